# -*- coding: utf-8 -*-
"""
Трёхмерный вектор на базе NumPy (float32).

Каждая операция, возвращающая вектор, принимает необязательный `dst`:
  * dst is None – создаётся и возвращается новый Vec3, входы не меняются;
  * иначе результат пишется в dst и возвращается сам dst.
dst может совпадать с любым из входов – результат от этого не зависит.
"""
import math
import numpy as np
from wgmath.math import scalar
from wgmath.math.hybrid import hybridmethod

# порог длины, ниже которого normalize() возвращает нулевой вектор
NORMALIZE_THRESHOLD = 1e-5


def _target(dst):
    return Vec3() if dst is None else dst


class Vec3:
    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._v = np.array([x, y, z], dtype=np.float32)

    # -------------------------------------------------
    # свойства с сеттерами
    # -------------------------------------------------
    @property
    def x(self) -> float:
        return float(self._v[0])

    @x.setter
    def x(self, value: float):
        self._v[0] = value

    @property
    def y(self) -> float:
        return float(self._v[1])

    @y.setter
    def y(self, value: float):
        self._v[1] = value

    @property
    def z(self) -> float:
        return float(self._v[2])

    @z.setter
    def z(self, value: float):
        self._v[2] = value

    # -------------------------------------------------
    # фабрики
    # -------------------------------------------------
    @classmethod
    def from_values(cls, x: float, y: float, z: float) -> "Vec3":
        return cls(x, y, z)

    @hybridmethod
    def set(cls, x: float, y: float, z: float, dst: "Vec3" = None) -> "Vec3":
        """Записать (x, y, z) в dst (или в новый вектор)."""
        out = _target(dst)
        out._v[0] = x
        out._v[1] = y
        out._v[2] = z
        return out

    @hybridmethod
    def zero(cls, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        out._v.fill(0.0)
        return out

    @hybridmethod
    def random(cls, scale: float = 1.0, dst: "Vec3" = None) -> "Vec3":
        """
        Равномерно распределённая точка на сфере радиуса `scale`.
        Без отбраковки: z равномерно в [-1, 1], азимут равномерно в [0, 2π).
        """
        out = _target(dst)
        angle = scalar.random() * 2.0 * math.pi
        z = scalar.random() * 2.0 - 1.0
        z_scale = math.sqrt(1.0 - z * z) * scale
        out._v[0] = math.cos(angle) * z_scale
        out._v[1] = math.sin(angle) * z_scale
        out._v[2] = z * scale
        return out

    @classmethod
    def get_translation(cls, m: "Mat4", dst: "Vec3" = None) -> "Vec3":
        """Столбец переноса Mat4."""
        out = _target(dst)
        out._v[:] = m.m[12:15]
        return out

    @classmethod
    def get_axis(cls, m: "Mat4", axis: int, dst: "Vec3" = None) -> "Vec3":
        """Базисный вектор (столбец 0, 1 или 2) Mat4."""
        if axis not in (0, 1, 2):
            raise ValueError(f"Axis must be 0, 1 or 2, got {axis}")
        out = _target(dst)
        off = axis * 4
        out._v[:] = m.m[off:off + 3]
        return out

    @classmethod
    def get_scaling(cls, m: "Mat4", dst: "Vec3" = None) -> "Vec3":
        """Масштаб по каждой оси – длины трёх базисных столбцов."""
        out = _target(dst)
        cols = m.m.astype(np.float64).reshape(4, 4)[:3, :3]
        sx, sy, sz = np.sqrt((cols * cols).sum(axis=1)).tolist()
        out._v[0] = sx
        out._v[1] = sy
        out._v[2] = sz
        return out

    # -------------------------------------------------
    # копирование
    # -------------------------------------------------
    def copy(self) -> "Vec3":
        return Vec3(*self._v)

    clone = copy

    def copy_into(self, dst: "Vec3") -> "Vec3":
        dst._v[:] = self._v
        return dst

    clone_into = copy_into

    # -------------------------------------------------
    # покомпонентная арифметика
    # -------------------------------------------------
    def add(self, other: "Vec3", dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.add(self._v, other._v, out=out._v)
        return out

    def subtract(self, other: "Vec3", dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.subtract(self._v, other._v, out=out._v)
        return out

    sub = subtract

    def multiply(self, other: "Vec3", dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.multiply(self._v, other._v, out=out._v)
        return out

    mul = multiply

    def divide(self, other: "Vec3", dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.divide(self._v, other._v, out=out._v)
        return out

    div = divide

    def mul_scalar(self, k: float, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        out._v[:] = self._v.astype(np.float64) * k
        return out

    scale = mul_scalar

    def div_scalar(self, k: float, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        out._v[:] = self._v.astype(np.float64) / k
        return out

    def add_scaled(self, other: "Vec3", k: float, dst: "Vec3" = None) -> "Vec3":
        """self + other·k."""
        out = _target(dst)
        out._v[:] = self._v + other._v.astype(np.float64) * k
        return out

    def negate(self, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.negative(self._v, out=out._v)
        return out

    def inverse(self, dst: "Vec3" = None) -> "Vec3":
        """Покомпонентная обратная величина 1/v."""
        out = _target(dst)
        np.divide(np.float32(1.0), self._v, out=out._v)
        return out

    invert = inverse

    def ceil(self, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.ceil(self._v, out=out._v)
        return out

    def floor(self, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.floor(self._v, out=out._v)
        return out

    def round(self, dst: "Vec3" = None) -> "Vec3":
        """Округление half‑up: floor(v + 0.5), как на GPU."""
        out = _target(dst)
        out._v[:] = np.floor(self._v.astype(np.float64) + 0.5)
        return out

    def clamp(self, lo: float = 0.0, hi: float = 1.0, dst: "Vec3" = None) -> "Vec3":
        out = _target(dst)
        np.clip(self._v, np.float32(lo), np.float32(hi), out=out._v)
        return out

    # -------------------------------------------------
    # геометрия
    # -------------------------------------------------
    def dot(self, other: "Vec3") -> float:
        ax, ay, az = self._v.tolist()
        bx, by, bz = other._v.tolist()
        return ax * bx + ay * by + az * bz

    def cross(self, other: "Vec3", dst: "Vec3" = None) -> "Vec3":
        """Правое векторное произведение."""
        ax, ay, az = self._v.tolist()
        bx, by, bz = other._v.tolist()
        out = _target(dst)
        out._v[0] = ay * bz - az * by
        out._v[1] = az * bx - ax * bz
        out._v[2] = ax * by - ay * bx
        return out

    def length_sq(self) -> float:
        x, y, z = self._v.tolist()
        return x * x + y * y + z * z

    len_sq = length_sq

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    len = length

    def distance_sq(self, other: "Vec3") -> float:
        ax, ay, az = self._v.tolist()
        bx, by, bz = other._v.tolist()
        dx, dy, dz = ax - bx, ay - by, az - bz
        return dx * dx + dy * dy + dz * dz

    dist_sq = distance_sq

    def distance(self, other: "Vec3") -> float:
        return math.sqrt(self.distance_sq(other))

    dist = distance

    def normalize(self, dst: "Vec3" = None) -> "Vec3":
        """Единичный вектор; при длине <= 1e-5 – нулевой вектор (без NaN)."""
        x, y, z = self._v.tolist()
        n = math.sqrt(x * x + y * y + z * z)
        out = _target(dst)
        if n > NORMALIZE_THRESHOLD:
            out._v[0] = x / n
            out._v[1] = y / n
            out._v[2] = z / n
        else:
            out._v.fill(0.0)
        return out

    def angle(self, other: "Vec3") -> float:
        """
        Угол между векторами в радианах, [0, π].

        Формула Кахана: 2·atan2(|a·|b| − b·|a||, |a·|b| + b·|a||).
        Устойчива около 0 и π (в отличие от acos(dot/|a||b|)) и
        не зависит от масштаба входов. Для нулевого вектора – 0.
        """
        a = self._v.astype(np.float64)
        b = other._v.astype(np.float64)
        ua = a * math.sqrt(float(b @ b))
        ub = b * math.sqrt(float(a @ a))
        d = ua - ub
        s = ua + ub
        return 2.0 * math.atan2(math.sqrt(float(d @ d)), math.sqrt(float(s @ s)))

    # -------------------------------------------------
    # интерполяция / ограничения
    # -------------------------------------------------
    def lerp(self, other: "Vec3", t: float, dst: "Vec3" = None) -> "Vec3":
        """self + t·(other − self); t вне [0, 1] экстраполирует."""
        out = _target(dst)
        a = self._v.astype(np.float64)
        out._v[:] = a + (other._v - a) * t
        return out

    def midpoint(self, other: "Vec3", dst: "Vec3" = None) -> "Vec3":
        return self.lerp(other, 0.5, dst)

    def set_length(self, length: float, dst: "Vec3" = None) -> "Vec3":
        """То же направление, длина ровно `length` (нулевой вектор остаётся нулевым)."""
        x, y, z = self._v.tolist()
        n = math.sqrt(x * x + y * y + z * z)
        out = _target(dst)
        if n > NORMALIZE_THRESHOLD:
            k = length / n
            out._v[0] = x * k
            out._v[1] = y * k
            out._v[2] = z * k
        else:
            out._v.fill(0.0)
        return out

    def truncate(self, max_len: float, dst: "Vec3" = None) -> "Vec3":
        """Укоротить до max_len, если вектор длиннее; иначе просто копия."""
        if self.length() > max_len:
            return self.set_length(max_len, dst)
        if dst is None:
            return self.copy()
        return self.copy_into(dst)

    # -------------------------------------------------
    # вращение вокруг произвольной точки
    # -------------------------------------------------
    def rotate_x(self, origin: "Vec3", angle: float, dst: "Vec3" = None) -> "Vec3":
        px, py, pz = (self._v.astype(np.float64) - origin._v).tolist()
        ox, oy, oz = origin._v.tolist()
        c, s = math.cos(angle), math.sin(angle)
        out = _target(dst)
        out._v[0] = px + ox
        out._v[1] = py * c - pz * s + oy
        out._v[2] = py * s + pz * c + oz
        return out

    def rotate_y(self, origin: "Vec3", angle: float, dst: "Vec3" = None) -> "Vec3":
        px, py, pz = (self._v.astype(np.float64) - origin._v).tolist()
        ox, oy, oz = origin._v.tolist()
        c, s = math.cos(angle), math.sin(angle)
        out = _target(dst)
        out._v[0] = pz * s + px * c + ox
        out._v[1] = py + oy
        out._v[2] = pz * c - px * s + oz
        return out

    def rotate_z(self, origin: "Vec3", angle: float, dst: "Vec3" = None) -> "Vec3":
        px, py, pz = (self._v.astype(np.float64) - origin._v).tolist()
        ox, oy, oz = origin._v.tolist()
        c, s = math.cos(angle), math.sin(angle)
        out = _target(dst)
        out._v[0] = px * c - py * s + ox
        out._v[1] = px * s + py * c + oy
        out._v[2] = pz + oz
        return out

    # -------------------------------------------------
    # преобразования матрицами и кватернионом
    # -------------------------------------------------
    def transform_mat3(self, m: "Mat3", dst: "Vec3" = None) -> "Vec3":
        """m · v (v – направление), m в column‑major."""
        x, y, z = self._v.tolist()
        e = m.m.tolist()
        out = _target(dst)
        out._v[0] = e[0] * x + e[3] * y + e[6] * z
        out._v[1] = e[1] * x + e[4] * y + e[7] * z
        out._v[2] = e[2] * x + e[5] * y + e[8] * z
        return out

    def transform_mat4(self, m: "Mat4", dst: "Vec3" = None) -> "Vec3":
        """
        m · (v, 1) с делением на w (v – точка). w == 0 считается равным 1.
        """
        x, y, z = self._v.tolist()
        e = m.m.tolist()
        w = e[3] * x + e[7] * y + e[11] * z + e[15]
        if w == 0.0:
            w = 1.0
        out = _target(dst)
        out._v[0] = (e[0] * x + e[4] * y + e[8] * z + e[12]) / w
        out._v[1] = (e[1] * x + e[5] * y + e[9] * z + e[13]) / w
        out._v[2] = (e[2] * x + e[6] * y + e[10] * z + e[14]) / w
        return out

    def transform_mat4_upper3x3(self, m: "Mat4", dst: "Vec3" = None) -> "Vec3":
        """Только линейный блок 3×3 (направления, нормали), без переноса."""
        x, y, z = self._v.tolist()
        e = m.m.tolist()
        out = _target(dst)
        out._v[0] = e[0] * x + e[4] * y + e[8] * z
        out._v[1] = e[1] * x + e[5] * y + e[9] * z
        out._v[2] = e[2] * x + e[6] * y + e[10] * z
        return out

    def transform_quat(self, q: "Quat", dst: "Vec3" = None) -> "Vec3":
        """v' = v + 2w·(q×v) + 2·q×(q×v) для единичного q."""
        qx, qy, qz, qw = q._v.tolist()
        x, y, z = self._v.tolist()
        w2 = qw * 2.0
        uvx = qy * z - qz * y
        uvy = qz * x - qx * z
        uvz = qx * y - qy * x
        out = _target(dst)
        out._v[0] = x + uvx * w2 + (qy * uvz - qz * uvy) * 2.0
        out._v[1] = y + uvy * w2 + (qz * uvx - qx * uvz) * 2.0
        out._v[2] = z + uvz * w2 + (qx * uvy - qy * uvx) * 2.0
        return out

    # -------------------------------------------------
    # сравнение
    # -------------------------------------------------
    def equals(self, other: "Vec3") -> bool:
        return bool(np.array_equal(self._v, other._v))

    def equals_approximately(self, other: "Vec3", eps: float = None) -> bool:
        if eps is None:
            eps = scalar.EPSILON
        diff = np.abs(self._v.astype(np.float64) - other._v)
        return bool((diff <= eps).all())

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    # -------------------------------------------------
    # операторы (всегда новый объект)
    # -------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, k):
        if isinstance(k, Vec3):
            return self.multiply(k)
        if isinstance(k, (int, float, np.floating, np.integer)):
            return self.mul_scalar(k)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, k):
        if isinstance(k, Vec3):
            return self.divide(k)
        if isinstance(k, (int, float, np.floating, np.integer)):
            return self.div_scalar(k)
        return NotImplemented

    def __neg__(self):
        return self.negate()

    # -------------------------------------------------
    # последовательность / экспорт
    # -------------------------------------------------
    def __len__(self) -> int:
        return 3

    def __getitem__(self, i):
        return float(self._v[i])

    def __iter__(self):
        return iter(self._v.tolist())

    def as_np(self) -> np.ndarray:
        """Возврат копии 3‑элементного массива float32."""
        return self._v.copy()

    def to_tuple(self):
        return tuple(self._v.tolist())

    def __repr__(self):
        return f"Vec3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"
