# wgmath/math/quat.py
# ---------------------------------------------------------------
# Кватернионы (x, y, z, w), float32, с поддержкой:
# - создания из оси/угла, углов Эйлера (6 порядков), матрицы,
# - умножения (произведение Гамильтона),
# - нормализации, сопряжения, обращения,
# - lerp / slerp,
# - преобразования в матрицы 3×3 / 4×4.
# Все операции принимают необязательный dst (см. Vec3).
# ---------------------------------------------------------------

import math
import numpy as np
from wgmath.math import scalar
from wgmath.math.hybrid import hybridmethod
from wgmath.math.vec3 import Vec3

EULER_ORDERS = ("xyz", "xzy", "yxz", "yzx", "zxy", "zyx")
_AXIS_INDEX = {"x": 0, "y": 1, "z": 2}


def _target(dst):
    return Quat() if dst is None else dst


def _hamilton(a, b):
    """a ⊗ b для кортежей (x, y, z, w)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def _axis_quat(axis: int, angle: float):
    half = angle * 0.5
    q = [0.0, 0.0, 0.0, math.cos(half)]
    q[axis] = math.sin(half)
    return q


class Quat:
    __slots__ = ("_v",)

    def __init__(self, x=0.0, y=0.0, z=0.0, w=0.0):
        self._v = np.array([x, y, z, w], dtype=np.float32)

    # -----------------------------------------------------------
    #  Компоненты
    # -----------------------------------------------------------
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

    @property
    def w(self) -> float:
        return float(self._v[3])

    @w.setter
    def w(self, value: float):
        self._v[3] = value

    def _write(self, values):
        self._v[0], self._v[1], self._v[2], self._v[3] = values
        return self

    # -----------------------------------------------------------
    #  Фабрики
    # -----------------------------------------------------------
    @classmethod
    def from_values(cls, x, y, z, w) -> "Quat":
        return cls(x, y, z, w)

    @hybridmethod
    def set(cls, x, y, z, w, dst: "Quat" = None) -> "Quat":
        return _target(dst)._write((x, y, z, w))

    @hybridmethod
    def identity(cls, dst: "Quat" = None) -> "Quat":
        return _target(dst)._write((0.0, 0.0, 0.0, 1.0))

    @classmethod
    def from_axis_angle(cls, axis, angle: float, dst: "Quat" = None) -> "Quat":
        """axis – Vec3 или 3‑элементный iterable, angle – в радианах."""
        ax = np.array(list(axis), dtype=np.float64)
        n = float(np.linalg.norm(ax))
        if n == 0.0:
            return cls.identity(dst)
        half = angle * 0.5
        s = math.sin(half) / n
        return _target(dst)._write((ax[0] * s, ax[1] * s, ax[2] * s, math.cos(half)))

    @classmethod
    def from_euler(cls, x: float, y: float, z: float, order: str = "xyz",
                   dst: "Quat" = None) -> "Quat":
        """
        Эйлеровы углы в радианах.

        Для порядка "abc" результат q = q_a ⊗ q_b ⊗ q_c, где q_a – поворот
        на угол соответствующей оси. Это внутренний (intrinsic) порядок:
        сначала вокруг a, затем вокруг уже повёрнутой b, затем c.
        """
        key = order.lower()
        if key not in EULER_ORDERS:
            raise ValueError(f"Unknown rotation order: {order!r}")
        angles = (x, y, z)
        q = (0.0, 0.0, 0.0, 1.0)
        for letter in key:
            idx = _AXIS_INDEX[letter]
            q = _hamilton(q, _axis_quat(idx, angles[idx]))
        return _target(dst)._write(q)

    @classmethod
    def from_mat(cls, m, dst: "Quat" = None) -> "Quat":
        """
        Кватернион из вращательной части Mat3 или Mat4 (column‑major).
        Алгоритм Шеппарда – выбираем наибольший диагональный член.
        """
        e = m.m.tolist()
        if len(e) == 16:
            m00, m01, m02 = e[0], e[4], e[8]
            m10, m11, m12 = e[1], e[5], e[9]
            m20, m21, m22 = e[2], e[6], e[10]
        elif len(e) == 9:
            m00, m01, m02 = e[0], e[3], e[6]
            m10, m11, m12 = e[1], e[4], e[7]
            m20, m21, m22 = e[2], e[5], e[8]
        else:
            raise ValueError(f"Expected Mat3 or Mat4, got {len(e)} values")

        trace = m00 + m11 + m22
        if trace > 0.0:
            s = 0.5 / math.sqrt(trace + 1.0)
            q = ((m21 - m12) * s, (m02 - m20) * s, (m10 - m01) * s, 0.25 / s)
        elif m00 > m11 and m00 > m22:
            s = 2.0 * math.sqrt(1.0 + m00 - m11 - m22)
            q = (0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
        elif m11 > m22:
            s = 2.0 * math.sqrt(1.0 + m11 - m00 - m22)
            q = ((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
        else:
            s = 2.0 * math.sqrt(1.0 + m22 - m00 - m11)
            q = ((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)
        return _target(dst)._write(q)

    @classmethod
    def rotation_to(cls, a, b, dst: "Quat" = None) -> "Quat":
        """Кратчайший поворот, переводящий единичный a в единичный b."""
        va = a if isinstance(a, Vec3) else Vec3(*a)
        vb = b if isinstance(b, Vec3) else Vec3(*b)
        d = va.dot(vb)
        if d < -0.999999:
            # противоположные векторы: любая ось, перпендикулярная a
            axis = Vec3(1.0, 0.0, 0.0).cross(va)
            if axis.length() < 0.000001:
                axis = Vec3(0.0, 1.0, 0.0).cross(va)
            return cls.from_axis_angle(axis, math.pi, dst)
        if d > 0.999999:
            return cls.identity(dst)
        c = va.cross(vb)
        out = _target(dst)._write((c.x, c.y, c.z, 1.0 + d))
        return out.normalize(out)

    # -----------------------------------------------------------
    #  Копирование
    # -----------------------------------------------------------
    def copy(self) -> "Quat":
        return Quat(*self._v)

    clone = copy

    def copy_into(self, dst: "Quat") -> "Quat":
        dst._v[:] = self._v
        return dst

    clone_into = copy_into

    # -----------------------------------------------------------
    #  Алгебра
    # -----------------------------------------------------------
    def multiply(self, other: "Quat", dst: "Quat" = None) -> "Quat":
        """self ⊗ other (сначала применяется other, затем self)."""
        q = _hamilton(self._v.tolist(), other._v.tolist())
        return _target(dst)._write(q)

    mul = multiply

    def add(self, other: "Quat", dst: "Quat" = None) -> "Quat":
        out = _target(dst)
        np.add(self._v, other._v, out=out._v)
        return out

    def subtract(self, other: "Quat", dst: "Quat" = None) -> "Quat":
        out = _target(dst)
        np.subtract(self._v, other._v, out=out._v)
        return out

    sub = subtract

    def mul_scalar(self, k: float, dst: "Quat" = None) -> "Quat":
        out = _target(dst)
        out._v[:] = self._v.astype(np.float64) * k
        return out

    scale = mul_scalar

    def conjugate(self, dst: "Quat" = None) -> "Quat":
        x, y, z, w = self._v.tolist()
        return _target(dst)._write((-x, -y, -z, w))

    def inverse(self, dst: "Quat" = None) -> "Quat":
        """conj(q) / |q|²; для нулевого кватерниона – нулевой."""
        x, y, z, w = self._v.tolist()
        d = x * x + y * y + z * z + w * w
        inv = 1.0 / d if d else 0.0
        return _target(dst)._write((-x * inv, -y * inv, -z * inv, w * inv))

    invert = inverse

    def dot(self, other: "Quat") -> float:
        return float(self._v.astype(np.float64) @ other._v.astype(np.float64))

    def length_sq(self) -> float:
        return self.dot(self)

    len_sq = length_sq

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    len = length

    def normalize(self, dst: "Quat" = None) -> "Quat":
        """Единичный кватернион; нулевой превращается в identity."""
        x, y, z, w = self._v.tolist()
        n = math.sqrt(x * x + y * y + z * z + w * w)
        if n <= 0.00001:
            return Quat.identity(dst)
        inv = 1.0 / n
        return _target(dst)._write((x * inv, y * inv, z * inv, w * inv))

    def rotate_x(self, angle: float, dst: "Quat" = None) -> "Quat":
        """self ⊗ поворот вокруг X на angle."""
        return _target(dst)._write(_hamilton(self._v.tolist(), _axis_quat(0, angle)))

    def rotate_y(self, angle: float, dst: "Quat" = None) -> "Quat":
        return _target(dst)._write(_hamilton(self._v.tolist(), _axis_quat(1, angle)))

    def rotate_z(self, angle: float, dst: "Quat" = None) -> "Quat":
        return _target(dst)._write(_hamilton(self._v.tolist(), _axis_quat(2, angle)))

    # -----------------------------------------------------------
    #  Интерполяция
    # -----------------------------------------------------------
    def lerp(self, other: "Quat", t: float, dst: "Quat" = None) -> "Quat":
        out = _target(dst)
        a = self._v.astype(np.float64)
        out._v[:] = a + (other._v - a) * t
        return out

    def slerp(self, other: "Quat", t: float, dst: "Quat" = None) -> "Quat":
        """Сферическая интерполяция по кратчайшей дуге."""
        ax, ay, az, aw = self._v.tolist()
        bx, by, bz, bw = other._v.tolist()
        cos_omega = ax * bx + ay * by + az * bz + aw * bw
        if cos_omega < 0.0:
            cos_omega = -cos_omega
            bx, by, bz, bw = -bx, -by, -bz, -bw
        if 1.0 - cos_omega > scalar.EPSILON:
            omega = math.acos(min(cos_omega, 1.0))
            sin_omega = math.sin(omega)
            k0 = math.sin((1.0 - t) * omega) / sin_omega
            k1 = math.sin(t * omega) / sin_omega
        else:
            k0 = 1.0 - t
            k1 = t
        return _target(dst)._write((
            k0 * ax + k1 * bx,
            k0 * ay + k1 * by,
            k0 * az + k1 * bz,
            k0 * aw + k1 * bw,
        ))

    def angle(self, other: "Quat") -> float:
        """Угол поворота между двумя единичными кватернионами, [0, π]."""
        d = abs(self.dot(other))
        return 2.0 * math.acos(min(d, 1.0))

    def to_axis_angle(self):
        """(ось Vec3, угол в радианах); для identity ось (1, 0, 0)."""
        x, y, z, w = self._v.tolist()
        angle = 2.0 * math.acos(scalar.clamp(w, -1.0, 1.0))
        s = math.sin(angle * 0.5)
        if s > scalar.EPSILON:
            return Vec3(x / s, y / s, z / s), angle
        return Vec3(1.0, 0.0, 0.0), angle

    # -----------------------------------------------------------
    #  Преобразования
    # -----------------------------------------------------------
    def rotate_vector(self, vec, dst: Vec3 = None) -> Vec3:
        """Вращает 3‑D вектор `vec` (Vec3 или iterable длины 3)."""
        v = vec if isinstance(vec, Vec3) else Vec3(*vec)
        return v.transform_quat(self, dst)

    def to_mat3(self, dst=None):
        from wgmath.math.mat3 import Mat3
        return Mat3.from_quat(self, dst)

    def to_mat4(self, dst=None):
        """Возвращает 4×4 матрицу вращения."""
        from wgmath.math.mat4 import Mat4
        return Mat4.from_quat(self, dst)

    # -----------------------------------------------------------
    #  Сравнение / операторы
    # -----------------------------------------------------------
    def equals(self, other: "Quat") -> bool:
        return bool(np.array_equal(self._v, other._v))

    def equals_approximately(self, other: "Quat", eps: float = None) -> bool:
        if eps is None:
            eps = scalar.EPSILON
        diff = np.abs(self._v.astype(np.float64) - other._v)
        return bool((diff <= eps).all())

    def __eq__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __mul__(self, other):
        """Произведение Гамильтона; Quat * Vec3 вращает вектор."""
        if isinstance(other, Quat):
            return self.multiply(other)
        if isinstance(other, Vec3):
            return other.transform_quat(self)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return self.multiply(other)

    def __len__(self) -> int:
        return 4

    def __getitem__(self, i):
        return float(self._v[i])

    def __iter__(self):
        return iter(self._v.tolist())

    def as_np(self) -> np.ndarray:
        return self._v.copy()

    def to_tuple(self):
        return tuple(self._v.tolist())

    def __repr__(self):
        return f"Quat({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.w:.3f})"
