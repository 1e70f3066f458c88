# wgmath/math/mat4.py
"""
Матрица 4×4 (float32), хранение column‑major (как ждёт OpenGL/WebGPU):
m[0:4] – первый столбец, ..., m[12:16] – столбец переноса.
Углы – в радианах. Все операции принимают необязательный dst.
"""
import math
import numpy as np
from wgmath.math import scalar
from wgmath.math.hybrid import hybridmethod
from wgmath.math.quat import Quat
from wgmath.math.vec3 import Vec3
from wgmath.utils.logger import logger


# |det| ниже порога – матрица считается вырожденной
SINGULAR_EPSILON = 1e-12


def _target(dst):
    return Mat4() if dst is None else dst


def _unit(v):
    x, y, z = v
    n = math.sqrt(x * x + y * y + z * z)
    if n <= 0.00001:
        return 0.0, 0.0, 0.0
    return x / n, y / n, z / n


class Mat4:
    __slots__ = ("m",)

    def __init__(self, *values):
        if len(values) == 1:
            values = tuple(np.asarray(values[0], dtype=np.float32).ravel())
        if not values:
            self.m = np.zeros(16, dtype=np.float32)
        elif len(values) == 16:
            self.m = np.array(values, dtype=np.float32)
        else:
            raise ValueError(f"Mat4 needs 16 values, got {len(values)}")

    # -----------------------------------------------------------------
    # фабрики
    # -----------------------------------------------------------------
    @classmethod
    def from_values(cls, *values) -> "Mat4":
        return cls(*values)

    @hybridmethod
    def set(cls, *values, dst: "Mat4" = None) -> "Mat4":
        if len(values) != 16:
            raise ValueError(f"Mat4 needs 16 values, got {len(values)}")
        out = _target(dst)
        out.m[:] = values
        return out

    @hybridmethod
    def identity(cls, dst: "Mat4" = None) -> "Mat4":
        out = _target(dst)
        out.m.fill(0.0)
        out.m[0] = out.m[5] = out.m[10] = out.m[15] = 1.0
        return out

    @classmethod
    def from_mat3(cls, m3, dst: "Mat4" = None) -> "Mat4":
        e = m3.m.tolist()
        out = _target(dst)
        out.m[:] = (
            e[0], e[1], e[2], 0,
            e[3], e[4], e[5], 0,
            e[6], e[7], e[8], 0,
            0, 0, 0, 1,
        )
        return out

    @classmethod
    def from_quat(cls, q, dst: "Mat4" = None) -> "Mat4":
        """Матрица вращения из (единичного) кватерниона."""
        x, y, z, w = q._v.tolist()
        x2, y2, z2 = x + x, y + y, z + z
        xx, yx, yy = x * x2, y * x2, y * y2
        zx, zy, zz = z * x2, z * y2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        out = _target(dst)
        out.m[:] = (
            1 - yy - zz, yx + wz, zx - wy, 0,
            yx - wz, 1 - xx - zz, zy + wx, 0,
            zx + wy, zy - wx, 1 - xx - yy, 0,
            0, 0, 0, 1,
        )
        return out

    @classmethod
    def from_euler(cls, x: float, y: float, z: float, order: str = "xyz",
                   dst: "Mat4" = None) -> "Mat4":
        """Тот же порядок композиции, что и Quat.from_euler."""
        return cls.from_quat(Quat.from_euler(x, y, z, order), dst)

    @classmethod
    def translation(cls, v, dst: "Mat4" = None) -> "Mat4":
        tx, ty, tz = v
        out = cls.identity(dst)
        out.m[12] = tx
        out.m[13] = ty
        out.m[14] = tz
        return out

    @classmethod
    def scaling(cls, v, dst: "Mat4" = None) -> "Mat4":
        sx, sy, sz = v
        out = cls.identity(dst)
        out.m[0] = sx
        out.m[5] = sy
        out.m[10] = sz
        return out

    @classmethod
    def rotation_x(cls, angle: float, dst: "Mat4" = None) -> "Mat4":
        c, s = math.cos(angle), math.sin(angle)
        out = cls.identity(dst)
        out.m[5] = c
        out.m[6] = s
        out.m[9] = -s
        out.m[10] = c
        return out

    @classmethod
    def rotation_y(cls, angle: float, dst: "Mat4" = None) -> "Mat4":
        c, s = math.cos(angle), math.sin(angle)
        out = cls.identity(dst)
        out.m[0] = c
        out.m[2] = -s
        out.m[8] = s
        out.m[10] = c
        return out

    @classmethod
    def rotation_z(cls, angle: float, dst: "Mat4" = None) -> "Mat4":
        c, s = math.cos(angle), math.sin(angle)
        out = cls.identity(dst)
        out.m[0] = c
        out.m[1] = s
        out.m[4] = -s
        out.m[5] = c
        return out

    @classmethod
    def axis_rotation(cls, axis, angle: float, dst: "Mat4" = None) -> "Mat4":
        """Поворот вокруг произвольной оси (ось нормализуется)."""
        x, y, z = _unit(axis)
        xx, yy, zz = x * x, y * y, z * z
        c, s = math.cos(angle), math.sin(angle)
        omc = 1.0 - c
        out = _target(dst)
        out.m[:] = (
            xx + (1 - xx) * c, x * y * omc + z * s, x * z * omc - y * s, 0,
            x * y * omc - z * s, yy + (1 - yy) * c, y * z * omc + x * s, 0,
            x * z * omc + y * s, y * z * omc - x * s, zz + (1 - zz) * c, 0,
            0, 0, 0, 1,
        )
        return out

    @classmethod
    def perspective(cls, fovy: float, aspect: float,
                    z_near: float, z_far: float, dst: "Mat4" = None) -> "Mat4":
        """
        Перспективная проекция (OpenGL clip‑space, z в [-1, 1]).
        z_far = math.inf даёт бесконечную дальнюю плоскость.
        """
        f = 1.0 / math.tan(fovy / 2.0)
        out = _target(dst)
        out.m.fill(0.0)
        out.m[0] = f / aspect
        out.m[5] = f
        out.m[11] = -1.0
        if math.isfinite(z_far):
            range_inv = 1.0 / (z_near - z_far)
            out.m[10] = (z_far + z_near) * range_inv
            out.m[14] = 2.0 * z_far * z_near * range_inv
        else:
            out.m[10] = -1.0
            out.m[14] = -2.0 * z_near
        return out

    @classmethod
    def ortho(cls, left: float, right: float, bottom: float, top: float,
              z_near: float, z_far: float, dst: "Mat4" = None) -> "Mat4":
        out = _target(dst)
        out.m.fill(0.0)
        out.m[0] = 2.0 / (right - left)
        out.m[5] = 2.0 / (top - bottom)
        out.m[10] = -2.0 / (z_far - z_near)
        out.m[12] = -(right + left) / (right - left)
        out.m[13] = -(top + bottom) / (top - bottom)
        out.m[14] = -(z_far + z_near) / (z_far - z_near)
        out.m[15] = 1.0
        return out

    @classmethod
    def look_at(cls, eye, target, up, dst: "Mat4" = None) -> "Mat4":
        """Видовая матрица камеры (смотрит вдоль −Z)."""
        ex, ey, ez = eye
        tx, ty, tz = target
        fx, fy, fz = _unit((tx - ex, ty - ey, tz - ez))
        ux, uy, uz = _unit(up)

        # s = f × u
        sx, sy, sz = _unit((fy * uz - fz * uy, fz * ux - fx * uz, fx * uy - fy * ux))
        # u = s × f
        ux, uy, uz = sy * fz - sz * fy, sz * fx - sx * fz, sx * fy - sy * fx

        out = _target(dst)
        out.m[:] = (
            sx, ux, -fx, 0,
            sy, uy, -fy, 0,
            sz, uz, -fz, 0,
            -(sx * ex + sy * ey + sz * ez),
            -(ux * ex + uy * ey + uz * ez),
            fx * ex + fy * ey + fz * ez,
            1,
        )
        return out

    # -----------------------------------------------------------------
    # копирование
    # -----------------------------------------------------------------
    def copy(self) -> "Mat4":
        return Mat4(self.m)

    clone = copy

    def copy_into(self, dst: "Mat4") -> "Mat4":
        dst.m[:] = self.m
        return dst

    clone_into = copy_into

    # -----------------------------------------------------------------
    # алгебра
    # -----------------------------------------------------------------
    def multiply(self, other: "Mat4", dst: "Mat4" = None) -> "Mat4":
        """self · other (other применяется первым)."""
        # reshape column-major даёт транспонированную матрицу:
        # (A·B)^T = B^T · A^T
        prod = other.m.reshape(4, 4).astype(np.float64) @ self.m.reshape(4, 4)
        out = _target(dst)
        out.m[:] = prod.ravel()
        return out

    mul = multiply

    def transpose(self, dst: "Mat4" = None) -> "Mat4":
        t = self.m.reshape(4, 4).T.ravel()
        out = _target(dst)
        out.m[:] = t
        return out

    def determinant(self) -> float:
        return float(np.linalg.det(self.m.reshape(4, 4).astype(np.float64)))

    def inverse(self, dst: "Mat4" = None) -> "Mat4":
        """Обратная матрица; для вырожденной – единичная (с записью в лог)."""
        src = self.m.reshape(4, 4).astype(np.float64)
        try:
            if abs(np.linalg.det(src)) < SINGULAR_EPSILON:
                raise np.linalg.LinAlgError("singular matrix")
            inv = np.linalg.inv(src)
        except np.linalg.LinAlgError as exc:
            logger.debug(f"[Mat4] Singular matrix, falling back to identity: {exc}")
            return Mat4.identity(dst)
        out = _target(dst)
        out.m[:] = inv.ravel()
        return out

    invert = inverse

    def translate(self, v, dst: "Mat4" = None) -> "Mat4":
        """self · T(v)."""
        return self.multiply(Mat4.translation(v), dst)

    def scale(self, v, dst: "Mat4" = None) -> "Mat4":
        """self · S(v)."""
        return self.multiply(Mat4.scaling(v), dst)

    def rotate_x(self, angle: float, dst: "Mat4" = None) -> "Mat4":
        return self.multiply(Mat4.rotation_x(angle), dst)

    def rotate_y(self, angle: float, dst: "Mat4" = None) -> "Mat4":
        return self.multiply(Mat4.rotation_y(angle), dst)

    def rotate_z(self, angle: float, dst: "Mat4" = None) -> "Mat4":
        return self.multiply(Mat4.rotation_z(angle), dst)

    def get_translation(self, dst: Vec3 = None) -> Vec3:
        return Vec3.get_translation(self, dst)

    def set_translation(self, v, dst: "Mat4" = None) -> "Mat4":
        """Копия self с заменённым столбцом переноса."""
        tx, ty, tz = v
        out = self.copy() if dst is None else self.copy_into(dst)
        out.m[12] = tx
        out.m[13] = ty
        out.m[14] = tz
        return out

    # -----------------------------------------------------------------
    # сравнение / операторы
    # -----------------------------------------------------------------
    def equals(self, other: "Mat4") -> bool:
        return bool(np.array_equal(self.m, other.m))

    def equals_approximately(self, other: "Mat4", eps: float = None) -> bool:
        if eps is None:
            eps = scalar.EPSILON
        return bool((np.abs(self.m.astype(np.float64) - other.m) <= eps).all())

    def __eq__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __matmul__(self, other):
        if not isinstance(other, Mat4):
            return NotImplemented
        return self.multiply(other)

    def __getitem__(self, i):
        return float(self.m[i])

    def __len__(self) -> int:
        return 16

    def __iter__(self):
        return iter(self.m.tolist())

    def __repr__(self):
        return f"Mat4({self.m.tolist()})"

    def to_np(self) -> np.ndarray:
        """Копия плоского column‑major массива (16 × float32)."""
        return self.m.copy()

    as_np = to_np

    def to_gl(self) -> np.ndarray:
        """Массив для glUniformMatrix4fv(..., transpose=GL_FALSE)."""
        return self.m.copy()
