# wgmath/math/mat3.py
"""
Матрица 3×3 (float32), хранение column‑major: m[0:3] – первый столбец,
m[3:6] – второй, m[6:9] – третий. Линейная часть преобразования
(вращение / масштаб / сдвиг), без переноса.
"""
import math
import numpy as np
from wgmath.math import scalar
from wgmath.math.hybrid import hybridmethod
from wgmath.utils.logger import logger


# |det| ниже порога – матрица считается вырожденной
SINGULAR_EPSILON = 1e-12


def _target(dst):
    return Mat3() if dst is None else dst


class Mat3:
    __slots__ = ("m",)

    def __init__(self, *values):
        if len(values) == 1:
            values = tuple(np.asarray(values[0], dtype=np.float32).ravel())
        if not values:
            self.m = np.zeros(9, dtype=np.float32)
        elif len(values) == 9:
            self.m = np.array(values, dtype=np.float32)
        else:
            raise ValueError(f"Mat3 needs 9 values, got {len(values)}")

    # -----------------------------------------------------------------
    # фабрики
    # -----------------------------------------------------------------
    @classmethod
    def from_values(cls, *values) -> "Mat3":
        return cls(*values)

    @hybridmethod
    def set(cls, *values, dst: "Mat3" = None) -> "Mat3":
        if len(values) != 9:
            raise ValueError(f"Mat3 needs 9 values, got {len(values)}")
        out = _target(dst)
        out.m[:] = values
        return out

    @hybridmethod
    def identity(cls, dst: "Mat3" = None) -> "Mat3":
        out = _target(dst)
        out.m.fill(0.0)
        out.m[0] = out.m[4] = out.m[8] = 1.0
        return out

    @classmethod
    def from_mat4(cls, m4, dst: "Mat3" = None) -> "Mat3":
        """Верхний левый блок 3×3 матрицы Mat4."""
        e = m4.m.tolist()
        out = _target(dst)
        out.m[:] = (e[0], e[1], e[2], e[4], e[5], e[6], e[8], e[9], e[10])
        return out

    @classmethod
    def from_quat(cls, q, dst: "Mat3" = None) -> "Mat3":
        x, y, z, w = q._v.tolist()
        x2, y2, z2 = x + x, y + y, z + z
        xx, yx, yy = x * x2, y * x2, y * y2
        zx, zy, zz = z * x2, z * y2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        out = _target(dst)
        out.m[:] = (
            1 - yy - zz, yx + wz, zx - wy,
            yx - wz, 1 - xx - zz, zy + wx,
            zx + wy, zy - wx, 1 - xx - yy,
        )
        return out

    @classmethod
    def rotation_x(cls, angle: float, dst: "Mat3" = None) -> "Mat3":
        c, s = math.cos(angle), math.sin(angle)
        out = _target(dst)
        out.m[:] = (1, 0, 0, 0, c, s, 0, -s, c)
        return out

    @classmethod
    def rotation_y(cls, angle: float, dst: "Mat3" = None) -> "Mat3":
        c, s = math.cos(angle), math.sin(angle)
        out = _target(dst)
        out.m[:] = (c, 0, -s, 0, 1, 0, s, 0, c)
        return out

    @classmethod
    def rotation_z(cls, angle: float, dst: "Mat3" = None) -> "Mat3":
        c, s = math.cos(angle), math.sin(angle)
        out = _target(dst)
        out.m[:] = (c, s, 0, -s, c, 0, 0, 0, 1)
        return out

    @classmethod
    def scaling(cls, v, dst: "Mat3" = None) -> "Mat3":
        sx, sy, sz = v
        out = _target(dst)
        out.m[:] = (sx, 0, 0, 0, sy, 0, 0, 0, sz)
        return out

    # -----------------------------------------------------------------
    # копирование
    # -----------------------------------------------------------------
    def copy(self) -> "Mat3":
        return Mat3(self.m)

    clone = copy

    def copy_into(self, dst: "Mat3") -> "Mat3":
        dst.m[:] = self.m
        return dst

    clone_into = copy_into

    # -----------------------------------------------------------------
    # алгебра
    # -----------------------------------------------------------------
    def multiply(self, other: "Mat3", dst: "Mat3" = None) -> "Mat3":
        """self · other (other применяется первым)."""
        # reshape column-major даёт транспонированную матрицу:
        # (A·B)^T = B^T · A^T
        prod = other.m.reshape(3, 3).astype(np.float64) @ self.m.reshape(3, 3)
        out = _target(dst)
        out.m[:] = prod.ravel()
        return out

    mul = multiply

    def transpose(self, dst: "Mat3" = None) -> "Mat3":
        t = self.m.reshape(3, 3).T.ravel()
        out = _target(dst)
        out.m[:] = t
        return out

    def determinant(self) -> float:
        return float(np.linalg.det(self.m.reshape(3, 3).astype(np.float64)))

    def inverse(self, dst: "Mat3" = None) -> "Mat3":
        """Обратная матрица; для вырожденной – единичная (с записью в лог)."""
        src = self.m.reshape(3, 3).astype(np.float64)
        try:
            if abs(np.linalg.det(src)) < SINGULAR_EPSILON:
                raise np.linalg.LinAlgError("singular matrix")
            inv = np.linalg.inv(src)
        except np.linalg.LinAlgError as exc:
            logger.debug(f"[Mat3] Singular matrix, falling back to identity: {exc}")
            return Mat3.identity(dst)
        out = _target(dst)
        out.m[:] = inv.ravel()
        return out

    invert = inverse

    # -----------------------------------------------------------------
    # сравнение / операторы
    # -----------------------------------------------------------------
    def equals(self, other: "Mat3") -> bool:
        return bool(np.array_equal(self.m, other.m))

    def equals_approximately(self, other: "Mat3", eps: float = None) -> bool:
        if eps is None:
            eps = scalar.EPSILON
        return bool((np.abs(self.m.astype(np.float64) - other.m) <= eps).all())

    def __eq__(self, other):
        if not isinstance(other, Mat3):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __matmul__(self, other):
        if not isinstance(other, Mat3):
            return NotImplemented
        return self.multiply(other)

    def __getitem__(self, i):
        return float(self.m[i])

    def __len__(self) -> int:
        return 9

    def __iter__(self):
        return iter(self.m.tolist())

    def to_np(self) -> np.ndarray:
        """Копия плоского column‑major массива (9 × float32)."""
        return self.m.copy()

    as_np = to_np

    def __repr__(self):
        return f"Mat3({self.m.tolist()})"
