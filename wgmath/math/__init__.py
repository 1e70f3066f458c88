"""
Математический суб‑пакет: Vec3, Mat3, Mat4, Quat и скалярные утилиты.
"""

from wgmath.math import scalar
from wgmath.math.vec3 import Vec3
from wgmath.math.quat import Quat, EULER_ORDERS
from wgmath.math.mat3 import Mat3
from wgmath.math.mat4 import Mat4

__all__ = ["scalar", "Vec3", "Mat3", "Mat4", "Quat", "EULER_ORDERS"]
