"""
wgmath – float32‑ядро линейной алгебры для real‑time графики:
Vec3, Mat3, Mat4, Quat с явным выходным параметром `dst`,
безопасным при алиасинге с любым из входов.
"""

from wgmath.utils import logger
from wgmath.utils.config import Config
from wgmath.math import scalar, Vec3, Mat3, Mat4, Quat, EULER_ORDERS

__version__ = "1.0.0"

__all__ = [
    "Config",
    "scalar",
    "Vec3",
    "Mat3",
    "Mat4",
    "Quat",
    "EULER_ORDERS",
]
