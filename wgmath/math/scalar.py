# wgmath/math/scalar.py
"""
Скалярные утилиты: допуск EPSILON, сравнение с допуском, clamp,
перевод градусы/радианы и общий генератор случайных чисел.
"""

import math
import numpy as np
from wgmath.utils.logger import logger

EPSILON = 1e-6

_rng = np.random.default_rng()


def get_epsilon() -> float:
    return EPSILON


def set_epsilon(value: float) -> float:
    """Задать глобальный допуск, вернуть предыдущее значение."""
    global EPSILON
    old = EPSILON
    EPSILON = float(value)
    logger.debug(f"[Scalar] EPSILON {old} -> {EPSILON}")
    return old


def seed(value: int) -> None:
    """Пересоздать генератор (воспроизводимые Vec3.random и т.п.)."""
    global _rng
    _rng = np.random.default_rng(value)


def random() -> float:
    """Равномерное число в [0, 1)."""
    return float(_rng.random())


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / math.pi


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def lerp(a: float, b: float, t: float) -> float:
    """a + t·(b − a); t не ограничивается отрезком [0, 1]."""
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, value: float) -> float:
    """Обратная к lerp; при a == b возвращает 0."""
    d = b - a
    if abs(d) < EPSILON:
        return 0.0
    return (value - a) / d


def euclidean_modulo(n: float, m: float) -> float:
    """Остаток, всегда неотрицательный для m > 0."""
    return ((n % m) + m) % m


def equals_approximately(a: float, b: float, eps: float = None) -> bool:
    if eps is None:
        eps = EPSILON
    return abs(a - b) <= eps
