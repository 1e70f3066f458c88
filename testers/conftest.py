# -*- coding: utf-8 -*-
"""
conftest.py – общие помощники для тестов ядра.

Главный из них – `check_dst`: проверяет контракт выходного параметра
для одной операции:
  1. без dst – новый объект, входы не изменились;
  2. со свежим dst – вернулся тот же dst, значение совпадает;
  3. dst == каждый из входов того же типа – значение совпадает,
     остальные входы не изменились.
"""

import numpy as np
import pytest

from wgmath.math import scalar


def _clone(arg):
    return arg.copy() if hasattr(arg, "copy") else arg


def _same_value(a, b) -> bool:
    if hasattr(a, "equals"):
        return a.equals(b)
    return a == b


def assert_close(expected, actual, tol: float = None) -> None:
    """Покомпонентное сравнение с допуском (по умолчанию EPSILON)."""
    if tol is None:
        tol = scalar.EPSILON
    exp = np.asarray(list(expected), dtype=np.float64)
    act = np.asarray(list(actual), dtype=np.float64)
    assert exp.shape == act.shape, (exp, act)
    assert np.all(np.abs(exp - act) <= tol), f"expected {exp}, got {act}"


def check_dst(op, expected, *args, tol: float = None) -> None:
    """
    op(*args, dst) -> результат. Последний позиционный аргумент op – dst.
    """

    # 1. без dst
    cloned = [_clone(a) for a in args]
    result = op(*cloned, None)
    assert_close(expected, result, tol)
    for original, after in zip(args, cloned):
        assert _same_value(original, after), "input modified without dst"
    for after in cloned:
        assert result is not after

    # 2. свежий dst
    cloned = [_clone(a) for a in args]
    dst = type(result)()
    returned = op(*cloned, dst)
    assert returned is dst
    assert_close(expected, dst, tol)
    for original, after in zip(args, cloned):
        assert _same_value(original, after), "input modified with fresh dst"

    # 3. dst совпадает с каждым из входов того же типа
    for i, arg in enumerate(args):
        if type(arg) is not type(result):
            continue
        cloned = [_clone(a) for a in args]
        alias = cloned[i]
        returned = op(*cloned, alias)
        assert returned is alias
        assert_close(expected, alias, tol)
        for j, (original, after) in enumerate(zip(args, cloned)):
            if j != i:
                assert _same_value(original, after), f"arg {j} modified when aliasing arg {i}"


@pytest.fixture
def fixed_seed():
    """Воспроизводимый генератор на время теста."""
    scalar.seed(1234)
    yield
    scalar.seed(None)


@pytest.fixture
def restore_epsilon():
    old = scalar.get_epsilon()
    yield
    scalar.set_epsilon(old)
