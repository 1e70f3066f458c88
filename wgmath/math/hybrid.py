# -*- coding: utf-8 -*-
"""
Декоратор для фабрик, которые зовутся и у класса, и у экземпляра.

    Vec3.zero()        -> новый нулевой вектор
    Vec3.zero(dst)     -> обнуляет dst
    v.zero()           -> обнуляет сам v и возвращает его
    v.zero(dst=other)  -> обнуляет other, v не трогает

Оборачиваемая функция устроена как classmethod и обязана иметь параметр `dst`.
"""
import functools
import inspect
import types


class hybridmethod:
    def __init__(self, func):
        self.func = func
        self.signature = inspect.signature(func)
        functools.update_wrapper(self, func)

    def __get__(self, obj, cls=None):
        if cls is None:
            cls = type(obj)
        if obj is None:
            return types.MethodType(self.func, cls)

        func, signature = self.func, self.signature

        @functools.wraps(func)
        def bound(*args, **kwargs):
            params = signature.bind(cls, *args, **kwargs)
            params.apply_defaults()
            if params.arguments["dst"] is None:
                params.arguments["dst"] = obj
            return func(*params.args, **params.kwargs)

        return bound
