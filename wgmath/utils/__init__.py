# wgmath/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger    – готовый объект logging.Logger (с level INFO)
    * set_level – смена уровня логгера по имени или числу
    * Config    – JSON‑конфигурация ядра
"""

from .logger import logger, set_level
from .config import Config

__all__ = ["logger", "set_level", "Config"]
