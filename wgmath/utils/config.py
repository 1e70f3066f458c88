"""
Простой загрузчик/сохранитель конфигурации ядра в формате JSON.
Если файл не найден – используются настройки по‑умолчанию
(файл на диске сам по себе не создаётся, только через save()).
"""

import json
import os
from pathlib import Path
from wgmath.utils.logger import logger, set_level

ENV_VAR = "WGMATH_CONFIG"
DEFAULT_PATH = "wgmath.json"

DEFAULT_CONFIG = {
    "epsilon": 1e-6,
    "random_seed": None,
    "log_level": "INFO",
}


class Config:
    """Singleton‑подобный объект конфигурации."""
    _instance = None

    def __new__(cls, path: str = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.path = Path(path or os.environ.get(ENV_VAR, DEFAULT_PATH))
            cls._instance._load()
        return cls._instance

    def _load(self):
        self.data = DEFAULT_CONFIG.copy()
        if not self.path.is_file():
            logger.debug(f"[Config] No config file at {self.path} – using defaults.")
            return
        try:
            with self.path.open("r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error(f"[Config] Failed to read config: {exc}")
            return
        if not isinstance(loaded, dict):
            logger.error(f"[Config] Expected a JSON object in {self.path}")
            return
        self.data.update(loaded)
        logger.info("[Config] Loaded configuration.")

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def apply(self):
        """Применить значения к скалярным утилитам и логгеру."""
        from wgmath.math import scalar

        set_level(self["log_level"])
        try:
            eps = float(self["epsilon"])
        except (TypeError, ValueError):
            logger.error(f"[Config] Invalid epsilon: {self['epsilon']!r}")
        else:
            scalar.set_epsilon(eps)
        seed = self["random_seed"]
        if seed is not None:
            scalar.seed(int(seed))
        return self

    @classmethod
    def reset(cls):
        """Забыть текущий экземпляр (следующий Config() перечитает файл)."""
        cls._instance = None

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value

    def get(self, key, default=None):
        return self.data.get(key, default)
