# wgmath/utils/logger.py
# ---------------------------------------------------------------
# Минимальный логгер ядра. Числовые функции пишут в него только
# на debug‑уровне и только при численных fallback‑ах.
# ---------------------------------------------------------------

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def init_logger(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("wgmath")


logger = init_logger()


def set_level(level) -> None:
    """Сменить уровень логгера: принимает int или имя ("DEBUG", "info" …)."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            logger.error(f"[Logger] Unknown log level: {level}")
            return
        level = resolved
    logger.setLevel(level)
