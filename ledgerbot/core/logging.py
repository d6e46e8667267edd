# ledgerbot/core/logging.py
# Простая JSON-логировка в stdout + уровни

from __future__ import annotations
import logging
import sys

_JSON_FMT = (
    '{"level":"%(levelname)s","ts":"%(asctime)s",'
    '"name":"%(name)s","msg":"%(message)s"}'
)

# aiogram и httpx на INFO пишут каждое обновление/запрос
_NOISY = ("aiogram.event", "httpx", "apscheduler.executors.default")


def setup_logging(level: str = "INFO") -> None:
    logger = logging.getLogger()
    logger.handlers.clear()
    logger.setLevel(level.upper())

    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter(_JSON_FMT))
    logger.addHandler(h)

    if logger.level <= logging.INFO:
        for name in _NOISY:
            logging.getLogger(name).setLevel(logging.WARNING)
