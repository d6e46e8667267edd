# ledgerbot/handlers/__init__.py
from __future__ import annotations

from typing import Iterable
from aiogram import Dispatcher, Router
import logging

def _module_names() -> Iterable[str]:
    # ПОРЯДОК ВАЖЕН: start (help/menu словами) и команды раньше messages,
    # иначе свободный текст уйдёт в классификатор
    return (
        "start",
        "balance",
        "stats",
        "messages",  # <-- последним
        "errors",
    )


def setup(dp: Dispatcher) -> None:
    for name in _module_names():
        try:
            mod = __import__(f"ledgerbot.handlers.{name}", fromlist=["router"])
            router: Router = getattr(mod, "router")
            dp.include_router(router)
        except Exception:
            logging.exception('handler_failed name="%s"', name)
            raise
        logging.info('handler_loaded name="%s"', name)
