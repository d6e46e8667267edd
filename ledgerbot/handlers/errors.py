# ledgerbot/handlers/errors.py
# Граница обработки: любая ошибка инфраструктуры -> лог + один общий ответ. Процесс не падает.
from __future__ import annotations

import logging

from aiogram import Router
from aiogram.types import ErrorEvent

from ledgerbot.core.config import Settings
from ledgerbot.ui.texts import t

log = logging.getLogger(__name__)
router = Router(name=__name__)


@router.errors()
async def on_error(event: ErrorEvent, settings: Settings) -> bool:
    update = event.update
    log.exception(
        "update_failed id=%s error=%s",
        update.update_id,
        event.exception.__class__.__name__,
        exc_info=event.exception,
    )
    message = update.message or (update.callback_query.message if update.callback_query else None)
    if message is not None:
        try:
            await message.answer(t("error", settings.lang))
        except Exception:
            log.warning("error reply not delivered", exc_info=True)
    return True
