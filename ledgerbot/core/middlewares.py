# ledgerbot/core/middlewares.py
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from ledgerbot.services.dedup import DuplicateFilter

log = logging.getLogger(__name__)


def message_key(m: Message) -> str:
    # message_id уникален только внутри чата
    return f"{m.chat.id}:{m.message_id}"


class DedupMiddleware(BaseMiddleware):
    """Outer-middleware на message: повтор в пределах окна молча отбрасываем, без ответа."""

    def __init__(self, dedup: DuplicateFilter) -> None:
        self.dedup = dedup

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if isinstance(event, Message):
            key = message_key(event)
            if not self.dedup.should_process(key):
                log.info('duplicate_dropped key="%s"', key)
                return None
        return await handler(event, data)
