# ledgerbot/handlers/messages.py
# Свободный текст в личке: классификатор -> resolver (одна транзакция) -> один ответ.
from __future__ import annotations

import logging

from aiogram import Router, F
from aiogram.enums import ChatType
from aiogram.types import Message

from ledgerbot.core.config import Settings
from ledgerbot.core.db import session_scope
from ledgerbot.services.classifier import IntentClassifier
from ledgerbot.services.resolver import resolve
from ledgerbot.ui.render import render_resolution

log = logging.getLogger(__name__)
router = Router(name=__name__)


@router.message(F.chat.type == ChatType.PRIVATE, F.text, ~F.text.startswith("/"))
async def free_text(m: Message, settings: Settings, classifier: IntentClassifier) -> None:
    uid = str(m.from_user.id)
    text = (m.text or "").strip()
    if not text:
        return
    log.info('user=%s text="%s"', uid, text[:200])

    intent = await classifier.classify(text)
    async with session_scope() as s:
        res = await resolve(s, uid, intent, raw_message=text)
    if not res.ok:
        log.debug("user=%s rejected: %s", uid, res.rejection.value)

    await m.answer(render_resolution(res, settings.lang, settings.currency))
