# ledgerbot/handlers/start.py
# Онбординг (/start) и справка (/help, кнопка Help, слова help/menu/commands)

from __future__ import annotations

import logging

from aiogram import Router, F
from aiogram.enums import ChatType
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from ledgerbot.core.config import Settings
from ledgerbot.core.db import session_scope
from ledgerbot.repo.balances import ensure_balance
from ledgerbot.ui.keyboards import SHOW_HELP, kb_start
from ledgerbot.ui.texts import t

log = logging.getLogger(__name__)
router = Router(name=__name__)

HELP_WORDS = {"help", "menu", "commands"}


def _is_help_word(text: str | None) -> bool:
    return (text or "").strip().lower() in HELP_WORDS


# слова-справка только в личке, как и свободный текст
private_help_word = (F.chat.type == ChatType.PRIVATE) & F.text.func(_is_help_word)


@router.message(CommandStart())
async def cmd_start(m: Message, settings: Settings) -> None:
    uid = str(m.from_user.id)
    log.info("user=%s /start", uid)
    async with session_scope() as s:
        await ensure_balance(s, uid)
    await m.answer(t("welcome", settings.lang), reply_markup=kb_start(settings.lang))


@router.message(Command("help"))
@router.message(private_help_word)
async def cmd_help(m: Message, settings: Settings) -> None:
    log.info("user=%s help", m.from_user.id)
    await m.answer(t("help", settings.lang))


@router.callback_query(F.data == SHOW_HELP)
async def cb_help(c: CallbackQuery, settings: Settings) -> None:
    log.info("user=%s callback %s", c.from_user.id, c.data)
    await c.message.answer(t("help", settings.lang))
    await c.answer()
