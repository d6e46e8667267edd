# ledgerbot/handlers/balance.py
from __future__ import annotations

import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from ledgerbot.core.config import Settings
from ledgerbot.core.db import session_scope
from ledgerbot.repo.balances import get_balance
from ledgerbot.services.resolver import reset_ledger
from ledgerbot.ui.render import render_balance
from ledgerbot.ui.texts import t

log = logging.getLogger(__name__)
router = Router(name=__name__)


@router.message(Command("balance"))
async def cmd_balance(m: Message, settings: Settings) -> None:
    uid = str(m.from_user.id)
    log.info("user=%s /balance", uid)
    async with session_scope() as s:
        bal = await get_balance(s, uid)
    await m.answer(render_balance(bal, settings.lang, settings.currency))


@router.message(Command("reset"))
async def cmd_reset(m: Message, settings: Settings) -> None:
    uid = str(m.from_user.id)
    log.info("user=%s /reset", uid)
    async with session_scope() as s:
        await reset_ledger(s, uid)
    await m.answer(t("reset_done", settings.lang))
