# ledgerbot/handlers/stats.py
from __future__ import annotations

import logging

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from ledgerbot.core.config import Settings
from ledgerbot.core.db import session_scope
from ledgerbot.repo.balances import ensure_balance
from ledgerbot.services.periods import DateRangeError
from ledgerbot.services.stats import compute_stats
from ledgerbot.ui.render import render_stats
from ledgerbot.ui.texts import t

log = logging.getLogger(__name__)
router = Router(name=__name__)


@router.message(Command("stats"))
async def cmd_stats(m: Message, command: CommandObject, settings: Settings) -> None:
    uid = str(m.from_user.id)
    args = (command.args or "").strip()
    log.info('user=%s /stats args="%s"', uid, args)
    try:
        async with session_scope() as s:
            await ensure_balance(s, uid)
            report = await compute_stats(s, uid, args)
    except DateRangeError as e:
        log.debug("user=%s stats rejected: %s", uid, e)
        await m.answer(t("stats_usage", settings.lang))
        return
    await m.answer(render_stats(report, settings.lang, settings.currency))
