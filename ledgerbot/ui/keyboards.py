# ledgerbot/ui/keyboards.py
from __future__ import annotations
from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from ledgerbot.ui.texts import t

SHOW_HELP = "SHOW_HELP"


def kb_start(lang: str = "en") -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[[InlineKeyboardButton(text=t("help_button", lang), callback_data=SHOW_HELP)]]
    )
