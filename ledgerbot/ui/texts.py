# -*- coding: utf-8 -*-
# ledgerbot/ui/texts.py
# Единая таблица текстов ответов. Язык выбирается конфигом (BOT_LANG), логика одна.
from __future__ import annotations

TEXTS: dict[str, dict[str, str]] = {
    "en": {
        "welcome": (
            "👋 Welcome to Expense Tracker Bot!\n\n"
            "Just write what you spent or received, I will keep your bank and cash balance.\n"
            "For more details use /help"
        ),
        "help_button": "ℹ️ Help",
        "help": (
            "🤖 <b>Expense Tracker Bot – Help</b>\n\n"
            "<b>Commands:</b>\n"
            "/balance – show balance\n"
            "/reset – reset balance and clear expenses\n"
            "/stats – expense stats\n"
            "/help – show help\n\n"
            "<b>Just write:</b>\n"
            "• <code>spent 50 on chai</code>\n"
            "• <code>paid 1200 rent via upi</code>\n"
            "• <code>got salary 45000</code>\n"
            "• <code>bank balance is 10000 and cash 500</code>\n"
            "• <code>show my balance</code>\n\n"
            "<b>Stats formats:</b>\n"
            "<code>/stats</code>\n"
            "<code>/stats from YYYY-MM-DD to YYYY-MM-DD</code>\n\n"
            "🌐 English, Hindi and Hinglish messages are understood.\n"
            "Expenses go to cash unless you mention bank/UPI/card. Income always goes to bank."
        ),
        "balance": "🏦 Bank: <b>{bank}</b>\n💵 Cash: <b>{cash}</b>",
        "expense_saved": "✅ Expense: {amount} · {category} · {wallet}",
        "income_saved": "✅ Income: +{amount} → bank",
        "balance_set": "✅ Balance updated",
        "reset_done": "♻️ Balance reset & expenses cleared",
        "invalid_amount": "⚠️ I need a positive amount. Example: <code>spent 50 on food</code>",
        "income_wallet": "⚠️ Income can only be added to bank. Example: <code>got 500 in bank</code>",
        "amount_missing": "⚠️ Tell me the amount to set. Example: <code>bank balance 1000</code>",
        "clarify": "🤔 Sorry, I could not understand that. Try <code>spent 50 on food</code> or /help",
        "stats_title": "📊 <b>Expense Stats</b>",
        "all_time": "All Time",
        "total": "💸 <b>Total Expense:</b> {total}",
        "by_category": "📂 <b>By Category</b>",
        "by_wallet": "👛 <b>By Wallet</b>",
        "recent": "🧾 <b>Recent Expenses</b>",
        "no_expenses": "No expenses found.",
        "truncated": "<i>(Showing last {limit} expenses)</i>",
        "stats_usage": "⚠️ Wrong dates. Format: <code>/stats from YYYY-MM-DD to YYYY-MM-DD</code>",
        "wallet_bank": "bank",
        "wallet_cash": "cash",
        "error": "😵 Something went wrong. Please try again a bit later.",
    },
    "hi": {
        "welcome": (
            "👋 Expense Tracker Bot में आपका स्वागत है!\n\n"
            "बस लिखिए कि आपने कितना खर्च किया या कितना मिला, मैं बैंक और कैश का हिसाब रखूँगा।\n"
            "ज़्यादा जानकारी के लिए /help"
        ),
        "help_button": "ℹ️ मदद",
        "help": (
            "🤖 <b>Expense Tracker Bot – मदद</b>\n\n"
            "<b>कमांड:</b>\n"
            "/balance – बैलेंस देखें\n"
            "/reset – बैलेंस शून्य करें और खर्च मिटाएँ\n"
            "/stats – खर्च का हिसाब\n"
            "/help – मदद\n\n"
            "<b>बस लिखिए:</b>\n"
            "• <code>chai pe 50 kharch kiye</code>\n"
            "• <code>1200 rent upi se diya</code>\n"
            "• <code>salary 45000 aayi</code>\n"
            "• <code>bank me 10000 hai aur cash 500</code>\n"
            "• <code>kitna paisa bacha hai</code>\n\n"
            "<b>Stats फ़ॉर्मैट:</b>\n"
            "<code>/stats</code>\n"
            "<code>/stats from YYYY-MM-DD to YYYY-MM-DD</code>\n\n"
            "🌐 हिंदी, English और Hinglish समझता हूँ।\n"
            "खर्च कैश से माना जाएगा जब तक आप बैंक/UPI/कार्ड न लिखें। आमदनी हमेशा बैंक में जाती है।"
        ),
        "balance": "🏦 बैंक: <b>{bank}</b>\n💵 कैश: <b>{cash}</b>",
        "expense_saved": "✅ खर्च: {amount} · {category} · {wallet}",
        "income_saved": "✅ आमदनी: +{amount} → बैंक",
        "balance_set": "✅ बैलेंस अपडेट हो गया",
        "reset_done": "♻️ बैलेंस शून्य और खर्च साफ़",
        "invalid_amount": "⚠️ रकम शून्य से ज़्यादा होनी चाहिए। जैसे: <code>food pe 50 kharch</code>",
        "income_wallet": "⚠️ आमदनी सिर्फ़ बैंक में जुड़ती है। जैसे: <code>bank me 500 aaye</code>",
        "amount_missing": "⚠️ कितनी रकम सेट करनी है? जैसे: <code>bank balance 1000</code>",
        "clarify": "🤔 माफ़ कीजिए, समझ नहीं आया। ऐसे लिखें: <code>food pe 50 kharch</code> या /help",
        "stats_title": "📊 <b>खर्च का हिसाब</b>",
        "all_time": "शुरुआत से अब तक",
        "total": "💸 <b>कुल खर्च:</b> {total}",
        "by_category": "📂 <b>श्रेणी के अनुसार</b>",
        "by_wallet": "👛 <b>वॉलेट के अनुसार</b>",
        "recent": "🧾 <b>हाल के खर्च</b>",
        "no_expenses": "कोई खर्च नहीं मिला।",
        "truncated": "<i>(आख़िरी {limit} खर्च दिखाए गए)</i>",
        "stats_usage": "⚠️ तारीख़ गलत है। फ़ॉर्मैट: <code>/stats from YYYY-MM-DD to YYYY-MM-DD</code>",
        "wallet_bank": "बैंक",
        "wallet_cash": "कैश",
        "error": "😵 कुछ गड़बड़ हो गई। थोड़ी देर बाद फिर कोशिश करें।",
    },
}


def t(key: str, lang: str = "en", **kw) -> str:
    table = TEXTS.get(lang) or TEXTS["en"]
    text = table.get(key) or TEXTS["en"][key]
    return text.format(**kw) if kw else text
