# -*- coding: utf-8 -*-
# ledgerbot/ui/render.py
# Результаты -> HTML-текст ответа. Пользовательские строки экранируем.
from __future__ import annotations

import html
from decimal import Decimal

from ledgerbot.models.balance import Balance
from ledgerbot.repo.expenses import RECENT_LIMIT
from ledgerbot.services.resolver import Outcome, Resolution
from ledgerbot.services.stats import StatsReport
from ledgerbot.ui.texts import t


def fmt_money(v: Decimal | int | float, currency: str = "₹") -> str:
    d = Decimal(str(v))
    sign = "-" if d < 0 else ""
    d = abs(d)
    num = str(int(d)) if d == d.to_integral_value() else f"{d:.2f}"
    return f"{sign}{currency}{num}"


def wallet_name(wallet: str, lang: str = "en") -> str:
    return t(f"wallet_{wallet}", lang)


def render_balance(bal: Balance, lang: str = "en", currency: str = "₹") -> str:
    return t("balance", lang, bank=fmt_money(bal.bank, currency), cash=fmt_money(bal.cash, currency))


def render_resolution(res: Resolution, lang: str = "en", currency: str = "₹") -> str:
    if res.outcome is Outcome.REJECTED:
        return t(res.rejection.value, lang)

    lines: list[str] = []
    if res.outcome is Outcome.BALANCE_SET:
        lines.append(t("balance_set", lang))
    elif res.outcome is Outcome.BALANCE_RESET:
        lines.append(t("reset_done", lang))
    elif res.expense is not None:
        e = res.expense
        lines.append(t(
            "expense_saved", lang,
            amount=fmt_money(e.amount, currency),
            category=html.escape(e.category),
            wallet=wallet_name(e.wallet, lang),
        ))
    elif res.income is not None:
        lines.append(t("income_saved", lang, amount=fmt_money(res.income, currency)))

    if lines:
        lines.append("")
    lines.append(render_balance(res.balance, lang, currency))
    return "\n".join(lines)


def render_stats(report: StatsReport, lang: str = "en", currency: str = "₹") -> str:
    lines = [t("stats_title", lang)]
    period = report.period.label if report.period else t("all_time", lang)
    lines.append(f"🗓 {period}")
    lines.append("")
    lines.append(t("total", lang, total=fmt_money(report.total, currency)))
    lines.append("")

    if report.by_category:
        lines.append(t("by_category", lang))
        for cat, total in report.by_category:
            lines.append(f"• {html.escape(cat)}: {fmt_money(total, currency)}")
        lines.append("")

    if report.by_wallet:
        lines.append(t("by_wallet", lang))
        for wallet in sorted(report.by_wallet):
            lines.append(f"• {wallet_name(wallet, lang)}: {fmt_money(report.by_wallet[wallet], currency)}")
        lines.append("")

    if report.empty:
        lines.append(t("no_expenses", lang))
        return "\n".join(lines)

    lines.append(t("recent", lang))
    for i, e in enumerate(report.recent, 1):
        lines.append(
            f"{i}. {fmt_money(e.amount, currency)} | {html.escape(e.category or 'general')} | "
            f"{wallet_name(e.wallet, lang)} | {e.created_at:%Y-%m-%d}"
        )
    if report.truncated:
        lines.append("")
        lines.append(t("truncated", lang, limit=RECENT_LIMIT))
    return "\n".join(lines)
