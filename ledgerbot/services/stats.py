# ledgerbot/services/stats.py
# Агрегации для /stats
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbot.models.expense import Expense
from ledgerbot.repo.expenses import (
    RECENT_LIMIT,
    aggregate_by_category,
    aggregate_by_wallet,
    aggregate_total,
    query_expenses,
)
from ledgerbot.services.periods import DateRange, parse_date_range


@dataclass
class StatsReport:
    period: Optional[DateRange]  # None = всё время
    total: Decimal = Decimal("0")
    by_category: list[tuple[str, Decimal]] = field(default_factory=list)
    by_wallet: dict[str, Decimal] = field(default_factory=dict)
    recent: list[Expense] = field(default_factory=list)
    truncated: bool = False

    @property
    def empty(self) -> bool:
        return not self.recent


async def compute_stats(session: AsyncSession, user_id: str, range_text: str = "") -> StatsReport:
    """
    Итог, разбивка по категориям (по убыванию) и кошелькам, последние 25 расходов.
    Все суммы — только по отфильтрованному периоду.
    Бросает DateRangeError, если в "from … to …" несуществующая дата.
    """
    period = parse_date_range(range_text)
    start = period.start if period else None
    end = period.end if period else None

    recent = await query_expenses(session, user_id, start, end, limit=RECENT_LIMIT)
    return StatsReport(
        period=period,
        total=await aggregate_total(session, user_id, start, end),
        by_category=await aggregate_by_category(session, user_id, start, end),
        by_wallet=await aggregate_by_wallet(session, user_id, start, end),
        recent=recent,
        truncated=len(recent) >= RECENT_LIMIT,
    )
