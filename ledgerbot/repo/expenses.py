# ledgerbot/repo/expenses.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, delete, func, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbot.models.balance import WALLETS, utc_now
from ledgerbot.models.expense import Expense

RECENT_LIMIT = 25


def _dec(v) -> Decimal:
    if v is None:
        return Decimal("0")
    return v if isinstance(v, Decimal) else Decimal(str(v))


def _where(user_id: str, start: datetime | None, end: datetime | None):
    # обе границы включительно
    conds = [Expense.user_id == user_id]
    if start is not None:
        conds.append(Expense.created_at >= start)
    if end is not None:
        conds.append(Expense.created_at <= end)
    return and_(*conds)


async def record_expense(
    session: AsyncSession,
    user_id: str,
    amount: Decimal,
    wallet: str,
    category: str = "general",
    raw_message: str | None = None,
    created_at: datetime | None = None,
) -> Expense:
    """Добавляет строку журнала. Баланс НЕ трогает — это делает вызывающий."""
    if amount <= 0:
        raise ValueError(f"expense amount must be positive, got {amount}")
    if wallet not in WALLETS:
        raise ValueError(f"unknown wallet: {wallet!r}")
    exp = Expense(
        user_id=user_id,
        amount=amount,
        wallet=wallet,
        category=category or "general",
        raw_message=raw_message,
        created_at=created_at or utc_now(),
    )
    session.add(exp)
    await session.flush()
    return exp


async def clear_expenses(session: AsyncSession, user_id: str) -> int:
    res = await session.execute(delete(Expense).where(Expense.user_id == user_id))
    return res.rowcount or 0


async def query_expenses(
    session: AsyncSession,
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = RECENT_LIMIT,
) -> list[Expense]:
    q = await session.execute(
        select(Expense)
        .where(_where(user_id, start, end))
        .order_by(desc(Expense.created_at), desc(Expense.id))
        .limit(limit)
    )
    return list(q.scalars().all())


async def aggregate_total(
    session: AsyncSession,
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
) -> Decimal:
    q = await session.execute(select(func.sum(Expense.amount)).where(_where(user_id, start, end)))
    return _dec(q.scalar_one_or_none())


async def aggregate_by_category(
    session: AsyncSession,
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[tuple[str, Decimal]]:
    """[(категория, сумма)] по убыванию суммы."""
    total = func.sum(Expense.amount).label("total")
    q = await session.execute(
        select(Expense.category, total)
        .where(_where(user_id, start, end))
        .group_by(Expense.category)
        .order_by(desc(total), Expense.category)
    )
    return [(cat or "general", _dec(s)) for cat, s in q.all()]


async def aggregate_by_wallet(
    session: AsyncSession,
    user_id: str,
    start: datetime | None = None,
    end: datetime | None = None,
) -> dict[str, Decimal]:
    q = await session.execute(
        select(Expense.wallet, func.sum(Expense.amount))
        .where(_where(user_id, start, end))
        .group_by(Expense.wallet)
    )
    return {w: _dec(s) for w, s in q.all()}
