# ledgerbot/repo/balances.py
# Баланс пользователя. Все изменения — одним SQL-выражением на стороне БД,
# никаких read-modify-write в Python.
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbot.models.balance import Balance, WALLETS, utc_now

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _wallet_column(wallet: str):
    if wallet not in WALLETS:
        raise ValueError(f"unknown wallet: {wallet!r}")
    return getattr(Balance, wallet)


async def _select(session: AsyncSession, user_id: str) -> Balance | None:
    q = await session.execute(
        select(Balance)
        .where(Balance.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return q.scalar_one_or_none()


async def ensure_balance(session: AsyncSession, user_id: str) -> None:
    """Создать нулевой баланс, если его нет. Повторный вызов — no-op."""
    insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
    if insert is None:
        # другие диалекты: обычный get-or-create
        if await _select(session, user_id) is None:
            session.add(Balance(user_id=user_id, bank=Decimal("0"), cash=Decimal("0")))
            await session.flush()
        return
    now = utc_now()
    stmt = (
        insert(Balance)
        .values(user_id=user_id, bank=Decimal("0"), cash=Decimal("0"), created_at=now, updated_at=now)
        .on_conflict_do_nothing(index_elements=[Balance.user_id])
    )
    await session.execute(stmt)


async def get_balance(session: AsyncSession, user_id: str) -> Balance:
    bal = await _select(session, user_id)
    if bal is None:
        await ensure_balance(session, user_id)
        bal = await _select(session, user_id)
    return bal


async def adjust_balance(session: AsyncSession, user_id: str, wallet: str, delta: Decimal) -> Balance:
    """
    Атомарный инкремент: UPDATE balances SET <wallet> = <wallet> + :delta.
    Параллельные корректировки одного пользователя складываются, а не затирают друг друга.
    """
    col = _wallet_column(wallet)
    await ensure_balance(session, user_id)
    await session.execute(
        update(Balance)
        .where(Balance.user_id == user_id)
        .values({col: col + delta})
        .execution_options(synchronize_session=False)
    )
    return await get_balance(session, user_id)


async def set_balance(
    session: AsyncSession,
    user_id: str,
    bank: Decimal | None = None,
    cash: Decimal | None = None,
) -> Balance:
    """Перезаписываем только переданные поля, остальные не трогаем."""
    values = {}
    if bank is not None:
        values[Balance.bank] = bank
    if cash is not None:
        values[Balance.cash] = cash
    if not values:
        raise ValueError("set_balance: nothing to set")
    await ensure_balance(session, user_id)
    await session.execute(
        update(Balance)
        .where(Balance.user_id == user_id)
        .values(values)
        .execution_options(synchronize_session=False)
    )
    return await get_balance(session, user_id)


async def reset_balance(session: AsyncSession, user_id: str) -> Balance:
    return await set_balance(session, user_id, bank=Decimal("0"), cash=Decimal("0"))
