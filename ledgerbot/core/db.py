# ledgerbot/core/db.py
# Async SQLAlchemy + session factory + инициализация схемы

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Один движок на приложение, создаётся в init_db()
engine: AsyncEngine | None = None
Session: async_sessionmaker[AsyncSession] | None = None


def configure(database_url: str) -> AsyncEngine:
    global engine, Session
    engine = create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
    )
    # Фабрика сессий
    Session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """
    Одна сессия = одна транзакция:
    >>> async with session_scope() as s:
    ...     await s.execute(...)
    """
    if Session is None:
        raise RuntimeError("БД не инициализирована: вызови init_db()")
    session: AsyncSession = Session()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_db(database_url: str) -> None:
    """
    Создание таблиц для старта без Alembic.
    Balance и Expense используют общий Base из ledgerbot.models.balance.
    """
    from ledgerbot.models.balance import Base
    import ledgerbot.models.expense  # noqa: F401  регистрируем таблицу в metadata

    configure(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    global engine, Session
    if engine is not None:
        await engine.dispose()
    engine = None
    Session = None
