# ledgerbot/models/balance.py
# Объявляем Base и модель Balance: одна запись на пользователя, два кошелька.

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, Integer, String, Numeric, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()

WALLETS = ("bank", "cash")

# Денежные поля: 14 знаков, 2 после запятой
Money = Numeric(14, 2)


def utc_now() -> datetime:
    # naive UTC: колонки TIMESTAMP WITHOUT TIME ZONE
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Balance(Base):
    __tablename__ = "balances"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    bank = Column(Money, nullable=False, default=Decimal("0"))
    cash = Column(Money, nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self) -> str:
        return f"Balance(user_id={self.user_id!r}, bank={self.bank}, cash={self.cash})"
