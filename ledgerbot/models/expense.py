# ledgerbot/models/expense.py
# Append-only журнал расходов. Строки не редактируются, удаляются только /reset.

from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint, Index

from ledgerbot.models.balance import Base, Money, utc_now


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), index=True, nullable=False)
    amount = Column(Money, nullable=False)
    wallet = Column(String(10), nullable=False)  # 'bank' | 'cash'
    category = Column(String(100), nullable=False, default="general")
    raw_message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
        CheckConstraint("wallet IN ('bank', 'cash')", name="ck_expenses_wallet"),
        Index("ix_expenses_user_created", "user_id", "created_at"),
    )
