# ledgerbot/services/resolver.py
"""
Intent -> изменение леджера.

Таблица переходов:

  expense        amount > 0           record_expense + adjust(wallet, -amount)   -> баланс
  expense        amount <= 0 / нет    -                                          -> invalid_amount
  income         amount > 0, bank     adjust(bank, +amount)                      -> баланс
  income         wallet не bank       -                                          -> income_wallet
  income         amount <= 0 / нет    -                                          -> invalid_amount
  set_balance    bank и/или cash      set_balance(только переданные)             -> подтверждение
  set_balance    ничего               -                                          -> amount_missing
  show_balance                        get_balance                                -> баланс
  reset_balance                       reset_balance + clear_expenses             -> нули
  unrecognized / ClassificationFailure                                           -> clarify

Никакого I/O кроме вызовов repo. Баланс создаётся (ensure) для любого распознанного ответа,
ClassificationFailure не трогает БД вовсе. Вызывающий держит одну транзакцию (session_scope),
так что запись расхода и списание с баланса коммитятся или откатываются вместе.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ledgerbot.models.balance import Balance
from ledgerbot.models.expense import Expense
from ledgerbot.repo.balances import adjust_balance, ensure_balance, get_balance, reset_balance, set_balance
from ledgerbot.repo.expenses import clear_expenses, record_expense
from ledgerbot.services.intents import (
    ClassificationFailure,
    ExpenseIntent,
    IncomeIntent,
    Intent,
    ResetBalanceIntent,
    SetBalanceIntent,
    ShowBalanceIntent,
)

log = logging.getLogger(__name__)

DEFAULT_EXPENSE_WALLET = "cash"
DEFAULT_CATEGORY = "general"
INCOME_WALLET = "bank"


class Outcome(str, Enum):
    BALANCE = "balance"
    BALANCE_SET = "balance_set"
    BALANCE_RESET = "balance_reset"
    REJECTED = "rejected"


class Rejection(str, Enum):
    INVALID_AMOUNT = "invalid_amount"
    INCOME_WALLET = "income_wallet"
    AMOUNT_MISSING = "amount_missing"
    CLARIFY = "clarify"


@dataclass(frozen=True)
class Resolution:
    outcome: Outcome
    balance: Optional[Balance] = None
    rejection: Optional[Rejection] = None
    expense: Optional[Expense] = None
    income: Optional[Decimal] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.REJECTED


def _reject(reason: Rejection) -> Resolution:
    return Resolution(Outcome.REJECTED, rejection=reason)


def _positive(amount: Decimal | None) -> bool:
    return amount is not None and amount > 0


async def resolve(
    session: AsyncSession,
    user_id: str,
    intent: Intent | ClassificationFailure,
    raw_message: str | None = None,
) -> Resolution:
    if isinstance(intent, ClassificationFailure):
        return _reject(Rejection.CLARIFY)

    await ensure_balance(session, user_id)

    if isinstance(intent, ExpenseIntent):
        if not _positive(intent.amount):
            log.debug("user=%s expense rejected: amount=%s", user_id, intent.amount)
            return _reject(Rejection.INVALID_AMOUNT)
        wallet = intent.wallet or DEFAULT_EXPENSE_WALLET
        exp = await record_expense(
            session,
            user_id,
            amount=intent.amount,
            wallet=wallet,
            category=intent.category or DEFAULT_CATEGORY,
            raw_message=raw_message,
        )
        bal = await adjust_balance(session, user_id, wallet, -intent.amount)
        log.info("user=%s expense amount=%s wallet=%s category=%s", user_id, exp.amount, wallet, exp.category)
        return Resolution(Outcome.BALANCE, balance=bal, expense=exp)

    if isinstance(intent, IncomeIntent):
        # доход только на bank
        if intent.wallet is not None and intent.wallet != INCOME_WALLET:
            log.debug("user=%s income rejected: wallet=%s", user_id, intent.wallet)
            return _reject(Rejection.INCOME_WALLET)
        if not _positive(intent.amount):
            log.debug("user=%s income rejected: amount=%s", user_id, intent.amount)
            return _reject(Rejection.INVALID_AMOUNT)
        bal = await adjust_balance(session, user_id, INCOME_WALLET, intent.amount)
        log.info("user=%s income amount=%s", user_id, intent.amount)
        return Resolution(Outcome.BALANCE, balance=bal, income=intent.amount)

    if isinstance(intent, SetBalanceIntent):
        if intent.bank is None and intent.cash is None:
            return _reject(Rejection.AMOUNT_MISSING)
        bal = await set_balance(session, user_id, bank=intent.bank, cash=intent.cash)
        log.info("user=%s set_balance bank=%s cash=%s", user_id, intent.bank, intent.cash)
        return Resolution(Outcome.BALANCE_SET, balance=bal)

    if isinstance(intent, ShowBalanceIntent):
        return Resolution(Outcome.BALANCE, balance=await get_balance(session, user_id))

    if isinstance(intent, ResetBalanceIntent):
        return Resolution(Outcome.BALANCE_RESET, balance=await reset_ledger(session, user_id))

    # UnrecognizedIntent
    return _reject(Rejection.CLARIFY)


async def reset_ledger(session: AsyncSession, user_id: str) -> Balance:
    """Нули на обоих кошельках + очистка журнала расходов (общая точка для /reset и reset_balance)."""
    bal = await reset_balance(session, user_id)
    removed = await clear_expenses(session, user_id)
    log.info("user=%s reset removed_expenses=%s", user_id, removed)
    return bal
