# ledgerbot/services/intents.py
"""
Структурированные намерения, которые возвращает классификатор.

Ответ модели — недоверенный JSON. Прежде чем он попадёт в логику изменения
баланса, он проходит через схему из шести вариантов:

  {"intent": "expense", "amount": 50, "wallet": "cash", "category": "food"}
  {"intent": "income", "amount": 200}
  {"intent": "set_balance", "bank": 1000}
  {"intent": "show_balance"}
  {"intent": "reset_balance"}
  всё остальное с непустым JSON-объектом -> UnrecognizedIntent
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

Wallet = Literal["bank", "cash"]


class _IntentBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


def _norm_wallet(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip().lower()
        return v or None
    return v


WalletField = Annotated[Optional[Wallet], BeforeValidator(_norm_wallet)]
AnyWalletField = Annotated[Optional[str], BeforeValidator(_norm_wallet)]

# столбцы Numeric(14, 2): копейки округляем, всё от 10^12 не помещается
MONEY_LIMIT = Decimal(10) ** 12


def _fit_money(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is None:
        return v
    # граница до quantize: огромные значения не влезают в точность контекста
    if abs(v) >= MONEY_LIMIT:
        raise ValueError(f"amount out of range: {v}")
    v = v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if abs(v) >= MONEY_LIMIT:
        raise ValueError(f"amount out of range: {v}")
    return v


MoneyField = Annotated[Optional[Decimal], AfterValidator(_fit_money)]


class ExpenseIntent(_IntentBase):
    intent: Literal["expense"] = "expense"
    amount: MoneyField = None
    wallet: WalletField = None
    category: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = " ".join(v.split()).lower()
            return v[:100] or None
        return v


class IncomeIntent(_IntentBase):
    intent: Literal["income"] = "income"
    amount: MoneyField = None
    # любой строковый кошелёк допустим на входе: не-bank отклоняет resolver
    wallet: AnyWalletField = None


class SetBalanceIntent(_IntentBase):
    intent: Literal["set_balance"] = "set_balance"
    bank: MoneyField = None
    cash: MoneyField = None


class ShowBalanceIntent(_IntentBase):
    intent: Literal["show_balance"] = "show_balance"


class ResetBalanceIntent(_IntentBase):
    intent: Literal["reset_balance"] = "reset_balance"


class UnrecognizedIntent(_IntentBase):
    intent: Literal["unrecognized"] = "unrecognized"


KnownIntent = Annotated[
    Union[ExpenseIntent, IncomeIntent, SetBalanceIntent, ShowBalanceIntent, ResetBalanceIntent],
    Field(discriminator="intent"),
]
Intent = Union[
    ExpenseIntent, IncomeIntent, SetBalanceIntent, ShowBalanceIntent, ResetBalanceIntent, UnrecognizedIntent
]

KNOWN_TAGS = ("expense", "income", "set_balance", "show_balance", "reset_balance")

_adapter: TypeAdapter = TypeAdapter(KnownIntent)


@dataclass(frozen=True)
class ClassificationFailure:
    reason: str


def parse_intent(payload: Any) -> Intent | ClassificationFailure:
    if not isinstance(payload, dict):
        return ClassificationFailure(f"expected JSON object, got {type(payload).__name__}")

    tag = payload.get("intent")
    if isinstance(tag, str):
        tag = tag.strip().lower()
    if tag not in KNOWN_TAGS:
        return UnrecognizedIntent()

    try:
        return _adapter.validate_python({**payload, "intent": tag})
    except ValidationError as e:
        return ClassificationFailure(f"invalid {tag} payload: {e.error_count()} error(s)")
