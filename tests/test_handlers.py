from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

from aiogram.types import Chat, Message, User
from sqlalchemy import func, select

from conftest import FakeClassifier, make_message
from ledgerbot.core.db import session_scope
from ledgerbot.core.middlewares import DedupMiddleware, message_key
from ledgerbot.handlers.balance import cmd_balance, cmd_reset
from ledgerbot.handlers.errors import on_error
from ledgerbot.handlers.messages import free_text
from ledgerbot.handlers.start import _is_help_word, cb_help, cmd_help, cmd_start, private_help_word
from ledgerbot.handlers.stats import cmd_stats
from ledgerbot.models.balance import Balance
from ledgerbot.models.expense import Expense
from ledgerbot.repo.balances import get_balance
from ledgerbot.repo.expenses import record_expense
from ledgerbot.services.dedup import DuplicateFilter
from ledgerbot.services.intents import ClassificationFailure, ExpenseIntent, IncomeIntent
from ledgerbot.ui.texts import t


def _reply(m) -> str:
    m.answer.assert_awaited_once()
    return m.answer.await_args.args[0]


async def test_start_creates_balance_and_offers_help(ledger_db, settings):
    m = make_message("/start", user_id=7)
    await cmd_start(m, settings=settings)
    assert "Welcome" in _reply(m)
    kb = m.answer.await_args.kwargs["reply_markup"]
    assert kb.inline_keyboard[0][0].callback_data == "SHOW_HELP"
    async with session_scope() as s:
        count = (await s.execute(select(func.count(Balance.id)).where(Balance.user_id == "7"))).scalar_one()
    assert count == 1


async def test_help_command_and_words_share_text(settings):
    m = make_message("/help")
    await cmd_help(m, settings=settings)
    assert _reply(m) == t("help")
    assert _is_help_word("  Menu ")
    assert _is_help_word("COMMANDS")
    assert not _is_help_word("help me pay 50")


def test_help_words_answer_only_in_private_chats():
    assert private_help_word.resolve(make_message("menu"))
    assert not private_help_word.resolve(make_message("menu", chat_type="group"))
    assert not private_help_word.resolve(make_message("help", chat_type="supergroup"))
    assert not private_help_word.resolve(make_message("spent 50"))


async def test_help_button(settings):
    c = SimpleNamespace(data="SHOW_HELP", from_user=SimpleNamespace(id=1), message=make_message(""))
    c.answer = AsyncMock()
    await cb_help(c, settings=settings)
    assert _reply(c.message) == t("help")
    c.answer.assert_awaited_once()


async def test_free_text_expense_round(ledger_db, settings):
    clf = FakeClassifier(ExpenseIntent(amount=Decimal("50"), wallet="cash", category="food"))
    m = make_message("  chai and samosa 50 ")
    await free_text(m, settings=settings, classifier=clf)

    assert clf.calls == ["chai and samosa 50"]
    text = _reply(m)
    assert "Expense: ₹50 · food · cash" in text
    assert "Cash: <b>-₹50</b>" in text
    async with session_scope() as s:
        row = (await s.execute(select(Expense))).scalar_one()
    assert row.raw_message == "chai and samosa 50"


async def test_free_text_income_to_cash_is_refused(ledger_db, settings):
    m = make_message("got 100 cash")
    await free_text(m, settings=settings, classifier=FakeClassifier(IncomeIntent(amount=Decimal("100"), wallet="cash")))
    assert _reply(m) == t("income_wallet")
    async with session_scope() as s:
        bal = await get_balance(s, "42")
    assert (bal.bank, bal.cash) == (0, 0)


async def test_free_text_classifier_failure_asks_to_rephrase(ledger_db, settings):
    m = make_message("asdfgh")
    await free_text(m, settings=settings, classifier=FakeClassifier(ClassificationFailure("status 500")))
    assert _reply(m) == t("clarify")


async def test_balance_and_reset_commands(ledger_db, settings):
    async with session_scope() as s:
        await record_expense(s, "42", Decimal("9"), "cash")

    m = make_message("/balance")
    await cmd_balance(m, settings=settings)
    assert "Bank: <b>₹0</b>" in _reply(m)

    m = make_message("/reset")
    await cmd_reset(m, settings=settings)
    assert _reply(m) == t("reset_done")
    async with session_scope() as s:
        assert (await s.execute(select(Expense))).first() is None


async def test_stats_command(ledger_db, settings):
    async with session_scope() as s:
        await record_expense(s, "42", Decimal("50"), "cash", "food", created_at=datetime(2024, 1, 10))
    m = make_message("/stats from 2024-01-01 to 2024-01-31")
    await cmd_stats(m, command=SimpleNamespace(args="from 2024-01-01 to 2024-01-31"), settings=settings)
    text = _reply(m)
    assert "2024-01-01 → 2024-01-31" in text
    assert "• food: ₹50" in text


async def test_stats_command_without_args_and_no_data(ledger_db, settings):
    m = make_message("/stats")
    await cmd_stats(m, command=SimpleNamespace(args=None), settings=settings)
    text = _reply(m)
    assert "All Time" in text
    assert "No expenses found." in text


async def test_stats_command_bad_date(ledger_db, settings):
    m = make_message("/stats from 2024-02-30 to 2024-03-01")
    await cmd_stats(m, command=SimpleNamespace(args="from 2024-02-30 to 2024-03-01"), settings=settings)
    assert _reply(m) == t("stats_usage")


def _tg_message(message_id: int, chat_id: int = 42) -> Message:
    return Message(
        message_id=message_id,
        date=datetime(2024, 1, 1),
        chat=Chat(id=chat_id, type="private"),
        from_user=User(id=chat_id, is_bot=False, first_name="Test"),
        text="spent 50",
    )


async def test_dedup_middleware_drops_repeat_delivery(ledger_db):
    middleware = DedupMiddleware(DuplicateFilter(window=300))

    async def handler(event, data):
        async with session_scope() as s:
            await record_expense(s, str(event.from_user.id), Decimal("50"), "cash")
        return "handled"

    first = _tg_message(100)
    assert await middleware(handler, first, {}) == "handled"
    assert await middleware(handler, _tg_message(100), {}) is None
    # тот же message_id в другом чате — другое сообщение
    assert await middleware(handler, _tg_message(100, chat_id=43), {}) == "handled"

    async with session_scope() as s:
        rows = (await s.execute(select(Expense.user_id))).scalars().all()
    assert sorted(rows) == ["42", "43"]
    assert message_key(first) == "42:100"


async def test_error_boundary_replies_once(settings):
    m = make_message("spent 50")
    event = SimpleNamespace(
        update=SimpleNamespace(update_id=1, message=m, callback_query=None),
        exception=RuntimeError("connection refused"),
    )
    assert await on_error(event, settings=settings) is True
    assert _reply(m) == t("error")


async def test_error_boundary_survives_failed_reply(settings):
    m = make_message("spent 50")
    m.answer.side_effect = RuntimeError("telegram down")
    event = SimpleNamespace(
        update=SimpleNamespace(update_id=2, message=m, callback_query=None),
        exception=RuntimeError("db down"),
    )
    assert await on_error(event, settings=settings) is True


def test_setup_includes_routers_in_order():
    from aiogram import Dispatcher

    from ledgerbot.handlers import setup

    dp = Dispatcher()
    setup(dp)
    assert [r.name for r in dp.sub_routers] == [
        "ledgerbot.handlers.start",
        "ledgerbot.handlers.balance",
        "ledgerbot.handlers.stats",
        "ledgerbot.handlers.messages",
        "ledgerbot.handlers.errors",
    ]


async def test_scheduler_registers_dedup_sweep():
    from ledgerbot.core.scheduler import start_scheduler

    dedup = DuplicateFilter(window=300)
    scheduler = start_scheduler(dedup)
    try:
        job = scheduler.get_job("dedup_sweep")
        assert job is not None
        await job.func()
    finally:
        scheduler.shutdown(wait=False)
