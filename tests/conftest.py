from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from ledgerbot.core import db
from ledgerbot.core.config import Settings


@pytest.fixture
async def ledger_db(tmp_path):
    """Свежая SQLite-база на тест; session_scope() ходит в неё."""
    await db.init_db(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    yield
    await db.dispose_db()


@pytest.fixture
async def session(ledger_db):
    async with db.session_scope() as s:
        yield s


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bot_token="123:test",
        database_url="sqlite+aiosqlite://",
        classifier_api_key="test-key",
        classifier_url="https://llm.test/v1/chat/completions",
        classifier_model="test-model",
        classifier_timeout=10.0,
        prompt_path=Path("unused.txt"),
        dedup_window=300.0,
        lang="en",
        currency="₹",
        log_level="DEBUG",
    )


def make_message(text: str, user_id: int = 42, chat_type: str = "private", message_id: int = 1):
    m = SimpleNamespace(
        text=text,
        message_id=message_id,
        from_user=SimpleNamespace(id=user_id, username="tester"),
        chat=SimpleNamespace(id=user_id, type=chat_type),
    )
    m.answer = AsyncMock()
    return m


class FakeClassifier:
    def __init__(self, result):
        self.result = result
        self.calls: list[str] = []

    async def classify(self, text):
        self.calls.append(text)
        return self.result
