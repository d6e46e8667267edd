# ledgerbot/services/dedup.py
# Фильтр повторной доставки: id сообщения, увиденный в течение окна, повторно не обрабатываем.
# Живёт в памяти процесса; рестарт очищает (повторы от транспорта сами ограничены по времени).
from __future__ import annotations

import time
from typing import Callable, Hashable

DEFAULT_WINDOW = 5 * 60


class DuplicateFilter:
    def __init__(self, window: float = DEFAULT_WINDOW, clock: Callable[[], float] = time.monotonic) -> None:
        if window <= 0:
            raise ValueError("window must be positive")
        self.window = window
        self._clock = clock
        self._seen: dict[Hashable, float] = {}  # message_id -> expires_at

    def __len__(self) -> int:
        return len(self._seen)

    def should_process(self, message_id: Hashable, now: float | None = None) -> bool:
        """
        True при первом появлении id (или после истечения окна), False для повтора.
        """
        now = self._clock() if now is None else now
        expires_at = self._seen.get(message_id)
        if expires_at is not None and now < expires_at:
            return False
        self._seen[message_id] = now + self.window
        return True

    def evict_expired(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        expired = [k for k, exp in self._seen.items() if exp <= now]
        for k in expired:
            del self._seen[k]
        return len(expired)
