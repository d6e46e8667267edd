# -*- coding: utf-8 -*-
# ledgerbot/services/periods.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
import re
from typing import Optional

_RANGE_RE = re.compile(r"from\s+(\d{4}-\d{2}-\d{2})\s+to\s+(\d{4}-\d{2}-\d{2})", re.IGNORECASE)

# конец дня включительно, с точностью до миллисекунды
END_OF_DAY = time(23, 59, 59, 999000)


class DateRangeError(ValueError):
    pass


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        d1, d2 = self.start.date(), self.end.date()
        if d1 == d2:
            return d1.isoformat()
        return f"{d1.isoformat()} → {d2.isoformat()}"


def day_range(d1: date, d2: date) -> DateRange:
    if d1 > d2:
        d1, d2 = d2, d1
    return DateRange(datetime.combine(d1, time.min), datetime.combine(d2, END_OF_DAY))


def _parse_day(s: str) -> date:
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        raise DateRangeError(f"no such date: {s}")


def parse_date_range(text: str) -> Optional[DateRange]:
    """
    Понимает "from 2024-01-01 to 2024-01-31" (регистр не важен).
    Нет совпадения -> None (всё время). Несуществующая дата -> DateRangeError.
    """
    if not text:
        return None
    m = _RANGE_RE.search(text)
    if not m:
        return None
    return day_range(_parse_day(m.group(1)), _parse_day(m.group(2)))
