"""
Calendar-month windows used to partition expenses.

Windows are inclusive on both ends: ``start <= moment <= end``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

from .models import Expense

logger = logging.getLogger(__name__)

_MONTH_KEY_RE = re.compile(r"([0-9]{4})-([0-9]{2})")

# Month indexes (year * 12 + month - 1) a datetime can represent
_FIRST_MONTH = 1 * 12
_LAST_MONTH = 9999 * 12 + 11


def month_key(moment: date) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"


def parse_month_key(key: str) -> Optional[Tuple[int, int]]:
    """Return ``(year, month)`` for a well-formed ``YYYY-MM`` key, else None."""
    if not isinstance(key, str):
        return None
    match = _MONTH_KEY_RE.fullmatch(key)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        return None
    return year, month


def _shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = min(max(year * 12 + (month - 1) - offset, _FIRST_MONTH), _LAST_MONTH)
    return index // 12, index % 12 + 1


def _as_datetime(moment: date) -> datetime:
    if isinstance(moment, datetime):
        return moment
    return datetime.combine(moment, time.min)


@dataclass(frozen=True)
class Window:
    start: datetime
    end: datetime

    @property
    def key(self) -> str:
        return month_key(self.start)

    def contains(self, moment: date) -> bool:
        moment = _as_datetime(moment)
        if self.start.tzinfo is None and moment.tzinfo is not None:
            moment = moment.replace(tzinfo=None)
        elif self.start.tzinfo is not None and moment.tzinfo is None:
            moment = moment.replace(tzinfo=self.start.tzinfo)
        return self.start <= moment <= self.end

    def select(self, expenses: Iterable[Expense]) -> List[Expense]:
        return [exp for exp in expenses if self.contains(exp.date)]


def window_for(year: int, month: int, tzinfo=None) -> Window:
    start = datetime(year, month, 1, tzinfo=tzinfo)
    if year * 12 + month - 1 >= _LAST_MONTH:
        end = datetime.max.replace(tzinfo=tzinfo)
    else:
        next_year, next_month = _shift_month(year, month, -1)
        end = datetime(next_year, next_month, 1, tzinfo=tzinfo) - timedelta(microseconds=1)
    return Window(start=start, end=end)


def month_window(reference: date, offset: int = 0) -> Window:
    """
    Window of the calendar month containing ``reference``, moved ``offset``
    months into the past (``offset=1`` is the previous month).
    """
    reference = _as_datetime(reference)
    year, month = _shift_month(reference.year, reference.month, offset)
    return window_for(year, month, reference.tzinfo)


def window_for_key(key: str, tzinfo=None) -> Optional[Window]:
    parsed = parse_month_key(key)
    if parsed is None:
        logger.warning(f"Ignoring unparseable month key: {key!r}")
        return None
    return window_for(parsed[0], parsed[1], tzinfo)


def trailing_windows(reference: date, count: int) -> List[Window]:
    """The last ``count`` month windows ending with the reference month, oldest first."""
    return [month_window(reference, offset) for offset in range(count - 1, -1, -1)]


def day_window(day: date) -> Window:
    start = _as_datetime(day).replace(hour=0, minute=0, second=0, microsecond=0)
    return Window(start=start, end=start + timedelta(days=1) - timedelta(microseconds=1))
