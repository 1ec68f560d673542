"""Calendar-day helpers used by the recurrence engine.

Weekdays follow the shift calendar convention: 0=Sunday .. 6=Saturday.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple


def normalize_date(value: date) -> date:
    """Drop any time-of-day component. Idempotent."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_calendar_date(value) -> Tuple[Optional[date], Optional[str]]:
    """Parse a date-like value into a calendar date.

    Accepts date, datetime, "YYYY-MM-DD" and full ISO datetimes (a trailing
    "Z" is read as UTC). Never raises: returns (date, None) on success and
    (None, reason) otherwise.
    """
    if isinstance(value, (date, datetime)):
        return normalize_date(value), None
    if not isinstance(value, str):
        return None, f"unsupported type {type(value).__name__}"

    raw = value.strip()
    if not raw:
        return None, "empty value"
    try:
        return date.fromisoformat(raw), None
    except ValueError:
        pass
    try:
        iso = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
        return datetime.fromisoformat(iso).date(), None
    except ValueError:
        return None, f"not an ISO date: {raw!r}"


def day_of_week(d: date) -> int:
    # Python weekday: Monday=0 ... Sunday=6
    return (d.weekday() + 1) % 7


def month_start(year: int, month: int) -> date:
    return date(year, month, 1)


def month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def day_exists_in_month(year: int, month: int, day: int) -> bool:
    """True if (year, month, day) is a real calendar date."""
    if not (1 <= month <= 12) or not (date.min.year <= year <= date.max.year):
        return False
    return 1 <= day <= calendar.monthrange(year, month)[1]


class DayRange:
    """Inclusive run of calendar days between two dates.

    Re-iterable, like range(); an inverted range is simply empty.
    """

    def __init__(self, start: date, end: date):
        self.start = normalize_date(start)
        self.end = normalize_date(end)

    def __iter__(self) -> Iterator[date]:
        cur = self.start
        while cur <= self.end:
            yield cur
            if cur == date.max:
                break
            cur = cur + timedelta(days=1)

    def __len__(self) -> int:
        return max((self.end - self.start).days + 1, 0)

    def __repr__(self) -> str:
        return f"DayRange({self.start.isoformat()}, {self.end.isoformat()})"


def each_day(start: date, end: date) -> DayRange:
    return DayRange(start, end)


def each_month(start: date, end: date) -> Iterator[Tuple[int, int]]:
    """Yield (year, month) from the month holding start through the month holding end."""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        month += 1
        if month > 12:
            year, month = year + 1, 1
