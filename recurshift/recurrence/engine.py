"""Recurrence engine: turn a RecurrenceConfig into concrete shift dates.

calculate_dates is a pure function of its input. An unusable config (bad or
inverted bounds) yields an empty list instead of raising; callers use
validate_config to tell "nothing matched" apart from "config is broken".
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from recurshift.models.recurrence import (
    ManualPattern,
    MonthlyByWeekdayPattern,
    MonthlySpecificDaysPattern,
    RecurrenceConfig,
    WeeklyPattern,
)
from recurshift.recurrence.calendar_dates import (
    day_exists_in_month,
    day_of_week,
    each_day,
    each_month,
    month_end,
    month_start,
    parse_calendar_date,
)

logger = logging.getLogger(__name__)

LAST_WEEK_NUMBER = 5


def calculate_dates(config: RecurrenceConfig) -> List[date]:
    """Enumerate every date the config's pattern implies inside its window.

    The result is ascending, free of duplicates, clipped to
    [start_date, end_date] and free of exception dates.
    """
    start, start_err = parse_calendar_date(config.start_date)
    end, end_err = parse_calendar_date(config.end_date)
    if start is None or end is None:
        logger.error(f"Invalid recurrence window: start={start_err or 'ok'} end={end_err or 'ok'}")
        return []
    if start > end:
        logger.error(f"Recurrence start {start.isoformat()} is after end {end.isoformat()}")
        return []

    pattern = config.pattern
    try:
        if isinstance(pattern, WeeklyPattern):
            dates = _weekly_dates(pattern, start, end)
        elif isinstance(pattern, MonthlyByWeekdayPattern):
            dates = _monthly_weekday_dates(pattern, start, end)
        elif isinstance(pattern, MonthlySpecificDaysPattern):
            dates = _monthly_specific_dates(pattern, start, end)
        elif isinstance(pattern, ManualPattern):
            dates = _manual_dates(pattern)
        else:
            logger.warning(f"Unrecognized recurrence pattern: {type(pattern).__name__}")
            return []
    except Exception as e:
        logger.error(f"Failed to calculate recurrence dates: {type(e).__name__}: {str(e)}")
        return []

    logger.debug(f"{len(dates)} candidate dates for {pattern.type} before filtering")
    return _finalize(dates, start, end, _exception_days(config.exceptions))


def _finalize(dates: Iterable[date], start: date, end: date, exceptions: set) -> List[date]:
    """Shared post-processing for every pattern kind."""
    kept = {d for d in dates if start <= d <= end and d not in exceptions}
    return sorted(kept)


def _exception_days(values: Sequence) -> set:
    out = set()
    for raw in values:
        d, reason = parse_calendar_date(raw)
        if d is None:
            logger.warning(f"Ignoring unparsable exception date: {reason}")
            continue
        out.add(d)
    return out


def _valid_values(values: Sequence[int], low: int, high: int, label: str) -> List[int]:
    valid = [v for v in values if low <= v <= high]
    if len(valid) != len(values):
        logger.warning(f"Dropped out-of-range {label}: {[v for v in values if v not in valid]}")
    return valid


def _weekly_dates(pattern: WeeklyPattern, start: date, end: date) -> List[date]:
    days = set(_valid_values(pattern.days_of_week, 0, 6, "weekdays"))
    if not days:
        return []
    return [d for d in each_day(start, end) if day_of_week(d) in days]


def weekday_occurrences(year: int, month: int, weekday: int) -> List[date]:
    """All dates in the month falling on the given weekday (0=Sunday), in order."""
    return [d for d in each_day(month_start(year, month), month_end(year, month)) if day_of_week(d) == weekday]


def _select_ordinal(occurrences: List[date], week_number: int) -> Optional[date]:
    if week_number == LAST_WEEK_NUMBER:
        # "Fifth" means the last one, even in a month with only four.
        return occurrences[-1] if occurrences else None
    if 1 <= week_number <= len(occurrences):
        return occurrences[week_number - 1]
    return None


def _monthly_weekday_dates(pattern: MonthlyByWeekdayPattern, start: date, end: date) -> List[date]:
    if not 0 <= pattern.day_of_week <= 6:
        logger.warning(f"Invalid day_of_week for monthly recurrence: {pattern.day_of_week}")
        return []
    week_numbers = _valid_values(pattern.week_numbers, 1, LAST_WEEK_NUMBER, "week numbers")
    dates: List[date] = []
    for year, month in each_month(start, end):
        occurrences = weekday_occurrences(year, month, pattern.day_of_week)
        for n in week_numbers:
            picked = _select_ordinal(occurrences, n)
            if picked is not None:
                dates.append(picked)
    return dates


def _monthly_specific_dates(pattern: MonthlySpecificDaysPattern, start: date, end: date) -> List[date]:
    days = _valid_values(pattern.days, 1, 31, "days of month")
    dates: List[date] = []
    for year, month in each_month(start, end):
        for day in days:
            if day_exists_in_month(year, month, day):
                dates.append(date(year, month, day))
    return dates


def _manual_dates(pattern: ManualPattern) -> List[date]:
    dates: List[date] = []
    for raw in pattern.dates:
        d, reason = parse_calendar_date(raw)
        if d is None:
            logger.warning(f"Dropping manual date: {reason}")
            continue
        dates.append(d)
    return dates


def has_weekday_in_month(year: int, month: int, weekday: int, week_number: int) -> bool:
    """Whether the week_number-th weekday (5 = last) exists in the month."""
    if not day_exists_in_month(year, month, 1) or not 0 <= weekday <= 6:
        return False
    return _select_ordinal(weekday_occurrences(year, month, weekday), week_number) is not None
