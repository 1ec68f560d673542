"""Structural checks for recurrence patterns and configs.

Nothing here raises: every problem is collected into PatternValidation.errors
so a client can show them all at once.
"""

from __future__ import annotations

from typing import List

from recurshift.models.recurrence import (
    ManualPattern,
    MonthlyByWeekdayPattern,
    MonthlySpecificDaysPattern,
    PatternValidation,
    RecurrenceConfig,
    WeeklyPattern,
)
from recurshift.recurrence.calendar_dates import parse_calendar_date


def _out_of_range(values: List[int], low: int, high: int) -> bool:
    return any(v < low or v > high for v in values)


def validate_pattern(pattern) -> PatternValidation:
    """Check a pattern independently of any date window."""
    errors: List[str] = []

    if isinstance(pattern, WeeklyPattern):
        if not pattern.days_of_week:
            errors.append("Select at least one day of the week")
        elif _out_of_range(pattern.days_of_week, 0, 6):
            errors.append("Days of the week must be between 0 (Sunday) and 6 (Saturday)")

    elif isinstance(pattern, MonthlyByWeekdayPattern):
        if not pattern.week_numbers:
            errors.append("Select at least one week of the month")
        elif _out_of_range(pattern.week_numbers, 1, 5):
            errors.append("Week numbers must be between 1 (first) and 5 (last)")
        if not 0 <= pattern.day_of_week <= 6:
            errors.append("Day of the week must be between 0 (Sunday) and 6 (Saturday)")

    elif isinstance(pattern, MonthlySpecificDaysPattern):
        if not pattern.days:
            errors.append("Select at least one day of the month")
        elif _out_of_range(pattern.days, 1, 31):
            errors.append("Days of the month must be between 1 and 31")

    elif isinstance(pattern, ManualPattern):
        if not pattern.dates:
            errors.append("Select at least one date")
        else:
            invalid = [str(raw) for raw in pattern.dates if parse_calendar_date(raw)[0] is None]
            if invalid:
                errors.append(f"Invalid dates found: {', '.join(invalid)}")

    else:
        errors.append("Unrecognized recurrence type")

    return PatternValidation(is_valid=not errors, errors=errors)


def validate_config(config: RecurrenceConfig) -> PatternValidation:
    """Pattern checks plus window checks (unparsable bounds, start after end)."""
    errors = list(validate_pattern(config.pattern).errors)

    start, start_reason = parse_calendar_date(config.start_date)
    end, end_reason = parse_calendar_date(config.end_date)
    if start is None:
        errors.append(f"Invalid start date: {start_reason}")
    if end is None:
        errors.append(f"Invalid end date: {end_reason}")
    if start is not None and end is not None and start > end:
        errors.append("Start date must be on or before end date")

    return PatternValidation(is_valid=not errors, errors=errors)
