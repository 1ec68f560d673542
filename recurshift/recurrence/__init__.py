"""Recurrence engine for recurshift."""

from recurshift.recurrence.engine import calculate_dates, has_weekday_in_month
from recurshift.recurrence.validation import validate_pattern, validate_config
from recurshift.recurrence.describe import describe_pattern, preview_dates, summarize_config
from recurshift.recurrence.rrule_export import pattern_to_rrule

__all__ = [
    "calculate_dates",
    "has_weekday_in_month",
    "validate_pattern",
    "validate_config",
    "describe_pattern",
    "preview_dates",
    "summarize_config",
    "pattern_to_rrule",
]
