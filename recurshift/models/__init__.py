"""Data models for recurshift."""

from recurshift.models.recurrence import (
    WeeklyPattern,
    MonthlyByWeekdayPattern,
    MonthlySpecificDaysPattern,
    ManualPattern,
    RecurrencePattern,
    RecurrenceConfig,
    PatternValidation,
)
from recurshift.models.shift import (
    PaymentType,
    ShiftTemplate,
    ShiftPayload,
    Shift,
    FailedShift,
    BatchSummary,
    BatchCreateResult,
)

__all__ = [
    "WeeklyPattern",
    "MonthlyByWeekdayPattern",
    "MonthlySpecificDaysPattern",
    "ManualPattern",
    "RecurrencePattern",
    "RecurrenceConfig",
    "PatternValidation",
    "PaymentType",
    "ShiftTemplate",
    "ShiftPayload",
    "Shift",
    "FailedShift",
    "BatchSummary",
    "BatchCreateResult",
]
