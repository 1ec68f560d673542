"""Recurrence models for recurshift.

A pattern says *how* a shift repeats, independent of any date window.
A RecurrenceConfig binds a pattern to an explicit window and exception dates.
Configs are rebuilt per computation and never persisted.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field, WrapValidator, field_validator


def _keep_raw_date_input(value, handler):
    # Non-date values pass through untouched; parse_calendar_date rejects them.
    if isinstance(value, (datetime, date, str)):
        return handler(value)
    return value


# Anything the engine knows how to turn into a calendar date.
CalendarDateInput = Annotated[Union[datetime, date, str], WrapValidator(_keep_raw_date_input)]


def _dedupe(values: list) -> list:
    # Set semantics, first-seen order kept for rendering.
    seen = set()
    out = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


class WeeklyPattern(BaseModel):
    """Repeats on the given weekdays (0=Sunday .. 6=Saturday) every week."""

    type: Literal["weekly"] = "weekly"
    days_of_week: List[int] = Field(default_factory=list, description="Weekdays, 0=Sunday")

    @field_validator("days_of_week")
    @classmethod
    def _dedupe_days(cls, v):
        return _dedupe(v)

    class Config:
        frozen = True


class MonthlyByWeekdayPattern(BaseModel):
    """Repeats on the Nth occurrence(s) of a weekday in each month.

    Week number 5 means the last occurrence of the weekday in the month,
    whether that month has four or five of them.
    """

    type: Literal["monthly_weekday"] = "monthly_weekday"
    week_numbers: List[int] = Field(default_factory=list, description="Ordinals 1..5 (5 = last)")
    day_of_week: int = Field(..., description="Weekday, 0=Sunday")

    @field_validator("week_numbers")
    @classmethod
    def _dedupe_weeks(cls, v):
        return _dedupe(v)

    class Config:
        frozen = True


class MonthlySpecificDaysPattern(BaseModel):
    """Repeats on the given day-of-month numbers; missing days are skipped per month."""

    type: Literal["monthly_specific"] = "monthly_specific"
    days: List[int] = Field(default_factory=list, description="Days of month 1..31")

    @field_validator("days")
    @classmethod
    def _dedupe_days(cls, v):
        return _dedupe(v)

    class Config:
        frozen = True


class ManualPattern(BaseModel):
    """Explicit list of dates chosen by the user."""

    type: Literal["manual"] = "manual"
    dates: List[CalendarDateInput] = Field(default_factory=list)

    class Config:
        frozen = True


RecurrencePattern = Annotated[
    Union[WeeklyPattern, MonthlyByWeekdayPattern, MonthlySpecificDaysPattern, ManualPattern],
    Field(discriminator="type"),
]


class RecurrenceConfig(BaseModel):
    """A pattern bound to an inclusive [start_date, end_date] window.

    Bounds are accepted as dates, datetimes or ISO strings; the engine checks
    them itself and treats an unusable window as "no dates".
    """

    pattern: RecurrencePattern
    start_date: CalendarDateInput
    end_date: CalendarDateInput
    exceptions: List[CalendarDateInput] = Field(
        default_factory=list, description="Dates excluded even when they match the pattern"
    )

    class Config:
        frozen = True


class PatternValidation(BaseModel):
    """Structured result of a pattern (or config) check."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
