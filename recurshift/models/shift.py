"""Shift data models for recurshift."""

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class PaymentType(str, Enum):
    """How the shift is paid."""
    PF = "PF"  # individual
    PJ = "PJ"  # company


class ShiftTemplate(BaseModel):
    """Shift fields held constant across every date of a batch."""

    start_time: dt.time = Field(..., description="Shift start (HH:MM)")
    end_time: dt.time = Field(..., description="Shift end (HH:MM); may be earlier than start for overnight shifts")
    value: float = Field(..., ge=0, description="Amount paid for the shift")
    payment_type: PaymentType = Field(..., description="Payment type (PF or PJ)")
    notes: Optional[str] = Field(None, description="Free-form notes")
    location_id: Optional[str] = Field(None, description="Where the shift takes place")
    contractor_id: Optional[str] = Field(None, description="Who contracted the shift")
    is_fixed: bool = Field(False, description="Whether the shift is a fixed (recurring) commitment")

    class Config:
        use_enum_values = True


class ShiftPayload(ShiftTemplate):
    """One shift to be created: a template applied to a calendar date."""

    date: dt.date = Field(..., description="Calendar day of the shift")


class Shift(ShiftPayload):
    """Persisted shift."""

    id: str = Field(..., description="Unique shift identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this shift")
    created_at: dt.datetime = Field(..., description="Creation timestamp")
    updated_at: dt.datetime = Field(..., description="Last update timestamp")


class FailedShift(BaseModel):
    shift: ShiftPayload
    error: str


class BatchSummary(BaseModel):
    """Counts for a batch. total == created + skipped + failed.

    not_attempted counts payloads left untouched after an aborted batch.
    """

    total: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0
    not_attempted: int = 0


class BatchCreateResult(BaseModel):
    """Outcome of a batch submission: every payload lands in exactly one bucket."""

    created: List[Shift] = Field(default_factory=list)
    skipped: List[ShiftPayload] = Field(default_factory=list)
    failed: List[FailedShift] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)
