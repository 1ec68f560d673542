"""FastAPI web application for recurshift."""

import logging
from datetime import date
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status
from pydantic import BaseModel, Field

from recurshift.api.dependencies import get_current_user_id, get_shift_repository
from recurshift.database.repository import ShiftRepository
from recurshift.models.constants import DEFAULT_PREVIEW_LIMIT, MAX_BATCH_SHIFTS
from recurshift.models.recurrence import PatternValidation, RecurrenceConfig, RecurrencePattern
from recurshift.models.shift import BatchCreateResult, Shift, ShiftPayload, ShiftTemplate
from recurshift.recurrence import (
    calculate_dates,
    describe_pattern,
    pattern_to_rrule,
    summarize_config,
    validate_config,
    validate_pattern,
)
from recurshift.recurrence.calendar_dates import parse_calendar_date
from recurshift.shifts.batch import (
    RecurrencePlanError,
    ShiftBatchAborted,
    create_shifts_batch,
    plan_recurring_shifts,
)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="recurshift API",
    description="Register recurring medical shifts from a single recurrence rule",
    version="0.1.0",
)


# Request models
class PreviewRequest(BaseModel):
    config: RecurrenceConfig
    limit: int = Field(DEFAULT_PREVIEW_LIMIT, ge=0, description="How many upcoming dates to preview")
    locale: Optional[str] = None


class ValidatePatternRequest(BaseModel):
    pattern: RecurrencePattern


class ShiftBatchRequest(BaseModel):
    shifts: List[ShiftPayload] = Field(..., min_length=1)
    skip_conflicts: bool = Field(False, description="Skip dates that already hold a shift")
    continue_on_error: bool = Field(True, description="Keep creating after a failed shift")


class RecurringShiftsRequest(BaseModel):
    recurrence: RecurrenceConfig
    template: ShiftTemplate
    skip_conflicts: bool = False
    continue_on_error: bool = True
    locale: Optional[str] = None


# Response models
class PreviewResponse(BaseModel):
    validation: PatternValidation
    description: str
    summary: str
    total: int
    dates: List[date]
    preview: List[date]
    rrule: Optional[str] = None


class RecurringShiftsResponse(BaseModel):
    description: str
    dates: List[date]
    result: BatchCreateResult


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/recurrence/validate", response_model=PatternValidation)
async def validate_recurrence_pattern(request: ValidatePatternRequest):
    """Structural check of a pattern, independent of any date window."""
    return validate_pattern(request.pattern)


@app.post("/recurrence/preview", response_model=PreviewResponse)
async def preview_recurrence(request: PreviewRequest):
    """Dates, description, RRULE and validation for a config. Never fails on a broken config."""
    dates = calculate_dates(request.config)
    return PreviewResponse(
        validation=validate_config(request.config),
        description=describe_pattern(request.config.pattern, request.locale),
        summary=summarize_config(request.config, request.locale),
        total=len(dates),
        dates=dates,
        preview=dates[: request.limit],
        rrule=pattern_to_rrule(request.config.pattern, until=parse_calendar_date(request.config.end_date)[0]),
    )


def _run_batch(repo: ShiftRepository, user_id: str, payloads, skip_conflicts: bool, continue_on_error: bool):
    try:
        return create_shifts_batch(
            repo,
            user_id,
            payloads,
            skip_conflicts=skip_conflicts,
            continue_on_error=continue_on_error,
        )
    except ShiftBatchAborted as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(e), "result": e.result.model_dump(mode="json")},
        )


@app.post("/shifts/batch", response_model=BatchCreateResult)
def create_batch(
    request: ShiftBatchRequest,
    user_id: str = Depends(get_current_user_id),
    repo: ShiftRepository = Depends(get_shift_repository),
):
    """Create many shifts at once with created/skipped/failed accounting."""
    if len(request.shifts) > MAX_BATCH_SHIFTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many shifts ({len(request.shifts)}); the maximum per batch is {MAX_BATCH_SHIFTS}",
        )
    return _run_batch(repo, user_id, request.shifts, request.skip_conflicts, request.continue_on_error)


@app.post("/shifts/recurring", response_model=RecurringShiftsResponse)
def create_recurring(
    request: RecurringShiftsRequest,
    user_id: str = Depends(get_current_user_id),
    repo: ShiftRepository = Depends(get_shift_repository),
):
    """Expand a recurrence into dates and create one shift per date."""
    try:
        payloads = plan_recurring_shifts(request.recurrence, request.template)
    except RecurrencePlanError as e:
        logger.info(f"Rejected recurrence for user {user_id}: {e.errors}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(e), "errors": e.errors},
        )

    result = _run_batch(repo, user_id, payloads, request.skip_conflicts, request.continue_on_error)
    return RecurringShiftsResponse(
        description=describe_pattern(request.recurrence.pattern, request.locale),
        dates=[p.date for p in payloads],
        result=result,
    )


@app.get("/shifts", response_model=List[Shift])
def list_shifts(
    start: date = Query(..., description="First day (inclusive)"),
    end: date = Query(..., description="Last day (inclusive)"),
    user_id: str = Depends(get_current_user_id),
    repo: ShiftRepository = Depends(get_shift_repository),
):
    """Shifts for the calling user between start and end."""
    if start > end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start must be on or before end")
    return repo.list_between(user_id, start, end)
