"""Turn recurrence dates into shifts and create them as one batch.

Every processed payload ends up in exactly one of three buckets:
created, skipped (conflict with an existing shift, when skip_conflicts is set)
or failed (with the error message). A batch stopped early counts the payloads
it never reached as not_attempted.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from recurshift.database.repository import ShiftRepository
from recurshift.models.constants import MAX_BATCH_SHIFTS
from recurshift.models.recurrence import RecurrenceConfig
from recurshift.models.shift import BatchCreateResult, FailedShift, ShiftPayload, ShiftTemplate
from recurshift.recurrence.engine import calculate_dates
from recurshift.recurrence.validation import validate_config

logger = logging.getLogger(__name__)


class RecurrencePlanError(ValueError):
    """A recurrence config that cannot be turned into a batch; surfaced as a 400."""

    def __init__(self, message: str, *, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class ShiftBatchAborted(RuntimeError):
    """A batch stopped at its first failure (continue_on_error=False)."""

    def __init__(self, message: str, *, result: BatchCreateResult):
        super().__init__(message)
        self.result = result


def build_shift_payloads(dates: Iterable[date], template: ShiftTemplate) -> List[ShiftPayload]:
    """One payload per date, all sharing the template's fields."""
    fields = template.model_dump()
    return [ShiftPayload(**fields, date=d) for d in dates]


def plan_recurring_shifts(
    config: RecurrenceConfig,
    template: ShiftTemplate,
    *,
    max_shifts: int = MAX_BATCH_SHIFTS,
) -> List[ShiftPayload]:
    """Validate the config, generate its dates and map them onto the template.

    Raises RecurrencePlanError when the config is broken, matches nothing, or
    produces more than max_shifts dates.
    """
    validation = validate_config(config)
    if not validation.is_valid:
        raise RecurrencePlanError("Invalid recurrence", errors=validation.errors)

    dates = calculate_dates(config)
    if not dates:
        raise RecurrencePlanError("No dates match the recurrence in the selected period")
    if len(dates) > max_shifts:
        raise RecurrencePlanError(
            f"Too many dates ({len(dates)}); the maximum per batch is {max_shifts} shifts"
        )
    return build_shift_payloads(dates, template)


def create_shifts_batch(
    repo: ShiftRepository,
    user_id: str,
    payloads: List[ShiftPayload],
    *,
    skip_conflicts: bool = False,
    continue_on_error: bool = True,
) -> BatchCreateResult:
    """Create each payload in order, partitioning the outcome.

    A payload whose date already holds a shift (stored, or created earlier in
    this batch) is a conflict: skipped when skip_conflicts is set, otherwise
    failed. With continue_on_error=False the first failure stops the batch and
    ShiftBatchAborted carries the partial result, whose summary still holds
    total == created + skipped + failed.
    """
    result = BatchCreateResult()

    taken = repo.dates_with_shifts(user_id, (p.date for p in payloads))
    logger.info(f"Creating {len(payloads)} shifts in batch for user {user_id}")

    for payload in payloads:
        result.summary.total += 1
        if payload.date in taken:
            if skip_conflicts:
                result.skipped.append(payload)
                result.summary.skipped += 1
                logger.debug(f"Skipped shift on {payload.date.isoformat()}: date already taken")
                continue
            error = f"A shift already exists on {payload.date.isoformat()}"
        else:
            try:
                shift = repo.create(user_id, payload)
                result.created.append(shift)
                result.summary.created += 1
                taken.add(payload.date)
                continue
            except Exception as e:
                error = str(e) or type(e).__name__

        result.failed.append(FailedShift(shift=payload, error=error))
        result.summary.failed += 1
        logger.warning(f"Failed to create shift on {payload.date.isoformat()}: {error}")
        if not continue_on_error:
            result.summary.not_attempted = len(payloads) - result.summary.total
            raise ShiftBatchAborted(f"Batch stopped at {payload.date.isoformat()}: {error}", result=result)

    logger.info(
        f"Batch finished: {result.summary.created} created, "
        f"{result.summary.skipped} skipped, {result.summary.failed} failed"
    )
    return result


def create_recurring_shifts(
    repo: ShiftRepository,
    user_id: str,
    config: RecurrenceConfig,
    template: ShiftTemplate,
    *,
    skip_conflicts: bool = False,
    continue_on_error: bool = True,
    max_shifts: int = MAX_BATCH_SHIFTS,
) -> BatchCreateResult:
    """Plan the recurrence and submit it as a single batch."""
    payloads = plan_recurring_shifts(config, template, max_shifts=max_shifts)
    return create_shifts_batch(
        repo,
        user_id,
        payloads,
        skip_conflicts=skip_conflicts,
        continue_on_error=continue_on_error,
    )
