"""Repository layer for shift database operations."""

import logging
from datetime import date
from typing import Iterable, List, Optional, Set
from sqlalchemy.orm import Session

from recurshift.models.shift import Shift, ShiftPayload
from recurshift.database.models import ShiftDB

logger = logging.getLogger(__name__)


class ShiftRepository:
    """Repository for Shift database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: str, payload: ShiftPayload) -> Shift:
        """Create a new shift for a user."""
        try:
            shift_db = ShiftDB.from_payload(user_id, payload)
            self.db.add(shift_db)
            self.db.commit()
            self.db.refresh(shift_db)
            logger.debug(f"Created shift {shift_db.id} on {payload.date.isoformat()}")
            return shift_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create shift on {payload.date.isoformat()}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, user_id: str, shift_id: str) -> Optional[Shift]:
        """Get shift by ID for a specific user."""
        shift_db = self.db.query(ShiftDB).filter(
            ShiftDB.id == shift_id,
            ShiftDB.user_id == user_id,
        ).first()
        return shift_db.to_pydantic() if shift_db else None

    def list_between(self, user_id: str, start: date, end: date) -> List[Shift]:
        """Shifts for a user with start <= date <= end, oldest first."""
        rows = (
            self.db.query(ShiftDB)
            .filter(
                ShiftDB.user_id == user_id,
                ShiftDB.date >= start,
                ShiftDB.date <= end,
            )
            .order_by(ShiftDB.date, ShiftDB.start_time)
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def dates_with_shifts(self, user_id: str, dates: Iterable[date]) -> Set[date]:
        """Subset of the given dates on which the user already has a shift."""
        wanted = set(dates)
        if not wanted:
            return set()
        rows = (
            self.db.query(ShiftDB.date)
            .filter(
                ShiftDB.user_id == user_id,
                ShiftDB.date >= min(wanted),
                ShiftDB.date <= max(wanted),
            )
            .all()
        )
        return {row[0] for row in rows} & wanted
