"""SQLAlchemy database models for recurshift."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Float, Boolean, Date, DateTime, Time, Index

from typing import Union, TypeVar, Type
from recurshift.database.database import Base
from recurshift.models.shift import PaymentType

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default."""
    if not value:
        return default
    try:
        return enum_class(value.upper())
    except (ValueError, AttributeError):
        return default


class ShiftDB(Base):
    """Database model for Shift."""

    __tablename__ = "shifts"
    __table_args__ = (
        # Conflict lookups are per user and calendar day.
        Index("ix_shifts_user_date", "user_id", "date"),
    )

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User association
    user_id = Column(String, nullable=False, index=True)

    # Schedule
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    # Payment
    value = Column(Float, nullable=False, default=0.0)
    payment_type = Column(String, nullable=False, default=PaymentType.PF.value)

    # References to collaborators managed elsewhere
    location_id = Column(String, nullable=True, index=True)
    contractor_id = Column(String, nullable=True, index=True)

    notes = Column(String, nullable=True)
    is_fixed = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from recurshift.models.shift import Shift

        return Shift(
            id=self.id,
            user_id=self.user_id,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            value=self.value,
            payment_type=value_to_enum(self.payment_type, PaymentType, PaymentType.PF),
            notes=self.notes,
            location_id=self.location_id,
            contractor_id=self.contractor_id,
            is_fixed=bool(self.is_fixed),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_payload(cls, user_id: str, payload):
        """Create database model from a ShiftPayload."""
        now = datetime.utcnow()
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            date=payload.date,
            start_time=payload.start_time,
            end_time=payload.end_time,
            value=payload.value,
            # Pydantic with use_enum_values=True returns strings
            payment_type=enum_to_value(payload.payment_type),
            notes=payload.notes,
            location_id=payload.location_id,
            contractor_id=payload.contractor_id,
            is_fixed=bool(payload.is_fixed),
            created_at=now,
            updated_at=now,
        )
