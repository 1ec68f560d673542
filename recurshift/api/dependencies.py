"""FastAPI dependencies for recurshift."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from recurshift.database.database import get_db
from recurshift.database.repository import ShiftRepository


def get_current_user_id(x_user_id: str = Header(default="", alias="X-User-Id")) -> str:
    """Identify the calling user.

    Authentication lives in front of this service; it forwards the user id.
    """
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return user_id


def get_shift_repository(db: Session = Depends(get_db)) -> ShiftRepository:
    return ShiftRepository(db)
