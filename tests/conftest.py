"""Pytest fixtures and configuration for recurshift tests."""

import pytest
from datetime import date, time
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from recurshift.database.database import Base, get_db
from recurshift.database import models  # noqa: F401  (registers tables)
from recurshift.database.repository import ShiftRepository
from recurshift.models.shift import PaymentType, ShiftPayload, ShiftTemplate


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    # StaticPool keeps one connection so the in-memory database survives across threads.
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def shift_repository(db_session: Session):
    """Create a ShiftRepository instance for testing."""
    return ShiftRepository(db_session)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def shift_template():
    """Morning shift paid to a company, reused across a batch."""
    return ShiftTemplate(
        start_time=time(8, 0),
        end_time=time(14, 0),
        value=1200.0,
        payment_type=PaymentType.PJ,
        notes="Emergency room",
        location_id="loc-1",
        contractor_id=None,
    )


@pytest.fixture
def make_payload(shift_template):
    """Factory: payload for a given date built from the shared template."""
    def _make(day: date) -> ShiftPayload:
        return ShiftPayload(**shift_template.model_dump(), date=day)
    return _make


@pytest.fixture
def shift_template_json():
    return {
        "start_time": "08:00",
        "end_time": "14:00",
        "value": 1200,
        "payment_type": "PJ",
        "notes": "Emergency room",
        "location_id": "loc-1",
    }


@pytest.fixture
def test_client(db_session: Session, test_user_id):
    """Create a FastAPI test client with overridden database dependency."""
    from recurshift.api.app import app

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, headers={"X-User-Id": test_user_id}) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
