"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from autoscheduling.domain.models import Base
from autoscheduling.domain.types import EmployeeAvailability, ShiftRequirement, TimeWindow
from autoscheduling.services.timeplan import WEEKDAYS

# Monday
MONDAY = date(2025, 1, 6)


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_employee():
    """Factory for employees available every day 06:00-22:00 unless overridden."""

    def _make(employee_id="E1", position="barista", hourly_rate=15.0, **overrides):
        days = overrides.pop("available_days", WEEKDAYS)
        window = overrides.pop("window", ("06:00", "22:00"))
        windows = overrides.pop(
            "available_time_windows",
            tuple(TimeWindow(day_of_week=d, start_time=window[0], end_time=window[1]) for d in days),
        )
        fields = dict(
            employee_id=employee_id,
            name=f"Employee {employee_id}",
            position=position,
            hourly_rate=hourly_rate,
            available_days=days,
            available_time_windows=windows,
            preferred_positions=[position],
        )
        fields.update(overrides)
        return EmployeeAvailability(**fields)

    return _make


@pytest.fixture
def make_requirement():
    """Factory for requirements on Monday 2025-01-06 unless overridden."""

    def _make(position="barista", time_slot="08:00-16:00", required_staff=1, **overrides):
        fields = dict(
            date=MONDAY,
            time_slot=time_slot,
            position=position,
            required_staff=required_staff,
        )
        fields.update(overrides)
        return ShiftRequirement(**fields)

    return _make
