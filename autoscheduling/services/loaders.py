"""Database-backed loaders that feed the engine.

Rows are mapped into engine value types through an explicit validation step:
a malformed row raises ``ValueError`` naming the record instead of letting a
missing or non-numeric value reach the scoring math.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from autoscheduling.domain.models import Employee, ShiftRequirementRecord, split_list
from autoscheduling.domain.repositories import EmployeeRepository, ShiftRequirementRepository
from autoscheduling.domain.types import EmployeeAvailability, ShiftRequirement, TimeWindow
from autoscheduling.logger import get_logger
from autoscheduling.services.timeplan import WEEKDAYS

logger = get_logger(__name__)

DEFAULT_AVAILABLE_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")
DEFAULT_WINDOW = ("07:00", "15:00")
DEFAULT_MAX_HOURS_PER_WEEK = 40.0
DEFAULT_PREFERRED_TIME_SLOTS = ("morning", "afternoon")
DEFAULT_EFFICIENCY = 75.0
DEFAULT_RELIABILITY = 85.0


def derive_experience_level(overall_performance: Optional[float]) -> str:
    """senior at >= 85, mid at >= 70, junior otherwise (including unknown)."""
    performance = overall_performance or 0.0
    if performance >= 85:
        return "senior"
    if performance >= 70:
        return "mid"
    return "junior"


def requirement_from_record(record: ShiftRequirementRecord) -> ShiftRequirement:
    """
    Map a stored requirement row into a ``ShiftRequirement``.

    Raises:
        ValueError: If the row is malformed, with the row id in the message
    """
    try:
        return ShiftRequirement(
            date=record.date,
            time_slot=record.time_slot,
            position=record.position,
            required_staff=record.required_staff,
            priority=record.priority or "medium",
            expected_volume=record.expected_volume if record.expected_volume is not None else 0.0,
            complexity_factor=record.complexity_factor if record.complexity_factor is not None else 1.0,
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid shift requirement row id={record.id}: {e}") from e


def availability_from_record(employee: Employee) -> EmployeeAvailability:
    """
    Map an employee row (with its availability windows) into an
    ``EmployeeAvailability`` snapshot.

    Missing optional columns fall back to the defaults above; an employee with
    no stored windows gets ``DEFAULT_WINDOW`` on each available day.

    Raises:
        ValueError: If a stored value is malformed
    """
    try:
        days = [d.lower() for d in split_list(employee.available_days)] or list(DEFAULT_AVAILABLE_DAYS)
        if employee.availability_windows:
            windows = [
                TimeWindow(day_of_week=w.day_of_week, start_time=w.start_time, end_time=w.end_time)
                for w in employee.availability_windows
            ]
        else:
            windows = [
                TimeWindow(day_of_week=d, start_time=DEFAULT_WINDOW[0], end_time=DEFAULT_WINDOW[1])
                for d in WEEKDAYS
                if d in days
            ]
        return EmployeeAvailability(
            employee_id=employee.employee_id,
            name=employee.full_name,
            position=employee.position,
            hourly_rate=employee.hourly_rate,
            max_hours_per_week=(
                employee.max_hours_per_week
                if employee.max_hours_per_week is not None
                else DEFAULT_MAX_HOURS_PER_WEEK
            ),
            skills=split_list(employee.skills),
            certifications=split_list(employee.certifications),
            available_days=days,
            available_time_windows=tuple(windows),
            preferred_positions=split_list(employee.preferred_positions) or [employee.position],
            preferred_time_slots=split_list(employee.preferred_time_slots) or list(DEFAULT_PREFERRED_TIME_SLOTS),
            efficiency_score=(
                employee.efficiency_score if employee.efficiency_score is not None else DEFAULT_EFFICIENCY
            ),
            reliability_score=(
                employee.reliability_score if employee.reliability_score is not None else DEFAULT_RELIABILITY
            ),
            experience_level=employee.experience_level or derive_experience_level(employee.overall_performance),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid employee row id={employee.employee_id}: {e}") from e


class DatabaseRequirementLoader:
    """Loads requirements for a date range from the ``shift_requirements`` table."""

    def __init__(self, session: Session):
        self.session = session

    def __call__(self, start_date: date, end_date: date) -> List[ShiftRequirement]:
        records = ShiftRequirementRepository.get_in_range(self.session, start_date, end_date)
        requirements = [requirement_from_record(r) for r in records]
        logger.info("Loaded %d shift requirements for %s..%s", len(requirements), start_date, end_date)
        return requirements


class DatabaseAvailabilityLoader:
    """Loads active employees and their availability windows."""

    def __init__(self, session: Session):
        self.session = session

    def __call__(self) -> List[EmployeeAvailability]:
        employees = [availability_from_record(e) for e in EmployeeRepository.get_active(self.session)]
        logger.info("Loaded availability for %d active employees", len(employees))
        return employees
