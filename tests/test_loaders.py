"""Tests for repositories and database-backed loaders."""

from datetime import date

import pytest

from autoscheduling.domain.db import get_session, init_database
from autoscheduling.domain.models import AvailabilityWindow, Employee, ShiftRequirementRecord
from autoscheduling.domain.repositories import EmployeeRepository, ShiftRequirementRepository
from autoscheduling.services.loaders import (
    DatabaseAvailabilityLoader,
    DatabaseRequirementLoader,
    availability_from_record,
    derive_experience_level,
    requirement_from_record,
)


@pytest.fixture
def sample_employees(db_session):
    """Two active employees (one with explicit windows) and one inactive."""
    ada = Employee(
        employee_id="E1",
        first_name="Ada",
        last_name="Lovelace",
        position="barista",
        hourly_rate=16.0,
        available_days="monday;tuesday",
        preferred_positions="barista;cashier",
        preferred_time_slots="morning",
        efficiency_score=90.0,
        reliability_score=95.0,
        overall_performance=88.0,
    )
    ada.availability_windows = [
        AvailabilityWindow(day_of_week="monday", start_time="06:00", end_time="14:00"),
        AvailabilityWindow(day_of_week="tuesday", start_time="12:00", end_time="22:00"),
    ]
    bob = Employee(employee_id="E2", first_name="Bob", last_name="Stone", position="cook", hourly_rate=14.0)
    cara = Employee(employee_id="E3", first_name="Cara", last_name="Ng", position="cook", hourly_rate=14.0,
                    status="inactive")
    EmployeeRepository.bulk_create(db_session, [ada, bob, cara])
    return [ada, bob, cara]


@pytest.mark.parametrize("performance,level", [(90, "senior"), (85, "senior"), (70, "mid"), (69.9, "junior"),
                                               (None, "junior")])
def test_derive_experience_level(performance, level):
    assert derive_experience_level(performance) == level


def test_availability_mapping_uses_stored_values(sample_employees):
    emp = availability_from_record(sample_employees[0])
    assert emp.employee_id == "E1"
    assert emp.name == "Ada Lovelace"
    assert emp.available_days == frozenset({"monday", "tuesday"})
    assert emp.preferred_positions == frozenset({"barista", "cashier"})
    assert emp.preferred_time_slots == frozenset({"morning"})
    assert emp.experience_level == "senior"
    assert [(w.day_of_week, w.start_time, w.end_time) for w in emp.available_time_windows] == [
        ("monday", "06:00", "14:00"),
        ("tuesday", "12:00", "22:00"),
    ]


def test_availability_mapping_defaults(sample_employees):
    emp = availability_from_record(sample_employees[1])
    assert emp.available_days == frozenset({"monday", "tuesday", "wednesday", "thursday", "friday"})
    assert emp.max_hours_per_week == 40.0
    assert emp.preferred_positions == frozenset({"cook"})
    assert emp.preferred_time_slots == frozenset({"morning", "afternoon"})
    assert emp.efficiency_score == 75.0
    assert emp.reliability_score == 85.0
    assert emp.experience_level == "junior"
    assert len(emp.available_time_windows) == 5
    assert emp.windows_for("friday")[0].start_time == "07:00"


def test_availability_mapping_rejects_bad_scores():
    emp = Employee(employee_id="E9", first_name="X", last_name="Y", position="cook", hourly_rate=14.0,
                   efficiency_score=150.0)
    with pytest.raises(ValueError, match="E9"):
        availability_from_record(emp)


def test_availability_loader_returns_active_only(db_session, sample_employees):
    employees = DatabaseAvailabilityLoader(db_session)()
    assert [e.employee_id for e in employees] == ["E1", "E2"]


def test_requirement_loader_filters_by_range(db_session):
    ShiftRequirementRepository.bulk_create(
        db_session,
        [
            ShiftRequirementRecord(date=date(2025, 1, 5), time_slot="08:00-16:00", position="barista",
                                   required_staff=1),
            ShiftRequirementRecord(date=date(2025, 1, 7), time_slot="08:00-16:00", position="cook",
                                   required_staff=2, priority="high"),
            ShiftRequirementRecord(date=date(2025, 1, 6), time_slot="10:00-14:00", position="barista",
                                   required_staff=1, complexity_factor=1.5),
            ShiftRequirementRecord(date=date(2025, 1, 13), time_slot="08:00-16:00", position="barista",
                                   required_staff=1),
        ],
    )
    reqs = DatabaseRequirementLoader(db_session)(date(2025, 1, 6), date(2025, 1, 12))
    assert [(r.date, r.position) for r in reqs] == [(date(2025, 1, 6), "barista"), (date(2025, 1, 7), "cook")]
    assert reqs[0].complexity_factor == 1.5
    assert reqs[1].priority == "high"


def test_requirement_mapping_names_bad_row():
    record = ShiftRequirementRecord(id=42, date=date(2025, 1, 6), time_slot="16:00-08:00", position="barista",
                                    required_staff=1)
    with pytest.raises(ValueError, match="id=42"):
        requirement_from_record(record)


def test_repository_lookup(db_session, sample_employees):
    assert EmployeeRepository.get_by_id(db_session, "E2").full_name == "Bob Stone"
    assert EmployeeRepository.get_by_id(db_session, "missing") is None
    assert len(EmployeeRepository.get_all(db_session)) == 3


@pytest.mark.integration
def test_init_database_keeps_existing_rows(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'app.db'}"
    init_database(db_url)
    session = get_session(db_url)
    try:
        EmployeeRepository.create(
            session, Employee(employee_id="E1", first_name="Ada", last_name="Lovelace", position="barista",
                              hourly_rate=15.0)
        )
    finally:
        session.close()

    init_database(db_url)
    session = get_session(db_url)
    try:
        assert [e.employee_id for e in EmployeeRepository.get_all(session)] == ["E1"]
    finally:
        session.close()
