"""Tests for engine value types and their validation."""

from datetime import date, datetime

import pytest

from autoscheduling.domain.types import (
    EmployeeAvailability,
    SchedulingConflict,
    SchedulingConstraints,
    ShiftRequirement,
    TimeWindow,
    coerce_date,
)


def test_coerce_date_accepts_date_datetime_and_iso_string():
    assert coerce_date(date(2025, 1, 6)) == date(2025, 1, 6)
    assert coerce_date(datetime(2025, 1, 6, 9, 30)) == date(2025, 1, 6)
    assert coerce_date("2025-01-06") == date(2025, 1, 6)


@pytest.mark.parametrize("value", ["06/01/2025", "", 20250106, None])
def test_coerce_date_rejects_other_values(value):
    with pytest.raises(ValueError):
        coerce_date(value)


def test_requirement_normalizes_fields():
    req = ShiftRequirement(date="2025-01-06", time_slot="8:00-16:00", position="barista",
                           required_staff=2, priority="HIGH")
    assert req.date == date(2025, 1, 6)
    assert req.time_slot == "08:00-16:00"
    assert req.start_time == "08:00"
    assert req.end_time == "16:00"
    assert req.priority == "high"
    assert req.expected_volume == 0.0
    assert req.complexity_factor == 1.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"required_staff": -1},
        {"required_staff": 1.5},
        {"priority": "urgent"},
        {"complexity_factor": 0},
        {"complexity_factor": -2.0},
        {"time_slot": "16:00-08:00"},
        {"position": "  "},
        {"expected_volume": float("nan")},
    ],
)
def test_requirement_rejects_invalid_values(overrides):
    fields = dict(date=date(2025, 1, 6), time_slot="08:00-16:00", position="barista", required_staff=1)
    fields.update(overrides)
    with pytest.raises(ValueError):
        ShiftRequirement(**fields)


def test_requirement_allows_zero_staff():
    req = ShiftRequirement(date=date(2025, 1, 6), time_slot="08:00-16:00", position="barista", required_staff=0)
    assert req.required_staff == 0


def test_time_window_validates_day_and_order():
    window = TimeWindow(day_of_week="Monday", start_time="7:00", end_time="15:00")
    assert window.day_of_week == "monday"
    assert window.start_time == "07:00"

    with pytest.raises(ValueError):
        TimeWindow(day_of_week="funday", start_time="07:00", end_time="15:00")
    with pytest.raises(ValueError):
        TimeWindow(day_of_week="monday", start_time="15:00", end_time="07:00")


def test_employee_availability_normalizes_and_filters_windows():
    emp = EmployeeAvailability(
        employee_id=7,
        name="Ada",
        position="barista",
        hourly_rate=15,
        available_days=["Monday", "TUESDAY"],
        available_time_windows=[
            {"day_of_week": "monday", "start_time": "07:00", "end_time": "15:00"},
            TimeWindow(day_of_week="tuesday", start_time="12:00", end_time="20:00"),
        ],
        preferred_time_slots=["Morning"],
    )
    assert emp.employee_id == "7"
    assert emp.available_days == frozenset({"monday", "tuesday"})
    assert emp.preferred_time_slots == frozenset({"morning"})
    assert [w.start_time for w in emp.windows_for("tuesday")] == ["12:00"]
    assert emp.windows_for("sunday") == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"efficiency_score": 101},
        {"reliability_score": -1},
        {"experience_level": "expert"},
        {"hourly_rate": -5},
        {"available_days": ["someday"]},
        {"preferred_time_slots": ["brunch"]},
        {"max_hours_per_week": None},
    ],
)
def test_employee_availability_rejects_out_of_range(overrides):
    fields = dict(employee_id="E1", name="Ada", position="barista", hourly_rate=15)
    fields.update(overrides)
    with pytest.raises(ValueError):
        EmployeeAvailability(**fields)


def test_constraints_defaults():
    c = SchedulingConstraints()
    assert c.max_hours_per_employee == 40
    assert c.min_hours_between_shifts == 8
    assert c.max_consecutive_days == 6
    assert c.max_weekly_labor_budget == 15000
    assert c.overtime_threshold == 8
    assert c.prefer_experienced_staff is True
    assert c.balance_workload is True
    assert c.minimize_labor_cost is False


def test_constraints_reject_invalid():
    with pytest.raises(ValueError):
        SchedulingConstraints(max_hours_per_employee=-1)
    with pytest.raises(ValueError):
        SchedulingConstraints(max_consecutive_days=0)
    with pytest.raises(ValueError):
        SchedulingConstraints(min_staff_per_position={"barista": -1})


def test_conflict_validates_type_and_severity():
    c = SchedulingConflict(type="Budget", severity="INFO", message="m", suggested_resolution="r")
    assert c.type == "budget"
    assert c.severity == "info"
    with pytest.raises(ValueError):
        SchedulingConflict(type="weather", severity="info", message="m", suggested_resolution="r")
    with pytest.raises(ValueError):
        SchedulingConflict(type="budget", severity="fatal", message="m", suggested_resolution="r")
