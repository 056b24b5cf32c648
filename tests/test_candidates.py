"""Tests for the hard eligibility filter."""

from datetime import date

from autoscheduling.domain.types import SchedulingConstraints, TimeWindow
from autoscheduling.services.candidates import (
    explain_rejections,
    find_candidate_employees,
    rejection_reason,
)

MONDAY = date(2025, 1, 6)


def test_eligible_employee_passes(make_employee, make_requirement):
    emp = make_employee()
    assert rejection_reason(emp, make_requirement(), {}, SchedulingConstraints()) is None


def test_position_must_match_primary_or_preferred(make_employee, make_requirement):
    constraints = SchedulingConstraints()
    cook = make_employee(position="cook")
    assert rejection_reason(cook, make_requirement(position="barista"), {}, constraints) == "position_mismatch"

    flexible = make_employee(position="cook", preferred_positions=["cook", "barista"])
    assert rejection_reason(flexible, make_requirement(position="barista"), {}, constraints) is None


def test_day_must_be_available(make_employee, make_requirement):
    emp = make_employee(available_days=["tuesday"])
    assert rejection_reason(emp, make_requirement(), {}, SchedulingConstraints()) == "day_unavailable"


def test_requirement_must_fit_inside_a_window(make_employee, make_requirement):
    emp = make_employee(
        available_days=["monday"],
        available_time_windows=(TimeWindow(day_of_week="monday", start_time="07:00", end_time="15:00"),),
    )
    constraints = SchedulingConstraints()
    assert rejection_reason(emp, make_requirement(time_slot="07:00-15:00"), {}, constraints) is None
    assert rejection_reason(emp, make_requirement(time_slot="08:00-16:00"), {}, constraints) == "outside_time_window"


def test_window_on_another_day_does_not_count(make_employee, make_requirement):
    emp = make_employee(
        available_days=["monday", "tuesday"],
        available_time_windows=(TimeWindow(day_of_week="tuesday", start_time="06:00", end_time="22:00"),),
    )
    assert rejection_reason(emp, make_requirement(), {}, SchedulingConstraints()) == "outside_time_window"


def test_employee_hour_cap(make_employee, make_requirement):
    emp = make_employee(max_hours_per_week=20)
    constraints = SchedulingConstraints()
    # 12 + 8 == 20 is allowed, 13 + 8 is not
    assert rejection_reason(emp, make_requirement(), {"E1": 12.0}, constraints) is None
    assert rejection_reason(emp, make_requirement(), {"E1": 13.0}, constraints) == "would_exceed_employee_max_hours"


def test_global_hour_cap(make_employee, make_requirement):
    emp = make_employee(max_hours_per_week=60)
    constraints = SchedulingConstraints(max_hours_per_employee=16)
    assert rejection_reason(emp, make_requirement(), {"E1": 8.0}, constraints) is None
    assert rejection_reason(emp, make_requirement(), {"E1": 8.5}, constraints) == "would_exceed_global_max_hours"


def test_overlapping_booking_is_rejected(make_employee, make_requirement):
    emp = make_employee()
    constraints = SchedulingConstraints()
    bookings = {"E1": [(MONDAY, "12:00", "20:00")]}
    assert rejection_reason(emp, make_requirement(), {}, constraints, bookings) == "double_booked"

    adjacent = {"E1": [(MONDAY, "16:00", "20:00")]}
    assert rejection_reason(emp, make_requirement(), {}, constraints, adjacent) is None

    other_day = {"E1": [(date(2025, 1, 7), "08:00", "16:00")]}
    assert rejection_reason(emp, make_requirement(), {}, constraints, other_day) is None


def test_find_candidates_preserves_input_order(make_employee, make_requirement):
    pool = [
        make_employee("E3"),
        make_employee("E1", position="cook"),
        make_employee("E2"),
    ]
    candidates = find_candidate_employees(make_requirement(), pool, {}, SchedulingConstraints())
    assert [c.employee_id for c in candidates] == ["E3", "E2"]


def test_find_candidates_empty_is_not_an_error(make_employee, make_requirement):
    pool = [make_employee(position="cook")]
    assert find_candidate_employees(make_requirement(), pool, {}, SchedulingConstraints()) == []


def test_find_candidates_does_not_mutate_accumulator(make_employee, make_requirement):
    assigned = {"E1": 4.0}
    find_candidate_employees(make_requirement(), [make_employee()], assigned, SchedulingConstraints())
    assert assigned == {"E1": 4.0}


def test_explain_rejections(make_employee, make_requirement):
    pool = [make_employee("E1"), make_employee("E2", position="cook"), make_employee("E3", available_days=["sunday"])]
    reasons = explain_rejections(make_requirement(), pool, {}, SchedulingConstraints())
    assert reasons == {"E1": "ok", "E2": "position_mismatch", "E3": "day_unavailable"}
