"""Hard eligibility filter: who may legally work a given shift requirement."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from autoscheduling.domain.types import EmployeeAvailability, SchedulingConstraints, ShiftRequirement
from autoscheduling.services.timeplan import (
    calculate_shift_hours,
    intervals_overlap,
    weekday_name,
    window_contains,
)

# employee_id -> [(date, start_time, end_time), ...]
Bookings = Mapping[str, Sequence[Tuple[date, str, str]]]

# Float slack for accumulated minute-based hours
HOURS_EPSILON = 1e-9


def rejection_reason(
    employee: EmployeeAvailability,
    requirement: ShiftRequirement,
    assigned_hours: Mapping[str, float],
    constraints: SchedulingConstraints,
    bookings: Optional[Bookings] = None,
) -> Optional[str]:
    """
    Check one employee against all hard constraints for a requirement.

    Args:
        employee: Candidate to check
        requirement: Shift requirement being filled
        assigned_hours: Hours already assigned in this run {employee_id: hours}
        constraints: Global scheduling constraints
        bookings: Optional intervals already booked in this run, to refuse
            double-booking

    Returns:
        None if the employee is eligible, otherwise a short reason code
    """
    # 1. Position match
    if employee.position != requirement.position and requirement.position not in employee.preferred_positions:
        return "position_mismatch"

    # 2. Day availability
    day = weekday_name(requirement.date)
    if day not in employee.available_days:
        return "day_unavailable"

    # 3. Time-window containment
    start, end = requirement.start_time, requirement.end_time
    if not any(window_contains(w.start_time, w.end_time, start, end) for w in employee.windows_for(day)):
        return "outside_time_window"

    # 4. Hours budget
    post_assignment_hours = assigned_hours.get(employee.employee_id, 0.0) + calculate_shift_hours(start, end)
    if post_assignment_hours > employee.max_hours_per_week + HOURS_EPSILON:
        return "would_exceed_employee_max_hours"
    if post_assignment_hours > constraints.max_hours_per_employee + HOURS_EPSILON:
        return "would_exceed_global_max_hours"

    # 5. Already booked in an overlapping slot the same day
    if bookings:
        for booked_date, booked_start, booked_end in bookings.get(employee.employee_id, ()):
            if booked_date == requirement.date and intervals_overlap(booked_start, booked_end, start, end):
                return "double_booked"

    return None


def find_candidate_employees(
    requirement: ShiftRequirement,
    employees: Sequence[EmployeeAvailability],
    assigned_hours: Mapping[str, float],
    constraints: SchedulingConstraints,
    bookings: Optional[Bookings] = None,
) -> List[EmployeeAvailability]:
    """
    Return the employees (in input order) that may work ``requirement``.

    An empty list is a normal outcome, not an error.
    """
    return [
        employee
        for employee in employees
        if rejection_reason(employee, requirement, assigned_hours, constraints, bookings) is None
    ]


def explain_rejections(
    requirement: ShiftRequirement,
    employees: Sequence[EmployeeAvailability],
    assigned_hours: Mapping[str, float],
    constraints: SchedulingConstraints,
    bookings: Optional[Bookings] = None,
) -> Dict[str, str]:
    """Map employee_id -> reason code ("ok" for eligible) for debug output."""
    return {
        employee.employee_id: rejection_reason(employee, requirement, assigned_hours, constraints, bookings) or "ok"
        for employee in employees
    }
