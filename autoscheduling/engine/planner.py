"""Greedy, priority-ordered assignment of employees to shift requirements."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import date
from typing import Dict, List, Sequence, Tuple

from autoscheduling.config import ScoringPolicy
from autoscheduling.domain.types import (
    EmployeeAvailability,
    GeneratedShift,
    SchedulingConflict,
    SchedulingConstraints,
    ShiftRequirement,
)
from autoscheduling.logger import get_logger
from autoscheduling.services.candidates import explain_rejections, find_candidate_employees
from autoscheduling.services.conflicts import ConflictLog, record_unmet_requirement
from autoscheduling.services.scoring import calculate_confidence_score, rank_candidates, score_candidates
from autoscheduling.services.timeplan import calculate_shift_cost, calculate_shift_hours

logger = get_logger(__name__)


def sort_by_priority(
    requirements: Sequence[ShiftRequirement],
    policy: ScoringPolicy | None = None,
) -> List[ShiftRequirement]:
    """Highest priority first; requirements of equal priority keep input order."""
    weights = (policy or ScoringPolicy()).priority_weights
    return sorted(requirements, key=lambda r: -weights[r.priority])


def create_shift(
    employee: EmployeeAvailability,
    requirement: ShiftRequirement,
    policy: ScoringPolicy | None = None,
) -> GeneratedShift:
    """Materialize one assignment of ``employee`` to ``requirement``."""
    start, end = requirement.start_time, requirement.end_time
    hours = calculate_shift_hours(start, end)
    return GeneratedShift(
        employee_id=employee.employee_id,
        name=employee.name,
        position=requirement.position,
        date=requirement.date,
        start_time=start,
        end_time=end,
        hours=hours,
        hourly_rate=employee.hourly_rate,
        estimated_cost=calculate_shift_cost(hours, employee.hourly_rate),
        confidence_score=calculate_confidence_score(employee, requirement, policy),
    )


def plan_assignments(
    requirements: Sequence[ShiftRequirement],
    employees: Sequence[EmployeeAvailability],
    constraints: SchedulingConstraints,
    policy: ScoringPolicy | None = None,
) -> Tuple[List[GeneratedShift], List[SchedulingConflict]]:
    """
    Run one planning pass over all requirements.

    Requirements are visited once, in priority order, and never revisited.
    Hours assigned to earlier requirements count against later ones, so the
    loop and the accumulator update stay strictly sequential.

    Args:
        requirements: Demand lines for the period
        employees: Employee pool snapshot
        constraints: Global scheduling constraints
        policy: Scoring weights (defaults when omitted)

    Returns:
        (schedule, conflicts) in creation order

    Raises:
        ValueError: If the pool lists the same employee_id more than once
    """
    counts = Counter(e.employee_id for e in employees)
    duplicates = sorted(emp_id for emp_id, n in counts.items() if n > 1)
    if duplicates:
        raise ValueError(f"Duplicate employee_id in employee pool: {', '.join(duplicates)}")

    policy = policy or ScoringPolicy()
    conflicts = ConflictLog()
    schedule: List[GeneratedShift] = []

    # Per-run state, owned by this pass only
    assigned_hours: Dict[str, float] = defaultdict(float)
    bookings: Dict[str, List[Tuple[date, str, str]]] = defaultdict(list)

    ordered = sort_by_priority(requirements, policy)
    logger.info(
        "Planning %d requirements against %d employees (minimize_labor_cost=%s, "
        "prefer_experienced_staff=%s, balance_workload=%s)",
        len(ordered),
        len(employees),
        constraints.minimize_labor_cost,
        constraints.prefer_experienced_staff,
        constraints.balance_workload,
    )

    for requirement in ordered:
        if requirement.required_staff == 0:
            logger.debug("Skipping %s on %s: nobody required", requirement.position, requirement.date)
            continue

        candidates = find_candidate_employees(requirement, employees, assigned_hours, constraints, bookings)

        if not candidates:
            record_unmet_requirement(conflicts, requirement)
            if logger.isEnabledFor(logging.DEBUG):
                reasons = explain_rejections(requirement, employees, assigned_hours, constraints, bookings)
                logger.debug(
                    "Unable to cover %s on %s %s. Candidate analysis: %s",
                    requirement.position,
                    requirement.date,
                    requirement.time_slot,
                    reasons,
                )
            continue

        ranked = rank_candidates(score_candidates(candidates, requirement, constraints, policy))
        selected = ranked[: requirement.required_staff]

        if len(selected) < requirement.required_staff:
            logger.warning(
                "Partial fill for %s on %s %s: %d of %d staff",
                requirement.position,
                requirement.date,
                requirement.time_slot,
                len(selected),
                requirement.required_staff,
            )

        for employee, score in selected:
            shift = create_shift(employee, requirement, policy)
            schedule.append(shift)
            assigned_hours[employee.employee_id] += shift.hours
            bookings[employee.employee_id].append((shift.date, shift.start_time, shift.end_time))
            logger.debug(
                "Assigned %s (%s) to %s on %s %s, score=%.1f",
                employee.name,
                employee.employee_id,
                requirement.position,
                requirement.date,
                requirement.time_slot,
                score,
            )

    logger.info("Planning pass produced %d shifts and %d conflicts", len(schedule), len(conflicts))
    return schedule, conflicts.to_list()
