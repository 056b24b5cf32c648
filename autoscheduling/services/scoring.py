"""Scoring functions for candidate suitability and shift confidence."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from autoscheduling.config import ScoringPolicy
from autoscheduling.domain.types import EmployeeAvailability, SchedulingConstraints, ShiftRequirement
from autoscheduling.services.timeplan import time_of_day_label

ScoredCandidate = Tuple[EmployeeAvailability, float]


def _clamp(value: float, upper: float = 100.0) -> float:
    return max(0.0, min(upper, value))


def calculate_performance_component(employee: EmployeeAvailability, policy: ScoringPolicy) -> float:
    return (
        employee.efficiency_score * policy.efficiency_weight
        + employee.reliability_score * policy.reliability_weight
    )


def calculate_experience_component(employee: EmployeeAvailability, policy: ScoringPolicy) -> float:
    return policy.experience_points[employee.experience_level] * policy.experience_weight


def calculate_cost_component(
    employee: EmployeeAvailability,
    constraints: SchedulingConstraints,
    policy: ScoringPolicy,
) -> float:
    """Lower hourly rate scores higher when cost minimization is on; neutral otherwise."""
    if constraints.minimize_labor_cost:
        cost_score = max(0.0, policy.cost_ceiling_rate - employee.hourly_rate)
    else:
        cost_score = policy.neutral_cost_score
    return cost_score * policy.cost_weight


def calculate_preference_component(
    employee: EmployeeAvailability,
    requirement: ShiftRequirement,
    policy: ScoringPolicy,
) -> float:
    """Flat bonuses for a preferred time-of-day slot and a preferred position."""
    bonus = 0.0
    if time_of_day_label(requirement.start_time) in employee.preferred_time_slots:
        bonus += policy.preferred_slot_bonus
    if requirement.position in employee.preferred_positions:
        bonus += policy.preferred_position_bonus
    return bonus


def calculate_employee_score(
    employee: EmployeeAvailability,
    requirement: ShiftRequirement,
    constraints: SchedulingConstraints,
    policy: ScoringPolicy | None = None,
) -> float:
    """
    Calculate overall suitability of an employee for a requirement.

    Higher score = better candidate.

    Args:
        employee: Eligible candidate to score
        requirement: Requirement being filled
        constraints: Run constraints (``minimize_labor_cost`` switches the cost term)
        policy: Scoring weights; defaults when omitted

    Returns:
        Score clamped to [0, policy.max_score]
    """
    policy = policy or ScoringPolicy()

    # 1. Performance (efficiency + reliability)
    score = calculate_performance_component(employee, policy)

    # 2. Experience level
    score += calculate_experience_component(employee, policy)

    # 3. Cost
    score += calculate_cost_component(employee, constraints, policy)

    # 4. Preference fit, additive
    score += calculate_preference_component(employee, requirement, policy)

    return _clamp(score, policy.max_score)


def score_candidates(
    candidates: Sequence[EmployeeAvailability],
    requirement: ShiftRequirement,
    constraints: SchedulingConstraints,
    policy: ScoringPolicy | None = None,
) -> List[ScoredCandidate]:
    """Pair each candidate with its score, preserving input order."""
    return [(c, calculate_employee_score(c, requirement, constraints, policy)) for c in candidates]


def rank_candidates(scored: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """Sort by score descending; equal scores keep their input order."""
    return sorted(scored, key=lambda pair: -pair[1])


def calculate_confidence_score(
    employee: EmployeeAvailability,
    requirement: ShiftRequirement,
    policy: ScoringPolicy | None = None,
) -> float:
    """
    How well-matched a single assignment looks, in [0, 100].

    Rises with reliability and experience, falls as the requirement's
    complexity factor grows.
    """
    policy = policy or ScoringPolicy()
    base = (
        policy.confidence_reliability_weight * employee.reliability_score
        + policy.confidence_experience_weight * policy.experience_points[employee.experience_level]
    )
    return _clamp(base / requirement.complexity_factor)
