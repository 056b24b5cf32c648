"""Aggregate metrics over a finished schedule."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from autoscheduling.config import MetricsPolicy
from autoscheduling.domain.types import (
    GeneratedShift,
    SchedulingConflict,
    SchedulingMetrics,
    ShiftRequirement,
)

SCHEDULE_COLUMNS = [
    "employee_id",
    "name",
    "position",
    "date",
    "start_time",
    "end_time",
    "hours",
    "hourly_rate",
    "estimated_cost",
    "confidence_score",
]


def schedule_to_frame(schedule: Sequence[GeneratedShift]) -> pd.DataFrame:
    """One row per generated shift, in schedule order."""
    return pd.DataFrame(
        [{col: getattr(shift, col) for col in SCHEDULE_COLUMNS} for shift in schedule],
        columns=SCHEDULE_COLUMNS,
    )


def calculate_employee_workloads(schedule: Sequence[GeneratedShift]) -> pd.DataFrame:
    """
    Per-employee totals.

    Returns:
        DataFrame indexed by employee_id with ``hours``, ``cost`` and
        ``cost_per_hour`` columns (sorted by employee_id)
    """
    df = schedule_to_frame(schedule)
    if df.empty:
        return pd.DataFrame(columns=["hours", "cost", "cost_per_hour"])
    workloads = df.groupby("employee_id").agg(hours=("hours", "sum"), cost=("estimated_cost", "sum"))
    workloads["cost_per_hour"] = workloads["cost"] / workloads["hours"]
    return workloads


def _coefficient_of_variation(values: pd.Series) -> float:
    if len(values) <= 1:
        return 0.0
    mean = float(values.mean())
    if mean == 0:
        return 0.0
    return float(values.std(ddof=0)) / mean


def calculate_employee_satisfaction_score(workloads: pd.DataFrame) -> float:
    """
    Workload balance score in [0, 100].

    100 when every scheduled employee carries the same hours; falls as the
    coefficient of variation of per-employee hours grows.
    """
    if workloads.empty:
        return 100.0
    cv = _coefficient_of_variation(workloads["hours"])
    return max(0.0, min(100.0, 100.0 * (1.0 - cv)))


def calculate_cost_efficiency_score(workloads: pd.DataFrame, policy: MetricsPolicy) -> float:
    """
    Cost efficiency in [0, 100].

    Penalizes the average paid rate drifting away from the market rate and
    dispersion of cost-per-hour across employees.
    """
    if workloads.empty:
        return 100.0
    total_hours = float(workloads["hours"].sum())
    if total_hours == 0:
        return 100.0
    avg_rate = float(workloads["cost"].sum()) / total_hours
    market = policy.market_hourly_rate
    rate_deviation = abs(avg_rate - market) / market if market > 0 else 0.0
    dispersion = _coefficient_of_variation(workloads["cost_per_hour"])
    score = 100.0 - 100.0 * rate_deviation - policy.rate_dispersion_penalty * dispersion
    return max(0.0, min(100.0, score))


def calculate_overtime_hours(schedule: Sequence[GeneratedShift], daily_threshold: float) -> float:
    """Hours beyond the fixed daily line, summed over shifts."""
    return sum(max(0.0, shift.hours - daily_threshold) for shift in schedule)


def calculate_coverage_rate(schedule: Sequence[GeneratedShift], requirements: Sequence[ShiftRequirement]) -> float:
    required = sum(r.required_staff for r in requirements)
    if required == 0:
        return 100.0
    return min(100.0, 100.0 * len(schedule) / required)


def calculate_position_coverage(
    schedule: Sequence[GeneratedShift],
    requirements: Sequence[ShiftRequirement],
) -> Dict[str, float]:
    """
    Per-position coverage percentage.

    Each requirement row adds ``100 * filled / required_staff`` to its
    position, where ``filled`` counts shifts of that position on that date.
    Rows for the same position are summed, not averaged.
    """
    filled_by_key: Dict[tuple, int] = {}
    for shift in schedule:
        key = (shift.position, shift.date)
        filled_by_key[key] = filled_by_key.get(key, 0) + 1

    coverage: Dict[str, float] = {}
    for req in requirements:
        coverage.setdefault(req.position, 0.0)
        if req.required_staff == 0:
            coverage[req.position] += 100.0
            continue
        filled = filled_by_key.get((req.position, req.date), 0)
        coverage[req.position] += 100.0 * filled / req.required_staff
    return coverage


def calculate_metrics(
    schedule: Sequence[GeneratedShift],
    requirements: Sequence[ShiftRequirement],
    conflicts: Sequence[SchedulingConflict],
    policy: MetricsPolicy | None = None,
) -> SchedulingMetrics:
    """
    Compute all schedule metrics.

    Args:
        schedule: Finished list of generated shifts
        requirements: Requirements the schedule was planned against
        conflicts: Every conflict recorded during the run
        policy: Measurement constants (defaults when omitted)

    Returns:
        SchedulingMetrics
    """
    policy = policy or MetricsPolicy()
    workloads = calculate_employee_workloads(schedule)
    critical = sum(1 for c in conflicts if c.severity == "critical")

    return SchedulingMetrics(
        total_shifts=len(schedule),
        total_hours=sum(s.hours for s in schedule),
        total_cost=sum(s.estimated_cost for s in schedule),
        coverage_rate=calculate_coverage_rate(schedule, requirements),
        overtime_hours=calculate_overtime_hours(schedule, policy.daily_overtime_hours),
        employee_satisfaction_score=calculate_employee_satisfaction_score(workloads),
        cost_efficiency_score=calculate_cost_efficiency_score(workloads, policy),
        position_coverage=calculate_position_coverage(schedule, requirements),
        gaps_filled=len(schedule),
        conflicts_resolved=max(0, len(requirements) - critical),
        optimization_score=max(0.0, 100.0 - policy.critical_conflict_penalty * critical),
    )


def metrics_as_dict(metrics: SchedulingMetrics) -> Dict[str, object]:
    out: Dict[str, object] = dict(metrics.__dict__)
    out["position_coverage"] = dict(metrics.position_coverage)
    return out


def conflicts_as_records(conflicts: Sequence[SchedulingConflict]) -> List[Dict[str, object]]:
    return [dict(c.__dict__) for c in conflicts]
