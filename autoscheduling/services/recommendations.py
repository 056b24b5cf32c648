"""Advisory recommendations derived from metrics and conflicts."""

from __future__ import annotations

from typing import List, Sequence

from autoscheduling.config import RecommendationPolicy
from autoscheduling.domain.types import SchedulingConflict, SchedulingMetrics


def generate_recommendations(
    metrics: SchedulingMetrics,
    conflicts: Sequence[SchedulingConflict],
    policy: RecommendationPolicy | None = None,
) -> List[str]:
    """
    Build human-readable suggestions. These are advice only; nothing acts on them.

    Args:
        metrics: Aggregated schedule metrics
        conflicts: All conflicts recorded for the run
        policy: Thresholds (defaults when omitted)

    Returns:
        Recommendations in a fixed order
    """
    policy = policy or RecommendationPolicy()
    recommendations: List[str] = []

    if metrics.coverage_rate < policy.min_coverage_rate:
        recommendations.append("Consider hiring additional staff to improve coverage rate")

    if metrics.overtime_hours > policy.max_overtime_hours:
        recommendations.append(
            "High overtime detected. Consider redistributing shifts or hiring part-time staff"
        )

    if conflicts:
        recommendations.append(f"Resolve {len(conflicts)} scheduling conflicts for optimal performance")

    if metrics.employee_satisfaction_score < policy.min_satisfaction_score:
        recommendations.append("Improve workload balance to increase employee satisfaction")

    if metrics.cost_efficiency_score < policy.min_cost_efficiency_score:
        recommendations.append("Review hourly rates and shift durations for better cost efficiency")

    return recommendations
