"""Scheduling engine: the planning pass and the public entry point."""

from .auto_scheduler import AutoSchedulingEngine, generate_optimal_schedule, persist_schedule
from .planner import create_shift, plan_assignments, sort_by_priority

__all__ = [
    "AutoSchedulingEngine",
    "generate_optimal_schedule",
    "persist_schedule",
    "create_shift",
    "plan_assignments",
    "sort_by_priority",
]
