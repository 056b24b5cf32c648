"""Auto-scheduling entry point: load, plan, audit, measure and publish."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Sequence

from sqlalchemy.orm import Session

from autoscheduling.config import EngineConfig
from autoscheduling.domain.models import ScheduledShift
from autoscheduling.domain.repositories import ScheduledShiftRepository
from autoscheduling.domain.types import (
    EmployeeAvailability,
    GeneratedShift,
    SchedulingConstraints,
    SchedulingSolution,
    ShiftRequirement,
    coerce_date,
)
from autoscheduling.events import SCHEDULE_GENERATED, EventBus
from autoscheduling.logger import get_logger, log_timing
from autoscheduling.services.metrics import calculate_metrics
from autoscheduling.services.recommendations import generate_recommendations
from autoscheduling.services.validation import validate_schedule

from .planner import plan_assignments

logger = get_logger(__name__)

RequirementLoader = Callable[[date, date], Sequence[ShiftRequirement]]
AvailabilityLoader = Callable[[], Sequence[EmployeeAvailability]]


def _load_requirements(
    loader: RequirementLoader, start_date: date, end_date: date, cfg: EngineConfig
) -> List[ShiftRequirement]:
    try:
        return list(loader(start_date, end_date))
    except ValueError:
        # Malformed records propagate
        raise
    except Exception:
        fallback = cfg.fallback_for(start_date, end_date)
        logger.exception("Using %d fallback shift requirements due to load error", len(fallback))
        return fallback


def _load_availability(loader: AvailabilityLoader) -> List[EmployeeAvailability]:
    try:
        return list(loader())
    except ValueError:
        raise
    except Exception:
        logger.exception("Using empty employee pool due to load error")
        return []


def generate_optimal_schedule(
    start_date: date | str,
    end_date: date | str,
    constraints: Optional[SchedulingConstraints] = None,
    *,
    requirement_loader: RequirementLoader,
    availability_loader: AvailabilityLoader,
    config: Optional[EngineConfig] = None,
    event_bus: Optional[EventBus] = None,
) -> SchedulingSolution:
    """
    Generate a schedule for ``start_date``..``end_date`` (inclusive).

    Load failures are logged and replaced with fallbacks so the run always
    completes; unmet requirements and soft violations come back as
    conflicts. Malformed records still raise ``ValueError``.

    Args:
        start_date: First date of the period (date or YYYY-MM-DD)
        end_date: Last date of the period
        constraints: Run constraints; defaults to ``config.constraints``
        requirement_loader: ``(start, end) -> requirements`` collaborator
        availability_loader: ``() -> employees`` collaborator
        config: Engine configuration (defaults when omitted)
        event_bus: Optional bus that receives ``schedule_generated``

    Returns:
        SchedulingSolution; ``success`` is False iff a critical conflict exists
    """
    cfg = config or EngineConfig()
    constraints = constraints or cfg.constraints
    start = coerce_date(start_date)
    end = coerce_date(end_date)
    if end < start:
        raise ValueError(f"end_date {end} is before start_date {start}")

    logger.info("Starting auto-scheduling for %s..%s", start, end)

    with log_timing("Auto-scheduling", logger):
        requirements = _load_requirements(requirement_loader, start, end, cfg)
        employees = _load_availability(availability_loader)

        schedule, conflicts = plan_assignments(requirements, employees, constraints, cfg.scoring)
        conflicts.extend(validate_schedule(schedule, constraints, cfg.metrics))

        metrics = calculate_metrics(schedule, requirements, conflicts, cfg.metrics)
        recommendations = generate_recommendations(metrics, conflicts, cfg.recommendations)

    solution = SchedulingSolution(
        success=not any(c.severity == "critical" for c in conflicts),
        schedule=schedule,
        metrics=metrics,
        conflicts=conflicts,
        recommendations=recommendations,
    )

    if event_bus is not None:
        event_bus.emit(
            SCHEDULE_GENERATED,
            {"solution": solution, "timestamp": datetime.now(timezone.utc).isoformat()},
        )

    logger.info(
        "Auto-scheduling completed: %d shifts, coverage %.1f%%, %d conflicts, success=%s",
        metrics.total_shifts,
        metrics.coverage_rate,
        len(conflicts),
        solution.success,
    )
    return solution


class AutoSchedulingEngine:
    """
    Binds the collaborators once so callers only pass the period.

    Holds no state between runs; every call starts from fresh loads.
    """

    def __init__(
        self,
        requirement_loader: RequirementLoader,
        availability_loader: AvailabilityLoader,
        config: Optional[EngineConfig] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.requirement_loader = requirement_loader
        self.availability_loader = availability_loader
        self.config = config or EngineConfig()
        self.event_bus = event_bus

    def generate(
        self,
        start_date: date | str,
        end_date: date | str,
        constraints: Optional[SchedulingConstraints] = None,
    ) -> SchedulingSolution:
        return generate_optimal_schedule(
            start_date,
            end_date,
            constraints,
            requirement_loader=self.requirement_loader,
            availability_loader=self.availability_loader,
            config=self.config,
            event_bus=self.event_bus,
        )


def persist_schedule(
    session: Session,
    schedule: Sequence[GeneratedShift],
    start_date: date | str,
    end_date: date | str,
) -> int:
    """
    Replace stored shifts in the period with ``schedule`` in one transaction.

    The previously stored shifts survive if the insert fails.

    Returns:
        Number of shifts written
    """
    start = coerce_date(start_date)
    end = coerce_date(end_date)

    rows = [
        ScheduledShift(
            emp_id=s.employee_id,
            employee_name=s.name,
            position=s.position,
            date=s.date,
            start_time=s.start_time,
            end_time=s.end_time,
            hours=s.hours,
            hourly_rate=s.hourly_rate,
            estimated_cost=s.estimated_cost,
            confidence_score=s.confidence_score,
        )
        for s in schedule
    ]
    deleted = ScheduledShiftRepository.replace_in_range(session, start, end, rows)
    if deleted > 0:
        logger.info("Replaced %d existing scheduled shifts for %s..%s", deleted, start, end)
    logger.info("Persisted %d scheduled shifts", len(rows))
    return len(rows)
