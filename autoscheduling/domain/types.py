"""Engine-side value types: requirements, availability, constraints and results.

These are plain frozen dataclasses so a planning run can never mutate its
inputs. Construction validates the record and raises ``ValueError`` on
anything that would otherwise leak bad numbers into scoring.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from autoscheduling.services.timeplan import (
    TIME_OF_DAY_SLOTS,
    WEEKDAYS,
    split_time_slot,
)

PRIORITIES = ("critical", "high", "medium", "low")
EXPERIENCE_LEVELS = ("junior", "mid", "senior")
CONFLICT_TYPES = ("availability", "overtime", "consecutive_days", "min_hours", "budget")
SEVERITIES = ("critical", "warning", "info")


def coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValueError(f"Malformed date {value!r}, expected YYYY-MM-DD") from None
    raise ValueError(f"Expected a date or ISO date string, got {value!r}")


def _coerce_number(name: str, value, minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    if minimum is not None and number < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {number}")
    if maximum is not None and number > maximum:
        raise ValueError(f"{name} must be <= {maximum}, got {number}")
    return number


def _coerce_choice(name: str, value, choices: Tuple[str, ...]) -> str:
    normalized = str(value).strip().lower()
    if normalized not in choices:
        raise ValueError(f"{name} must be one of {choices}, got {value!r}")
    return normalized


def _lower_set(values: Iterable[str]) -> FrozenSet[str]:
    if isinstance(values, str):
        values = [values]
    return frozenset(str(v).strip().lower() for v in values)


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval ``[start_time, end_time)`` on one weekday."""

    day_of_week: str
    start_time: str
    end_time: str

    def __post_init__(self):
        object.__setattr__(self, "day_of_week", _coerce_choice("day_of_week", self.day_of_week, WEEKDAYS))
        start, end = split_time_slot(f"{self.start_time}-{self.end_time}")
        object.__setattr__(self, "start_time", start)
        object.__setattr__(self, "end_time", end)


@dataclass(frozen=True)
class ShiftRequirement:
    """Demand for ``required_staff`` workers of one position in one slot."""

    date: date
    time_slot: str
    position: str
    required_staff: int
    priority: str = "medium"
    expected_volume: float = 0.0
    complexity_factor: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "date", coerce_date(self.date))
        start, end = split_time_slot(self.time_slot)
        object.__setattr__(self, "time_slot", f"{start}-{end}")
        if not str(self.position).strip():
            raise ValueError("Requirement position must not be empty")
        if isinstance(self.required_staff, bool) or int(self.required_staff) != self.required_staff:
            raise ValueError(f"required_staff must be an integer, got {self.required_staff!r}")
        if self.required_staff < 0:
            raise ValueError(f"required_staff must be >= 0, got {self.required_staff}")
        object.__setattr__(self, "required_staff", int(self.required_staff))
        object.__setattr__(self, "priority", _coerce_choice("priority", self.priority, PRIORITIES))
        object.__setattr__(self, "expected_volume", _coerce_number("expected_volume", self.expected_volume, 0))
        complexity = _coerce_number("complexity_factor", self.complexity_factor)
        if complexity <= 0:
            raise ValueError(f"complexity_factor must be > 0, got {complexity}")
        object.__setattr__(self, "complexity_factor", complexity)

    @property
    def start_time(self) -> str:
        return self.time_slot.split("-")[0]

    @property
    def end_time(self) -> str:
        return self.time_slot.split("-")[1]


@dataclass(frozen=True)
class EmployeeAvailability:
    """Snapshot of one employee's eligibility and performance attributes."""

    employee_id: str
    name: str
    position: str
    hourly_rate: float
    max_hours_per_week: float = 40.0
    skills: FrozenSet[str] = frozenset()
    certifications: FrozenSet[str] = frozenset()
    available_days: FrozenSet[str] = frozenset()
    available_time_windows: Tuple[TimeWindow, ...] = ()
    preferred_positions: FrozenSet[str] = frozenset()
    preferred_time_slots: FrozenSet[str] = frozenset()
    efficiency_score: float = 75.0
    reliability_score: float = 85.0
    experience_level: str = "mid"

    def __post_init__(self):
        object.__setattr__(self, "employee_id", str(self.employee_id))
        object.__setattr__(self, "hourly_rate", _coerce_number("hourly_rate", self.hourly_rate, 0))
        object.__setattr__(
            self, "max_hours_per_week", _coerce_number("max_hours_per_week", self.max_hours_per_week, 0)
        )
        object.__setattr__(self, "skills", frozenset(self.skills))
        object.__setattr__(self, "certifications", frozenset(self.certifications))
        days = _lower_set(self.available_days)
        unknown = days - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"Unknown weekday(s) for employee {self.employee_id}: {sorted(unknown)}")
        object.__setattr__(self, "available_days", days)
        windows = tuple(
            w if isinstance(w, TimeWindow) else TimeWindow(**w) for w in self.available_time_windows
        )
        object.__setattr__(self, "available_time_windows", windows)
        object.__setattr__(self, "preferred_positions", frozenset(self.preferred_positions))
        slots = _lower_set(self.preferred_time_slots)
        unknown = slots - set(TIME_OF_DAY_SLOTS)
        if unknown:
            raise ValueError(f"Unknown time slot(s) for employee {self.employee_id}: {sorted(unknown)}")
        object.__setattr__(self, "preferred_time_slots", slots)
        object.__setattr__(
            self, "efficiency_score", _coerce_number("efficiency_score", self.efficiency_score, 0, 100)
        )
        object.__setattr__(
            self, "reliability_score", _coerce_number("reliability_score", self.reliability_score, 0, 100)
        )
        object.__setattr__(
            self, "experience_level", _coerce_choice("experience_level", self.experience_level, EXPERIENCE_LEVELS)
        )

    def windows_for(self, day_of_week: str) -> List[TimeWindow]:
        return [w for w in self.available_time_windows if w.day_of_week == day_of_week]


@dataclass(frozen=True)
class SchedulingConstraints:
    """Global knobs supplied once per planning run."""

    max_hours_per_employee: float = 40.0
    min_hours_between_shifts: float = 8.0
    max_consecutive_days: int = 6
    max_weekly_labor_budget: float = 15000.0
    overtime_threshold: float = 8.0
    prefer_experienced_staff: bool = True
    balance_workload: bool = True
    minimize_labor_cost: bool = False
    min_staff_per_position: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        for name in (
            "max_hours_per_employee",
            "min_hours_between_shifts",
            "max_weekly_labor_budget",
            "overtime_threshold",
        ):
            object.__setattr__(self, name, _coerce_number(name, getattr(self, name), 0))
        if int(self.max_consecutive_days) < 1:
            raise ValueError(f"max_consecutive_days must be >= 1, got {self.max_consecutive_days}")
        object.__setattr__(self, "max_consecutive_days", int(self.max_consecutive_days))
        for position, count in self.min_staff_per_position.items():
            if int(count) < 0:
                raise ValueError(f"min_staff_per_position[{position!r}] must be >= 0, got {count}")


@dataclass(frozen=True)
class GeneratedShift:
    employee_id: str
    name: str
    position: str
    date: date
    start_time: str
    end_time: str
    hours: float
    hourly_rate: float
    estimated_cost: float
    confidence_score: float


@dataclass(frozen=True)
class SchedulingConflict:
    """One recorded planning issue. Never raised, only logged and returned."""

    type: str
    severity: str
    message: str
    suggested_resolution: str
    employee_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "type", _coerce_choice("type", self.type, CONFLICT_TYPES))
        object.__setattr__(self, "severity", _coerce_choice("severity", self.severity, SEVERITIES))


@dataclass(frozen=True)
class SchedulingMetrics:
    total_shifts: int = 0
    total_hours: float = 0.0
    total_cost: float = 0.0
    coverage_rate: float = 0.0
    overtime_hours: float = 0.0
    employee_satisfaction_score: float = 0.0
    cost_efficiency_score: float = 0.0
    position_coverage: Dict[str, float] = field(default_factory=dict)
    gaps_filled: int = 0
    conflicts_resolved: int = 0
    optimization_score: float = 0.0


@dataclass(frozen=True)
class SchedulingSolution:
    success: bool
    schedule: List[GeneratedShift]
    metrics: SchedulingMetrics
    conflicts: List[SchedulingConflict]
    recommendations: List[str]
