"""Domain models, engine value types and data access layer."""

from .models import AvailabilityWindow, Base, Employee, ScheduledShift, ShiftRequirementRecord
from .repositories import EmployeeRepository, ScheduledShiftRepository, ShiftRequirementRepository
from .types import (
    EmployeeAvailability,
    GeneratedShift,
    SchedulingConflict,
    SchedulingConstraints,
    SchedulingMetrics,
    SchedulingSolution,
    ShiftRequirement,
    TimeWindow,
)

__all__ = [
    "AvailabilityWindow",
    "Base",
    "Employee",
    "ScheduledShift",
    "ShiftRequirementRecord",
    "EmployeeRepository",
    "ScheduledShiftRepository",
    "ShiftRequirementRepository",
    "EmployeeAvailability",
    "GeneratedShift",
    "SchedulingConflict",
    "SchedulingConstraints",
    "SchedulingMetrics",
    "SchedulingSolution",
    "ShiftRequirement",
    "TimeWindow",
]
