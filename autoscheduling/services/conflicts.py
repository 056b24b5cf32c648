"""Append-only conflict log used during a planning pass."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from autoscheduling.domain.types import SchedulingConflict, ShiftRequirement
from autoscheduling.logger import get_logger

logger = get_logger(__name__)


class ConflictLog:
    """
    Collects conflicts without ever raising.

    A fresh log is created per planning run and handed through the pipeline
    explicitly; entries are never removed or rewritten.
    """

    def __init__(self, conflicts: Iterable[SchedulingConflict] = ()):
        self._conflicts: List[SchedulingConflict] = list(conflicts)

    def record(
        self,
        type: str,
        severity: str,
        message: str,
        suggested_resolution: str,
        employee_id: Optional[str] = None,
    ) -> SchedulingConflict:
        conflict = SchedulingConflict(
            type=type,
            severity=severity,
            message=message,
            suggested_resolution=suggested_resolution,
            employee_id=employee_id,
        )
        self._conflicts.append(conflict)
        if conflict.severity == "critical":
            logger.warning("Conflict recorded [%s/%s]: %s", conflict.type, conflict.severity, message)
        else:
            logger.debug("Conflict recorded [%s/%s]: %s", conflict.type, conflict.severity, message)
        return conflict

    def extend(self, conflicts: Iterable[SchedulingConflict]) -> None:
        for conflict in conflicts:
            self._conflicts.append(conflict)

    def critical_count(self) -> int:
        return sum(1 for c in self._conflicts if c.severity == "critical")

    def has_critical(self) -> bool:
        return self.critical_count() > 0

    def to_list(self) -> List[SchedulingConflict]:
        return list(self._conflicts)

    def __iter__(self) -> Iterator[SchedulingConflict]:
        return iter(list(self._conflicts))

    def __len__(self) -> int:
        return len(self._conflicts)


def record_unmet_requirement(log: ConflictLog, requirement: ShiftRequirement) -> SchedulingConflict:
    """Record the critical conflict for a requirement nobody can work."""
    return log.record(
        type="availability",
        severity="critical",
        message=(
            f"No available staff for {requirement.position} on "
            f"{requirement.date.isoformat()} at {requirement.time_slot}"
        ),
        suggested_resolution="Consider adjusting requirements or recruiting additional staff",
    )
