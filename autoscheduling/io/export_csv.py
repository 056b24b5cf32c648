"""CSV export of generated and stored schedules."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Sequence

import pandas as pd
from sqlalchemy.orm import Session

from autoscheduling.domain.repositories import ScheduledShiftRepository
from autoscheduling.domain.types import GeneratedShift, coerce_date
from autoscheduling.logger import get_logger
from autoscheduling.services.metrics import SCHEDULE_COLUMNS, schedule_to_frame

logger = get_logger(__name__)


def export_schedule_csv(schedule: Sequence[GeneratedShift], path: str | Path) -> int:
    """
    Write a generated schedule to CSV, one row per shift.

    Returns:
        Number of rows written
    """
    df = schedule_to_frame(schedule)
    df.to_csv(path, index=False)
    logger.info("Exported %d shifts to %s", len(df), path)
    return len(df)


def export_stored_schedule_csv(
    session: Session,
    path: str | Path,
    start_date: date | str,
    end_date: date | str,
) -> int:
    """
    Write persisted shifts for ``start_date``..``end_date`` to CSV.

    Columns match ``export_schedule_csv`` so both outputs are interchangeable.
    """
    start = coerce_date(start_date)
    end = coerce_date(end_date)
    shifts = ScheduledShiftRepository.get_in_range(session, start, end)

    df = pd.DataFrame(
        [
            {
                "employee_id": s.emp_id,
                "name": s.employee_name,
                "position": s.position,
                "date": s.date,
                "start_time": s.start_time,
                "end_time": s.end_time,
                "hours": s.hours,
                "hourly_rate": s.hourly_rate,
                "estimated_cost": s.estimated_cost,
                "confidence_score": s.confidence_score,
            }
            for s in shifts
        ],
        columns=SCHEDULE_COLUMNS,
    )
    df.to_csv(path, index=False)
    logger.info("Exported %d stored shifts for %s..%s to %s", len(df), start, end, path)
    return len(df)
