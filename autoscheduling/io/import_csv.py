"""CSV import utilities to load data into database."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
from sqlalchemy.orm import Session

from autoscheduling.domain.models import AvailabilityWindow, Employee, ShiftRequirementRecord
from autoscheduling.domain.types import ShiftRequirement, TimeWindow
from autoscheduling.logger import get_logger

logger = get_logger(__name__)


def _read(csv_path: str | Path, dtype: dict | None = None) -> pd.DataFrame:
    df = pd.read_csv(csv_path, dtype=dtype)
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    return df


def _opt_float(row: pd.Series, col: str, default: Optional[float] = None) -> Optional[float]:
    value = row.get(col)
    return float(value) if pd.notna(value) else default


def _opt_str(row: pd.Series, col: str) -> Optional[str]:
    value = row.get(col)
    if pd.isna(value) or not str(value).strip():
        return None
    return str(value).strip()


def import_employees_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import employees from CSV into database.

    List-valued columns (skills, available_days, preferred_positions, ...)
    are semicolon-separated.

    Args:
        session: Database session
        csv_path: Path to employees CSV

    Returns:
        Number of employees imported
    """
    df = _read(csv_path, dtype={"employee_id": str})

    employees = []
    for _, row in df.iterrows():
        days = _opt_str(row, "available_days")
        slots = _opt_str(row, "preferred_time_slots")
        level = _opt_str(row, "experience_level")
        emp = Employee(
            employee_id=str(row["employee_id"]).strip(),
            first_name=str(row["first_name"]),
            last_name=str(row["last_name"]),
            position=str(row["position"]).strip(),
            hourly_rate=float(row["hourly_rate"]),
            status=(_opt_str(row, "status") or "active").lower(),
            max_hours_per_week=_opt_float(row, "max_hours_per_week"),
            skills=_opt_str(row, "skills"),
            certifications=_opt_str(row, "certifications"),
            available_days=days.lower() if days else None,
            preferred_positions=_opt_str(row, "preferred_positions"),
            preferred_time_slots=slots.lower() if slots else None,
            efficiency_score=_opt_float(row, "efficiency_score"),
            reliability_score=_opt_float(row, "reliability_score"),
            overall_performance=_opt_float(row, "overall_performance"),
            experience_level=level.lower() if level else None,
        )
        employees.append(emp)

    session.add_all(employees)
    session.commit()

    logger.info("Imported %d employees from %s", len(employees), csv_path)
    return len(employees)


def import_availability_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import weekly availability windows (employee_id, day_of_week, start_time, end_time).

    Raises:
        ValueError: If a window is malformed
    """
    df = _read(csv_path, dtype={"employee_id": str})

    windows = []
    for idx, row in df.iterrows():
        try:
            window = TimeWindow(
                day_of_week=str(row["day_of_week"]),
                start_time=str(row["start_time"]),
                end_time=str(row["end_time"]),
            )
        except ValueError as e:
            raise ValueError(f"{csv_path}: invalid availability row {idx + 2}: {e}") from e
        windows.append(
            AvailabilityWindow(
                emp_id=str(row["employee_id"]).strip(),
                day_of_week=window.day_of_week,
                start_time=window.start_time,
                end_time=window.end_time,
            )
        )

    session.add_all(windows)
    session.commit()

    logger.info("Imported %d availability windows from %s", len(windows), csv_path)
    return len(windows)


def import_requirements_csv(
    session: Session,
    csv_path: str | Path,
    start_date: str | None = None,
    end_date: str | None = None,
) -> int:
    """
    Import shift requirements from CSV into database.

    Accepts either a ``time_slot`` column or ``start_time``/``end_time``.
    Every row is validated before anything is written.

    Args:
        session: Database session
        csv_path: Path to requirements CSV
        start_date: Optional inclusive lower date bound (YYYY-MM-DD)
        end_date: Optional inclusive upper date bound

    Returns:
        Number of requirements imported
    """
    df = _read(csv_path)

    if "time_slot" not in df.columns:
        df["time_slot"] = df["start_time"].astype(str).str.strip() + "-" + df["end_time"].astype(str).str.strip()

    # Convert date
    df["date"] = pd.to_datetime(df["date"]).dt.date

    # Filter by period if specified
    if start_date is not None:
        df = df[df["date"] >= pd.Timestamp(start_date).date()].copy()
    if end_date is not None:
        df = df[df["date"] <= pd.Timestamp(end_date).date()].copy()

    records = []
    for idx, row in df.iterrows():
        try:
            req = ShiftRequirement(
                date=row["date"],
                time_slot=str(row["time_slot"]),
                position=str(row["position"]).strip(),
                required_staff=row["required_staff"],
                priority=_opt_str(row, "priority") or "medium",
                expected_volume=_opt_float(row, "expected_volume", 0.0),
                complexity_factor=_opt_float(row, "complexity_factor", 1.0),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"{csv_path}: invalid requirement row {idx + 2}: {e}") from e
        records.append(
            ShiftRequirementRecord(
                date=req.date,
                time_slot=req.time_slot,
                position=req.position,
                required_staff=req.required_staff,
                priority=req.priority,
                expected_volume=req.expected_volume,
                complexity_factor=req.complexity_factor,
            )
        )

    session.add_all(records)
    session.commit()

    logger.info("Imported %d shift requirements from %s", len(records), csv_path)
    return len(records)
