"""Repository classes for data access."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from .models import Employee, ScheduledShift, ShiftRequirementRecord


class EmployeeRepository:
    """Repository for employee data access."""

    @staticmethod
    def get_all(session: Session) -> List[Employee]:
        """Get all employees."""
        return session.query(Employee).order_by(Employee.employee_id).all()

    @staticmethod
    def get_active(session: Session) -> List[Employee]:
        """Get active employees with their availability windows loaded."""
        return (
            session.query(Employee)
            .options(selectinload(Employee.availability_windows))
            .filter(Employee.status == "active")
            .order_by(Employee.employee_id)
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, employee_id: str) -> Optional[Employee]:
        """Get employee by ID."""
        return session.query(Employee).filter(Employee.employee_id == str(employee_id)).first()

    @staticmethod
    def create(session: Session, employee: Employee) -> Employee:
        """Create a new employee."""
        session.add(employee)
        session.commit()
        session.refresh(employee)
        return employee

    @staticmethod
    def bulk_create(session: Session, employees: List[Employee]) -> None:
        """Create multiple employees (with any attached availability windows)."""
        session.add_all(employees)
        session.commit()


class ShiftRequirementRepository:
    """Repository for shift requirement data access."""

    @staticmethod
    def get_in_range(session: Session, start_date: date, end_date: date) -> List[ShiftRequirementRecord]:
        """Requirements with start_date <= date <= end_date, in stable id order."""
        return (
            session.query(ShiftRequirementRecord)
            .filter(ShiftRequirementRecord.date >= start_date, ShiftRequirementRecord.date <= end_date)
            .order_by(ShiftRequirementRecord.date, ShiftRequirementRecord.id)
            .all()
        )

    @staticmethod
    def bulk_create(session: Session, requirements: List[ShiftRequirementRecord]) -> None:
        """Create multiple requirement rows."""
        session.add_all(requirements)
        session.commit()


class ScheduledShiftRepository:
    """Repository for generated schedule data access."""

    @staticmethod
    def get_in_range(session: Session, start_date: date, end_date: date) -> List[ScheduledShift]:
        """Scheduled shifts within the date range, ordered by date, start and id."""
        return (
            session.query(ScheduledShift)
            .filter(ScheduledShift.date >= start_date, ScheduledShift.date <= end_date)
            .order_by(ScheduledShift.date, ScheduledShift.start_time, ScheduledShift.id)
            .all()
        )

    @staticmethod
    def get_by_employee(session: Session, emp_id: str) -> List[ScheduledShift]:
        """Get all scheduled shifts for one employee."""
        return (
            session.query(ScheduledShift)
            .filter(ScheduledShift.emp_id == str(emp_id))
            .order_by(ScheduledShift.date, ScheduledShift.start_time)
            .all()
        )

    @staticmethod
    def bulk_create(session: Session, shifts: List[ScheduledShift]) -> None:
        """Create multiple scheduled shifts."""
        session.add_all(shifts)
        session.commit()

    @staticmethod
    def replace_in_range(
        session: Session, start_date: date, end_date: date, shifts: List[ScheduledShift]
    ) -> int:
        """
        Swap the shifts stored in the date range for ``shifts`` in one transaction.

        Nothing is changed if the insert fails. Returns number of deleted rows.
        """
        try:
            count = (
                session.query(ScheduledShift)
                .filter(ScheduledShift.date >= start_date, ScheduledShift.date <= end_date)
                .delete(synchronize_session=False)
            )
            session.add_all(shifts)
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
        return count
