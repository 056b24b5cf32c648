"""SQLAlchemy models for the staff scheduling back-office."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def split_list(value: str | None) -> List[str]:
    """Split a semicolon-separated column into a clean list."""
    if not value:
        return []
    return [part.strip() for part in str(value).split(";") if part.strip()]


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Employee(Base):
    """Employee record with rate, preferences and performance metrics."""

    __tablename__ = "employees"

    employee_id = Column(String(64), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    position = Column(String(50), nullable=False)
    hourly_rate = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="active")  # active, inactive

    max_hours_per_week = Column(Float, nullable=True)

    # Semicolon-separated lists
    skills = Column(Text, nullable=True)
    certifications = Column(Text, nullable=True)
    available_days = Column(String(100), nullable=True)  # monday;tuesday;...
    preferred_positions = Column(String(255), nullable=True)
    preferred_time_slots = Column(String(100), nullable=True)  # morning;afternoon;evening;night

    # Performance metrics (0-100, nullable when not yet evaluated)
    efficiency_score = Column(Float, nullable=True)
    reliability_score = Column(Float, nullable=True)
    overall_performance = Column(Float, nullable=True)
    experience_level = Column(String(10), nullable=True)  # junior, mid, senior

    # Relationships
    availability_windows = relationship(
        "AvailabilityWindow", back_populates="employee", cascade="all, delete-orphan"
    )
    scheduled_shifts = relationship("ScheduledShift", back_populates="employee")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Employee(id={self.employee_id}, name='{self.full_name}', position='{self.position}')>"


class AvailabilityWindow(Base):
    """Weekly recurring window in which an employee can work."""

    __tablename__ = "availability_windows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    emp_id = Column(String(64), ForeignKey("employees.employee_id"), nullable=False)
    day_of_week = Column(String(10), nullable=False)  # monday ... sunday
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM

    employee = relationship("Employee", back_populates="availability_windows")

    def __repr__(self) -> str:
        return f"<AvailabilityWindow(emp={self.emp_id}, {self.day_of_week} {self.start_time}-{self.end_time})>"


class ShiftRequirementRecord(Base):
    """Stored demand line: N staff of a position for one date and time slot."""

    __tablename__ = "shift_requirements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    time_slot = Column(String(11), nullable=False)  # HH:MM-HH:MM
    position = Column(String(50), nullable=False)
    required_staff = Column(Integer, nullable=False)
    priority = Column(String(10), nullable=False, default="medium")
    expected_volume = Column(Float, nullable=False, default=0.0)
    complexity_factor = Column(Float, nullable=False, default=1.0)

    def __repr__(self) -> str:
        return (
            f"<ShiftRequirementRecord(id={self.id}, date={self.date}, slot={self.time_slot}, "
            f"position='{self.position}', staff={self.required_staff}, priority={self.priority})>"
        )


class ScheduledShift(Base):
    """Persisted output of a planning run."""

    __tablename__ = "scheduled_shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    emp_id = Column(String(64), ForeignKey("employees.employee_id"), nullable=False)
    employee_name = Column(String(201), nullable=False)
    position = Column(String(50), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    hours = Column(Float, nullable=False)
    hourly_rate = Column(Float, nullable=False)
    estimated_cost = Column(Float, nullable=False)
    confidence_score = Column(Float, nullable=False)
    generated_at = Column(DateTime, nullable=False, default=_utcnow)

    employee = relationship("Employee", back_populates="scheduled_shifts")

    def __repr__(self) -> str:
        return (
            f"<ScheduledShift(id={self.id}, emp={self.emp_id}, date={self.date}, "
            f"{self.start_time}-{self.end_time}, position='{self.position}')>"
        )
