"""Time and cost helpers shared by the filter, scorer, planner and metrics."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Tuple

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

TIME_OF_DAY_SLOTS = ("morning", "afternoon", "evening", "night")


def parse_time_string(value: str) -> time:
    """
    Parse an ``HH:MM`` string into a ``datetime.time``.

    Raises:
        ValueError: If the string is not a valid 24h clock time
    """
    if not isinstance(value, str):
        raise ValueError(f"Time must be an 'HH:MM' string, got {value!r}")
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Malformed time string {value!r}, expected 'HH:MM'")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time out of range: {value!r}")
    return time(hour, minute)


def split_time_slot(time_slot: str) -> Tuple[str, str]:
    """
    Split a ``"HH:MM-HH:MM"`` slot into normalized start and end strings.

    Slots may not cross midnight: the end must be strictly after the start.

    Raises:
        ValueError: If the slot is malformed or not increasing
    """
    if not isinstance(time_slot, str) or time_slot.count("-") != 1:
        raise ValueError(f"Malformed time slot {time_slot!r}, expected 'HH:MM-HH:MM'")
    raw_start, raw_end = time_slot.split("-")
    start = parse_time_string(raw_start)
    end = parse_time_string(raw_end)
    if end <= start:
        raise ValueError(f"Time slot {time_slot!r} must end after it starts")
    return start.strftime("%H:%M"), end.strftime("%H:%M")


def calculate_shift_hours(start_time: str, end_time: str) -> float:
    """
    Duration in hours between two ``HH:MM`` strings on the same day.

    Args:
        start_time: Shift start, e.g. "08:00"
        end_time: Shift end, e.g. "16:30"

    Returns:
        Hours as a float (minutes / 60)
    """
    start = parse_time_string(start_time)
    end = parse_time_string(end_time)
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    if minutes <= 0:
        raise ValueError(f"Shift {start_time}-{end_time} must end after it starts")
    return minutes / 60.0


def calculate_shift_cost(hours: float, hourly_rate: float) -> float:
    return hours * hourly_rate


def weekday_name(shift_date: date) -> str:
    """Lowercase English weekday for a date ("monday" ... "sunday")."""
    return WEEKDAYS[shift_date.weekday()]


def time_of_day_label(start_time: str) -> str:
    """Bucket a start time into morning / afternoon / evening / night."""
    hour = parse_time_string(start_time).hour
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def window_contains(window_start: str, window_end: str, start_time: str, end_time: str) -> bool:
    """True if ``[start_time, end_time)`` lies inside ``[window_start, window_end)``."""
    return (
        parse_time_string(window_start) <= parse_time_string(start_time)
        and parse_time_string(window_end) >= parse_time_string(end_time)
    )


def intervals_overlap(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    return parse_time_string(a_start) < parse_time_string(b_end) and parse_time_string(b_start) < parse_time_string(a_end)


def combine(shift_date: date, clock: str) -> datetime:
    """Naive local datetime for a date plus an ``HH:MM`` string."""
    return datetime.combine(shift_date, parse_time_string(clock))
