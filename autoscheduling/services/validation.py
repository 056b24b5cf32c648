"""Post-generation audit of a schedule against the soft constraint knobs."""

from __future__ import annotations

from collections import defaultdict
from datetime import timedelta
from typing import Dict, List, Sequence

from autoscheduling.config import MetricsPolicy
from autoscheduling.domain.types import GeneratedShift, SchedulingConflict, SchedulingConstraints
from autoscheduling.services.conflicts import ConflictLog
from autoscheduling.services.metrics import schedule_to_frame
from autoscheduling.services.timeplan import combine


def _shifts_by_employee(schedule: Sequence[GeneratedShift]) -> Dict[str, List[GeneratedShift]]:
    by_emp: Dict[str, List[GeneratedShift]] = defaultdict(list)
    for shift in schedule:
        by_emp[shift.employee_id].append(shift)
    for shifts in by_emp.values():
        shifts.sort(key=lambda s: (s.date, s.start_time))
    return by_emp


def check_shift_overtime(schedule, constraints: SchedulingConstraints, log: ConflictLog) -> None:
    for shift in schedule:
        if shift.hours > constraints.overtime_threshold:
            log.record(
                type="overtime",
                severity="warning",
                employee_id=shift.employee_id,
                message=(
                    f"{shift.name} works {shift.hours:.1f}h on {shift.date.isoformat()} "
                    f"({shift.start_time}-{shift.end_time}), above the {constraints.overtime_threshold:g}h threshold"
                ),
                suggested_resolution="Split the shift or assign a second employee",
            )


def check_weekly_overtime(by_emp, policy: MetricsPolicy, log: ConflictLog) -> None:
    for emp_id in sorted(by_emp):
        weekly: Dict[tuple, float] = defaultdict(float)
        for shift in by_emp[emp_id]:
            iso = shift.date.isocalendar()
            weekly[(iso[0], iso[1])] += shift.hours
        for (year, week), hours in sorted(weekly.items()):
            if hours > policy.weekly_overtime_hours:
                log.record(
                    type="overtime",
                    severity="warning",
                    employee_id=emp_id,
                    message=(
                        f"{by_emp[emp_id][0].name} is scheduled {hours:.1f}h in {year}-W{week:02d}, "
                        f"above {policy.weekly_overtime_hours:g}h"
                    ),
                    suggested_resolution="Redistribute shifts to employees with spare hours",
                )


def check_rest_gaps(by_emp, constraints: SchedulingConstraints, log: ConflictLog) -> None:
    min_gap = timedelta(hours=constraints.min_hours_between_shifts)
    for emp_id in sorted(by_emp):
        shifts = by_emp[emp_id]
        for prev, nxt in zip(shifts, shifts[1:]):
            prev_end = combine(prev.date, prev.end_time)
            next_start = combine(nxt.date, nxt.start_time)
            if prev_end <= next_start < prev_end + min_gap:
                gap_hours = (next_start - prev_end).total_seconds() / 3600.0
                log.record(
                    type="min_hours",
                    severity="warning",
                    employee_id=emp_id,
                    message=(
                        f"{nxt.name} has only {gap_hours:.1f}h rest between "
                        f"{prev.date.isoformat()} {prev.end_time} and {nxt.date.isoformat()} {nxt.start_time}"
                    ),
                    suggested_resolution=(
                        f"Keep at least {constraints.min_hours_between_shifts:g}h between shifts"
                    ),
                )


def check_double_booking(by_emp, log: ConflictLog) -> None:
    for emp_id in sorted(by_emp):
        shifts = by_emp[emp_id]
        for i, a in enumerate(shifts):
            for b in shifts[i + 1:]:
                if a.date != b.date:
                    break
                if a.start_time < b.end_time and b.start_time < a.end_time:
                    log.record(
                        type="availability",
                        severity="critical",
                        employee_id=emp_id,
                        message=(
                            f"{a.name} is double-booked on {a.date.isoformat()}: "
                            f"{a.start_time}-{a.end_time} ({a.position}) overlaps "
                            f"{b.start_time}-{b.end_time} ({b.position})"
                        ),
                        suggested_resolution="Reassign one of the overlapping shifts",
                    )


def check_consecutive_days(by_emp, constraints: SchedulingConstraints, log: ConflictLog) -> None:
    limit = constraints.max_consecutive_days
    for emp_id in sorted(by_emp):
        days = sorted({s.date for s in by_emp[emp_id]})
        run = 1
        for prev, cur in zip(days, days[1:]):
            run = run + 1 if cur - prev == timedelta(days=1) else 1
            # Report once per streak, on the first day past the limit
            if run == limit + 1:
                log.record(
                    type="consecutive_days",
                    severity="warning",
                    employee_id=emp_id,
                    message=(
                        f"{by_emp[emp_id][0].name} works more than {limit} consecutive days "
                        f"(through {cur.isoformat()})"
                    ),
                    suggested_resolution="Insert a day off in the streak",
                )


def check_budget(schedule, constraints: SchedulingConstraints, policy: MetricsPolicy, log: ConflictLog) -> None:
    total_cost = sum(s.estimated_cost for s in schedule)
    budget = constraints.max_weekly_labor_budget
    if total_cost > budget:
        log.record(
            type="budget",
            severity="warning",
            message=f"Scheduled labor cost {total_cost:.2f} exceeds the budget of {budget:.2f}",
            suggested_resolution="Reduce hours on low-priority requirements or favour lower-rate staff",
        )
    elif budget > 0 and total_cost > policy.budget_info_ratio * budget:
        log.record(
            type="budget",
            severity="info",
            message=(
                f"Scheduled labor cost {total_cost:.2f} is above "
                f"{policy.budget_info_ratio:.0%} of the budget of {budget:.2f}"
            ),
            suggested_resolution="Review remaining budget before adding shifts",
        )


def check_min_staff(schedule, constraints: SchedulingConstraints, log: ConflictLog) -> None:
    if not constraints.min_staff_per_position or not schedule:
        return
    counts: Dict[tuple, int] = defaultdict(int)
    for shift in schedule:
        counts[(shift.date, shift.position)] += 1
    for day in sorted({s.date for s in schedule}):
        for position, minimum in sorted(constraints.min_staff_per_position.items()):
            have = counts.get((day, position), 0)
            if have < int(minimum):
                log.record(
                    type="availability",
                    severity="warning",
                    message=f"Only {have} of minimum {minimum} {position} staff scheduled on {day.isoformat()}",
                    suggested_resolution=f"Add {position} requirements or availability for {day.isoformat()}",
                )


def validate_schedule(
    schedule: Sequence[GeneratedShift],
    constraints: SchedulingConstraints,
    policy: MetricsPolicy | None = None,
) -> List[SchedulingConflict]:
    """
    Audit a finished schedule and return any conflicts found.

    Only double-booking is critical; every other finding is a warning or
    info entry and does not block applying the schedule.
    """
    policy = policy or MetricsPolicy()
    log = ConflictLog()
    by_emp = _shifts_by_employee(schedule)

    check_double_booking(by_emp, log)
    check_shift_overtime(schedule, constraints, log)
    check_weekly_overtime(by_emp, policy, log)
    check_rest_gaps(by_emp, constraints, log)
    check_consecutive_days(by_emp, constraints, log)
    check_budget(schedule, constraints, policy, log)
    check_min_staff(schedule, constraints, log)
    return log.to_list()


def summarize_schedule(schedule: Sequence[GeneratedShift]) -> str:
    """Text summary: head-count per date and position, hours and cost per employee."""
    df = schedule_to_frame(schedule)
    if df.empty:
        return "No shifts scheduled."

    coverage = df.groupby(["date", "position"]).size().unstack(fill_value=0)
    hours = (
        df.groupby(["employee_id", "name"])
        .agg(hours=("hours", "sum"), cost=("estimated_cost", "sum"), shifts=("hours", "size"))
        .sort_values("hours", ascending=False)
    )

    lines = ["Staff per date per position:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Hours per employee:")
    lines.append(hours.to_string())
    return "\n".join(lines)
