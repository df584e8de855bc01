from datetime import date
import math
from typing import Optional

from .types import Project, Interval, Period, Availability, WorkloadRecord, HORIZON_PADDING_DAYS, EMPTY_HORIZON_MONTHS, MIN_GAP_DAYS
from .dateutil import days_between, inclusive_days, days_offset, months_offset
from .conflicts import task_interval
from .workload import group_by_person

def compute_horizon(projects: list[Project], today: Optional[date] = None) -> Interval:
    """
    Date range every timeline view is laid out against.

    Spans today, all project start/end dates and all task due dates, padded by
    HORIZON_PADDING_DAYS on each side. With no projects it runs from today to
    EMPTY_HORIZON_MONTHS months out.
    """
    today = today or date.today()
    if not projects:
        return Interval(today, months_offset(today, EMPTY_HORIZON_MONTHS))

    min_date = today
    max_date = today
    for project in projects:
        if project.start_date and project.start_date < min_date:
            min_date = project.start_date
        if project.end_date and project.end_date > max_date:
            max_date = project.end_date
        for task in project.tasks:
            if task.due_date and task.due_date > max_date:
                max_date = task.due_date

    return Interval(days_offset(min_date, -HORIZON_PADDING_DAYS), days_offset(max_date, HORIZON_PADDING_DAYS))

def busy_periods(record: WorkloadRecord) -> list[Period]:
    periods = []
    for pt in record.tasks:
        interval = task_interval(pt.task)
        if interval:
            periods.append(Period(interval.start, interval.end, pt.project_name))
    return sorted(periods, key=lambda p: p.start)

# Gaps in the horizon not covered by any busy period. Gaps of MIN_GAP_DAYS or
# less between two periods count as contiguous work. Periods are expected
# sorted by start.
def available_periods(busy: list[Period], horizon: Interval) -> list[Period]:
    if not busy:
        return [Period(horizon.start, horizon.end)]

    ret = []
    if busy[0].start > horizon.start:
        ret.append(Period(horizon.start, busy[0].start))

    # Track the latest end seen so a short period nested in a long one does not
    # open a gap inside the long one. Work that starts before the horizon
    # never pulls a gap in front of it.
    cursor = max(busy[0].end, horizon.start)
    for period in busy[1:]:
        if days_between(cursor, period.start) > MIN_GAP_DAYS:
            ret.append(Period(cursor, period.start))
        cursor = max(cursor, period.end)

    if cursor < horizon.end:
        ret.append(Period(cursor, horizon.end))
    return ret

def utilization(busy_days: int, horizon_days: int) -> int:
    if horizon_days <= 0:
        return 0
    # Halves round up, 12.5% reads as 13%.
    return math.floor(100 * busy_days / horizon_days + 0.5)

def person_availability(record: WorkloadRecord, horizon: Interval) -> Availability:
    busy = busy_periods(record)
    # Overlapping periods are not merged, double booked days
    # count twice.
    busy_days = sum(inclusive_days(p.start, p.end) for p in busy)
    horizon_days = max(0, inclusive_days(horizon.start, horizon.end))
    return Availability(
        person=record.person,
        busy_periods=busy,
        total_days=horizon_days,
        busy_days=busy_days,
        utilization=utilization(busy_days, horizon_days),
        available_periods=available_periods(busy, horizon),
    )

def analyze_availability(projects: list[Project], horizon: Interval) -> list[Availability]:
    ret = [person_availability(r, horizon) for r in group_by_person(projects) if not r.person.is_unassigned]
    return sorted(ret, key=lambda a: -a.utilization)
