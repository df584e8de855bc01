from datetime import date
from typing import Any, Optional

from .types import Interval, Project, BarPosition, DateHeader, MonthSpan, MIN_BAR_WIDTH
from .dateutil import days_between, day_range, to_interval

def bar_position(interval: Optional[Interval], horizon: Interval) -> BarPosition:
    """
    Place an interval on a timeline axis covering the horizon.

    Both values are percentages of the axis width. The end date is inclusive,
    so a single day task still gets a bar, and any visible bar is at least
    MIN_BAR_WIDTH wide. A width of 0 means there is nothing to draw: a missing
    or inverted interval, or an empty horizon.
    """
    if interval is None or not interval.is_valid():
        return BarPosition(0, 0)
    total_days = days_between(horizon.start, horizon.end)
    if total_days <= 0:
        return BarPosition(0, 0)

    start_offset = days_between(horizon.start, interval.start)
    duration = days_between(interval.start, interval.end) + 1

    left = 100 * start_offset / total_days
    width = 100 * duration / total_days
    return BarPosition(max(0, left), max(MIN_BAR_WIDTH, width))

def task_bar(start_raw: Any, end_raw: Any, horizon: Interval) -> BarPosition:
    return bar_position(to_interval(start_raw, end_raw), horizon)

def project_bar(project: Project, horizon: Interval) -> BarPosition:
    return task_bar(project.start_date, project.end_date, horizon)

def date_headers(horizon: Interval, today: Optional[date] = None) -> list[DateHeader]:
    today = today or date.today()
    return [DateHeader(d, d == today) for d in day_range(horizon.start, horizon.end)]

# Consecutive header days grouped by month, each with its share of the axis.
def month_spans(horizon: Interval) -> list[MonthSpan]:
    days = day_range(horizon.start, horizon.end)
    spans: list[MonthSpan] = []
    for d in days:
        label = d.strftime('%b %Y')
        if spans and spans[-1].label == label:
            spans[-1].days += 1
        else:
            spans.append(MonthSpan(label, 1, 0))
    for span in spans:
        span.width = 100 * span.days / len(days)
    return spans
