from datetime import date, datetime
from typing import Any, Optional
import calendar
import numpy as np

from .types import Interval

# Accepts dates, datetimes, ISO dates and ISO timestamps (a trailing 'Z'
# included). Anything else is treated as missing.
def parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None

def days_between(start: date, end: date) -> int:
    return int((np.datetime64(end, 'D') - np.datetime64(start, 'D')).astype(int))

# Number of calendar days in [start, end], counting both ends.
def inclusive_days(start: date, end: date) -> int:
    return days_between(start, end) + 1

def days_offset(day: date, days: int) -> date:
    return (np.datetime64(day, 'D') + np.timedelta64(days, 'D')).astype(date)

def months_offset(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))

def day_range(start: date, end: date) -> list[date]:
    if end < start:
        return []
    days = np.arange(np.datetime64(start, 'D'), np.datetime64(end, 'D') + 1)
    return [d.astype(date) for d in days]

def to_interval(start_raw: Any, end_raw: Any) -> Optional[Interval]:
    start = parse_date(start_raw)
    end = parse_date(end_raw)
    if start is None or end is None:
        return None
    return Interval(start, end)
