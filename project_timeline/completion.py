from datetime import date
from typing import Optional

from .types import Task, Project, Status, CompletionTiming, CompletionStats, ProjectTask, UPCOMING_THRESHOLD
from .dateutil import days_between, days_offset

# Dates are already day granular, so comparing them compares calendar days.
def classify(task: Task) -> CompletionTiming:
    if task.status != Status.Completed or not task.completed_at or not task.due_date:
        return CompletionTiming.NoTiming
    if task.completed_at < task.due_date:
        return CompletionTiming.Early
    if task.completed_at == task.due_date:
        return CompletionTiming.OnTime
    return CompletionTiming.Late

def completion_stats(tasks: list[Task]) -> CompletionStats:
    """
    Summarize how completed tasks landed against their due dates.

    Only completed tasks with both a completion date and a due date count.
    The on-time percentage includes early completions.
    """
    stats = CompletionStats()
    early_days = 0
    late_days = 0
    for task in tasks:
        timing = classify(task)
        if timing == CompletionTiming.NoTiming:
            continue
        stats.total_completed += 1
        # Positive when finished ahead of the due date.
        diff = days_between(task.completed_at, task.due_date)
        match timing:
            case CompletionTiming.Early:
                stats.completed_early += 1
                early_days += diff
            case CompletionTiming.OnTime:
                stats.completed_on_time += 1
            case CompletionTiming.Late:
                stats.completed_late += 1
                late_days += -diff

    if stats.total_completed == 0:
        return stats
    if stats.completed_early:
        stats.average_days_early = early_days / stats.completed_early
    if stats.completed_late:
        stats.average_days_late = late_days / stats.completed_late
    stats.on_time_percentage = (stats.completed_early + stats.completed_on_time) / stats.total_completed * 100
    return stats

def all_tasks(projects: list[Project]) -> list[ProjectTask]:
    return [ProjectTask(t, p.name) for p in projects for t in p.tasks]

def overdue_tasks(projects: list[Project], today: Optional[date] = None) -> list[ProjectTask]:
    today = today or date.today()
    return [pt for pt in all_tasks(projects)
            if pt.task.due_date and pt.task.due_date < today and pt.task.status != Status.Completed]

def upcoming_deadlines(projects: list[Project], today: Optional[date] = None, days: int = UPCOMING_THRESHOLD) -> list[ProjectTask]:
    today = today or date.today()
    until = days_offset(today, days)
    ret = [pt for pt in all_tasks(projects)
           if pt.task.due_date and today <= pt.task.due_date <= until and pt.task.status != Status.Completed]
    return sorted(ret, key=lambda pt: pt.task.due_date)
