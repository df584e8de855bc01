from datetime import date
from typing import Dict, Optional

from .types import Project, ProjectDuration
from .dateutil import days_between

def project_duration_days(project: Project) -> Optional[int]:
    if project.start_date is None or project.end_date is None:
        return None
    return days_between(project.start_date, project.end_date)

def team_members(project: Project) -> list[str]:
    seen: list[str] = []
    for task in project.tasks:
        if task.assignee.is_unassigned or task.assignee.name in seen:
            continue
        seen.append(task.assignee.name)
    return seen

def analyze_durations(projects: list[Project], conflicts: Dict[str, set[str]], today: Optional[date] = None) -> list[ProjectDuration]:
    # Projects without a start date are placed as if they started today.
    today = today or date.today()
    ret = []
    for project in projects:
        ret.append(ProjectDuration(
            project=project,
            duration_days=project_duration_days(project),
            team_members=team_members(project),
            has_conflicts=any(t.id in conflicts for t in project.tasks),
        ))
    return sorted(ret, key=lambda d: d.project.start_date or today)
