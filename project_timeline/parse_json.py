from typing import Any, Optional
import json

from .types import Task, Project, Person, UNASSIGNED, UNASSIGNED_NAME, parse_status, parse_priority, parse_phase
from .dateutil import parse_date
from .notification import Notification, Severity, Topic

# A field that is present but unparseable is treated as missing, with a warning
# so the user can find it.
def parse_optional_date(owner: str, key: str, raw: dict[str, Any], notifications: list[Notification]):
    value = raw.get(key)
    parsed = parse_date(value)
    if parsed is None and value not in (None, ''):
        notifications.append(Notification(Severity.WARN, f"{owner} has unreadable {key} '{value}', ignoring it", Topic.Data))
    return parsed

# Keys may be present with a null value; take the first one that is set.
def first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and str(value).strip() != '':
            return value
    return None

def get_id(kind: str, raw: dict[str, Any]) -> str:
    ident = first_present(raw, 'id', '_id')
    if ident is None or str(ident) == '':
        raise Exception(f"{kind} is missing an id: {raw}")
    return str(ident)

def full_name(ref: dict[str, Any]) -> str:
    name = ref.get('displayName') or ref.get('name')
    if name:
        return str(name).strip()
    return f"{ref.get('firstName') or ''} {ref.get('lastName') or ''}".strip()

# Collapse the assignee shapes we see in stored tasks into a single Person:
# a populated object with an identity, a bare identity under assigneeId
# (named by assigneeName), a bare display name, or nothing at all.
def resolve_assignee(raw: dict[str, Any]) -> Person:
    fallback_name = str(raw.get('assigneeName') or '').strip()

    ref = first_present(raw, 'assignee', 'assigneeId')
    if isinstance(ref, dict):
        ident = first_present(ref, 'id', '_id')
        name = full_name(ref) or fallback_name or UNASSIGNED_NAME
        if ident is not None:
            return Person(str(ident), name)
        if name != UNASSIGNED_NAME:
            return Person(name, name)
        return UNASSIGNED

    named = raw.get('assignee')
    if isinstance(named, str) and named.strip():
        return Person(named.strip(), named.strip())

    ident = raw.get('assigneeId')
    if isinstance(ident, (str, int)) and str(ident).strip():
        return Person(str(ident).strip(), fallback_name or UNASSIGNED_NAME)

    if fallback_name:
        return Person(fallback_name, fallback_name)
    return UNASSIGNED

def parse_number(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

def parse_task(raw: Any, notifications: list[Notification]) -> Task:
    if not isinstance(raw, dict):
        raise Exception(f"Task entries must be objects, got: {raw}")
    id = get_id('Task', raw)
    title = str(raw.get('title') or '')
    owner = f"Task '{title or id}'"
    return Task(
        id=id,
        title=title,
        phase=parse_phase(str(raw.get('phase') or '')),
        status=parse_status(str(raw.get('status') or '')),
        priority=parse_priority(str(raw.get('priority') or '')),
        start_date=parse_optional_date(owner, 'startDate', raw, notifications),
        due_date=parse_optional_date(owner, 'dueDate', raw, notifications),
        completed_at=parse_optional_date(owner, 'completedAt', raw, notifications),
        estimated_hours=parse_number(raw.get('estimatedHours')),
        assignee=resolve_assignee(raw),
    )

def parse_project(raw: Any, notifications: list[Notification]) -> Project:
    if not isinstance(raw, dict):
        raise Exception(f"Project entries must be objects, got: {raw}")
    id = get_id('Project', raw)
    name = str(raw.get('name') or '')
    owner = f"Project '{name or id}'"

    tasks_raw = raw.get('tasks') or []
    if not isinstance(tasks_raw, list):
        raise Exception(f"{owner} has tasks that are not a list")

    return Project(
        id=id,
        name=name,
        start_date=parse_optional_date(owner, 'startDate', raw, notifications),
        end_date=parse_optional_date(owner, 'endDate', raw, notifications),
        status=str(raw.get('status') or ''),
        progress=parse_number(raw.get('progress')) or 0,
        tasks=[parse_task(t, notifications) for t in tasks_raw],
    )

# Content is either JSON text or already decoded data; both a bare list of
# projects and an object with a 'projects' key are accepted.
def parse_snapshot(content: Any, notifications: list[Notification]) -> list[Project]:
    data = content
    if isinstance(content, (str, bytes)):
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise Exception(f"Invalid JSON ( json.loads threw: \"{str(e)}\")")

    if isinstance(data, dict):
        data = data.get('projects')
    if not isinstance(data, list):
        raise Exception("Expected a list of projects or an object with a 'projects' list")

    return [parse_project(p, notifications) for p in data]
