from dataclasses import dataclass, field
from typing import Optional
from enum import StrEnum
from datetime import date

HORIZON_PADDING_DAYS = 7
EMPTY_HORIZON_MONTHS = 2
OVER_UTILIZED_THRESHOLD = 80
UNDER_UTILIZED_THRESHOLD = 30
MIN_GAP_DAYS = 1
UPCOMING_THRESHOLD = 7
MIN_BAR_WIDTH = 1

UNASSIGNED_KEY = 'unassigned'
UNASSIGNED_NAME = 'Unassigned'

class Status(StrEnum):
    Todo = 'todo'
    InProgress = 'in-progress'
    Completed = 'completed'

# Stored data carries a few legacy spellings; fold them onto the three we know.
StatusNormalization: dict[str, Status] = {
    'todo': Status.Todo,
    'pending': Status.Todo,
    'not started': Status.Todo,
    '': Status.Todo,
    'in-progress': Status.InProgress,
    'in_progress': Status.InProgress,
    'in progress': Status.InProgress,
    'completed': Status.Completed,
    'done': Status.Completed,
}

def parse_status(status: str) -> Status:
    key = status.strip().lower()
    if key not in StatusNormalization:
        raise Exception(f"Unknown task status: {status}")
    return StatusNormalization[key]

class Priority(StrEnum):
    Low = 'low'
    Medium = 'medium'
    High = 'high'

def parse_priority(priority: str) -> Priority:
    try:
        return Priority(priority.strip().lower() or Priority.Medium)
    except ValueError:
        raise Exception(f"Unknown task priority: {priority}")

# Decorative only, the engine never branches on phase.
class Phase(StrEnum):
    Architectural = 'architectural'
    Structural = 'structural'
    Electrical = 'electrical'
    Mechanical = 'mechanical'
    FinalPlan = 'final-plan'
    FinalEstimate = 'final-estimate'
    Checking = 'checking'
    Other = 'other'

def parse_phase(phase: str) -> Phase:
    try:
        return Phase(phase.strip().lower() or Phase.Other)
    except ValueError:
        raise Exception(f"Unknown task phase: {phase}")

class CompletionTiming(StrEnum):
    Early = 'early'
    OnTime = 'on-time'
    Late = 'late'
    NoTiming = 'none'

@dataclass(frozen=True)
class Person:
    # Identity if the assignee resolved to one, otherwise the display name,
    # otherwise UNASSIGNED_KEY.
    key: str
    name: str

    @property
    def is_unassigned(self) -> bool:
        return self.key == UNASSIGNED_KEY

UNASSIGNED = Person(UNASSIGNED_KEY, UNASSIGNED_NAME)

@dataclass(frozen=True)
class Interval:
    start: date
    end: date

    # Inverted intervals are carried through but never displayed or compared.
    def is_valid(self) -> bool:
        return self.start <= self.end

    def overlaps(self, other: 'Interval') -> bool:
        return self.start <= other.end and other.start <= self.end

@dataclass
class Task:
    id: str
    title: str
    phase: Phase = Phase.Other
    status: Status = Status.Todo
    priority: Priority = Priority.Medium
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    completed_at: Optional[date] = None
    estimated_hours: Optional[float] = None
    assignee: Person = UNASSIGNED

    def __hash__(self):
        return hash(self.id)

@dataclass
class Project:
    id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = ''
    progress: float = 0
    tasks: list[Task] = field(default_factory=list)

    def __hash__(self):
        return hash(self.id)

# A task together with the name of the project it came from, so that
# per-person views can still group by project.
@dataclass
class ProjectTask:
    task: Task
    project_name: str

@dataclass
class WorkloadRecord:
    person: Person
    tasks: list[ProjectTask] = field(default_factory=list)
    projects: set[str] = field(default_factory=set)

    @property
    def name(self) -> str:
        return self.person.name

    def count_by_status(self) -> dict[Status, int]:
        counts = {s: 0 for s in Status}
        for pt in self.tasks:
            counts[pt.task.status] += 1
        return counts

    def estimated_hours(self) -> float:
        return sum(pt.task.estimated_hours or 0 for pt in self.tasks)

@dataclass
class ProjectDuration:
    project: Project
    duration_days: Optional[int]
    team_members: list[str]
    has_conflicts: bool

# A busy or available stretch of a person's horizon. Available periods carry
# no project name.
@dataclass
class Period:
    start: date
    end: date
    project_name: Optional[str] = None

@dataclass
class Availability:
    person: Person
    busy_periods: list[Period]
    total_days: int
    busy_days: int
    utilization: int
    available_periods: list[Period]

    # Raw utilization can exceed 100 when someone is double booked; bars are
    # drawn with the capped value.
    @property
    def display_utilization(self) -> int:
        return min(100, self.utilization)

@dataclass
class BarPosition:
    left: float
    width: float

    def visible(self) -> bool:
        return self.width > 0

@dataclass
class DateHeader:
    day: date
    is_today: bool

@dataclass
class MonthSpan:
    label: str
    days: int
    width: float

@dataclass
class CompletionStats:
    total_completed: int = 0
    completed_early: int = 0
    completed_on_time: int = 0
    completed_late: int = 0
    average_days_early: float = 0
    average_days_late: float = 0
    on_time_percentage: float = 0
