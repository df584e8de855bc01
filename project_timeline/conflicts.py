from collections import defaultdict
from typing import Dict, Optional
import networkx as nx

from .types import Task, Project, Interval
from .dateutil import to_interval

def task_interval(task: Task) -> Optional[Interval]:
    interval = to_interval(task.start_date, task.due_date)
    if interval is None or not interval.is_valid():
        return None
    return interval

# Tasks per person across every project. Unassigned tasks are left out since
# nobody can be double booked on them.
def tasks_by_person(projects: list[Project]) -> Dict[str, list[Task]]:
    ret: Dict[str, list[Task]] = defaultdict(list)
    for project in projects:
        for task in project.tasks:
            if task.assignee.is_unassigned:
                continue
            ret[task.assignee.key].append(task)
    return ret

# Nodes are task ids, an edge joins two tasks of the same person whose closed
# intervals overlap.
def build_overlap_graph(projects: list[Project]) -> nx.Graph:
    G = nx.Graph()
    for tasks in tasks_by_person(projects).values():
        scheduled = [(t, task_interval(t)) for t in tasks]
        scheduled = [(t, i) for t, i in scheduled if i is not None]
        for idx, (a, a_interval) in enumerate(scheduled):
            for b, b_interval in scheduled[idx + 1:]:
                if a.id != b.id and a_interval.overlaps(b_interval):
                    G.add_edge(a.id, b.id)
    return G

def detect_conflicts(projects: list[Project]) -> Dict[str, set[str]]:
    """
    Map every conflicting task id to the ids of the tasks it overlaps with.

    Only tasks with a conflict appear as keys. The relation is symmetric: if
    b is in a's set then a is in b's.
    """
    G = build_overlap_graph(projects)
    return {task_id: set(G.adj[task_id]) for task_id in G.nodes}

# Chains of tasks linked by overlaps, largest first.
def conflict_groups(conflicts: Dict[str, set[str]]) -> list[set[str]]:
    G = nx.Graph()
    for task_id, others in conflicts.items():
        for other in others:
            G.add_edge(task_id, other)
    return sorted((set(c) for c in nx.connected_components(G)), key=lambda c: (-len(c), sorted(c)))

def conflict_count(conflicts: Dict[str, set[str]]) -> int:
    return len(conflicts)
