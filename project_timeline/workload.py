from typing import Dict

from .types import Project, ProjectTask, WorkloadRecord

def group_by_person(projects: list[Project]) -> list[WorkloadRecord]:
    """
    Bucket every task of every project under its assignee.

    Unlike conflict detection this keeps unassigned tasks (in their own
    'Unassigned' bucket) and tasks without dates, so the task counts always
    add up to the snapshot's total. Records are ordered by display name; ties
    keep the order in which the people were first seen.
    """
    buckets: Dict[str, WorkloadRecord] = {}
    for project in projects:
        for task in project.tasks:
            person = task.assignee
            if person.key not in buckets:
                buckets[person.key] = WorkloadRecord(person)
            record = buckets[person.key]
            record.tasks.append(ProjectTask(task, project.name))
            record.projects.add(project.name)

    return sorted(buckets.values(), key=lambda r: r.name)

def total_tasks(projects: list[Project]) -> int:
    return sum(len(p.tasks) for p in projects)
