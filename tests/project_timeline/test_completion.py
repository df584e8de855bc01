from project_timeline.completion import classify, completion_stats, overdue_tasks, upcoming_deadlines
from project_timeline.parse_json import parse_task
from project_timeline.types import Task, Project, Status, CompletionTiming

import datetime
import unittest

def d(day: str) -> datetime.date:
    return datetime.date.fromisoformat(day)

def done(id, completed, due) -> Task:
    return Task(id, id, status=Status.Completed, completed_at=d(completed) if completed else None, due_date=d(due) if due else None)

class TestClassify(unittest.TestCase):
    def test_early_on_time_late(self):
        self.assertEqual(classify(done("A", "2024-01-30", "2024-02-01")), CompletionTiming.Early)
        self.assertEqual(classify(done("B", "2024-02-01", "2024-02-01")), CompletionTiming.OnTime)
        self.assertEqual(classify(done("C", "2024-02-02", "2024-02-01")), CompletionTiming.Late)

    def test_time_of_day_is_ignored(self):
        task = parse_task({'id': 'A', 'status': 'completed', 'completedAt': '2024-02-01T23:30:00',
                           'dueDate': '2024-02-01T00:00:00.000Z'}, [])
        self.assertEqual(classify(task), CompletionTiming.OnTime)

    def test_none_cases(self):
        self.assertEqual(classify(done("A", None, "2024-02-01")), CompletionTiming.NoTiming)
        self.assertEqual(classify(done("B", "2024-02-01", None)), CompletionTiming.NoTiming)
        in_progress = Task("C", "C", status=Status.InProgress, completed_at=d("2024-01-01"), due_date=d("2024-02-01"))
        self.assertEqual(classify(in_progress), CompletionTiming.NoTiming)

class TestCompletionStats(unittest.TestCase):
    def test_stats(self):
        tasks = [
            done("A", "2024-01-28", "2024-02-01"),
            done("B", "2024-01-30", "2024-02-01"),
            done("C", "2024-02-01", "2024-02-01"),
            done("D", "2024-02-06", "2024-02-01"),
            done("E", None, "2024-02-01"),
            Task("F", "F", due_date=d("2024-02-01")),
        ]
        stats = completion_stats(tasks)
        self.assertEqual(stats.total_completed, 4)
        self.assertEqual(stats.completed_early, 2)
        self.assertEqual(stats.completed_on_time, 1)
        self.assertEqual(stats.completed_late, 1)
        self.assertEqual(stats.average_days_early, 3)
        self.assertEqual(stats.average_days_late, 5)
        self.assertEqual(stats.on_time_percentage, 75)

    def test_empty(self):
        stats = completion_stats([])
        self.assertEqual(stats.total_completed, 0)
        self.assertEqual(stats.on_time_percentage, 0)

class TestDeadlines(unittest.TestCase):
    def setUp(self):
        self.projects = [Project("P", "Mall", tasks=[
            Task("past", "Past", due_date=d("2024-03-01")),
            Task("past-done", "Past done", due_date=d("2024-03-01"), status=Status.Completed),
            Task("today", "Today", due_date=d("2024-03-10")),
            Task("week", "Week", due_date=d("2024-03-17"), status=Status.InProgress),
            Task("soon", "Soon", due_date=d("2024-03-12")),
            Task("later", "Later", due_date=d("2024-03-18")),
            Task("undated", "Undated"),
        ])]
        self.today = d("2024-03-10")

    def test_overdue(self):
        overdue = overdue_tasks(self.projects, self.today)
        self.assertEqual([pt.task.id for pt in overdue], ["past"])
        self.assertEqual(overdue[0].project_name, "Mall")

    def test_upcoming(self):
        upcoming = upcoming_deadlines(self.projects, self.today)
        self.assertEqual([pt.task.id for pt in upcoming], ["today", "soon", "week"])
