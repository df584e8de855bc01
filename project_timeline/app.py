from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional
import traceback
import os

from flask import Flask, request, jsonify

from .types import *
from .notification import Notification, Severity, Topic, by_topic
from .parse_json import parse_snapshot
from .dateutil import parse_date
from .conflicts import detect_conflicts, task_interval
from .workload import group_by_person, total_tasks
from .durations import analyze_durations
from .availability import compute_horizon, analyze_availability
from .layout import bar_position, project_bar, date_headers, month_spans
from .completion import classify, completion_stats, overdue_tasks, upcoming_deadlines
from .recommend import recommend

app = Flask(__name__)

app.secret_key = os.environ.get("FLASK_SECRET_KEY")

# Every view model derived from one snapshot. Nothing in here is kept between
# requests; a new snapshot means a new analysis.
@dataclass
class TimelineAnalysis:
    horizon: Interval
    conflicts: Dict[str, set[str]]
    workload: list[WorkloadRecord]
    durations: list[ProjectDuration]
    availability: list[Availability]
    project_bars: Dict[str, BarPosition]
    task_bars: Dict[str, BarPosition]
    completion: Dict[str, CompletionTiming]
    completion_stats: CompletionStats
    overdue: list[ProjectTask]
    upcoming: list[ProjectTask]
    headers: list[DateHeader]
    months: list[MonthSpan]
    recommendations: list[Notification] = field(default_factory=list)

def build_timeline_analysis(projects: list[Project], notifications: list[Notification], today: Optional[date] = None) -> TimelineAnalysis:
    today = today or date.today()
    horizon = compute_horizon(projects, today)

    conflicts = detect_conflicts(projects)
    workload = group_by_person(projects)
    durations = analyze_durations(projects, conflicts, today)
    availability = analyze_availability(projects, horizon)

    tasks = [t for p in projects for t in p.tasks]
    task_bars = {t.id: bar_position(task_interval(t), horizon) for t in tasks}
    project_bars = {p.id: project_bar(p, horizon) for p in projects}

    notifications.append(Notification(Severity.INFO, f"[Projects: {len(projects)}], [Tasks: {total_tasks(projects)}], [People: {len(availability)}], [Horizon: {horizon.start} to {horizon.end}]"))
    unscheduled = sum(1 for t in tasks if task_interval(t) is None)
    if unscheduled:
        notifications.append(Notification(Severity.INFO, f"{unscheduled} tasks have no usable start/due dates and are left off the timeline."))
    unreadable = by_topic(notifications, Topic.Data)
    if unreadable:
        notifications.append(Notification(Severity.INFO, f"{len(unreadable)} snapshot values could not be read and were treated as missing."))
    recommendations = recommend(conflicts, availability, notifications)

    return TimelineAnalysis(
        horizon=horizon,
        conflicts=conflicts,
        workload=workload,
        durations=durations,
        availability=availability,
        project_bars=project_bars,
        task_bars=task_bars,
        completion={t.id: classify(t) for t in tasks},
        completion_stats=completion_stats(tasks),
        overdue=overdue_tasks(projects, today),
        upcoming=upcoming_deadlines(projects, today),
        headers=date_headers(horizon, today),
        months=month_spans(horizon),
        recommendations=recommendations,
    )

def iso(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d else None

def period_to_dict(p: Period) -> Dict[str, Any]:
    return {'start': iso(p.start), 'end': iso(p.end), 'projectName': p.project_name}

def bar_to_dict(b: BarPosition) -> Dict[str, float]:
    return {'left': b.left, 'width': b.width}

def project_task_to_dict(pt: ProjectTask) -> Dict[str, Any]:
    t = pt.task
    return {
        'id': t.id,
        'title': t.title,
        'projectName': pt.project_name,
        'status': str(t.status),
        'dueDate': iso(t.due_date),
        'assignee': t.assignee.name,
    }

def analysis_to_dict(a: TimelineAnalysis) -> Dict[str, Any]:
    return {
        'horizon': {'start': iso(a.horizon.start), 'end': iso(a.horizon.end)},
        'conflicts': {k: sorted(v) for k, v in a.conflicts.items()},
        'workload': [{
            'person': r.person.key,
            'name': r.name,
            'taskIds': [pt.task.id for pt in r.tasks],
            'projects': sorted(r.projects),
            'byStatus': {str(s): n for s, n in r.count_by_status().items()},
            'estimatedHours': r.estimated_hours(),
        } for r in a.workload],
        'durations': [{
            'projectId': d.project.id,
            'name': d.project.name,
            'durationDays': d.duration_days,
            'teamMembers': d.team_members,
            'hasConflicts': d.has_conflicts,
        } for d in a.durations],
        'availability': [{
            'person': av.person.key,
            'name': av.person.name,
            'busyPeriods': [period_to_dict(p) for p in av.busy_periods],
            'totalDays': av.total_days,
            'busyDays': av.busy_days,
            'utilization': av.utilization,
            'displayUtilization': av.display_utilization,
            'availablePeriods': [period_to_dict(p) for p in av.available_periods],
        } for av in a.availability],
        'projectBars': {k: bar_to_dict(b) for k, b in a.project_bars.items()},
        'taskBars': {k: bar_to_dict(b) for k, b in a.task_bars.items()},
        'completion': {k: str(v) for k, v in a.completion.items()},
        'completionStats': {
            'totalCompleted': a.completion_stats.total_completed,
            'completedEarly': a.completion_stats.completed_early,
            'completedOnTime': a.completion_stats.completed_on_time,
            'completedLate': a.completion_stats.completed_late,
            'averageDaysEarly': a.completion_stats.average_days_early,
            'averageDaysLate': a.completion_stats.average_days_late,
            'onTimePercentage': a.completion_stats.on_time_percentage,
        },
        'overdue': [project_task_to_dict(pt) for pt in a.overdue],
        'upcoming': [project_task_to_dict(pt) for pt in a.upcoming],
        'headers': [{'date': iso(h.day), 'isToday': h.is_today} for h in a.headers],
        'months': [{'label': m.label, 'days': m.days, 'width': m.width} for m in a.months],
        'recommendations': [n.to_dict() for n in a.recommendations],
    }

@app.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})

@app.route('/analyze', methods=['POST'])
def analyze():
    content = request.get_json(silent=True)
    if not isinstance(content, dict) or 'projects' not in content:
        return jsonify({'message': "Request body must be a JSON object with a 'projects' list"}), 400

    try:
        notifications: list[Notification] = list()
        projects = parse_snapshot(content, notifications)
        today = parse_date(content.get('today'))

        analysis = build_timeline_analysis(projects, notifications, today)

        response = analysis_to_dict(analysis)
        response['notifications'] = [n.to_dict() for n in notifications]
        return jsonify(response)

    except Exception as e:
        print(f"Caught exception {e}")
        print(traceback.format_exc())
        return jsonify({'message': str(e)}), 500

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.environ.get('TIMELINE_PORT', 5000)), debug=os.environ.get('TIMELINE_DEBUG') == '1')
