from datetime import date

import pytest
from project_timeline.layout import bar_position, task_bar, project_bar, date_headers, month_spans
from project_timeline.types import Interval, Project, BarPosition

horizon = Interval(date(2024, 1, 1), date(2024, 1, 11))

def test_bar_position_basic():
    bar = bar_position(Interval(date(2024, 1, 3), date(2024, 1, 5)), horizon)
    assert bar.left == pytest.approx(20)
    assert bar.width == pytest.approx(30)
    assert bar.visible()

def test_single_day_bar_has_width():
    bar = bar_position(Interval(date(2024, 1, 6), date(2024, 1, 6)), horizon)
    assert bar.left == pytest.approx(50)
    assert bar.width == pytest.approx(10)

def test_bar_before_horizon_clamps_left():
    bar = bar_position(Interval(date(2023, 12, 30), date(2024, 1, 2)), horizon)
    assert bar.left == 0
    assert bar.width == pytest.approx(40)

def test_minimum_width_on_long_horizon():
    long_horizon = Interval(date(2020, 1, 1), date(2030, 1, 1))
    bar = bar_position(Interval(date(2024, 1, 6), date(2024, 1, 6)), long_horizon)
    assert bar.width == 1

def test_missing_or_inverted_interval():
    assert task_bar('2024-01-03', None, horizon) == BarPosition(0, 0)
    assert task_bar(None, '2024-01-03', horizon) == BarPosition(0, 0)
    assert task_bar('2024-01-05', '2024-01-03', horizon) == BarPosition(0, 0)
    assert not task_bar('2024-01-05', '2024-01-03', horizon).visible()

def test_empty_horizon():
    flat = Interval(date(2024, 1, 1), date(2024, 1, 1))
    assert bar_position(Interval(date(2024, 1, 1), date(2024, 1, 1)), flat) == BarPosition(0, 0)

def test_width_is_zero_or_at_least_one():
    long_horizon = Interval(date(2023, 1, 1), date(2026, 1, 1))
    for start_day in range(1, 28, 3):
        for length in range(-2, 5):
            start = date(2024, 2, start_day)
            end = date(2024, 2, max(1, min(28, start_day + length)))
            width = bar_position(Interval(start, end), long_horizon).width
            assert width == 0 or width >= 1

def test_project_bar():
    p = Project("P", "Mall", date(2024, 1, 1), date(2024, 1, 11))
    bar = project_bar(p, horizon)
    assert bar.left == 0
    assert bar.width == pytest.approx(110)
    assert project_bar(Project("Q", "Undated"), horizon) == BarPosition(0, 0)

def test_date_headers():
    headers = date_headers(Interval(date(2024, 1, 30), date(2024, 2, 2)), today=date(2024, 2, 1))
    assert [h.day for h in headers] == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2)]
    assert [h.is_today for h in headers] == [False, False, True, False]

def test_month_spans():
    spans = month_spans(Interval(date(2024, 1, 30), date(2024, 2, 2)))
    assert [(s.label, s.days) for s in spans] == [("Jan 2024", 2), ("Feb 2024", 2)]
    assert sum(s.width for s in spans) == pytest.approx(100)
    assert spans[0].width == pytest.approx(50)
