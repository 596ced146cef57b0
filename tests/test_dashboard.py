from datetime import date

from ticketdesk.dashboard import (
    approaching_due,
    count_by_status,
    filter_by_due_range,
    overdue,
    status_counts_frame,
    summarize,
    tasks_frame,
)
from ticketdesk.models import Task

TODAY = date(2026, 10, 19)


def _task(id, status=1, due=None):
    return Task(id=id, title=f"Task {id}", status=status, due_date=due)


def test_counts_by_status():
    tasks = [_task(1, 1), _task(2, 1), _task(3, 2), _task(4, 3)]
    assert count_by_status(tasks) == {1: 2, 2: 1, 3: 1}


def test_counts_ignore_unknown_status():
    tasks = [_task(1, 1), _task(2, 9), _task(3, None)]
    counts = count_by_status(tasks)
    assert counts == {1: 1, 2: 0, 3: 0}


def test_range_filter_keeps_tasks_without_due_date():
    tasks = [
        _task(1, due="2026-10-01T08:00:00"),
        _task(2, due="2026-10-10T23:59:00"),
        _task(3, due="2026-10-20T00:00:00"),
        _task(4),
    ]
    kept = filter_by_due_range(tasks, date(2026, 10, 10), date(2026, 10, 15))
    assert [t.id for t in kept] == [2, 4]


def test_range_filter_with_one_bound():
    tasks = [_task(1, due="2026-10-01"), _task(2, due="2026-10-30")]
    assert [t.id for t in filter_by_due_range(tasks, date_from=date(2026, 10, 15))] == [2]
    assert [t.id for t in filter_by_due_range(tasks, date_to="2026-10-15")] == [1]


def test_range_filter_without_bounds_returns_everything():
    tasks = [_task(1, due="2026-10-01"), _task(2)]
    assert filter_by_due_range(tasks) == tasks


def test_approaching_window_is_today_to_three_days():
    tasks = [
        _task(1, due="2026-10-18T09:00:00"),
        _task(2, due="2026-10-19T07:00:00"),
        _task(3, due="2026-10-22T23:00:00"),
        _task(4, due="2026-10-23T00:00:00"),
        _task(5, status=3, due="2026-10-20T09:00:00"),
        _task(6),
    ]
    assert [t.id for t in approaching_due(tasks, TODAY)] == [2, 3]


def test_overdue_excludes_done_and_today():
    tasks = [
        _task(1, due="2026-10-18T23:59:00"),
        _task(2, status=2, due="2026-09-01"),
        _task(3, status=3, due="2026-09-01"),
        _task(4, due="2026-10-19T00:00:00"),
        _task(5),
    ]
    assert [t.id for t in overdue(tasks, TODAY)] == [1, 2]


def test_summarize_applies_range_before_buckets():
    tasks = [
        _task(1, due="2026-10-10"),
        _task(2, 2, due="2026-10-20"),
        _task(3, 3, due="2026-11-30"),
    ]
    summary = summarize(tasks, date(2026, 10, 1), date(2026, 10, 31), today=TODAY)
    assert [t.id for t in summary.tasks] == [1, 2]
    assert summary.counts == {1: 1, 2: 1, 3: 0}
    assert summary.total_counted == 2
    assert [t.id for t in summary.approaching] == [2]
    assert [t.id for t in summary.overdue] == [1]


def test_frames():
    counts_df = status_counts_frame({1: 2, 2: 0, 3: 5})
    assert list(counts_df["status"]) == ["To Do", "In Progress", "Done"]
    assert list(counts_df["count"]) == [2, 0, 5]

    df = tasks_frame([_task(1, 2, due="2026-10-20T10:00:00")])
    assert list(df.columns) == ["Title", "Status", "Due Date"]
    assert df.iloc[0]["Status"] == "In Progress"
    assert df.iloc[0]["Due Date"] == date(2026, 10, 20)

    assert tasks_frame([]).empty
