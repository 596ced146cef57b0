"""Client-side due-date aggregation for the dashboard page.

All comparisons work on calendar days in local time: a task's due timestamp
is reduced to the start of its day before it is compared against the filter
bounds or "today".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from ticketdesk.models import STATUS_LABELS, Task, TaskStatus

APPROACHING_WINDOW_DAYS = 3

DateLike = Union[date, datetime, str, None]


def _as_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def due_day(task: Task) -> Optional[date]:
    due = task.due_datetime()
    return due.date() if due else None


def is_in_due_date_range(task: Task, date_from: DateLike = None, date_to: DateLike = None) -> bool:
    """Tasks without a due date always pass; bounds are inclusive days."""
    due = due_day(task)
    if due is None:
        return True
    start = _as_date(date_from)
    end = _as_date(date_to)
    if start is not None and due < start:
        return False
    if end is not None and due > end:
        return False
    return True


def filter_by_due_range(tasks: Iterable[Task], date_from: DateLike = None, date_to: DateLike = None) -> List[Task]:
    tasks = list(tasks)
    if _as_date(date_from) is None and _as_date(date_to) is None:
        return tasks
    return [t for t in tasks if is_in_due_date_range(t, date_from, date_to)]


def count_by_status(tasks: Iterable[Task]) -> Dict[int, int]:
    counts = {int(s): 0 for s in TaskStatus}
    for t in tasks:
        if t.status in counts:
            counts[int(t.status)] += 1
    return counts


def _open_with_due(tasks: Iterable[Task]):
    for t in tasks:
        if t.is_done:
            continue
        due = due_day(t)
        if due is not None:
            yield t, due


def approaching_due(tasks: Iterable[Task], today: Optional[date] = None) -> List[Task]:
    """Open tasks due between today and three days from now, inclusive."""
    today = _as_date(today) or date.today()
    horizon = today + timedelta(days=APPROACHING_WINDOW_DAYS)
    return [t for t, due in _open_with_due(tasks) if today <= due <= horizon]


def overdue(tasks: Iterable[Task], today: Optional[date] = None) -> List[Task]:
    today = _as_date(today) or date.today()
    return [t for t, due in _open_with_due(tasks) if due < today]


@dataclass(frozen=True)
class DashboardSummary:
    tasks: List[Task]
    counts: Dict[int, int]
    approaching: List[Task] = field(default_factory=list)
    overdue: List[Task] = field(default_factory=list)

    @property
    def total_counted(self) -> int:
        return sum(self.counts.values())


def summarize(
    tasks: Iterable[Task],
    date_from: DateLike = None,
    date_to: DateLike = None,
    today: Optional[date] = None,
) -> DashboardSummary:
    filtered = filter_by_due_range(tasks, date_from, date_to)
    return DashboardSummary(
        tasks=filtered,
        counts=count_by_status(filtered),
        approaching=approaching_due(filtered, today),
        overdue=overdue(filtered, today),
    )


def status_counts_frame(counts: Dict[int, int]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "status": [STATUS_LABELS[s] for s in sorted(STATUS_LABELS)],
            "count": [int(counts.get(s, 0)) for s in sorted(STATUS_LABELS)],
        }
    )


def tasks_frame(tasks: Iterable[Task]) -> pd.DataFrame:
    rows = [
        {
            "Title": t.title,
            "Status": t.status_label,
            "Due Date": due_day(t),
        }
        for t in tasks
    ]
    if not rows:
        return pd.DataFrame(columns=["Title", "Status", "Due Date"])
    return pd.DataFrame(rows)
