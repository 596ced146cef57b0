from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Dict, Iterable, List, MutableMapping, Optional, Tuple

from ticketdesk.forms import FormError
from ticketdesk.models import TaskStatus

EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DateRange = Tuple[Optional[date], Optional[date]]


@dataclass(frozen=True)
class ExportPreset:
    label: str
    get_range: Callable[[date], DateRange]


def _today(t: date) -> DateRange:
    return t, t


def _last_days(n: int) -> Callable[[date], DateRange]:
    def _range(t: date) -> DateRange:
        return t - timedelta(days=n - 1), t
    return _range


def _this_month(t: date) -> DateRange:
    return t.replace(day=1), t


def _all_dates(_t: date) -> DateRange:
    return None, None


EXPORT_PRESETS: List[ExportPreset] = [
    ExportPreset("Today", _today),
    ExportPreset("Last 7 days", _last_days(7)),
    ExportPreset("Last 30 days", _last_days(30)),
    ExportPreset("This month", _this_month),
    ExportPreset("All dates", _all_dates),
]

ALL_STATUSES = [int(s) for s in TaskStatus]


def preset_range(label: str, today: Optional[date] = None) -> DateRange:
    today = today or date.today()
    for p in EXPORT_PRESETS:
        if p.label == label:
            return p.get_range(today)
    raise KeyError(label)


def build_export_filters(
    date_from: Optional[date],
    date_to: Optional[date],
    statuses: Iterable[int],
) -> Dict[str, Any]:
    """Filter body for ``POST /api/tasks/export`` (created-at range + statuses)."""
    chosen = sorted({int(s) for s in statuses})
    if not chosen:
        raise FormError("Select at least one status")
    filters: Dict[str, Any] = {"status": chosen}
    if date_from:
        filters["dateFrom"] = date_from.isoformat()
    if date_to:
        filters["dateTo"] = date_to.isoformat()
    return filters


def export_file_name(today: Optional[date] = None) -> str:
    return f"task-export-{(today or date.today()).isoformat()}.xlsx"


def reset_export_form(state: MutableMapping[str, Any]) -> None:
    """Start the export dialog over: no dates (all dates), every status, no file."""
    state.pop("export_blob", None)
    state["export_from"] = None
    state["export_to"] = None
    state["export_statuses"] = list(ALL_STATUSES)
