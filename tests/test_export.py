from datetime import date

import pytest

from ticketdesk.export import (
    ALL_STATUSES,
    EXPORT_PRESETS,
    build_export_filters,
    export_file_name,
    preset_range,
    reset_export_form,
)
from ticketdesk.forms import FormError

TODAY = date(2026, 10, 19)


def test_presets():
    assert [p.label for p in EXPORT_PRESETS] == ["Today", "Last 7 days", "Last 30 days", "This month", "All dates"]
    assert preset_range("Today", TODAY) == (TODAY, TODAY)
    assert preset_range("Last 7 days", TODAY) == (date(2026, 10, 13), TODAY)
    assert preset_range("Last 30 days", TODAY) == (date(2026, 9, 20), TODAY)
    assert preset_range("This month", TODAY) == (date(2026, 10, 1), TODAY)
    assert preset_range("All dates", TODAY) == (None, None)


def test_unknown_preset():
    with pytest.raises(KeyError):
        preset_range("Next year", TODAY)


def test_filters_default_to_all_statuses():
    filters = build_export_filters(TODAY, TODAY, ALL_STATUSES)
    assert filters == {"status": [1, 2, 3], "dateFrom": "2026-10-19", "dateTo": "2026-10-19"}


def test_filters_without_dates():
    assert build_export_filters(None, None, [3, 1, 3]) == {"status": [1, 3]}


def test_filters_need_a_status():
    with pytest.raises(FormError, match="at least one status"):
        build_export_filters(TODAY, TODAY, [])


def test_export_file_name():
    assert export_file_name(TODAY) == "task-export-2026-10-19.xlsx"


def test_reset_export_form_clears_previous_export():
    state = {
        "export_blob": b"PK old file",
        "export_from": date(2026, 1, 1),
        "export_to": date(2026, 1, 31),
        "export_statuses": [3],
        "unrelated": "kept",
    }
    reset_export_form(state)

    assert state == {
        "export_from": None,
        "export_to": None,
        "export_statuses": [1, 2, 3],
        "unrelated": "kept",
    }
    assert build_export_filters(state["export_from"], state["export_to"], state["export_statuses"]) == {
        "status": [1, 2, 3]
    }
