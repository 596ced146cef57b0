from datetime import date, time

import pytest

from ticketdesk.forms import (
    FormError,
    build_recurring_config_payload,
    build_sublocation_payload,
    build_task_payload,
    build_user_payload,
    build_vendor_payload,
    combine_due,
    format_days,
    format_time_of_day,
    join_days,
    parse_time_of_day,
)


def test_task_payload_requires_title():
    with pytest.raises(FormError, match="Title is required"):
        build_task_payload("   ")


def test_task_payload_omits_blank_optionals():
    payload = build_task_payload(" Broken lamp ", description="", location="  ", sub_location=None)
    assert payload == {"title": "Broken lamp"}


def test_task_payload_combines_due_date_and_time():
    payload = build_task_payload("Check pump", "weekly", date(2026, 10, 21), time(14, 30), "Plant A", "Room 2")
    assert payload == {
        "title": "Check pump",
        "description": "weekly",
        "dueDate": "2026-10-21T14:30",
        "location": "Plant A",
        "subLocation": "Room 2",
    }


def test_combine_due_without_time_is_midnight():
    assert combine_due(date(2026, 1, 2)) == "2026-01-02T00:00"
    assert combine_due(None, time(9, 0)) is None


def test_new_user_needs_password():
    with pytest.raises(FormError, match="Password"):
        build_user_payload("a@b.c", "A", "VENDOR", "")


def test_edit_user_may_keep_password():
    payload = build_user_payload(" a@b.c ", "A", "asset", "", is_edit=True)
    assert payload == {"email": "a@b.c", "name": "A", "role": "ASSET"}


def test_user_payload_validation():
    with pytest.raises(FormError, match="Role"):
        build_user_payload("a@b.c", "A", "JANITOR", "pw")
    with pytest.raises(FormError, match="Email"):
        build_user_payload(" ", "A", "VENDOR", "pw")
    assert build_user_payload("a@b.c", "", "SUPER_ADMIN", "pw")["password"] == "pw"


def test_recurring_payload():
    payload = build_recurring_config_payload(
        "Clean filters", ["5", "1", "1"], "07:30", location="Block B", is_active=False
    )
    assert payload == {
        "title": "Clean filters",
        "location": "Block B",
        "days": "1,5",
        "timeOfDay": "07:30",
        "isActive": False,
    }


def test_recurring_payload_validation():
    with pytest.raises(FormError, match="Title"):
        build_recurring_config_payload("", ["1"])
    with pytest.raises(FormError, match="at least one day"):
        build_recurring_config_payload("x", [])
    with pytest.raises(FormError, match="Unknown day"):
        build_recurring_config_payload("x", ["1", "8"])


def test_weekday_helpers():
    assert join_days(["3", " 1", "3", ""]) == "1,3"
    assert format_days("1,3") == "Monday, Wednesday"
    assert format_days("") == "-"
    assert format_days(None) == "-"
    assert format_days("7,9") == "Sunday, 9"


def test_time_of_day_helpers():
    assert parse_time_of_day("17:45") == time(17, 45)
    assert parse_time_of_day(None) == time(9, 0)
    assert parse_time_of_day("soon") == time(9, 0)
    assert format_time_of_day(time(6, 5)) == "06:05"
    assert format_time_of_day(None) == "09:00"


def test_vendor_and_sublocation_payloads():
    assert build_vendor_payload(" ACME ") == {"name": "ACME"}
    with pytest.raises(FormError):
        build_vendor_payload("")
    assert build_sublocation_payload("Lobby", 3) == {"name": "Lobby", "locationId": 3}
    with pytest.raises(FormError, match="Location"):
        build_sublocation_payload("Lobby", None)
    with pytest.raises(FormError, match="Name"):
        build_sublocation_payload(" ", 3)
