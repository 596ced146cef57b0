"""Client-side checks and request payloads for the create/edit forms.

Validation is deliberately thin; the backend is the authority. Optional
text fields left blank are omitted from the payload rather than sent empty.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Iterable, List, Optional

from ticketdesk.models import Role

DAY_LABELS = {
    "1": "Monday",
    "2": "Tuesday",
    "3": "Wednesday",
    "4": "Thursday",
    "5": "Friday",
    "6": "Saturday",
    "7": "Sunday",
}

DEFAULT_TIME_OF_DAY = "09:00"


class FormError(ValueError):
    """Input rejected before anything was sent."""


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _put_optional(payload: Dict[str, Any], key: str, value: Optional[str]) -> None:
    cleaned = _clean(value)
    if cleaned is not None:
        payload[key] = cleaned


# ---------------- Weekdays ----------------

def parse_days(days: Optional[str]) -> List[str]:
    return [d.strip() for d in (days or "").split(",") if d.strip()]


def join_days(days: Iterable[str]) -> str:
    return ",".join(sorted({str(d).strip() for d in days if str(d).strip()}))


def format_days(days: Optional[str]) -> str:
    codes = parse_days(days)
    if not codes:
        return "-"
    return ", ".join(DAY_LABELS.get(d, d) for d in codes)


# ---------------- Tasks ----------------

def combine_due(due_date: Optional[date], due_time: Optional[time] = None) -> Optional[str]:
    """ISO local timestamp (minute precision) for the backend, or None."""
    if due_date is None:
        return None
    stamp = datetime.combine(due_date, due_time or time(0, 0))
    return stamp.strftime("%Y-%m-%dT%H:%M")


def build_task_payload(
    title: str,
    description: Optional[str] = None,
    due_date: Optional[date] = None,
    due_time: Optional[time] = None,
    location: Optional[str] = None,
    sub_location: Optional[str] = None,
) -> Dict[str, Any]:
    cleaned_title = _clean(title)
    if not cleaned_title:
        raise FormError("Title is required")
    payload: Dict[str, Any] = {"title": cleaned_title}
    _put_optional(payload, "description", description)
    _put_optional(payload, "dueDate", combine_due(due_date, due_time))
    _put_optional(payload, "location", location)
    _put_optional(payload, "subLocation", sub_location)
    return payload


# ---------------- Users ----------------

def build_user_payload(
    email: str,
    name: str,
    role: Any,
    password: Optional[str] = None,
    *,
    is_edit: bool = False,
) -> Dict[str, Any]:
    """Payload for register (new) or update (edit).

    A new user needs a password; on edit a blank password leaves it unchanged.
    """
    parsed_role = Role.parse(role)
    if parsed_role is None:
        raise FormError("Role is invalid")
    if not _clean(email):
        raise FormError("Email is required")
    payload: Dict[str, Any] = {"email": email.strip(), "name": (name or "").strip(), "role": parsed_role.value}
    if password and password.strip():
        payload["password"] = password
    elif not is_edit:
        raise FormError("Password is required for a new user")
    return payload


# ---------------- Recurring configs ----------------

def build_recurring_config_payload(
    title: str,
    days: Iterable[str],
    time_of_day: Optional[str] = DEFAULT_TIME_OF_DAY,
    description: Optional[str] = None,
    location: Optional[str] = None,
    sub_location: Optional[str] = None,
    is_active: bool = True,
) -> Dict[str, Any]:
    cleaned_title = _clean(title)
    if not cleaned_title:
        raise FormError("Title is required")
    joined = join_days(days)
    if not joined:
        raise FormError("Select at least one day")
    unknown = [d for d in parse_days(joined) if d not in DAY_LABELS]
    if unknown:
        raise FormError(f"Unknown day code(s): {', '.join(unknown)}")
    payload: Dict[str, Any] = {"title": cleaned_title}
    _put_optional(payload, "description", description)
    _put_optional(payload, "location", location)
    _put_optional(payload, "subLocation", sub_location)
    payload["days"] = joined
    _put_optional(payload, "timeOfDay", time_of_day)
    payload["isActive"] = bool(is_active)
    return payload


def format_time_of_day(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value else DEFAULT_TIME_OF_DAY


def parse_time_of_day(value: Optional[str]) -> time:
    try:
        hours, minutes = (value or DEFAULT_TIME_OF_DAY).split(":")[:2]
        return time(int(hours), int(minutes))
    except ValueError:
        return time(9, 0)


# ---------------- Vendors / sub-locations ----------------

def build_vendor_payload(name: str) -> Dict[str, Any]:
    cleaned = _clean(name)
    if not cleaned:
        raise FormError("Name is required")
    return {"name": cleaned}


def build_sublocation_payload(name: str, location_id: Any) -> Dict[str, Any]:
    if location_id in (None, ""):
        raise FormError("Location is required")
    cleaned = _clean(name)
    if not cleaned:
        raise FormError("Name is required")
    return {"name": cleaned, "locationId": location_id}
