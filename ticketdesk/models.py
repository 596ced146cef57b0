"""Plain records received from the ticketing backend.

The backend speaks camelCase JSON; each dataclass has a ``from_dict`` that
tolerates missing optional keys and ignores anything it does not know about.
No relational checks happen here: uniqueness and foreign keys belong to the
backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    VENDOR = "VENDOR"
    ASSET = "ASSET"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]

    @classmethod
    def parse(cls, raw: Any) -> Optional["Role"]:
        if isinstance(raw, Role):
            return raw
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            return None


ROLE_LABELS = {
    Role.SUPER_ADMIN: "Super Admin",
    Role.VENDOR: "Vendor",
    Role.ASSET: "Asset",
}


class TaskStatus(IntEnum):
    TODO = 1
    IN_PROGRESS = 2
    DONE = 3

    @property
    def label(self) -> str:
        return STATUS_LABELS[int(self)]


STATUS_LABELS = {1: "To Do", 2: "In Progress", 3: "Done"}


class TaskType(IntEnum):
    INCIDENTAL = 1
    RECURRING = 2


TYPE_LABELS = {1: "Incidental", 2: "Recurring"}


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _opt_int(v: Any) -> Optional[int]:
    if v is None or isinstance(v, bool):
        return None
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _coerce_enum(enum_cls, raw: Any) -> Union[IntEnum, int, None]:
    value = _opt_int(raw)
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        # keep unknown codes so they can still be shown
        return value


def parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the backend.

    Timezone-aware values are converted to local time and made naive so they
    compare against the local "start of today".
    """
    if not raw:
        return None
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return None
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def status_label(status: Any) -> str:
    code = _opt_int(status)
    if code is None:
        return "-" if status is None else str(status)
    return STATUS_LABELS.get(code, str(code))


def type_label(task_type: Any) -> str:
    code = _opt_int(task_type)
    if code is None:
        return TYPE_LABELS[TaskType.INCIDENTAL]
    return TYPE_LABELS.get(code, str(code))


def join_location(location: Optional[str], sub_location: Optional[str]) -> str:
    return " / ".join(p for p in (location, sub_location) if p) or "-"


@dataclass(frozen=True)
class User:
    id: Any
    email: str
    name: str
    role: Optional[Role]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "User":
        return cls(
            id=raw.get("id"),
            email=str(raw.get("email") or ""),
            name=str(raw.get("name") or ""),
            role=Role.parse(raw.get("role")),
        )

    @property
    def initial(self) -> str:
        return self.name[:1].upper() if self.name else "U"


@dataclass(frozen=True)
class Task:
    id: Any
    title: str
    description: Optional[str] = None
    type: Union[TaskType, int, None] = TaskType.INCIDENTAL
    status: Union[TaskStatus, int, None] = TaskStatus.TODO
    due_date: Optional[str] = None
    start_date: Optional[str] = None
    location: Optional[str] = None
    sub_location: Optional[str] = None
    evidence_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Task":
        return cls(
            id=raw.get("id"),
            title=str(raw.get("title") or ""),
            description=_opt_str(raw.get("description")),
            type=_coerce_enum(TaskType, raw.get("type")),
            status=_coerce_enum(TaskStatus, raw.get("status")),
            due_date=_opt_str(raw.get("dueDate")),
            start_date=_opt_str(raw.get("startDate")),
            location=_opt_str(raw.get("location")),
            sub_location=_opt_str(raw.get("subLocation")),
            evidence_url=_opt_str(raw.get("evidenceUrl")),
            created_at=_opt_str(raw.get("createdAt")),
            updated_at=_opt_str(raw.get("updatedAt")),
        )

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    @property
    def status_label(self) -> str:
        return status_label(self.status)

    @property
    def type_label(self) -> str:
        return type_label(self.type)

    @property
    def location_label(self) -> str:
        return join_location(self.location, self.sub_location)

    def due_datetime(self) -> Optional[datetime]:
        return parse_datetime(self.due_date)


@dataclass(frozen=True)
class TaskConfig:
    id: Any
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    sub_location: Optional[str] = None
    days: str = ""
    time_of_day: str = "09:00"
    is_active: bool = True

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TaskConfig":
        return cls(
            id=raw.get("id"),
            title=str(raw.get("title") or ""),
            description=_opt_str(raw.get("description")),
            location=_opt_str(raw.get("location")),
            sub_location=_opt_str(raw.get("subLocation")),
            days=str(raw.get("days") or ""),
            time_of_day=_opt_str(raw.get("timeOfDay")) or "09:00",
            # only an explicit false deactivates
            is_active=raw.get("isActive") is not False,
        )

    @property
    def day_codes(self) -> List[str]:
        return [d.strip() for d in self.days.split(",") if d.strip()]

    @property
    def location_label(self) -> str:
        return join_location(self.location, self.sub_location)


@dataclass(frozen=True)
class Vendor:
    id: Any
    name: str

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Vendor":
        return cls(id=raw.get("id"), name=str(raw.get("name") or ""))


@dataclass(frozen=True)
class Location:
    id: Any
    name: str

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Location":
        return cls(id=raw.get("id"), name=str(raw.get("name") or ""))


@dataclass(frozen=True)
class SubLocation:
    id: Any
    name: str
    location_id: Any = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SubLocation":
        return cls(id=raw.get("id"), name=str(raw.get("name") or ""), location_id=raw.get("locationId"))
