"""Master-data endpoints: users, recurring task configs, vendors, locations."""
from __future__ import annotations

from typing import Any, Dict, List

from ticketdesk.api_client import ApiClient, envelope_list
from ticketdesk.models import Location, SubLocation, TaskConfig, User, Vendor


# ---------------- Users ----------------

def list_users(client: ApiClient) -> List[User]:
    return [User.from_dict(u) for u in envelope_list(client.get("/api/users"))]


def register_user(client: ApiClient, payload: Dict[str, Any]) -> Any:
    return client.post("/api/auth/register", payload)


def update_user(client: ApiClient, user_id: Any, payload: Dict[str, Any]) -> Any:
    return client.put(f"/api/users/{user_id}", payload)


def delete_user(client: ApiClient, user_id: Any) -> Any:
    return client.delete(f"/api/users/{user_id}")


# ---------------- Recurring task configs ----------------

def list_task_configs(client: ApiClient) -> List[TaskConfig]:
    return [TaskConfig.from_dict(c) for c in envelope_list(client.get("/api/task-configs"))]


def create_task_config(client: ApiClient, payload: Dict[str, Any]) -> Any:
    return client.post("/api/task-configs", payload)


def update_task_config(client: ApiClient, config_id: Any, payload: Dict[str, Any]) -> Any:
    return client.put(f"/api/task-configs/{config_id}", payload)


def delete_task_config(client: ApiClient, config_id: Any) -> Any:
    return client.delete(f"/api/task-configs/{config_id}")


def set_task_config_active(client: ApiClient, config_id: Any, is_active: bool) -> Any:
    return client.patch(f"/api/task-configs/{config_id}/status", {"isActive": bool(is_active)})


def run_recurring_today(client: ApiClient) -> int:
    """Ask the backend to generate today's recurring tasks; returns the count."""
    body = client.post("/api/recurring-tasks/run-today")
    if isinstance(body, dict) and body.get("success"):
        data = body.get("data") or {}
        try:
            return int(data.get("count") or 0)
        except (TypeError, ValueError, AttributeError):
            return 0
    return 0


# ---------------- Vendors ----------------

def list_vendors(client: ApiClient) -> List[Vendor]:
    return [Vendor.from_dict(v) for v in envelope_list(client.get("/api/vendors"))]


def save_vendor(client: ApiClient, payload: Dict[str, Any], vendor_id: Any = None) -> Any:
    if vendor_id is not None:
        return client.put(f"/api/vendors/{vendor_id}", payload)
    return client.post("/api/vendors", payload)


def delete_vendor(client: ApiClient, vendor_id: Any) -> Any:
    return client.delete(f"/api/vendors/{vendor_id}")


# ---------------- Locations ----------------

def list_locations(client: ApiClient) -> List[Location]:
    return [Location.from_dict(x) for x in envelope_list(client.get("/api/locations"))]


def list_sublocations(client: ApiClient) -> List[SubLocation]:
    return [SubLocation.from_dict(x) for x in envelope_list(client.get("/api/sublocations"))]


def save_sublocation(client: ApiClient, payload: Dict[str, Any], sublocation_id: Any = None) -> Any:
    if sublocation_id is not None:
        return client.put(f"/api/sublocations/{sublocation_id}", payload)
    return client.post("/api/sublocations", payload)


def delete_sublocation(client: ApiClient, sublocation_id: Any) -> Any:
    return client.delete(f"/api/sublocations/{sublocation_id}")
