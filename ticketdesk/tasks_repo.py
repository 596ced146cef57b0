"""Task endpoints of the ticketing backend.

Every function takes the caller's ``ApiClient`` and raises ``ApiError`` when
the backend refuses. Nothing is cached: pages re-fetch after each mutation.
"""
from __future__ import annotations

from typing import Any, Dict, List

from ticketdesk.api_client import ApiClient, envelope_list
from ticketdesk.models import Task


def list_tasks(client: ApiClient) -> List[Task]:
    return [Task.from_dict(t) for t in envelope_list(client.get("/api/tasks"))]


def create_task(client: ApiClient, payload: Dict[str, Any]) -> Any:
    return client.post("/api/tasks", payload)


def update_task_status(client: ApiClient, task_id: Any, status: int) -> Any:
    return client.patch(f"/api/tasks/{task_id}/status", {"status": int(status)})


def delete_task(client: ApiClient, task_id: Any) -> Any:
    return client.delete(f"/api/tasks/{task_id}")


def upload_evidence(client: ApiClient, task_id: Any, file_name: str, content: bytes, mime_type: str) -> Any:
    return client.upload_evidence(task_id, file_name, content, mime_type)


def export_tasks_excel(client: ApiClient, filters: Dict[str, Any]) -> bytes:
    return client.export_tasks_excel(filters)
