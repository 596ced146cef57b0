"""Status changes for a task, including the evidence rule for Done.

Moving a task to Done needs proof: either evidence already on the task or a
freshly chosen image, which is uploaded before the status is patched. The two
calls are sequential and nothing is rolled back; if the patch fails after the
upload succeeded, the evidence stays attached and the status is unchanged.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from ticketdesk import tasks_repo
from ticketdesk.api_client import ApiClient, ApiError
from ticketdesk.models import Task, TaskStatus

logger = logging.getLogger(__name__)

EVIDENCE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "webp")


class EvidenceRequiredError(ValueError):
    """Done was requested without existing or new evidence."""


class StatusUpdateError(ApiError):
    def __init__(self, message: str, status_code: int = 0, *, evidence_uploaded: bool = False) -> None:
        super().__init__(message, status_code)
        self.evidence_uploaded = evidence_uploaded


@dataclass(frozen=True)
class EvidenceFile:
    name: str
    content: bytes
    mime_type: Optional[str] = None

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lower().lstrip(".")

    def resolved_mime_type(self) -> str:
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.name)
        return guessed or "application/octet-stream"

    @classmethod
    def from_upload(cls, uploaded) -> "EvidenceFile":
        """Build from a Streamlit ``UploadedFile``."""
        return cls(name=uploaded.name, content=uploaded.getvalue(), mime_type=getattr(uploaded, "type", None))


def needs_evidence(task: Task, target_status: int) -> bool:
    return int(target_status) == TaskStatus.DONE and not task.evidence_url


def validate_evidence(evidence: EvidenceFile) -> None:
    if evidence.extension not in EVIDENCE_EXTENSIONS:
        raise EvidenceRequiredError("Evidence must be an image file")
    if not evidence.content:
        raise EvidenceRequiredError("Evidence file is empty")


@dataclass(frozen=True)
class StatusChange:
    task_id: object
    status: int
    evidence_uploaded: bool


def change_status(
    client: ApiClient,
    task: Task,
    target_status: int,
    evidence: Optional[EvidenceFile] = None,
) -> StatusChange:
    """Upload evidence when moving to Done, then patch the status.

    Raises ``EvidenceRequiredError`` before any call when Done lacks
    evidence, ``ApiError`` when the upload fails (status untouched) and
    ``StatusUpdateError`` when the patch fails.
    """
    target = int(target_status)
    if target not in {int(s) for s in TaskStatus}:
        raise ValueError(f"Unknown status {target_status!r}")

    if needs_evidence(task, target) and evidence is None:
        raise EvidenceRequiredError("Evidence image upload is required for status Done")

    uploaded = False
    if evidence is not None and target == TaskStatus.DONE:
        validate_evidence(evidence)
        tasks_repo.upload_evidence(
            client, task.id, evidence.name, evidence.content, evidence.resolved_mime_type()
        )
        uploaded = True
        logger.info("Uploaded evidence for task %s", task.id)

    try:
        tasks_repo.update_task_status(client, task.id, target)
    except ApiError as exc:
        if uploaded:
            logger.warning("Evidence stored for task %s but status update failed: %s", task.id, exc)
        raise StatusUpdateError(exc.message, exc.status_code, evidence_uploaded=uploaded) from exc

    logger.info("Task %s moved to status %s", task.id, target)
    return StatusChange(task_id=task.id, status=target, evidence_uploaded=uploaded)
