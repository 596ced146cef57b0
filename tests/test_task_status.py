import pytest

from conftest import FakeResponse, fail, ok
from ticketdesk.api_client import ApiError
from ticketdesk.models import Task, TaskStatus
from ticketdesk.task_status import (
    EvidenceFile,
    EvidenceRequiredError,
    StatusUpdateError,
    change_status,
    needs_evidence,
)

PNG = EvidenceFile(name="proof.PNG", content=b"\x89PNG\r\n")


def _task(evidence_url=None, status=TaskStatus.IN_PROGRESS):
    return Task(id=42, title="Leaking pipe", status=status, evidence_url=evidence_url)


def test_needs_evidence_only_for_done_without_url():
    assert needs_evidence(_task(), TaskStatus.DONE)
    assert not needs_evidence(_task("/uploads/x.png"), TaskStatus.DONE)
    assert not needs_evidence(_task(), TaskStatus.IN_PROGRESS)


def test_done_without_evidence_makes_no_call(client, session):
    with pytest.raises(EvidenceRequiredError):
        change_status(client, _task(), TaskStatus.DONE)
    assert session.calls == []


def test_unknown_status_is_rejected(client, session):
    with pytest.raises(ValueError):
        change_status(client, _task(), 7)
    assert session.calls == []


def test_plain_transition_patches_status(client, session):
    session.queue(ok({"id": 42, "status": 2}))
    change = change_status(client, _task(status=TaskStatus.TODO), TaskStatus.IN_PROGRESS)

    assert change.evidence_uploaded is False
    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["method"] == "PATCH"
    assert call["url"].endswith("/api/tasks/42/status")
    assert call["json"] == {"status": 2}


def test_done_uploads_then_patches(client, session):
    session.queue(ok({"evidenceUrl": "/uploads/proof.png"}), ok({"id": 42, "status": 3}))
    change = change_status(client, _task(), TaskStatus.DONE, PNG)

    assert change.evidence_uploaded is True
    assert change.status == 3
    upload, patch = session.calls
    assert upload["url"].endswith("/api/evidence/42")
    assert upload["files"]["evidence"] == ("proof.PNG", PNG.content, "image/png")
    assert patch["json"] == {"status": 3}


def test_done_with_existing_evidence_skips_upload(client, session):
    session.queue(ok({"id": 42, "status": 3}))
    change_status(client, _task("/uploads/old.png"), TaskStatus.DONE)
    assert len(session.calls) == 1
    assert session.calls[0]["method"] == "PATCH"


def test_failed_upload_leaves_status_untouched(client, session):
    session.queue(FakeResponse(500, None, reason="Server Error"))
    with pytest.raises(ApiError, match="Upload failed") as exc:
        change_status(client, _task(), TaskStatus.DONE, PNG)
    assert not isinstance(exc.value, StatusUpdateError)
    assert len(session.calls) == 1


def test_failed_patch_after_upload_reports_partial_state(client, session):
    session.queue(ok({"evidenceUrl": "/uploads/proof.png"}), fail(409, "Task already done"))
    with pytest.raises(StatusUpdateError) as exc:
        change_status(client, _task(), TaskStatus.DONE, PNG)
    assert exc.value.evidence_uploaded is True
    assert exc.value.message == "Task already done"
    assert exc.value.status_code == 409


def test_failed_patch_without_upload(client, session):
    session.queue(fail(403, "Forbidden"))
    with pytest.raises(StatusUpdateError) as exc:
        change_status(client, _task(), TaskStatus.TODO)
    assert exc.value.evidence_uploaded is False


@pytest.mark.parametrize("evidence", [
    EvidenceFile(name="notes.pdf", content=b"%PDF"),
    EvidenceFile(name="empty.jpg", content=b""),
])
def test_invalid_evidence_is_rejected_before_upload(client, session, evidence):
    with pytest.raises(EvidenceRequiredError):
        change_status(client, _task(), TaskStatus.DONE, evidence)
    assert session.calls == []


def test_evidence_mime_type():
    assert EvidenceFile(name="a.jpg", content=b"x").resolved_mime_type() == "image/jpeg"
    assert EvidenceFile(name="a.webp", content=b"x", mime_type="image/webp").resolved_mime_type() == "image/webp"
    assert EvidenceFile(name="blob", content=b"x").resolved_mime_type() == "application/octet-stream"


def test_evidence_from_upload():
    class Uploaded:
        name = "site.jpeg"
        type = "image/jpeg"

        def getvalue(self):
            return b"jpeg-bytes"

    ev = EvidenceFile.from_upload(Uploaded())
    assert ev == EvidenceFile(name="site.jpeg", content=b"jpeg-bytes", mime_type="image/jpeg")
    assert ev.extension == "jpeg"
