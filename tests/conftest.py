import json

import pytest
import requests

from ticketdesk.api_client import ApiClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, reason="OK", content=None):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        if content is not None:
            self.content = content
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Stands in for ``requests.Session``; replays queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise requests.ConnectionError("connection refused")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def ok(data=None, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return FakeResponse(200, body)


def fail(status_code, message=None, reason="Bad Request"):
    body = {"success": False, "message": message} if message else None
    return FakeResponse(status_code, body, reason=reason)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def token():
    return {"value": "tok-123"}


@pytest.fixture
def client(session, token):
    return ApiClient(
        base_url="http://backend.test/",
        token_provider=lambda: token["value"],
        timeout_seconds=5,
        session=session,
    )
