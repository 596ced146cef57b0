import json

import pytest

from conftest import fail, ok
from ticketdesk.api_client import ApiError
from ticketdesk.auth import AuthSession, sign_in
from ticketdesk.models import Role
from ticketdesk.session_store import TOKEN_KEY, USER_KEY, MappingSessionStore

ADMIN = {"id": 1, "email": "admin@example.com", "name": "Admin", "role": "SUPER_ADMIN"}


def _auth(state=None):
    return AuthSession(MappingSessionStore(state if state is not None else {}))


def test_starts_loading_until_initialized():
    auth = _auth()
    assert auth.loading is True
    assert auth.user is None
    auth.initialize()
    assert auth.loading is False
    assert not auth.is_authenticated


def test_initialize_restores_stored_user():
    auth = _auth({"ticketdesk.token": "abc", "ticketdesk.user": json.dumps(ADMIN)})
    auth.initialize()
    assert auth.user.email == "admin@example.com"
    assert auth.role is Role.SUPER_ADMIN
    assert auth.token == "abc"


@pytest.mark.parametrize("raw", ["{broken", "[1, 2]", '"just a string"'])
def test_initialize_discards_malformed_user(raw):
    state = {"ticketdesk.token": "abc", "ticketdesk.user": raw}
    auth = _auth(state)
    auth.initialize()
    assert auth.user is None
    assert auth.loading is False
    assert state == {}


def test_initialize_is_idempotent():
    state = {}
    auth = _auth(state)
    auth.initialize()
    state["ticketdesk.user"] = json.dumps(ADMIN)
    auth.initialize()
    assert auth.user is None


def test_login_and_logout():
    state = {}
    auth = _auth(state)
    auth.initialize()
    user = auth.login({"token": "tok", "user": ADMIN})

    assert user.name == "Admin"
    assert auth.is_authenticated
    assert auth.role is Role.SUPER_ADMIN
    assert state["ticketdesk.token"] == "tok"
    assert json.loads(state["ticketdesk.user"]) == ADMIN

    auth.logout()
    assert auth.user is None
    assert auth.store.get(TOKEN_KEY) is None
    assert auth.store.get(USER_KEY) is None


def test_sign_in_posts_credentials(client, session):
    session.queue(ok({"token": "tok-new", "user": ADMIN}))
    auth = _auth()
    auth.initialize()

    user = sign_in(client, auth, "admin@example.com", "secret")

    assert user.role is Role.SUPER_ADMIN
    assert auth.token == "tok-new"
    call = session.calls[0]
    assert call["url"].endswith("/api/auth/login")
    assert call["json"] == {"email": "admin@example.com", "password": "secret"}


def test_sign_in_rejected_keeps_session_empty(client, session):
    session.queue(fail(401, "Invalid credentials"))
    auth = _auth()
    auth.initialize()
    with pytest.raises(ApiError, match="Invalid credentials"):
        sign_in(client, auth, "admin@example.com", "wrong")
    assert auth.user is None


def test_sign_in_unsuccessful_envelope(client, session):
    session.queue(ok(None, success=False))
    auth = _auth()
    auth.initialize()
    with pytest.raises(ApiError, match="Login failed"):
        sign_in(client, auth, "a@b.c", "x")
