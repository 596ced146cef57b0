from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ticketdesk.api_client import ApiClient, ApiError
from ticketdesk.models import Role, User
from ticketdesk.session_store import TOKEN_KEY, USER_KEY, SessionStore

logger = logging.getLogger(__name__)


class AuthSession:
    """Current user for one browser session, backed by a ``SessionStore``.

    ``loading`` stays true until ``initialize()`` has read the store; guards
    must not render protected content before then.
    """

    def __init__(self, store: SessionStore) -> None:
        self.store = store
        self.user: Optional[User] = None
        self.loading = True

    def initialize(self) -> None:
        if not self.loading:
            return
        raw = self.store.get(USER_KEY)
        if raw:
            try:
                parsed = json.loads(raw)
                if not isinstance(parsed, dict):
                    raise ValueError("stored user is not an object")
                self.user = User.from_dict(parsed)
            except ValueError:
                logger.warning("Discarding malformed stored session")
                self.store.remove(USER_KEY)
                self.store.remove(TOKEN_KEY)
                self.user = None
        self.loading = False

    def login(self, data: Dict[str, Any]) -> User:
        user_raw = data.get("user") or {}
        self.store.set(TOKEN_KEY, str(data.get("token") or ""))
        self.store.set(USER_KEY, json.dumps(user_raw))
        self.user = User.from_dict(user_raw)
        self.loading = False
        logger.info("Signed in user id=%s role=%s", self.user.id, self.role.value if self.role else None)
        return self.user

    def logout(self) -> None:
        self.store.remove(TOKEN_KEY)
        self.store.remove(USER_KEY)
        self.user = None

    @property
    def token(self) -> Optional[str]:
        return self.store.get_token()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[Role]:
        return self.user.role if self.user else None


def sign_in(client: ApiClient, auth: AuthSession, email: str, password: str) -> User:
    """POST the credentials and, on success, store the returned session."""
    body = client.post("/api/auth/login", {"email": email, "password": password})
    if isinstance(body, dict) and body.get("success") and body.get("data"):
        return auth.login(body["data"])
    message = body.get("message") if isinstance(body, dict) else None
    raise ApiError(str(message or "Login failed"))
