from __future__ import annotations

import logging
from typing import Any, MutableMapping

import streamlit as st

from ticketdesk.api_client import ApiClient
from ticketdesk.auth import AuthSession
from ticketdesk.config import AppConfig, get_config
from ticketdesk.session_store import FileSessionStore, MappingSessionStore, SessionStore

_AUTH_KEY = "ticketdesk.auth"
_CLIENT_KEY = "ticketdesk.client"

logger = logging.getLogger(__name__)


def build_session_store(cfg: AppConfig, state: MutableMapping[str, Any]) -> SessionStore:
    if cfg.session_backend == "file":
        logger.warning(
            "File session backend in use: every browser shares the login stored in %s",
            cfg.session_file,
        )
        return FileSessionStore(cfg.session_file)
    return MappingSessionStore(state)


def get_auth() -> AuthSession:
    """Per-browser-session auth, initialized on first access."""
    auth = st.session_state.get(_AUTH_KEY)
    if auth is None:
        auth = AuthSession(build_session_store(get_config(), st.session_state))
        st.session_state[_AUTH_KEY] = auth
    auth.initialize()
    return auth


def get_client() -> ApiClient:
    client = st.session_state.get(_CLIENT_KEY)
    if client is None:
        auth = get_auth()
        client = ApiClient.from_config(get_config(), token_provider=auth.store.get_token)
        st.session_state[_CLIENT_KEY] = client
    return client
