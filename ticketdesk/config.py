from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ticketdesk.config_utils import env_bool, env_choice, env_int, env_path, env_str


_REPO_ROOT = Path(__file__).resolve().parents[1]

SESSION_BACKENDS = ("session_state", "file")


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration for the ticketing admin client.

    Env-first with safe local-dev defaults.

    Env vars:
    - TICKETDESK_API_BASE_URL (default "", i.e. same origin as the app)
    - TICKETDESK_HTTP_TIMEOUT_SECONDS (default 30)
    - TICKETDESK_VERIFY_SSL (default true)
    - TICKETDESK_SESSION_BACKEND: session_state|file (default session_state).
      "file" keeps one login per process: every browser that connects is
      signed in as whoever logged in last. Single-operator deployments only.
    - TICKETDESK_SESSION_FILE (default data/session.json)
    - TICKETDESK_LOG_LEVEL (default INFO)
    - TICKETDESK_APP_TITLE (default "Ticketing System")
    """

    api_base_url: str
    http_timeout_seconds: int
    verify_ssl: bool

    session_backend: str
    session_file: Path

    log_level: str
    app_title: str

    DEFAULT_API_BASE_URL: str = ""
    DEFAULT_HTTP_TIMEOUT_SECONDS: int = 30
    DEFAULT_SESSION_BACKEND: str = "session_state"
    DEFAULT_SESSION_FILE: Path = _REPO_ROOT / "data" / "session.json"
    DEFAULT_LOG_LEVEL: str = "INFO"
    DEFAULT_APP_TITLE: str = "Ticketing System"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            api_base_url=env_str("TICKETDESK_API_BASE_URL", cls.DEFAULT_API_BASE_URL).rstrip("/"),
            http_timeout_seconds=env_int(
                "TICKETDESK_HTTP_TIMEOUT_SECONDS", cls.DEFAULT_HTTP_TIMEOUT_SECONDS, minimum=1
            ),
            verify_ssl=env_bool("TICKETDESK_VERIFY_SSL", True),
            session_backend=env_choice(
                "TICKETDESK_SESSION_BACKEND", cls.DEFAULT_SESSION_BACKEND, SESSION_BACKENDS
            ),
            session_file=env_path("TICKETDESK_SESSION_FILE", cls.DEFAULT_SESSION_FILE),
            log_level=env_str("TICKETDESK_LOG_LEVEL", cls.DEFAULT_LOG_LEVEL).upper(),
            app_title=env_str("TICKETDESK_APP_TITLE", cls.DEFAULT_APP_TITLE) or cls.DEFAULT_APP_TITLE,
        )


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the app configuration (cached)."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None
