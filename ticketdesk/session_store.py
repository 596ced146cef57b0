"""Where the login token and user live between page runs.

Two backends:
- ``MappingSessionStore``: any mutable mapping. The app hands it
  ``st.session_state`` so the session lasts as long as the browser tab;
  tests hand it a plain dict.
- ``FileSessionStore``: a small JSON file on disk, so a single-operator
  deployment stays logged in across restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionStore:
    """Key/value persistence for session strings."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def get_token(self) -> Optional[str]:
        return self.get(TOKEN_KEY) or None


class MappingSessionStore(SessionStore):
    def __init__(self, mapping: MutableMapping[str, Any], *, prefix: str = "ticketdesk.") -> None:
        self._mapping = mapping
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self._mapping.get(self._key(key))
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        self._mapping[self._key(key)] = value

    def remove(self, key: str) -> None:
        self._mapping.pop(self._key(key), None)


class FileSessionStore(SessionStore):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items() if v is not None}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
