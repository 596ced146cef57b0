from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional


_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}


def env_str(name: str, default: str, *, strip: bool = True) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() if strip else value


def env_optional_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() or default


def env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


def env_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def env_choice(name: str, default: str, choices: Iterable[str]) -> str:
    """Lower-cased env value if it is one of ``choices``, else ``default``."""
    value = env_str(name, default).lower()
    return value if value in set(choices) else default


def env_path(name: str, default: Path) -> Path:
    raw = env_optional_str(name)
    return Path(raw).expanduser() if raw else default
