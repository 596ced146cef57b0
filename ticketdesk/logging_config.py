from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Set up root logging once per process.

    Streamlit re-executes page scripts on every interaction, so repeated
    calls are no-ops after the first.
    """
    global _configured
    if not _configured:
        resolved = logging.getLevelName((level or "INFO").upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
        logging.basicConfig(
            level=resolved,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler(sys.stdout)],
        )
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        _configured = True
    return logging.getLogger("ticketdesk")
