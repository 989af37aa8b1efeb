"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only configures the
root handler and level once.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def configure_logging() -> None:
    global _configured
    if _configured:
        return None

    level = logging.getLevelName(log_level())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    # asyncpg is chatty at DEBUG; keep it at the app level or quieter.
    logging.getLogger("asyncpg").setLevel(max(level, logging.INFO))
    _configured = True
