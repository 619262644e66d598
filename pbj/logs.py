"""Logging setup for PBJ Health.

All library modules log through ``logging.getLogger(__name__)``; the front
ends call :func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone

LOGGER_NAME = "pbj"


class PrettyFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="seconds")
        line = f"{ts.replace('+00:00', 'Z')} {record.levelname} [{record.name}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str | None = None) -> logging.Logger:
    """Install one stream handler on the ``pbj`` logger.

    Level comes from the argument, then ``PBJ_LOG_LEVEL``, then INFO.
    Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level_name = (level or os.environ.get("PBJ_LOG_LEVEL") or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_pbj_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(PrettyFormatter())
        handler._pbj_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
