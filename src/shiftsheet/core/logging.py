"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the ``shiftsheet`` logger."""
    logger = logging.getLogger("shiftsheet")
    logger.setLevel(level.upper())
    if not any(getattr(h, "_shiftsheet", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._shiftsheet = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
