"""Debug log file setup."""

from __future__ import annotations

import logging
from pathlib import Path

from pizza.config import DEBUG_LOG_PATH

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s %(message)s"

_file_handler: logging.Handler | None = None


def configure_logging(path: str | Path = DEBUG_LOG_PATH, level: int = logging.DEBUG) -> logging.Handler | None:
    """
    Send `pizza.*` loggers to an append-only file.

    The terminal belongs to the UI, so nothing is written to stderr. Failure
    to open the file leaves logging unconfigured rather than stopping the app.
    Calling this again swaps the previous file handler for the new one.
    """
    global _file_handler

    log_path = Path(path)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        return None

    logger = logging.getLogger("pizza")
    if _file_handler is not None:
        logger.removeHandler(_file_handler)
        _file_handler.close()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.setLevel(level)
    logger.addHandler(handler)
    _file_handler = handler
    return handler
