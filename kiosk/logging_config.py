"""Configure file logging for the kiosk.

Textual owns the terminal while the app runs, so records go to a rotating
debug log file only.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from kiosk.config import LOG_BACKUP_COUNT, LOG_LEVEL, LOG_MAX_BYTES, LOG_PATH

_FORMAT = "%(asctime)s %(levelname)s %(module)s %(message)s"


def _resolve_level(level: str | int) -> int | None:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else None


def configure_logging(log_path: str = LOG_PATH, level: str | int = LOG_LEVEL) -> None:
    """Attach a rotating file handler to the ``kiosk`` logger.

    If the log file cannot be opened the kiosk keeps running without it.
    """
    logger = logging.getLogger("kiosk")
    resolved = _resolve_level(level)
    logger.setLevel(resolved if resolved is not None else logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    try:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        logger.addHandler(logging.NullHandler())
        return

    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    if resolved is None:
        logger.warning("log_level_invalid value=%r fallback=INFO", level)
