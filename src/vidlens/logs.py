"""Logging setup for vidlens.

The terminal belongs to the interface while a session runs, so records are
written to a rotating file instead of a stream handler.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from vidlens.config.models import LoggingSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "vidlens-file"


def configure_logging(settings: LoggingSettings) -> Path:
    """Attach a rotating file handler to the ``vidlens`` logger.

    Calling this more than once replaces the previously installed handler.

    Args:
        settings: Logging section of the resolved configuration.

    Returns:
        Path: Location of the log file.
    """
    path = Path(settings.file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("vidlens")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()

    handler = RotatingFileHandler(
        path,
        maxBytes=max(1, settings.max_size_mb) * 1024 * 1024,
        backupCount=max(0, settings.backup_count),
        encoding="utf-8",
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(settings.level.upper())
    logger.propagate = False
    return path


__all__ = ["configure_logging", "LOG_FORMAT"]
