"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; nothing is written
anywhere until ``configure_logging()`` is called from the entry point.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import APP_SUPPORT_DIR


LOG_DIR = APP_SUPPORT_DIR / "logs"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_FILE_HANDLER = "easytap:file"
_CONSOLE_HANDLER = "easytap:console"


def configure_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
    console: bool = False,
) -> logging.Logger:
    """Attach handlers to the ``easytap`` logger.  Safe to call repeatedly."""
    logger = logging.getLogger("easytap")
    logger.setLevel(level)

    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    if not any(h.get_name() == _FILE_HANDLER for h in logger.handlers):
        file_handler = RotatingFileHandler(
            filename=log_dir / "easytap.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        file_handler.set_name(_FILE_HANDLER)
        logger.addHandler(file_handler)

    if console and not any(h.get_name() == _CONSOLE_HANDLER for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(fmt)
        console_handler.set_name(_CONSOLE_HANDLER)
        logger.addHandler(console_handler)

    return logger
