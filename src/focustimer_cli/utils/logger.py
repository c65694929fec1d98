"""File logging for the focus timer.

Everything goes to ``focustimer.log`` under the platformdirs user log
directory; the terminal belongs to the timer display and is never logged
to. Modules log through a child of the application logger so each line
names its source:

- ``engine``: phase transitions, completions and resets
- ``storage``: failed reads and writes caught by the persistence gateway
- ``lifecycle``: job-control suspend and resume
- ``background``: the storage writer thread
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "focustimer_cli"
_LOG_FILE = "focustimer.log"
_MAX_BYTES = 1024 * 1024
_BACKUP_COUNT = 2

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Where log lines are written; ``config show`` reports it."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def get_logger() -> logging.Logger:
    """The application logger, created with its rotating file on first use."""
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def get_child_logger(name: str) -> logging.Logger:
    """Child of the application logger, e.g. ``get_child_logger("engine")``."""
    return get_logger().getChild(name)
