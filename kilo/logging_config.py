"""Logging setup for the editor.

The terminal is in raw mode while the editor runs, so records go to a
rotating file under the platform log directory and never to the console.
``KILO_KEYTRACE=1`` additionally traces every decoded key.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import tempfile
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "kilo"
LOG_FILENAME = "kilo.log"
KEYTRACE_ENV = "KILO_KEYTRACE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
MAX_LOG_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3

logger = logging.getLogger(APP_NAME)
KEY_LOGGER = logging.getLogger(f"{APP_NAME}.keyevents")


def default_log_dir() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False))


def _keytrace_enabled() -> bool:
    return os.environ.get(KEYTRACE_ENV, "").strip().lower() in {"1", "true", "yes"}


def _resolve_log_dir(log_dir: Path) -> Path:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        fallback = Path(tempfile.gettempdir())
        print(f"kilo: cannot create log directory {log_dir}: {exc}; using {fallback}", file=sys.stderr)
        return fallback
    return log_dir


def _open_handler(log_path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(level: str = "WARNING", log_dir: Path | None = None) -> Path | None:
    """Attach a rotating file handler to the ``kilo`` logger.

    Existing handlers are replaced so repeated calls do not duplicate records.
    A log file that cannot be opened falls back to the temp directory, and
    failing that to no file at all. Returns the path of the log file in use,
    or None when file logging is disabled.
    """
    directory = _resolve_log_dir(log_dir if log_dir is not None else default_log_dir())
    log_path: Path | None = directory / LOG_FILENAME

    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()

    handler: logging.Handler
    try:
        handler = _open_handler(log_path)
    except OSError as exc:
        fallback = Path(tempfile.gettempdir()) / LOG_FILENAME
        print(f"kilo: cannot open log file {log_path}: {exc}; using {fallback}", file=sys.stderr)
        try:
            handler = _open_handler(fallback)
            log_path = fallback
        except OSError as fallback_exc:
            print(f"kilo: cannot open log file {fallback}: {fallback_exc}; file logging disabled", file=sys.stderr)
            # Keeps records off the raw-mode terminal.
            handler = logging.NullHandler()
            log_path = None

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    # Key traces flow through the ``kilo`` handler when enabled.
    KEY_LOGGER.setLevel(logging.DEBUG if _keytrace_enabled() else logging.WARNING)
    return log_path
