"""Persistent JSON config helpers.

Stores the geometry strategy, key-read timeout, and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..geometry import GEOMETRY_IOCTL, GEOMETRY_STRATEGIES
from ..input.reader import ESC_SEQUENCE_TIMEOUT_MS

APP_NAME = "kilo"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

MIN_ESCAPE_TIMEOUT_MS = 1
MAX_ESCAPE_TIMEOUT_MS = 1000
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class EditorSettings:
    geometry: str = GEOMETRY_IOCTL
    escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write failures."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _load_geometry(data: dict[str, object]) -> str:
    value = data.get("geometry")
    if isinstance(value, str) and value.strip() in GEOMETRY_STRATEGIES:
        return value.strip()
    return GEOMETRY_IOCTL


def _load_escape_timeout_ms(data: dict[str, object]) -> int:
    """Read the key-read timeout; booleans and non-integers are ignored."""
    value = data.get("escape_timeout_ms")
    if isinstance(value, bool) or not isinstance(value, int):
        return ESC_SEQUENCE_TIMEOUT_MS
    return max(MIN_ESCAPE_TIMEOUT_MS, min(MAX_ESCAPE_TIMEOUT_MS, value))


def _load_log_level(data: dict[str, object]) -> str:
    value = data.get("log_level")
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    normalized = value.strip().upper()
    if isinstance(logging.getLevelName(normalized), int):
        return normalized
    return DEFAULT_LOG_LEVEL


def load_settings() -> EditorSettings:
    data = load_config()
    return EditorSettings(
        geometry=_load_geometry(data),
        escape_timeout_ms=_load_escape_timeout_ms(data),
        log_level=_load_log_level(data),
    )


def save_geometry(strategy: str) -> None:
    """Persist the preferred geometry strategy; unknown names are ignored."""
    if strategy not in GEOMETRY_STRATEGIES:
        return
    config = load_config()
    config["geometry"] = strategy
    save_config(config)
