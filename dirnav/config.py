"""Persistent JSON settings and history-path resolution.

Stores the history document location and the history bound.
All access is defensive: malformed or missing settings fall back safely.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

logger = logging.getLogger(__name__)

APP_NAME = "dirnav"
CONFIG_FILENAME = "config.json"
HISTORY_FILENAME = "history.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_HISTORY_PATH = Path(user_data_dir(APP_NAME, appauthor=False)) / HISTORY_FILENAME
HISTORY_FILE_ENV = "DIRNAV_HISTORY_FILE"
DEFAULT_MAX_ENTRIES = 256


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for one session."""

    history_path: Path
    max_entries: int = DEFAULT_MAX_ENTRIES


def load_config() -> dict[str, object]:
    """Load the persisted JSON settings object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring settings file %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def coerce_max_entries(value: object) -> int | None:
    """Return ``value`` as a history bound, or ``None`` when it is not a positive int.

    Booleans are rejected even though they are ``int`` subclasses.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _configured_history_path(config: dict[str, object]) -> Path | None:
    value = config.get("history_file")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return Path(stripped).expanduser() if stripped else None


def resolve_settings(
    history_file: str | Path | None = None,
    max_entries: int | None = None,
) -> Settings:
    """Resolve settings with precedence: explicit argument, environment, settings file, default."""
    config = load_config()

    if history_file is not None:
        history_path = Path(history_file).expanduser()
    elif os.environ.get(HISTORY_FILE_ENV, "").strip():
        history_path = Path(os.environ[HISTORY_FILE_ENV].strip()).expanduser()
    else:
        history_path = _configured_history_path(config) or DEFAULT_HISTORY_PATH

    bound = coerce_max_entries(max_entries)
    if bound is None:
        bound = coerce_max_entries(config.get("max_entries"))
    if bound is None:
        bound = DEFAULT_MAX_ENTRIES

    return Settings(history_path=history_path, max_entries=bound)
