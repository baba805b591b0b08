"""JSON preferences file.

Stores the UI theme, colour switch, jump size, and log level. The browser
only reads it; malformed or missing config falls back to defaults key by key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..input.bindings import RV_JUMP

APP_NAME = "rover"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserConfig:
    """Validated preferences with defaults filled in."""

    theme: str | None = None
    jump: int = RV_JUMP
    log_level: str | None = None
    no_color: bool = False


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_positive_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _load_name(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_browser_config() -> BrowserConfig:
    """Read preferences, dropping any value with the wrong type."""
    data = load_config()
    return BrowserConfig(
        theme=_load_name(data, "theme"),
        jump=_load_positive_int(data, "jump", RV_JUMP),
        log_level=_load_name(data, "log_level"),
        no_color=_load_bool(data, "no_color", False),
    )
