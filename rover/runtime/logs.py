"""Log-file setup.

The terminal belongs to the TUI, so log records go to a file under the
platform log directory. Without a configured level the package stays silent.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "rover.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "rover"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def parse_level(name: str | None) -> int | None:
    """Map a level name such as ``"debug"`` to its numeric value."""
    if not name:
        return None
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def configure_logging(level_name: str | None, path: Path | None = None) -> Path | None:
    """Attach a file handler to the package logger.

    Returns the log path, or ``None`` when logging stays disabled.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = parse_level(level_name)
    if level is None:
        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())
        return None

    log_path = path if path is not None else default_log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return log_path
