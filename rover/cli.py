"""Command-line front door for rover.

Every argument is a directory for tabs 1-9; there are no flags. Theme, colour
and log level come from the config file and the environment. Sets up locale
and logging, then dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import locale
import logging
import os
import sys
from collections.abc import Mapping, Sequence

from .runtime import run_browser
from .runtime.config import BrowserConfig, load_browser_config
from .runtime.logs import configure_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "ROVER_LOG_LEVEL"
NO_COLOR_ENV = "NO_COLOR"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rover",
        description="Browse directories in up to ten tabs from the terminal.",
        add_help=False,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="DIR",
        help="Directories for tabs 1-9, in order. Unreadable ones fall back to $HOME.",
    )
    return parser


def parse_paths(argv: Sequence[str]) -> list[str]:
    """Return ``argv`` as directory paths, including ones that start with ``-``."""
    return build_parser().parse_args(["--", *argv]).paths


def resolve_log_level(config: BrowserConfig, environ: Mapping[str, str]) -> str | None:
    """``$ROVER_LOG_LEVEL`` wins over the ``log_level`` config key."""
    return environ.get(LOG_LEVEL_ENV, "").strip() or config.log_level


def colour_disabled(config: BrowserConfig, environ: Mapping[str, str]) -> bool:
    """Honour the ``NO_COLOR`` convention as well as the ``no_color`` key."""
    return config.no_color or bool(environ.get(NO_COLOR_ENV, ""))


def main(argv: list[str] | None = None) -> None:
    """Launch the browser on the directories named in ``argv``."""
    paths = parse_paths(sys.argv[1:] if argv is None else argv)
    config = load_browser_config()

    configure_logging(resolve_log_level(config, os.environ))

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as exc:
        logger.warning("keeping C locale collation: %s", exc)

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("rover needs an interactive terminal.")

    run_browser(
        paths,
        theme_name=config.theme,
        no_color=colour_disabled(config, os.environ),
        jump=config.jump,
    )


if __name__ == "__main__":
    main()
