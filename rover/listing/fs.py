"""Filesystem scanning for one directory level.

Lists immediate children only, applies the tab filter mask, and orders
directories before files with locale-aware collation inside each group.
"""

from __future__ import annotations

import locale
import logging
import os
from pathlib import Path

from .types import Entry, FilterMask

logger = logging.getLogger(__name__)


class DirectoryUnreadable(OSError):
    """Raised when a directory cannot be opened or scanned."""

    def __init__(self, path: str | Path, cause: OSError | None = None) -> None:
        self.path = str(path)
        self.cause = cause
        reason = cause.strerror if cause is not None and cause.strerror else "cannot read directory"
        super().__init__(f"{self.path}: {reason}")


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    """Sort key placing directories first, then locale collation by name.

    The raw name is the final tie-breaker so distinct names never compare
    equal even when the locale collates them identically.
    """
    return (not entry.is_dir, locale.strxfrm(entry.name), entry.name)


def _classify(child: os.DirEntry[str]) -> tuple[bool, int]:
    """Return ``(is_dir, size)`` for a scandir child, following symlinks."""
    try:
        is_dir = child.is_dir()
    except OSError:
        is_dir = False
    if is_dir:
        return True, 0
    try:
        return False, int(child.stat().st_size)
    except OSError:
        # Broken symlink or a child removed mid-scan.
        return False, 0


def list_directory(path: str | Path, filter_mask: FilterMask) -> list[Entry]:
    """List the visible children of ``path`` in display order.

    ``.`` and ``..`` never appear (``os.scandir`` omits them). Raises
    ``DirectoryUnreadable`` when the directory cannot be opened or read.
    """
    show_hidden = bool(filter_mask & FilterMask.HIDDEN)
    show_dirs = bool(filter_mask & FilterMask.DIRS)
    show_files = bool(filter_mask & FilterMask.FILES)

    entries: list[Entry] = []
    try:
        with os.scandir(path) as children:
            for child in children:
                name = child.name
                if name in {".", ".."}:
                    continue
                if not show_hidden and name.startswith("."):
                    continue
                is_dir, size = _classify(child)
                if is_dir and not show_dirs:
                    continue
                if not is_dir and not show_files:
                    continue
                entries.append(Entry(name=name, is_dir=is_dir, size=size))
    except OSError as exc:
        raise DirectoryUnreadable(path, exc) from exc

    entries.sort(key=entry_sort_key)
    logger.debug("listed %s: %d entries (mask=%s)", path, len(entries), filter_mask.flags_label())
    return entries


__all__ = [
    "DirectoryUnreadable",
    "entry_sort_key",
    "list_directory",
]
