"""Directory listing engine.

This package contains non-UI listing primitives:
- entry and filter-mask datatypes
- one-level directory scanning with filter and ordering rules
"""

from __future__ import annotations

from .fs import DirectoryUnreadable, entry_sort_key, list_directory
from .types import DEFAULT_FILTER_MASK, Entry, FilterMask

__all__ = [
    "DEFAULT_FILTER_MASK",
    "DirectoryUnreadable",
    "Entry",
    "FilterMask",
    "entry_sort_key",
    "list_directory",
]
