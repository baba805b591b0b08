"""Domain datatypes for one directory listing."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class FilterMask(enum.IntFlag):
    """Entry categories eligible for display in a listing."""

    NONE = 0
    FILES = 0x01
    DIRS = 0x02
    HIDDEN = 0x04

    def flags_label(self) -> str:
        """Return the three-column ``FDH`` status label, blanking unset bits."""
        return "".join(
            letter if self & flag else " "
            for letter, flag in (("F", FilterMask.FILES), ("D", FilterMask.DIRS), ("H", FilterMask.HIDDEN))
        )


DEFAULT_FILTER_MASK = FilterMask.FILES | FilterMask.DIRS


@dataclass(frozen=True)
class Entry:
    """One immediate child of a listed directory."""

    name: str
    is_dir: bool
    size: int = 0

    @property
    def hidden(self) -> bool:
        return self.name.startswith(".")

    @property
    def display_name(self) -> str:
        """Name as shown to the user; directories carry a trailing ``/``."""
        return f"{self.name}/" if self.is_dir else self.name


__all__ = [
    "DEFAULT_FILTER_MASK",
    "Entry",
    "FilterMask",
]
