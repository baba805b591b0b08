"""Static key-binding table: logical action name -> key tokens.

Bindings are configuration only; the controller maps each action name to
one operation and ignores every key that is not listed here.
"""

from __future__ import annotations

from types import MappingProxyType

DEFAULT_KEY_BINDINGS = MappingProxyType(
    {
        "quit": ("q",),
        "down": ("j", "DOWN"),
        "up": ("k", "UP"),
        "jump_down": ("J", "PAGE_DOWN"),
        "jump_up": ("K", "PAGE_UP"),
        "cd_down": ("l", "RIGHT"),
        "cd_up": ("h", "LEFT"),
        "home": ("H",),
        "shell": ("ENTER",),
        "view": (" ",),
        "edit": ("e",),
        "search": ("/",),
        "toggle_files": ("f",),
        "toggle_dirs": ("d",),
        "toggle_hidden": ("s",),
        "toggle_mark": ("m",),
        "invert_marks": ("M",),
        "mark_all": ("a",),
        "delete_marked": ("X",),
        "copy_marked": ("C",),
        "help": ("?",),
        "redraw": ("CTRL_L",),
    }
)

TAB_KEYS: tuple[str, ...] = tuple(str(digit) for digit in range(10))

SEARCH_ACCEPT_KEYS = frozenset({"ENTER", "DOWN"})
SEARCH_ERASE_KEYS = frozenset({"BACKSPACE", "LEFT"})
SEARCH_KILL_KEYS = frozenset({"CTRL_U"})
SEARCH_CANCEL_KEYS = frozenset({"ESC"})

RV_JUMP = 10


def keys_for(action: str) -> tuple[str, ...]:
    return DEFAULT_KEY_BINDINGS.get(action, ())


__all__ = [
    "DEFAULT_KEY_BINDINGS",
    "RV_JUMP",
    "SEARCH_ACCEPT_KEYS",
    "SEARCH_CANCEL_KEYS",
    "SEARCH_ERASE_KEYS",
    "SEARCH_KILL_KEYS",
    "TAB_KEYS",
    "keys_for",
]
