"""Input-layer public API for key decoding and mode handlers.

Exports are split between low-level terminal decoding (`read_key`) and the
dispatch primitives used by the navigation controller.
"""

from .bindings import DEFAULT_KEY_BINDINGS, RV_JUMP, TAB_KEYS, keys_for
from .key_registry import KeyComboBinding, KeyComboRegistry
from .key_search import SearchKeyCallbacks, handle_search_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "DEFAULT_KEY_BINDINGS",
    "RV_JUMP",
    "TAB_KEYS",
    "keys_for",
    "KeyComboBinding",
    "KeyComboRegistry",
    "SearchKeyCallbacks",
    "handle_search_key",
]
