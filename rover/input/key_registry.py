"""Key-token dispatch table shared by the controller's input modes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

ActionHandler = Callable[[], bool | None]


@dataclass(frozen=True)
class KeyComboBinding:
    """One action reachable through any of ``combos``."""

    combos: tuple[str, ...]
    handler: ActionHandler


class KeyComboRegistry:
    """Map key tokens to actions; tokens with no action dispatch to ``None``."""

    def __init__(self) -> None:
        self._actions: dict[str, ActionHandler] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Bind every combo of ``binding``; a later binding wins on conflicts."""
        self._actions.update(dict.fromkeys(binding.combos, binding.handler))
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool | None:
        """Run the action bound to ``key`` and pass its result through."""
        action = self._actions.get(key)
        return None if action is None else action()
