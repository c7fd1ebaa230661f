"""Key-token dispatch tables shared by the navigator and the list views."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Key tokens bound to one action; the action reports whether state changed."""

    combos: tuple[str, ...]
    handler: Callable[[], bool]


class KeyComboRegistry:
    """Exact-token dispatch table. A later binding for a token replaces an earlier one."""

    def __init__(self, *bindings: KeyComboBinding) -> None:
        self._handlers: dict[str, Callable[[], bool]] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyComboBinding) -> None:
        for combo in binding.combos:
            self._handlers[combo] = binding.handler

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; unbound keys report ``False``."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        return bool(handler())
