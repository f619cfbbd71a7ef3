"""
Store protocol - the contract every subsystem consumes.

Any object with these four operations can back a design system, typed
CSS layer, or relational engine.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

Handler = Callable[[Any], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class StoreEvent:
    """Payload delivered to wildcard subscribers."""

    path: str
    value: Any


@runtime_checkable
class Store(Protocol):
    """
    A path-addressable, observable key-value store.

    Exact-path subscribers receive the bare value. Wildcard subscribers
    (a pattern ending in '.*') receive a StoreEvent.
    """

    def get(self, path: str) -> Any: ...

    def set(self, path: str, value: Any) -> None: ...

    def subscribe(self, path_or_pattern: str, handler: Handler) -> Unsubscribe: ...

    def destroy(self) -> None: ...


def is_wildcard(pattern: str) -> bool:
    """True if a subscription pattern matches more than one path."""
    return pattern == "*" or pattern.endswith(".*")


def matches(pattern: str, path: str) -> bool:
    """
    Check whether a subscription pattern matches a concrete path.

    'css.*' matches 'css.btn' and 'css.btn.hover.color' but not 'css'.
    '*' matches every path.
    """
    if pattern == "*":
        return True
    if pattern.endswith(".*"):
        return path.startswith(pattern[:-1])
    return pattern == path
