"""
StateStore - the reference in-memory Store.

Values live in a nested dict tree addressed by dotted paths. Every set()
synchronously notifies matching subscribers, in the order they were
registered, before returning.
"""

from __future__ import annotations

import copy
import functools
import itertools
import logging
from typing import Any

from chuk_css_state.store.protocol import Handler, StoreEvent, Unsubscribe, is_wildcard, matches

logger = logging.getLogger(__name__)


class StateStore:
    """
    Observable dotted-path store.

    Satisfies the Store protocol. Dict and list values are deep-copied on
    write so callers can't mutate stored state behind the store's back.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        """
        Initialize the store.

        Args:
            initial: Optional initial state tree
        """
        self._state: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._subscriptions: dict[int, tuple[str, Handler]] = {}
        self._ids = itertools.count()

    def get(self, path: str) -> Any:
        """Read the value at a dotted path, or None if any segment is missing."""
        node: Any = self._state
        for segment in path.split("."):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return node

    def set(self, path: str, value: Any) -> None:
        """Write a value at a dotted path and notify subscribers."""
        if isinstance(value, dict | list):
            value = copy.deepcopy(value)

        *parents, leaf = path.split(".")
        node = self._state
        for segment in parents:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[leaf] = value

        self._notify(path, value)

    def subscribe(self, path_or_pattern: str, handler: Handler) -> Unsubscribe:
        """
        Subscribe to an exact path or a wildcard pattern.

        Returns:
            Idempotent unsubscribe function
        """
        sub_id = next(self._ids)
        self._subscriptions[sub_id] = (path_or_pattern, handler)
        return functools.partial(self._subscriptions.pop, sub_id, None)

    @property
    def subscription_count(self) -> int:
        """Number of live subscriptions."""
        return len(self._subscriptions)

    def destroy(self) -> None:
        """Drop every subscription."""
        logger.debug(f"Destroying store with {len(self._subscriptions)} subscriptions")
        self._subscriptions.clear()

    def _notify(self, path: str, value: Any) -> None:
        # Snapshot so handlers may (un)subscribe while we iterate
        for sub_id, (pattern, handler) in list(self._subscriptions.items()):
            if sub_id not in self._subscriptions or not matches(pattern, path):
                continue
            if is_wildcard(pattern):
                handler(StoreEvent(path=path, value=value))
            else:
                handler(value)
