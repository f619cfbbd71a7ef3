"""
Cycle guard - refuses re-entrant recomputes.

A recompute writes into the store, which may synchronously trigger other
recomputes. If that chain comes back around to a recompute that is still
running, the graph has a cycle and recursing would never terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable

from chuk_css_state.constants import ErrorMessages

logger = logging.getLogger(__name__)


class CycleGuard:
    """Tracks in-flight recomputes for one component instance."""

    def __init__(self, owner: str):
        self.owner = owner
        self._active: dict[Hashable, tuple[str, ...]] = {}
        self.refused = 0

    def run(self, key: Hashable, paths: Iterable[str], compute: Callable[[], None]) -> bool:
        """
        Run a recompute unless the same key is already in flight.

        Args:
            key: Identity of the binding or relation
            paths: Target paths it writes (for the warning message)
            compute: The recompute itself

        Returns:
            True if the recompute ran, False if it was refused as cyclic
        """
        if key in self._active:
            self.refused += 1
            chain = ", ".join(p for written in self._active.values() for p in written)
            logger.warning(
                f"[{self.owner}] " + ErrorMessages.CYCLE_REFUSED.format(key=key, paths=chain)
            )
            return False

        self._active[key] = tuple(paths)
        try:
            compute()
        finally:
            del self._active[key]
        return True

    @property
    def in_flight(self) -> bool:
        """True while any recompute owned by this guard is running."""
        return bool(self._active)
