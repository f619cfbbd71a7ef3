"""
Store layer - the observable namespace every subsystem shares.

- Store: Protocol of get/set/subscribe/destroy
- StoreEvent: Wildcard notification payload
- StateStore: Reference in-memory implementation
- CycleGuard: Refuses re-entrant recomputes in chained graphs
"""

from chuk_css_state.store.guard import CycleGuard
from chuk_css_state.store.protocol import (
    Handler,
    Store,
    StoreEvent,
    Unsubscribe,
    is_wildcard,
    matches,
)
from chuk_css_state.store.state import StateStore

__all__ = [
    "CycleGuard",
    "Handler",
    "StateStore",
    "Store",
    "StoreEvent",
    "Unsubscribe",
    "is_wildcard",
    "matches",
]
