"""
Design System - reactive token-to-style bindings.

Tokens live in the store under a namespace (default 'tokens'). Binding a
style path to a token copies the token's value there now and on every
later write to the token. Each distinct token has at most one store
subscription, no matter how many style paths are bound to it.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from chuk_css_state.constants import DEFAULT_TOKEN_NAMESPACE
from chuk_css_state.store import CycleGuard, Store, Unsubscribe

logger = logging.getLogger(__name__)


def flatten_tree(prefix: str, tree: Any) -> list[tuple[str, Any]]:
    """
    Flatten a nested dict into (dotted path, leaf) pairs.

    Depth-first, pre-order, path = parent path + '.' + key. Uses an
    explicit stack so deeply nested trees can't exhaust the call stack.
    Non-dict values (including lists) are leaves; empty dicts yield nothing.
    """
    leaves: list[tuple[str, Any]] = []
    stack: list[tuple[str, Any]] = [(prefix, tree)]
    while stack:
        path, node = stack.pop()
        if isinstance(node, dict):
            # Reversed so children pop in insertion order
            stack.extend((f"{path}.{key}", child) for key, child in reversed(node.items()))
        else:
            leaves.append((path, node))
    return leaves


class DesignSystem:
    """
    Design tokens as reactive state.

    Example:
        ds = DesignSystem(store, tokens={"color": {"primary": "#3b82f6"}})
        ds.bind("css.btn.background", "color.primary")
        ds.set_token("color.primary", "#22c55e")  # css.btn.background follows
    """

    def __init__(
        self,
        store: Store,
        tokens: dict[str, Any] | None = None,
        namespace: str = DEFAULT_TOKEN_NAMESPACE,
    ):
        """
        Initialize the design system and write the initial tokens.

        Args:
            store: Backing store
            tokens: Initial token tree
            namespace: Store namespace for tokens
        """
        self.store = store
        self.namespace = namespace
        # token path (short form) -> ordered set of style paths
        self._bindings: dict[str, dict[str, None]] = {}
        self._unsubs: dict[str, Unsubscribe] = {}
        self._guard = CycleGuard("design-system")

        if tokens:
            self.set_tokens(tokens)

    def _short(self, token_path: str) -> str:
        prefix = f"{self.namespace}."
        return token_path[len(prefix) :] if token_path.startswith(prefix) else token_path

    def _full(self, token_path: str) -> str:
        return f"{self.namespace}.{self._short(token_path)}"

    def _ensure_subscription(self, token_path: str) -> None:
        if token_path in self._unsubs:
            return

        def propagate(value: Any) -> None:
            targets = self._bindings.get(token_path)
            if not targets:
                return

            def write() -> None:
                for style_path in list(targets):
                    self.store.set(style_path, value)

            self._guard.run(token_path, tuple(targets), write)

        self._unsubs[token_path] = self.store.subscribe(self._full(token_path), propagate)
        logger.debug(f"Subscribed to token {self._full(token_path)}")

    def _release(self, token_path: str) -> None:
        unsub = self._unsubs.pop(token_path, None)
        if unsub:
            unsub()
            logger.debug(f"Released token subscription {self._full(token_path)}")

    def bind(self, style_path: str, token_path: str) -> Unsubscribe:
        """
        Bind a style path to a token.

        The style path receives the token's current value immediately (if
        the token is defined) and on every later token write.

        Args:
            style_path: Target style path (e.g. 'css.btn.background')
            token_path: Token path, with or without the namespace (e.g. 'color.primary')

        Returns:
            Function that removes just this one binding
        """
        key = self._short(token_path)
        self._bindings.setdefault(key, {})[style_path] = None
        self._ensure_subscription(key)
        logger.debug(f"Bound {style_path} -> {self._full(key)}")

        current = self.store.get(self._full(key))
        if current is not None:
            self.store.set(style_path, current)

        def unbind() -> None:
            targets = self._bindings.get(key)
            if targets is None or style_path not in targets:
                return
            del targets[style_path]
            if not targets:
                del self._bindings[key]
                self._release(key)

        return unbind

    def bind_all(self, mapping: dict[str, str]) -> Unsubscribe:
        """
        Bind several style paths at once.

        Args:
            mapping: style path -> token path

        Returns:
            Function that removes every binding made by this call
        """
        unbinds = [self.bind(style_path, token_path) for style_path, token_path in mapping.items()]

        def unbind_all() -> None:
            for unbind in unbinds:
                unbind()

        return unbind_all

    def set_token(self, token_path: str, value: Any) -> None:
        """Set one token; bound style paths update through the subscription."""
        self.store.set(self._full(token_path), value)

    def set_tokens(self, tree: dict[str, Any]) -> None:
        """
        Merge a partial token tree into the store, leaf by leaf.

        Tokens not present in the tree are left untouched.
        """
        for path, value in flatten_tree(self.namespace, tree):
            self.store.set(path, value)

    def get_token(self, token_path: str) -> Any:
        """Current value of a token, or None if undefined."""
        return self.store.get(self._full(token_path))

    def get_all_tokens(self) -> dict[str, Any]:
        """Copy of the full token tree."""
        return copy.deepcopy(self.store.get(self.namespace) or {})

    def get_bindings(self) -> dict[str, list[str]]:
        """Snapshot of token path -> bound style paths, in binding order."""
        return {token: list(targets) for token, targets in self._bindings.items()}

    def destroy(self) -> None:
        """Release every token subscription and clear the binding graph."""
        for unsub in self._unsubs.values():
            unsub()
        logger.debug(f"Destroyed design system ({len(self._unsubs)} token subscriptions)")
        self._unsubs.clear()
        self._bindings.clear()
