"""
Design tokens as reactive state.

Tokens are named design values. Bindings keep style paths in sync with
the tokens they reference.
"""

from chuk_css_state.tokens.design_system import DesignSystem, flatten_tree

__all__ = ["DesignSystem", "flatten_tree"]
