"""
Reactive CSS state: design tokens, typed CSS, and relational constraints.

Three subsystems layered over one observable, path-addressable store:
- DesignSystem: token-to-style bindings
- TypedCSS: schema validation with a bounded violation log
- RelationalCSS: derive / scale / contrast / clamp constraints
"""

from chuk_css_state.constants import ConstraintType, RelationType, ValidationMode
from chuk_css_state.core import ParsedLength, format_length, parse_color, parse_length
from chuk_css_state.models import (
    ClampRelation,
    ContrastRelation,
    DeriveRelation,
    PropertyConstraint,
    ScaleRelation,
    Theme,
    ValidationResult,
    Violation,
)
from chuk_css_state.relations import RelationalCSS
from chuk_css_state.store import StateStore, Store, StoreEvent
from chuk_css_state.themes import ThemeLoader
from chuk_css_state.tokens import DesignSystem
from chuk_css_state.typed import GuardedStore, TypedCSS

__version__ = "0.1.0"

__all__ = [
    "ClampRelation",
    "ConstraintType",
    "ContrastRelation",
    "DeriveRelation",
    "DesignSystem",
    "GuardedStore",
    "ParsedLength",
    "PropertyConstraint",
    "RelationType",
    "RelationalCSS",
    "ScaleRelation",
    "StateStore",
    "Store",
    "StoreEvent",
    "Theme",
    "ThemeLoader",
    "TypedCSS",
    "ValidationMode",
    "ValidationResult",
    "Violation",
    "format_length",
    "parse_color",
    "parse_length",
]
