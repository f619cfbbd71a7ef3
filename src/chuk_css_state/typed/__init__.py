"""
Typed CSS - schema validation with violation tracking.
"""

from chuk_css_state.typed.typed_css import GuardedStore, TypedCSS, ViolationSink
from chuk_css_state.typed.validators import VALIDATORS, is_valid_length

__all__ = [
    "GuardedStore",
    "TypedCSS",
    "VALIDATORS",
    "ViolationSink",
    "is_valid_length",
]
