"""
Per-type value validators.

Each validator takes the stringified value and its constraint and returns
an error message, or None if the value is acceptable.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from chuk_css_state.constants import LENGTH_KEYWORDS, ConstraintType, ErrorMessages
from chuk_css_state.core import (
    is_valid_color,
    length_to_px,
    parse_length,
    parse_number,
    to_css_string,
)
from chuk_css_state.models.schema import PropertyConstraint

Validator = Callable[[str, PropertyConstraint], str | None]

_VAR_RE = re.compile(r"^var\(")


def is_valid_length(value: str) -> bool:
    """
    True if every whitespace-separated part is a length, a keyword, or var().

    Compound values like '0.5rem 1rem' are accepted.
    """
    parts = value.strip().split()
    if not parts:
        return False
    return all(
        parse_length(part) is not None or part in LENGTH_KEYWORDS or _VAR_RE.match(part)
        for part in parts
    )


def validate_color(value: str, constraint: PropertyConstraint) -> str | None:
    if not is_valid_color(value):
        return ErrorMessages.INVALID_COLOR.format(value=value)
    return None


def validate_length(value: str, constraint: PropertyConstraint) -> str | None:
    if not is_valid_length(value):
        return ErrorMessages.INVALID_LENGTH.format(value=value)

    # Bounds only apply to single values in a unit with a fixed px size
    if constraint.min is None and constraint.max is None:
        return None
    px = length_to_px(value)
    if px is None:
        return None

    if constraint.min is not None:
        min_px = length_to_px(constraint.min)
        if min_px is not None and px < min_px:
            return ErrorMessages.LENGTH_BELOW_MIN.format(value=value, min=constraint.min)
    if constraint.max is not None:
        max_px = length_to_px(constraint.max)
        if max_px is not None and px > max_px:
            return ErrorMessages.LENGTH_ABOVE_MAX.format(value=value, max=constraint.max)
    return None


def validate_enum(value: str, constraint: PropertyConstraint) -> str | None:
    if not constraint.values or value not in constraint.values:
        allowed = ", ".join(constraint.values or [])
        return ErrorMessages.ENUM_NOT_ALLOWED.format(value=value, values=allowed)
    return None


def validate_number(value: str, constraint: PropertyConstraint) -> str | None:
    num = parse_number(value)
    if num is None:
        return ErrorMessages.INVALID_NUMBER.format(value=value)

    low = parse_number(constraint.min) if constraint.min is not None else None
    high = parse_number(constraint.max) if constraint.max is not None else None
    if low is not None and num < low:
        return ErrorMessages.NUMBER_BELOW_MIN.format(value=value, min=to_css_string(constraint.min))
    if high is not None and num > high:
        return ErrorMessages.NUMBER_ABOVE_MAX.format(value=value, max=to_css_string(constraint.max))
    return None


def validate_string(value: str, constraint: PropertyConstraint) -> str | None:
    return None


def validate_shadow(value: str, constraint: PropertyConstraint) -> str | None:
    if constraint.max_layers:
        layers = len(value.split(","))
        if layers > constraint.max_layers:
            return ErrorMessages.TOO_MANY_SHADOW_LAYERS.format(
                layers=layers, max_layers=constraint.max_layers
            )
    return None


VALIDATORS: dict[ConstraintType, Validator] = {
    ConstraintType.COLOR: validate_color,
    ConstraintType.LENGTH: validate_length,
    ConstraintType.ENUM: validate_enum,
    ConstraintType.NUMBER: validate_number,
    ConstraintType.STRING: validate_string,
    ConstraintType.SHADOW: validate_shadow,
}
