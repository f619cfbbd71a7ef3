"""
Length primitives - ParsedLength and the numeric helpers around it.

CSS length literals are parsed into an exact (value, unit) pair so that
computed values can be written back in the same unit. Formatting rounds
to a fixed number of decimal places to keep float noise out of the store.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from chuk_css_state.constants import LENGTH_PRECISION, LENGTH_UNIT_TO_PX, LENGTH_UNITS

_UNIT_ALT = "|".join(re.escape(u) for u in LENGTH_UNITS)
LENGTH_RE = re.compile(r"^(-?\d+(?:\.\d+)?)(" + _UNIT_ALT + r")$")

# Leading float literal, the way a lenient number parse reads "10px" as 10
_NUMBER_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Whole-string float literal: "1.5" but not "10deg" or "1rem 2rem"
_BARE_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True)
class ParsedLength:
    """
    A CSS length split into its numeric value and unit.

    Immutable and hashable.
    """

    value: float
    unit: str

    def __str__(self) -> str:
        return format_length(self.value, self.unit)

    def to_px(self) -> float | None:
        """Approximate pixel equivalent, or None for relative units with no fixed size."""
        factor = LENGTH_UNIT_TO_PX.get(self.unit)
        return self.value * factor if factor is not None else None


def parse_length(value: Any) -> ParsedLength | None:
    """
    Parse a single CSS length literal like '1.5rem' or '-4px'.

    Args:
        value: Candidate literal (non-strings never parse)

    Returns:
        ParsedLength, or None if the value is not a length literal
    """
    if not isinstance(value, str):
        return None
    match = LENGTH_RE.match(value.strip())
    if not match:
        return None
    return ParsedLength(value=float(match.group(1)), unit=match.group(2))


def length_to_px(value: Any) -> float | None:
    """Convert a length literal to approximate px, None if unparseable or unmapped."""
    match = LENGTH_RE.match(to_css_string(value))
    if not match:
        return None
    factor = LENGTH_UNIT_TO_PX.get(match.group(2))
    return float(match.group(1)) * factor if factor is not None else None


def parse_number(value: Any) -> float | None:
    """
    Leniently parse a number from the start of a value.

    Mirrors how CSS tooling reads '10', '1.5', or '10px' (as 10).
    Returns None when no leading number is present.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return None if math.isnan(value) else float(value)
    match = _NUMBER_PREFIX_RE.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def parse_bare_number(value: Any) -> float | None:
    """
    Parse a value that is exactly a number, nothing more.

    Numeric values pass through. Strings must be a complete float literal
    (surrounding whitespace aside), so '10deg' and '1rem 2rem' return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return None if math.isnan(value) else float(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _BARE_NUMBER_RE.match(text):
        return None
    return float(text)


def format_number(num: float) -> str:
    """
    Format a number in plain decimal notation.

    Whole values drop the '.0' and small or large values never use an
    exponent: 0.00001 is '0.00001', not '1e-05'.
    """
    if not math.isfinite(num):
        return repr(float(num))
    if float(num).is_integer():
        return str(int(num))
    # Shortest round-tripping digits, expanded out of exponent form
    return format(Decimal(repr(float(num))), "f")


def format_length(num: float, unit: str) -> str:
    """
    Format a number and unit as a CSS length.

    Rounds half-up to LENGTH_PRECISION decimal places first, so
    0.1 * 3 comes out as '0.3rem' rather than '0.30000000000000004rem'.
    """
    scale = 10**LENGTH_PRECISION
    rounded = math.floor(num * scale + 0.5) / scale
    return f"{format_number(rounded)}{unit}"


def to_css_string(value: Any) -> str:
    """Stringify a store value the way it would appear in a stylesheet."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return format_number(value)
    return str(value)
