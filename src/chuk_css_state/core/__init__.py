"""
Core value primitives shared by every subsystem.

- ParsedLength: A CSS length as (value, unit)
- parse_length / format_length: Exact length round-tripping
- parse_number / format_number: Lenient numeric parsing and output
- parse_bare_number: Strict whole-value number parsing
- parse_color: Hex, rgb() and named colors as an RGB triple
- relative_luminance / contrast_ratio: WCAG contrast math
"""

from chuk_css_state.core.color import (
    RGB,
    contrast_ratio,
    is_valid_color,
    parse_color,
    relative_luminance,
)
from chuk_css_state.core.length import (
    ParsedLength,
    format_length,
    format_number,
    length_to_px,
    parse_bare_number,
    parse_length,
    parse_number,
    to_css_string,
)

__all__ = [
    # Length
    "ParsedLength",
    "parse_length",
    "format_length",
    "length_to_px",
    "parse_number",
    "parse_bare_number",
    "format_number",
    "to_css_string",
    # Color
    "RGB",
    "parse_color",
    "is_valid_color",
    "relative_luminance",
    "contrast_ratio",
]
