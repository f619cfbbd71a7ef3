"""
Color primitives - parsing and WCAG contrast math.

Colors are reduced to an (r, g, b) integer triple in [0, 255]. Alpha
channels are dropped, so contrast is always computed as if opaque.
"""

from __future__ import annotations

import re
from typing import Any

from chuk_css_state.constants import COLOR_KEYWORDS, NAMED_COLORS

RGB = tuple[int, int, int]

_HEX_RE = re.compile(r"^#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_RGB_RE = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", re.IGNORECASE)
_COLOR_FUNCTION_RE = re.compile(r"^(?:rgba?|hsla?)\(", re.IGNORECASE)


def _hex_to_rgb(hex_color: str) -> RGB | None:
    """Convert #rgb, #rgba, #rrggbb or #rrggbbaa to an RGB triple."""
    digits = hex_color.lstrip("#")

    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits[:3])
    elif len(digits) in (6, 8):
        digits = digits[:6]
    else:
        return None

    try:
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    except ValueError:
        return None


def parse_color(value: Any) -> RGB | None:
    """
    Parse a hex, rgb()/rgba() or named color.

    Args:
        value: Color literal

    Returns:
        (r, g, b) triple, or None if the literal is not understood
    """
    if not value or not isinstance(value, str):
        return None
    v = value.strip()

    if v.startswith("#"):
        return _hex_to_rgb(v)

    match = _RGB_RE.search(v)
    if match:
        r, g, b = (min(int(group), 255) for group in match.groups())
        return (r, g, b)

    return NAMED_COLORS.get(v.lower())


def is_valid_color(value: Any) -> bool:
    """True if the value is a recognized CSS color literal (case-insensitive)."""
    if not isinstance(value, str):
        return False
    v = value.strip().lower()
    return bool(
        _HEX_RE.match(v)
        or _COLOR_FUNCTION_RE.match(v)
        or v.startswith("var(")
        or v in COLOR_KEYWORDS
        or v in NAMED_COLORS
    )


def relative_luminance(rgb: RGB) -> float:
    """
    Calculate relative luminance per WCAG 2.x.

    Formula: L = 0.2126 * R + 0.7152 * G + 0.0722 * B
    Where R, G, B are sRGB channels normalized and linearized.
    """

    def linearize(c: int) -> float:
        c_srgb = c / 255
        if c_srgb <= 0.03928:
            return c_srgb / 12.92
        return float(((c_srgb + 0.055) / 1.055) ** 2.4)

    r, g, b = rgb
    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def contrast_ratio(first: RGB, second: RGB) -> float:
    """
    Calculate the WCAG contrast ratio between two colors.

    Symmetric in its arguments. Ranges from 1.0 (identical) to 21.0
    (black on white).
    """
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)
