"""
Constants and enums for the CSS state system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class ValidationMode(str, Enum):
    """What typed CSS does with an invalid value."""

    WARN = "warn"  # Log a warning, allow the write
    ERROR = "error"  # Log an error, allow the write
    REJECT = "reject"  # Drop the write when it goes through a guarded store


class ConstraintType(str, Enum):
    """Value types a schema property can declare."""

    COLOR = "color"
    LENGTH = "length"
    ENUM = "enum"
    NUMBER = "number"
    STRING = "string"
    SHADOW = "shadow"


class RelationType(str, Enum):
    """Kinds of relational constraints."""

    DERIVE = "derive"
    SCALE = "scale"
    CONTRAST = "contrast"
    CLAMP = "clamp"


# Length units accepted in a CSS length literal
LengthUnit = Literal[
    "px", "rem", "em", "%", "vh", "vw", "vmin", "vmax", "ch", "ex", "cm", "mm", "in", "pt", "pc"
]

LENGTH_UNITS: tuple[str, ...] = (
    "px", "rem", "em", "%", "vh", "vw", "vmin", "vmax", "ch", "ex", "cm", "mm", "in", "pt", "pc",
)

# Approximate px per unit, for min/max comparison only
LENGTH_UNIT_TO_PX: dict[str, float] = {
    "px": 1,
    "rem": 16,
    "em": 16,
    "pt": 1.333,
    "cm": 37.795,
    "mm": 3.7795,
    "in": 96,
}

# Keywords that pass length validation as-is
LENGTH_KEYWORDS: frozenset[str] = frozenset({"0", "auto", "inherit", "initial", "unset"})

# Keywords that pass color validation as-is (lowercase)
COLOR_KEYWORDS: frozenset[str] = frozenset(
    {"transparent", "currentcolor", "inherit", "initial", "unset"}
)

# Shared by the validator and the contrast parser
NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "pink": (255, 192, 203),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "brown": (165, 42, 42),
    "olive": (128, 128, 0),
    "navy": (0, 0, 128),
    "teal": (0, 128, 128),
    "maroon": (128, 0, 0),
    "aqua": (0, 255, 255),
    "lime": (0, 255, 0),
    "silver": (192, 192, 192),
    "fuchsia": (255, 0, 255),
}

# Default store namespaces
DEFAULT_TOKEN_NAMESPACE = "tokens"
DEFAULT_CSS_NAMESPACE = "css"
DEFAULT_SCHEMA_PATH = "schema"

# Violation log capacity (oldest evicted first)
MAX_VIOLATIONS = 200
DEFAULT_VIOLATION_LIMIT = 50

# Contrast defaults (WCAG AA for normal text)
DEFAULT_LIGHT_COLOR = "#ffffff"
DEFAULT_DARK_COLOR = "#1e293b"
DEFAULT_MIN_RATIO = 4.5

# Decimal places kept when formatting computed lengths
LENGTH_PRECISION = 4


class ErrorMessages:
    """Standardized error messages."""

    INVALID_COLOR = (
        "'{value}' is not a valid color. "
        "Use hex (#fff), rgb(), hsl(), or a named color."
    )
    INVALID_LENGTH = "'{value}' is not a valid CSS length."
    LENGTH_BELOW_MIN = "'{value}' is below minimum '{min}'."
    LENGTH_ABOVE_MAX = "'{value}' exceeds maximum '{max}'."
    ENUM_NOT_ALLOWED = "'{value}' is not allowed. Expected one of: {values}."
    INVALID_NUMBER = "'{value}' is not a valid number."
    NUMBER_BELOW_MIN = "{value} is below minimum {min}."
    NUMBER_ABOVE_MAX = "{value} exceeds maximum {max}."
    TOO_MANY_SHADOW_LAYERS = "Shadow has {layers} layers, maximum is {max_layers}."
    PROPERTY_NOT_IN_SCHEMA = "Property '{prop}' not in {component} schema. Allowed: {allowed}."
    INVALID_MODE = "Invalid validation mode: '{mode}'. Expected one of: warn, error, reject."
    CONTRAST_BELOW_MIN = (
        "contrast({target}): best ratio {ratio:.2f}:1 does not meet {min_ratio}:1. Using '{color}'."
    )
    CYCLE_REFUSED = "Refusing re-entrant recompute of {key} (cycle through {paths})."
