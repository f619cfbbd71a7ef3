"""
Schema models - per-component property constraints.

A schema maps component -> property -> PropertyConstraint. Schemas are
mutable at runtime (components can be defined and removed), but each
constraint is frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from chuk_css_state.constants import ConstraintType


class PropertyConstraint(BaseModel):
    """Declared type and bounds for one style property."""

    type: ConstraintType = Field(description="Value type this property accepts")
    min: str | float | None = Field(
        default=None,
        description="Lower bound: a length literal for 'length', a number for 'number'",
    )
    max: str | float | None = Field(
        default=None,
        description="Upper bound: a length literal for 'length', a number for 'number'",
    )
    values: list[str] | None = Field(
        default=None,
        description="Allowed values for 'enum'",
    )
    max_layers: int | None = Field(
        default=None,
        alias="maxLayers",
        ge=1,
        description="Maximum comma-separated layers for 'shadow'",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, as mirrored into the store for introspection."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ComponentSchema = dict[str, PropertyConstraint]
Schema = dict[str, ComponentSchema]


def build_component_schema(
    properties: dict[str, PropertyConstraint | dict[str, Any]],
) -> ComponentSchema:
    """Validate a property -> constraint mapping into PropertyConstraint models."""
    return {
        prop: c if isinstance(c, PropertyConstraint) else PropertyConstraint.model_validate(c)
        for prop, c in properties.items()
    }


def build_schema(data: dict[str, dict[str, PropertyConstraint | dict[str, Any]]]) -> Schema:
    """Validate a full component schema tree."""
    return {component: build_component_schema(props) for component, props in data.items()}


def schema_to_dict(schema: Schema) -> dict[str, dict[str, dict[str, Any]]]:
    """Plain-data copy of a schema tree."""
    return {
        component: {prop: c.to_dict() for prop, c in props.items()}
        for component, props in schema.items()
    }


@dataclass(frozen=True)
class Violation:
    """A recorded value that failed its schema constraint."""

    component: str
    property: str
    message: str
    timestamp: datetime

    def __str__(self) -> str:
        return f"[typed-css] {self.component}.{self.property}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one value."""

    valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        """Boolean conversion returns valid."""
        return self.valid

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True, error=None)

    @classmethod
    def fail(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)
