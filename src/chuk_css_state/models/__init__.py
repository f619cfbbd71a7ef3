"""
Pydantic models for the CSS state system.

This module provides:
- PropertyConstraint: Type and bounds for one style property
- Violation / ValidationResult: Typed CSS outcomes
- DeriveRelation, ScaleRelation, ContrastRelation, ClampRelation: Relation descriptors
- Theme: File-backed tokens + schema + bindings
"""

from chuk_css_state.models.relation import (
    ClampRelation,
    ContrastRelation,
    DeriveRelation,
    RelationDescriptor,
    ScaleRelation,
)
from chuk_css_state.models.schema import (
    ComponentSchema,
    PropertyConstraint,
    Schema,
    ValidationResult,
    Violation,
    build_component_schema,
    build_schema,
    schema_to_dict,
)
from chuk_css_state.models.theme import Theme, ThemeMetadata

__all__ = [
    "ClampRelation",
    "ComponentSchema",
    "ContrastRelation",
    "DeriveRelation",
    "PropertyConstraint",
    "RelationDescriptor",
    "ScaleRelation",
    "Schema",
    "Theme",
    "ThemeMetadata",
    "ValidationResult",
    "Violation",
    "build_component_schema",
    "build_schema",
    "schema_to_dict",
]
