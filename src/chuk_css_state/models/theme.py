"""
Theme model - a named bundle of tokens, schema, and bindings.

Themes are the file-backed configuration for the three subsystems:
tokens seed a DesignSystem, schema seeds TypedCSS, and bindings feed
DesignSystem.bind_all().
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_css_state.models.schema import PropertyConstraint


class Theme(BaseModel):
    """A complete theme definition."""

    name: str = Field(description="Theme identifier")
    description: str = Field(default="", description="Human-readable description")
    tokens: dict[str, Any] = Field(
        default_factory=dict,
        description="Nested token tree (leaves are strings or numbers)",
    )
    component_schema: dict[str, dict[str, PropertyConstraint]] = Field(
        default_factory=dict,
        alias="schema",
        description="component -> property -> constraint",
    )
    bindings: dict[str, str] = Field(
        default_factory=dict,
        description="style path -> token path",
    )

    model_config = {"populate_by_name": True}


class ThemeMetadata(BaseModel):
    """Lightweight theme info for listing."""

    name: str
    description: str
    token_count: int
    component_count: int

    @classmethod
    def from_theme(cls, theme: Theme) -> ThemeMetadata:
        """Create metadata from a full theme."""
        count = 0
        stack: list[Any] = [theme.tokens]
        while stack:
            node = stack.pop()
            if isinstance(node, dict):
                stack.extend(node.values())
            else:
                count += 1
        return cls(
            name=theme.name,
            description=theme.description,
            token_count=count,
            component_count=len(theme.component_schema),
        )
