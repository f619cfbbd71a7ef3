"""
Relation descriptors - the inspectable record of each registered relation.

Descriptors are frozen: a relation never changes after registration. To
change one, dispose it and register a new one.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from chuk_css_state.constants import (
    DEFAULT_DARK_COLOR,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_MIN_RATIO,
    RelationType,
)


class DeriveRelation(BaseModel):
    """target = source * multiply + add."""

    type: Literal[RelationType.DERIVE] = RelationType.DERIVE
    target: str
    source: str
    multiply: float = 1
    add: float = 0
    unit: str | None = None

    model_config = {"frozen": True}

    @property
    def sources(self) -> tuple[str, ...]:
        return (self.source,)

    @property
    def targets_written(self) -> tuple[str, ...]:
        return (self.target,)


class ScaleRelation(BaseModel):
    """Every target = base * its factor (a modular scale)."""

    type: Literal[RelationType.SCALE] = RelationType.SCALE
    base: str
    targets: dict[str, float] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def sources(self) -> tuple[str, ...]:
        return (self.base,)

    @property
    def targets_written(self) -> tuple[str, ...]:
        return tuple(self.targets)


class ContrastRelation(BaseModel):
    """target = whichever of light/dark contrasts best with the background."""

    type: Literal[RelationType.CONTRAST] = RelationType.CONTRAST
    target: str
    against: str
    light: str = DEFAULT_LIGHT_COLOR
    dark: str = DEFAULT_DARK_COLOR
    min_ratio: float = Field(default=DEFAULT_MIN_RATIO, alias="minRatio", gt=0)

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def sources(self) -> tuple[str, ...]:
        return (self.against,)

    @property
    def targets_written(self) -> tuple[str, ...]:
        return (self.target,)


class ClampRelation(BaseModel):
    """target = ref bounded to [min, max] (same-unit bounds only)."""

    type: Literal[RelationType.CLAMP] = RelationType.CLAMP
    target: str
    ref: str
    min: str | None = None
    max: str | None = None

    model_config = {"frozen": True}

    @property
    def sources(self) -> tuple[str, ...]:
        return (self.ref,)

    @property
    def targets_written(self) -> tuple[str, ...]:
        return (self.target,)


RelationDescriptor = Annotated[
    DeriveRelation | ScaleRelation | ContrastRelation | ClampRelation,
    Field(discriminator="type"),
]
