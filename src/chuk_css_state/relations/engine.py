"""
Relational CSS - constraint-based reactive style relationships.

Each relation computes its target(s) once at registration, then again on
every write to its source path. Relations chain: a relation whose source
is another relation's target recomputes inside the same set() call.

Relations:
- derive: target = source * multiply + add
- scale: modular scale, every target = base * factor
- contrast: pick the light or dark color that best contrasts a background
- clamp: bound a length to [min, max] in matching units
"""

from __future__ import annotations

import functools
import itertools
import logging
from collections.abc import Callable
from typing import Any

from chuk_css_state.constants import (
    DEFAULT_DARK_COLOR,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_MIN_RATIO,
    ErrorMessages,
)
from chuk_css_state.core import (
    contrast_ratio,
    format_length,
    format_number,
    parse_bare_number,
    parse_color,
    parse_length,
    to_css_string,
)
from chuk_css_state.models.relation import (
    ClampRelation,
    ContrastRelation,
    DeriveRelation,
    RelationDescriptor,
    ScaleRelation,
)
from chuk_css_state.store import CycleGuard, Store, Unsubscribe

logger = logging.getLogger(__name__)


class RelationalCSS:
    """
    Registry of live relations over one store.

    Example:
        rel = RelationalCSS(store)
        rel.derive("css.header.padding", ref="css.card.padding", multiply=2)
        rel.scale("tokens.font.base", {"css.h1.fontSize": 2.0, "css.h2.fontSize": 1.5})
        rel.contrast("css.card.color", against="css.card.background")
    """

    def __init__(self, store: Store):
        """
        Initialize an empty relation registry.

        Args:
            store: Backing store
        """
        self.store = store
        self._relations: dict[int, tuple[RelationDescriptor, Unsubscribe]] = {}
        self._ids = itertools.count()
        self._guard = CycleGuard("relational-css")

    def _register(self, descriptor: RelationDescriptor, compute: Callable[[], None]) -> Unsubscribe:
        """Compute now, subscribe to the source, and record the descriptor."""
        relation_id = next(self._ids)

        def recompute(_: Any = None) -> None:
            self._guard.run(
                f"{descriptor.type.value}#{relation_id}", descriptor.targets_written, compute
            )

        recompute()
        unsub = self.store.subscribe(descriptor.sources[0], recompute)
        self._relations[relation_id] = (descriptor, unsub)
        logger.debug(
            f"Registered {descriptor.type.value} relation "
            f"{descriptor.sources[0]} -> {', '.join(descriptor.targets_written)}"
        )
        return functools.partial(self._remove, relation_id)

    def _remove(self, relation_id: int) -> None:
        entry = self._relations.pop(relation_id, None)
        if entry is None:
            return
        descriptor, unsub = entry
        unsub()
        logger.debug(f"Removed {descriptor.type.value} relation on {descriptor.sources[0]}")

    def derive(
        self,
        target: str,
        *,
        ref: str,
        multiply: float = 1,
        add: float = 0,
        unit: str | None = None,
    ) -> Unsubscribe:
        """
        Derive a value from another by a multiplier and/or offset.

        Lengths keep their unit (or take `unit` if given); bare numbers are
        written as plain numeric strings. Anything else is left alone.

        Args:
            target: Path to write the computed value
            ref: Source path to watch
            multiply: Factor applied to the source value
            add: Offset added after multiplying (in the output unit)
            unit: Override the output unit (e.g. 'rem')

        Returns:
            Function that removes this relation
        """
        relation = DeriveRelation(target=target, source=ref, multiply=multiply, add=add, unit=unit)

        def compute() -> None:
            source = self.store.get(relation.source)
            if source is None:
                return

            parsed = parse_length(to_css_string(source))
            if parsed:
                result = parsed.value * relation.multiply + relation.add
                self.store.set(relation.target, format_length(result, relation.unit or parsed.unit))
                return

            num = parse_bare_number(source)
            if num is not None:
                result = num * relation.multiply + relation.add
                self.store.set(relation.target, format_number(result))

        return self._register(relation, compute)

    def scale(self, base: str, targets: dict[str, float]) -> Unsubscribe:
        """
        Create a modular scale from a base length.

        Every target gets base * factor in the base's unit. All targets
        are rewritten together whenever the base changes.

        Args:
            base: Path to the base value (e.g. 'tokens.font.base')
            targets: target path -> scale factor

        Returns:
            Function that removes this relation
        """
        relation = ScaleRelation(base=base, targets=dict(targets))

        def compute() -> None:
            value = self.store.get(relation.base)
            if value is None:
                return

            parsed = parse_length(to_css_string(value))
            if not parsed:
                return

            for target_path, factor in relation.targets.items():
                self.store.set(target_path, format_length(parsed.value * factor, parsed.unit))

        return self._register(relation, compute)

    def contrast(
        self,
        target: str,
        *,
        against: str,
        light: str = DEFAULT_LIGHT_COLOR,
        dark: str = DEFAULT_DARK_COLOR,
        min_ratio: float = DEFAULT_MIN_RATIO,
    ) -> Unsubscribe:
        """
        Pick a light or dark text color based on background contrast.

        If both candidates meet min_ratio the higher contrast wins (light
        on a tie). If neither does, the better one is used anyway and a
        warning is logged.

        Args:
            target: Path to write the chosen color
            against: Path of the background color
            light: Light candidate
            dark: Dark candidate
            min_ratio: Minimum WCAG contrast ratio (4.5 = AA, 7 = AAA)

        Returns:
            Function that removes this relation
        """
        relation = ContrastRelation(
            target=target, against=against, light=light, dark=dark, min_ratio=min_ratio
        )

        def compute() -> None:
            background = self.store.get(relation.against)
            if not background:
                return

            bg_rgb = parse_color(to_css_string(background))
            light_rgb = parse_color(relation.light)
            dark_rgb = parse_color(relation.dark)
            if not bg_rgb or not light_rgb or not dark_rgb:
                return

            light_ratio = contrast_ratio(light_rgb, bg_rgb)
            dark_ratio = contrast_ratio(dark_rgb, bg_rgb)
            light_passes = light_ratio >= relation.min_ratio
            dark_passes = dark_ratio >= relation.min_ratio

            if light_passes and dark_passes:
                choice = relation.light if light_ratio >= dark_ratio else relation.dark
            elif light_passes:
                choice = relation.light
            elif dark_passes:
                choice = relation.dark
            else:
                choice = relation.light if light_ratio >= dark_ratio else relation.dark
                logger.warning(
                    ErrorMessages.CONTRAST_BELOW_MIN.format(
                        target=relation.target,
                        ratio=light_ratio if light_ratio >= dark_ratio else dark_ratio,
                        min_ratio=relation.min_ratio,
                        color=choice,
                    )
                )

            self.store.set(relation.target, choice)

        return self._register(relation, compute)

    def clamp(
        self,
        target: str,
        *,
        ref: str,
        min: str | None = None,
        max: str | None = None,
    ) -> Unsubscribe:
        """
        Clamp a length between min and max, reacting to source changes.

        A bound applies only when its unit matches the source's unit.
        Values that are not lengths are written through unchanged.

        Args:
            target: Path to write the clamped value
            ref: Source path
            min: Lower bound (e.g. '0.75rem')
            max: Upper bound (e.g. '3rem')

        Returns:
            Function that removes this relation
        """
        relation = ClampRelation(target=target, ref=ref, min=min, max=max)
        low = parse_length(relation.min)
        high = parse_length(relation.max)

        def compute() -> None:
            source = self.store.get(relation.ref)
            if source is None:
                return

            parsed = parse_length(to_css_string(source))
            if not parsed:
                self.store.set(relation.target, source)
                return

            value = parsed.value
            if low and low.unit == parsed.unit and value < low.value:
                value = low.value
            if high and high.unit == parsed.unit and value > high.value:
                value = high.value

            self.store.set(relation.target, format_length(value, parsed.unit))

        return self._register(relation, compute)

    def get_relations(self) -> list[RelationDescriptor]:
        """Copies of every live relation descriptor, in registration order."""
        return [descriptor.model_copy(deep=True) for descriptor, _ in self._relations.values()]

    def destroy(self) -> None:
        """Tear down every relation."""
        for _, unsub in self._relations.values():
            unsub()
        logger.debug(f"Destroyed relational engine ({len(self._relations)} relations)")
        self._relations.clear()
