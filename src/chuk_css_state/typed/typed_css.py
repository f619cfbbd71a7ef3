"""
Typed CSS - runtime schema validation for state-driven styles.

Every leaf write under the watched namespace is checked against the
component schema. Violations are recorded, handed to an optional sink,
and otherwise logged according to the validation mode.

Path convention: css.{component}[.{pseudo}...].{property}. The first
segment is the component and the last is the property.
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from chuk_css_state.constants import (
    DEFAULT_CSS_NAMESPACE,
    DEFAULT_SCHEMA_PATH,
    DEFAULT_VIOLATION_LIMIT,
    MAX_VIOLATIONS,
    ErrorMessages,
    ValidationMode,
)
from chuk_css_state.core import to_css_string
from chuk_css_state.models.schema import (
    PropertyConstraint,
    Schema,
    ValidationResult,
    Violation,
    build_component_schema,
    build_schema,
    schema_to_dict,
)
from chuk_css_state.store import Handler, Store, StoreEvent, Unsubscribe
from chuk_css_state.typed.validators import VALIDATORS

logger = logging.getLogger(__name__)

ViolationSink = Callable[[Violation], None]


class TypedCSS:
    """
    Schema validation layer over a store namespace.

    Components without a schema are not validated. A component with a
    schema rejects properties it does not declare.
    """

    def __init__(
        self,
        store: Store,
        schema: dict[str, dict[str, PropertyConstraint | dict[str, Any]]] | None = None,
        namespace: str = DEFAULT_CSS_NAMESPACE,
        mode: ValidationMode | str = ValidationMode.WARN,
        on_violation: ViolationSink | None = None,
        schema_path: str = DEFAULT_SCHEMA_PATH,
    ):
        """
        Initialize the validator and start watching the namespace.

        Args:
            store: Backing store
            schema: component -> property -> constraint (dicts or models)
            namespace: Store namespace to validate
            mode: 'warn', 'error' or 'reject'
            on_violation: Sink called with each Violation instead of logging
            schema_path: Store path the schema is mirrored to

        Raises:
            ValueError: If mode is not a known validation mode
            pydantic.ValidationError: If the schema is malformed
        """
        try:
            self.mode = ValidationMode(mode)
        except ValueError:
            raise ValueError(ErrorMessages.INVALID_MODE.format(mode=mode)) from None

        self.store = store
        self.namespace = namespace
        self.schema_path = schema_path
        self.on_violation = on_violation
        self._schema: Schema = build_schema(schema or {})
        self._violations: deque[Violation] = deque(maxlen=MAX_VIOLATIONS)

        self.store.set(self.schema_path, schema_to_dict(self._schema))
        self._unsub: Unsubscribe | None = self.store.subscribe(
            f"{self.namespace}.*", self._on_write
        )

    def _on_write(self, event: StoreEvent) -> None:
        # Subtree replacements and clears are not leaf values
        if event.value is None or isinstance(event.value, dict | list):
            return
        self.check(event.path, event.value)

    def _resolve(self, path: str) -> tuple[str, str] | None:
        """Split a store path into (component, property), or None if too short."""
        prefix = f"{self.namespace}."
        relative = path[len(prefix) :] if path.startswith(prefix) else path
        segments = relative.split(".")
        if len(segments) < 2:
            return None
        return segments[0], segments[-1]

    def check(self, path: str, value: Any) -> bool:
        """
        Validate a write to a store path, reporting any violation.

        Returns:
            Whether the write should proceed (False only in reject mode)
        """
        target = self._resolve(path)
        if target is None:
            return True

        component, prop = target
        result = self.validate(component, prop, value)
        if result.valid:
            return True

        self.report(component, prop, result.error or "")
        return self.mode is not ValidationMode.REJECT

    def validate(self, component: str, prop: str, value: Any) -> ValidationResult:
        """
        Validate a value against a component's schema.

        Args:
            component: Component name
            prop: Property name
            value: Value to check (stringified first)

        Returns:
            ValidationResult with valid flag and error message
        """
        component_schema = self._schema.get(component)
        if component_schema is None:
            return ValidationResult.ok()

        constraint = component_schema.get(prop)
        if constraint is None:
            return ValidationResult.fail(
                ErrorMessages.PROPERTY_NOT_IN_SCHEMA.format(
                    prop=prop, component=component, allowed=", ".join(component_schema)
                )
            )

        validator = VALIDATORS.get(constraint.type)
        if validator is None:
            return ValidationResult.ok()

        error = validator(to_css_string(value), constraint)
        return ValidationResult(valid=error is None, error=error)

    def report(self, component: str, prop: str, message: str) -> Violation:
        """Record a violation and route it to the sink or the log."""
        violation = Violation(
            component=component,
            property=prop,
            message=message,
            timestamp=datetime.now(UTC),
        )
        self._violations.append(violation)

        if self.on_violation:
            self.on_violation(violation)
        elif self.mode is ValidationMode.WARN:
            logger.warning(str(violation))
        elif self.mode is ValidationMode.ERROR:
            logger.error(str(violation))

        return violation

    def define_component(
        self,
        component: str,
        schema: dict[str, PropertyConstraint | dict[str, Any]],
    ) -> None:
        """Add or replace a component schema and mirror it into the store."""
        self._schema[component] = build_component_schema(schema)
        self.store.set(
            f"{self.schema_path}.{component}",
            {prop: c.to_dict() for prop, c in self._schema[component].items()},
        )

    def remove_component(self, component: str) -> None:
        """Remove a component schema; its writes become unvalidated."""
        if self._schema.pop(component, None) is not None:
            self.store.set(self.schema_path, schema_to_dict(self._schema))

    def get_schema(self, component: str | None = None) -> dict[str, Any] | None:
        """Schema mirror from the store: one component, or all of them."""
        path = f"{self.schema_path}.{component}" if component else self.schema_path
        return copy.deepcopy(self.store.get(path))

    def get_violations(self, limit: int = DEFAULT_VIOLATION_LIMIT) -> list[Violation]:
        """The most recent violations, oldest first."""
        return list(self._violations)[-limit:]

    def clear_violations(self) -> None:
        """Clear violation history."""
        self._violations.clear()

    @property
    def active(self) -> bool:
        """True until destroy() is called."""
        return self._unsub is not None

    @property
    def guarded_store(self) -> GuardedStore:
        """A view of the store whose writes honor reject mode."""
        return GuardedStore(self)

    def destroy(self) -> None:
        """Stop watching the namespace and drop the violation log."""
        if self._unsub:
            self._unsub()
            self._unsub = None
        self._violations.clear()


class GuardedStore:
    """
    Store wrapper that gives reject mode real veto power.

    In reject mode, leaf writes under the watched namespace are validated
    before they reach the store; invalid ones are reported and dropped.
    In warn and error modes writes pass straight through and are reported
    by the namespace subscription as usual.
    """

    def __init__(self, typed: TypedCSS):
        self._typed = typed
        self._inner = typed.store

    def get(self, path: str) -> Any:
        return self._inner.get(path)

    def set(self, path: str, value: Any) -> None:
        if self._should_write(path, value):
            self._inner.set(path, value)

    def subscribe(self, path_or_pattern: str, handler: Handler) -> Unsubscribe:
        return self._inner.subscribe(path_or_pattern, handler)

    def destroy(self) -> None:
        self._inner.destroy()

    def _should_write(self, path: str, value: Any) -> bool:
        typed = self._typed
        if typed.mode is not ValidationMode.REJECT or not typed.active:
            return True
        if not path.startswith(f"{typed.namespace}."):
            return True
        if value is None or isinstance(value, dict | list):
            return True
        return typed.check(path, value)
