"""
Tests for typed CSS.

Tests cover:
- Per-type validators (color, length, enum, number, string, shadow)
- On-demand validate() semantics for unknown components/properties
- Automatic validation of namespace writes and the violation log
- Validation modes, logging, and the reject veto via GuardedStore
- Runtime schema changes and the store mirror
"""

import logging

import pytest
from pydantic import ValidationError

from chuk_css_state.constants import MAX_VIOLATIONS, ValidationMode
from chuk_css_state.models import PropertyConstraint, ValidationResult
from chuk_css_state.relations import RelationalCSS
from chuk_css_state.store import StateStore
from chuk_css_state.typed import TypedCSS, is_valid_length

BTN_SCHEMA = {
    "btn": {
        "background": {"type": "color"},
        "padding": {"type": "length", "min": "0.25rem", "max": "3rem"},
        "display": {"type": "enum", "values": ["flex", "inline-flex", "block", "none"]},
        "boxShadow": {"type": "shadow", "maxLayers": 2},
        "label": {"type": "string"},
    },
    "card": {"zIndex": {"type": "number", "min": 0, "max": 9999}},
}


@pytest.fixture
def typed(store: StateStore) -> TypedCSS:
    """Typed CSS over the button/card schema, collecting violations silently."""
    engine = TypedCSS(store, BTN_SCHEMA, on_violation=lambda v: None)
    yield engine
    engine.destroy()


class TestIsValidLength:
    """Tests for is_valid_length."""

    def test_single_and_compound(self) -> None:
        """Single lengths, compound shorthands and keywords pass."""
        for value in ("1rem", "0", "auto", "0.5rem 1rem", "0 auto", "var(--gap)", "inherit"):
            assert is_valid_length(value), value

    def test_invalid(self) -> None:
        """Unitless numbers, unknown units and empty strings fail."""
        for value in ("10", "1furlong", "", "   ", "1rem bogus"):
            assert not is_valid_length(value), value


class TestValidate:
    """Tests for on-demand validate()."""

    def test_color(self, typed: TypedCSS) -> None:
        """Colors validate by literal grammar."""
        assert typed.validate("btn", "background", "#3b82f6") == ValidationResult(True, None)
        result = typed.validate("btn", "background", "not-a-color")
        assert not result.valid
        assert "not a valid color" in result.error

    def test_length(self, typed: TypedCSS) -> None:
        """Lengths validate by grammar."""
        assert typed.validate("btn", "padding", "1rem").valid
        result = typed.validate("btn", "padding", "big")
        assert result.error == "'big' is not a valid CSS length."

    def test_length_bounds(self, typed: TypedCSS) -> None:
        """Bounds compare by approximate px."""
        assert typed.validate("btn", "padding", "16px").valid
        assert typed.validate("btn", "padding", "10rem").error == "'10rem' exceeds maximum '3rem'."
        assert typed.validate("btn", "padding", "1px").error == "'1px' is below minimum '0.25rem'."

    def test_length_bounds_skip_unmapped_units(self, typed: TypedCSS) -> None:
        """Relative units and compound values skip the bound check."""
        assert typed.validate("btn", "padding", "90vh").valid
        assert typed.validate("btn", "padding", "10rem 10rem").valid

    def test_enum(self, typed: TypedCSS) -> None:
        """Enums require an exact match."""
        assert typed.validate("btn", "display", "flex").valid
        result = typed.validate("btn", "display", "table")
        assert result.error == (
            "'table' is not allowed. Expected one of: flex, inline-flex, block, none."
        )

    def test_number_bounds(self, typed: TypedCSS) -> None:
        """Numbers are inclusive on both bounds."""
        assert typed.validate("card", "zIndex", "10").valid
        assert typed.validate("card", "zIndex", "0").valid
        assert typed.validate("card", "zIndex", "9999").valid
        assert not typed.validate("card", "zIndex", "-1").valid
        assert not typed.validate("card", "zIndex", "10000").valid
        assert typed.validate("card", "zIndex", "-1").error == "-1 is below minimum 0."
        assert typed.validate("card", "zIndex", 10).valid

    def test_number_not_a_number(self, typed: TypedCSS) -> None:
        """Non-numeric values fail."""
        assert typed.validate("card", "zIndex", "high").error == "'high' is not a valid number."

    def test_string_always_valid(self, typed: TypedCSS) -> None:
        """String properties accept anything."""
        assert typed.validate("btn", "label", "anything at all").valid

    def test_shadow_layers(self, typed: TypedCSS) -> None:
        """Shadows are limited by layer count."""
        assert typed.validate("btn", "boxShadow", "0 1px 2px #000, 0 2px 4px #000").valid
        result = typed.validate("btn", "boxShadow", "0 1px #000, 0 2px #000, 0 3px #000")
        assert result.error == "Shadow has 3 layers, maximum is 2."

    def test_unknown_component_is_permissive(self, typed: TypedCSS) -> None:
        """Components without a schema are not validated."""
        assert typed.validate("modal", "anything", "whatever") == ValidationResult(True, None)

    def test_unknown_property_is_invalid(self, typed: TypedCSS) -> None:
        """A schema'd component rejects undeclared properties, naming the allowed ones."""
        result = typed.validate("card", "unknownProp", "value")
        assert not result.valid
        assert result.error == "Property 'unknownProp' not in card schema. Allowed: zIndex."

    def test_validate_is_pure(self, typed: TypedCSS) -> None:
        """Repeated calls give identical results and record nothing."""
        first = typed.validate("btn", "display", "table")
        assert typed.validate("btn", "display", "table") == first
        assert typed.get_violations() == []

    def test_result_bool(self) -> None:
        """ValidationResult is truthy when valid."""
        assert ValidationResult.ok()
        assert not ValidationResult.fail("nope")


class TestAutomaticValidation:
    """Tests for validation of store writes."""

    def test_write_records_violation(self, store: StateStore) -> None:
        """Invalid writes are reported to the sink."""
        violations = []
        typed = TypedCSS(store, BTN_SCHEMA, on_violation=violations.append)
        store.set("css.btn.background", "not-a-color")

        assert len(violations) == 1
        assert violations[0].component == "btn"
        assert violations[0].property == "background"
        assert typed.get_violations() == violations
        typed.destroy()

    def test_write_still_happens(self, store: StateStore, typed: TypedCSS) -> None:
        """Without a guarded store, invalid writes still land."""
        store.set("css.btn.display", "table")
        assert store.get("css.btn.display") == "table"
        assert len(typed.get_violations()) == 1

    def test_valid_writes_record_nothing(self, store: StateStore, typed: TypedCSS) -> None:
        """Valid writes are silent."""
        store.set("css.btn.padding", "1rem")
        store.set("css.modal.width", "whatever")
        assert typed.get_violations() == []

    def test_pseudo_segments(self, store: StateStore, typed: TypedCSS) -> None:
        """The last path segment is the property, the first the component."""
        store.set("css.btn.hover.background", "nope")
        [violation] = typed.get_violations()
        assert (violation.component, violation.property) == ("btn", "background")

    def test_subtree_writes_skipped(self, store: StateStore, typed: TypedCSS) -> None:
        """Object-valued writes are not validated."""
        store.set("css.btn", {"background": "nope"})
        assert typed.get_violations() == []

    def test_short_paths_skipped(self, store: StateStore, typed: TypedCSS) -> None:
        """Paths without a property segment are ignored."""
        store.set("css.btn", "nope")
        assert typed.get_violations() == []

    def test_unknown_property_write(self, store: StateStore, typed: TypedCSS) -> None:
        """Writing an undeclared property is a violation."""
        store.set("css.card.color", "#fff")
        [violation] = typed.get_violations()
        assert violation.message.startswith("Property 'color' not in card schema.")

    def test_custom_namespace(self, store: StateStore) -> None:
        """Only the configured namespace is watched."""
        violations = []
        typed = TypedCSS(store, BTN_SCHEMA, namespace="styles", on_violation=violations.append)
        store.set("css.btn.background", "nope")
        store.set("styles.btn.background", "nope")
        assert len(violations) == 1
        typed.destroy()

    def test_destroy_stops_watching(self, store: StateStore) -> None:
        """After destroy, writes are not validated and the log is empty."""
        violations = []
        typed = TypedCSS(store, BTN_SCHEMA, on_violation=violations.append)
        store.set("css.btn.background", "nope")
        typed.destroy()
        store.set("css.btn.background", "nope")
        assert len(violations) == 1
        assert typed.get_violations() == []
        assert store.subscription_count == 0


class TestViolationLog:
    """Tests for the bounded violation log."""

    def test_limit_returns_most_recent(self, typed: TypedCSS) -> None:
        """get_violations(limit) returns the newest entries, oldest first."""
        for i in range(5):
            typed.report("btn", "padding", f"m{i}")
        assert [v.message for v in typed.get_violations(2)] == ["m3", "m4"]
        assert len(typed.get_violations()) == 5

    def test_capped_with_oldest_evicted(self, typed: TypedCSS) -> None:
        """The log keeps the newest MAX_VIOLATIONS entries."""
        for i in range(MAX_VIOLATIONS + 10):
            typed.report("btn", "padding", f"m{i}")
        kept = typed.get_violations(limit=1000)
        assert len(kept) == MAX_VIOLATIONS
        assert kept[0].message == "m10"
        assert kept[-1].message == f"m{MAX_VIOLATIONS + 9}"

    def test_clear(self, typed: TypedCSS) -> None:
        """clear_violations empties the log."""
        typed.report("btn", "padding", "bad")
        typed.clear_violations()
        assert typed.get_violations() == []

    def test_violation_str(self, typed: TypedCSS) -> None:
        """Violations format with component and property."""
        violation = typed.report("btn", "padding", "bad")
        assert str(violation) == "[typed-css] btn.padding: bad"


class TestModes:
    """Tests for validation modes and logging."""

    def test_invalid_mode(self, store: StateStore) -> None:
        """Unknown modes are a configuration error."""
        with pytest.raises(ValueError, match="Invalid validation mode"):
            TypedCSS(store, {}, mode="explode")

    def test_warn_logs_warning(self, store: StateStore, caplog) -> None:
        """warn mode logs at WARNING."""
        typed = TypedCSS(store, BTN_SCHEMA)
        with caplog.at_level(logging.WARNING):
            store.set("css.btn.display", "table")
        assert any(
            r.levelno == logging.WARNING and "btn.display" in r.getMessage()
            for r in caplog.records
        )
        typed.destroy()

    def test_error_logs_error(self, store: StateStore, caplog) -> None:
        """error mode logs at ERROR."""
        typed = TypedCSS(store, BTN_SCHEMA, mode="error")
        with caplog.at_level(logging.WARNING):
            store.set("css.btn.display", "table")
        assert any(r.levelno == logging.ERROR for r in caplog.records)
        typed.destroy()

    def test_reject_logs_nothing(self, store: StateStore, caplog) -> None:
        """reject mode records but does not log."""
        typed = TypedCSS(store, BTN_SCHEMA, mode=ValidationMode.REJECT)
        with caplog.at_level(logging.DEBUG, logger="chuk_css_state.typed"):
            store.set("css.btn.display", "table")
        assert caplog.records == []
        assert len(typed.get_violations()) == 1
        typed.destroy()

    def test_sink_replaces_logging(self, store: StateStore, caplog) -> None:
        """With a sink, nothing is logged."""
        seen = []
        typed = TypedCSS(store, BTN_SCHEMA, on_violation=seen.append)
        with caplog.at_level(logging.WARNING):
            store.set("css.btn.display", "table")
        assert len(seen) == 1
        assert caplog.records == []
        typed.destroy()

    def test_check_return_value(self, store: StateStore) -> None:
        """check() only says 'stop' in reject mode."""
        warn = TypedCSS(store, BTN_SCHEMA, on_violation=lambda v: None)
        reject = TypedCSS(store, BTN_SCHEMA, mode="reject")
        assert warn.check("css.btn.display", "table") is True
        assert reject.check("css.btn.display", "table") is False
        assert reject.check("css.btn.display", "flex") is True
        warn.destroy()
        reject.destroy()


class TestGuardedStore:
    """Tests for the reject-mode veto."""

    def test_reject_drops_invalid_writes(self, store: StateStore) -> None:
        """Invalid writes through the guarded store never land."""
        typed = TypedCSS(store, BTN_SCHEMA, mode="reject")
        guarded = typed.guarded_store
        guarded.set("css.btn.display", "flex")
        guarded.set("css.btn.display", "table")

        assert store.get("css.btn.display") == "flex"
        assert guarded.get("css.btn.display") == "flex"
        assert len(typed.get_violations()) == 1
        typed.destroy()

    def test_non_reject_modes_pass_through(self, store: StateStore) -> None:
        """In warn mode the guarded store writes and reports once."""
        seen = []
        typed = TypedCSS(store, BTN_SCHEMA, on_violation=seen.append)
        typed.guarded_store.set("css.btn.display", "table")
        assert store.get("css.btn.display") == "table"
        assert len(seen) == 1
        typed.destroy()

    def test_outside_namespace_passes(self, store: StateStore) -> None:
        """Writes outside the namespace are never vetoed."""
        typed = TypedCSS(store, BTN_SCHEMA, mode="reject")
        typed.guarded_store.set("tokens.btn.display", "table")
        assert store.get("tokens.btn.display") == "table"
        typed.destroy()

    def test_relations_through_guarded_store(self, store: StateStore) -> None:
        """Relations writing via the guarded store are vetoed too."""
        typed = TypedCSS(store, {"card": {"zIndex": {"type": "number", "max": 100}}}, mode="reject")
        store.set("css.base.z", "10")
        rel = RelationalCSS(typed.guarded_store)
        rel.derive("css.card.zIndex", ref="css.base.z", multiply=5)
        assert store.get("css.card.zIndex") == "50"

        store.set("css.base.z", "30")
        assert store.get("css.card.zIndex") == "50"
        assert len(typed.get_violations()) == 1
        rel.destroy()
        typed.destroy()


class TestSchemaManagement:
    """Tests for runtime schema changes."""

    def test_schema_mirrored_into_store(self, store: StateStore, typed: TypedCSS) -> None:
        """The schema is copied into the store for introspection."""
        assert store.get("schema.card.zIndex") == {"type": "number", "min": 0.0, "max": 9999.0}
        assert store.get("schema.btn.boxShadow") == {"type": "shadow", "maxLayers": 2}

    def test_caller_schema_not_aliased(self, store: StateStore) -> None:
        """Mutating the caller's schema afterwards has no effect."""
        schema = {"btn": {"background": {"type": "color"}}}
        typed = TypedCSS(store, schema, on_violation=lambda v: None)
        schema["btn"]["padding"] = {"type": "length"}
        assert not typed.validate("btn", "padding", "1rem").valid
        typed.destroy()

    def test_define_component(self, store: StateStore) -> None:
        """Components defined at runtime validate immediately."""
        typed = TypedCSS(store, {})
        typed.define_component("card", {"background": {"type": "color"}})
        assert typed.validate("card", "background", "#fff") == ValidationResult(True, None)
        assert typed.get_schema("card") == {"background": {"type": "color"}}
        typed.destroy()

    def test_define_component_with_models(self, store: StateStore) -> None:
        """PropertyConstraint models are accepted as-is."""
        typed = TypedCSS(store, {})
        typed.define_component("card", {"zIndex": PropertyConstraint(type="number", max=10)})
        assert not typed.validate("card", "zIndex", "11").valid
        typed.destroy()

    def test_remove_component(self, store: StateStore, typed: TypedCSS) -> None:
        """Removed components become permissive and leave the mirror."""
        typed.remove_component("card")
        assert typed.validate("card", "zIndex", "-5").valid
        assert typed.get_schema("card") is None
        assert "btn" in typed.get_schema()

    def test_get_schema_is_a_copy(self, typed: TypedCSS) -> None:
        """Mutating the returned schema doesn't touch the store."""
        schema = typed.get_schema()
        schema["btn"]["background"]["type"] = "number"
        assert typed.get_schema("btn")["background"]["type"] == "color"

    def test_malformed_schema_rejected(self, store: StateStore) -> None:
        """Unknown constraint types fail at definition time."""
        with pytest.raises(ValidationError):
            TypedCSS(store, {"btn": {"background": {"type": "gradient"}}})
