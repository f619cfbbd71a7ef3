"""
Tests for the theme system.

Tests cover:
- Theme model validation
- ThemeLoader discovery, project overrides, caching, copy_to_project
- Wiring a loaded theme into DesignSystem and TypedCSS
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chuk_css_state.constants import ConstraintType
from chuk_css_state.models import Theme, ThemeMetadata
from chuk_css_state.store import StateStore
from chuk_css_state.themes import ThemeLoader
from chuk_css_state.tokens import DesignSystem
from chuk_css_state.typed import TypedCSS

CUSTOM_THEME = """
name: default
description: Project override
tokens:
  color:
    primary: "#000000"
schema:
  btn:
    background: {type: color}
bindings:
  css.btn.background: color.primary
"""


class TestThemeModel:
    """Tests for the Theme model."""

    def test_schema_alias(self) -> None:
        """The 'schema' key populates component_schema."""
        theme = Theme.model_validate(
            {"name": "t", "schema": {"btn": {"padding": {"type": "length", "min": "1px"}}}}
        )
        assert theme.component_schema["btn"]["padding"].type == ConstraintType.LENGTH
        assert theme.component_schema["btn"]["padding"].min == "1px"

    def test_defaults(self) -> None:
        """Only the name is required."""
        theme = Theme(name="empty")
        assert theme.tokens == {}
        assert theme.component_schema == {}
        assert theme.bindings == {}

    def test_bad_constraint(self) -> None:
        """Invalid constraint types are rejected."""
        with pytest.raises(ValidationError):
            Theme.model_validate({"name": "t", "schema": {"btn": {"x": {"type": "nope"}}}})

    def test_metadata_counts_leaves(self) -> None:
        """Metadata counts token leaves and components."""
        theme = Theme.model_validate({
            "name": "t",
            "tokens": {"color": {"a": "#fff", "b": "#000"}, "space": "1rem"},
            "schema": {"btn": {}, "card": {}},
        })
        meta = ThemeMetadata.from_theme(theme)
        assert (meta.token_count, meta.component_count) == (3, 2)


class TestThemeLoader:
    """Tests for ThemeLoader."""

    def test_library_themes(self) -> None:
        """The built-in library ships default and midnight."""
        loader = ThemeLoader()
        names = [m.name for m in loader.list_themes()]
        assert "default" in names
        assert "midnight" in names

    def test_get_library_theme(self) -> None:
        """Library themes load fully."""
        theme = ThemeLoader().get_theme("default")
        assert theme is not None
        assert theme.tokens["color"]["primary"] == "#3b82f6"
        assert theme.component_schema["btn"]["display"].values == [
            "flex", "inline-flex", "block", "none"
        ]
        assert theme.component_schema["card"]["boxShadow"].max_layers == 2
        assert theme.bindings["css.btn.background"] == "color.primary"

    def test_missing_theme(self) -> None:
        """Unknown names return None."""
        assert ThemeLoader().get_theme("does-not-exist") is None

    def test_project_overrides_library(self, temp_dir: Path) -> None:
        """A project theme with the same name wins."""
        (temp_dir / "default.yaml").write_text(CUSTOM_THEME)
        loader = ThemeLoader(project_path=temp_dir)

        theme = loader.get_theme("default")
        assert theme.description == "Project override"
        listed = {m.name: m for m in loader.list_themes()}
        assert listed["default"].description == "Project override"

    def test_broken_override_falls_back_to_library(self, temp_dir: Path) -> None:
        """A project file that fails to load does not hide the library theme."""
        (temp_dir / "default.yaml").write_text("tokens: [unclosed\n")
        loader = ThemeLoader(project_path=temp_dir)
        theme = loader.get_theme("default")
        assert theme is not None
        assert theme.tokens["color"]["primary"] == "#3b82f6"

    def test_listing_is_sorted(self, temp_dir: Path) -> None:
        """Themes are listed by name."""
        for name in ("zebra", "alpha", "mango"):
            (temp_dir / f"{name}.yaml").write_text(f"description: {name}\n")
        loader = ThemeLoader(library_path=temp_dir)
        assert [m.name for m in loader.list_themes()] == ["alpha", "mango", "zebra"]

    def test_name_defaults_to_file_stem(self, temp_dir: Path) -> None:
        """Themes without a name take the file name."""
        (temp_dir / "ocean.yaml").write_text("tokens:\n  color:\n    primary: '#0ea5e9'\n")
        theme = ThemeLoader(project_path=temp_dir).get_theme("ocean")
        assert theme.name == "ocean"

    def test_broken_files_are_skipped(self, temp_dir: Path) -> None:
        """Unparseable or invalid files don't break listing."""
        (temp_dir / "broken.yaml").write_text("tokens: [unclosed\n")
        (temp_dir / "invalid.yaml").write_text("schema:\n  btn:\n    x: {type: nope}\n")
        (temp_dir / "scalar.yaml").write_text("just a string\n")
        loader = ThemeLoader(library_path=temp_dir)
        assert loader.list_themes() == []
        assert loader.get_theme("broken") is None
        assert loader.get_theme("scalar") is None

    def test_cache(self, temp_dir: Path) -> None:
        """Loaded themes are cached until clear_cache()."""
        path = temp_dir / "cached.yaml"
        path.write_text("description: first\n")
        loader = ThemeLoader(library_path=temp_dir)
        assert loader.get_theme("cached").description == "first"

        path.write_text("description: second\n")
        assert loader.get_theme("cached").description == "first"
        loader.clear_cache()
        assert loader.get_theme("cached").description == "second"

    def test_copy_to_project(self, temp_dir: Path) -> None:
        """Library themes can be copied for customization."""
        project = temp_dir / "themes"
        loader = ThemeLoader(project_path=project)
        dest = loader.copy_to_project("midnight")
        assert dest == project / "midnight.yaml"
        assert dest.exists()

        with pytest.raises(ValueError, match="already exists"):
            loader.copy_to_project("midnight")
        assert loader.copy_to_project("does-not-exist") is None

    def test_copy_requires_project_path(self) -> None:
        """copy_to_project needs somewhere to copy to."""
        with pytest.raises(ValueError, match="No project path"):
            ThemeLoader().copy_to_project("default")


class TestThemeWiring:
    """Tests for feeding a theme into the subsystems."""

    def test_default_theme_end_to_end(self, store: StateStore) -> None:
        """Tokens, schema and bindings from a theme work together."""
        theme = ThemeLoader().get_theme("default")
        violations = []
        typed = TypedCSS(store, theme.component_schema, on_violation=violations.append)
        ds = DesignSystem(store, tokens=theme.tokens)
        ds.bind_all(theme.bindings)

        assert store.get("css.btn.background") == "#3b82f6"
        assert store.get("css.card.boxShadow") == "0 4px 6px #0000001a"
        assert violations == []

        ds.set_token("spacing.md", "10rem")
        assert store.get("css.btn.padding") == "10rem"
        [violation] = violations
        assert violation.message == "'10rem' exceeds maximum '3rem'."

        ds.destroy()
        typed.destroy()
