#!/usr/bin/env python3
"""
Example: Driving component styles from a theme.

Loads the built-in default theme, wires its tokens and bindings into a
DesignSystem, validates every css.* write with TypedCSS, and layers a few
relational constraints on top. Changing a single token then ripples through
bindings and relations, with bad values reported along the way.

Usage:
    python examples/use_themes.py
"""

import tempfile
from pathlib import Path

from chuk_css_state import (
    DesignSystem,
    RelationalCSS,
    StateStore,
    ThemeLoader,
    TypedCSS,
    ValidationMode,
)


def main() -> None:
    """Demonstrate themes, tokens, validation and relations together."""
    print("CHUK CSS State Demo")
    print("=" * 40)
    print()

    with tempfile.TemporaryDirectory() as tmp:
        loader = ThemeLoader(project_path=Path(tmp))

        print("Available themes:")
        for meta in loader.list_themes():
            print(f"  {meta.name}: {meta.description}")
            print(f"    Tokens: {meta.token_count}, Components: {meta.component_count}")
        print()

        theme = loader.get_theme("default")
        if not theme:
            print("Failed to load theme")
            return

        store = StateStore()
        typed = TypedCSS(store, theme.component_schema, mode=ValidationMode.REJECT)
        guarded = typed.guarded_store

        ds = DesignSystem(guarded, tokens=theme.tokens)
        ds.bind_all(theme.bindings)

        rel = RelationalCSS(guarded)
        rel.derive("css.card.borderRadius", ref="css.btn.borderRadius", multiply=2)
        rel.clamp("css.btn.fontSize", ref="tokens.font.base", min="0.75rem", max="2rem")
        rel.contrast("css.card.color", against="css.card.background")

        def show(label: str) -> None:
            print(f"{label}:")
            for path in (
                "css.btn.background",
                "css.btn.padding",
                "css.btn.fontSize",
                "css.card.background",
                "css.card.color",
                "css.card.borderRadius",
            ):
                print(f"  {path} = {store.get(path)}")
            print()

        show("Initial styles")

        # Token changes flow through bindings and relations
        ds.set_tokens({"color": {"surface": "#0f172a"}, "radius": {"md": "0.75rem"}})
        show("After switching to a dark surface")

        # Reject mode keeps invalid values out of the store
        ds.set_token("spacing.md", "12rem")
        ds.set_token("font.base", "1.125rem")
        show("After an out-of-range padding token")

        print("Recent violations:")
        for violation in typed.get_violations(5):
            print(f"  {violation}")
        print()

        print("Live relations:")
        for relation in rel.get_relations():
            print(f"  {relation.type.value}: {', '.join(relation.sources)}")
        print()

        copied_path = loader.copy_to_project("midnight")
        if copied_path:
            print(f"Copied midnight theme to: {copied_path}")
            print("  Edit this file to customize the theme!")
        print()

        rel.destroy()
        ds.destroy()
        typed.destroy()
        store.destroy()

        print("Done!")


if __name__ == "__main__":
    main()
