"""
Theme system - file-backed tokens, schemas, and bindings.
"""

from chuk_css_state.themes.loader import ThemeLoader

__all__ = ["ThemeLoader"]
