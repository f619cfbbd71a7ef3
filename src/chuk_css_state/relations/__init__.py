"""
Relational CSS - derive, scale, contrast and clamp constraints.
"""

from chuk_css_state.relations.engine import RelationalCSS

__all__ = ["RelationalCSS"]
