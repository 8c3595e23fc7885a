"""Graphics module for NEON DASH rendering.

The frame renderer lives in ``neondash.graphics.renderer``; it depends on the
simulation types, so it is not imported here.
"""

from neondash.graphics.primitives import (
    clear,
    wash,
    draw_rect,
    draw_glow,
    draw_circle,
    draw_triangle,
    draw_line,
    draw_text,
    draw_text_centered,
    text_size,
)

__all__ = [
    "clear",
    "wash",
    "draw_rect",
    "draw_glow",
    "draw_circle",
    "draw_triangle",
    "draw_line",
    "draw_text",
    "draw_text_centered",
    "text_size",
]
