"""
Glyphs Module
=============

Character ramps and luminance-to-glyph selection.
"""

from termascii.glyphs.ramps import (
    COLOR_RAMP,
    PLAIN_RAMP,
    glyph_index,
    glyph_indices,
    select_glyphs,
    select_ramp,
)


__all__ = [
    "COLOR_RAMP",
    "PLAIN_RAMP",
    "glyph_index",
    "glyph_indices",
    "select_glyphs",
    "select_ramp",
]
