"""
Data Models
===========

Typed values passed between pipeline stages.

Models:
    - RawFrame: Decoded RGBA frame plus display duration
    - ToneMap: Per-cell luminance and optional blurred colors
    - CharacterGrid: Selected glyphs plus optional per-cell colors
"""

from termascii.models.frame import RawFrame
from termascii.models.grid import CharacterGrid, ToneMap

__all__ = [
    "RawFrame",
    "ToneMap",
    "CharacterGrid",
]
