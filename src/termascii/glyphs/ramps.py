"""
Glyph Ramps
===========

Fixed character ramps ordered from sparsest (dark) to densest (bright),
and the luminance -> glyph index mapping.

    index = clamp(floor(l * (len(ramp) - 1)), 0, len(ramp) - 1)

Boundaries round down; l == 1.0 lands on the last glyph through the clamp.
"""

import logging

import numpy as np

from termascii.config import RenderConfig
from termascii.models.grid import CharacterGrid, ToneMap


logger = logging.getLogger(__name__)


# Short, high-contrast ramp for plain output.
PLAIN_RAMP = " .:-=+*#%@"

# Longer ramp for color output, where the color carries most of the detail.
COLOR_RAMP = (
    " .'`^\",:;Il!i><~+_-?][}{1)(|\\/"
    "tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
)


def select_ramp(color: bool) -> str:
    """Return the color ramp in color mode, the plain ramp otherwise."""
    return COLOR_RAMP if color else PLAIN_RAMP


def glyph_index(luma: float, ramp_length: int) -> int:
    """
    Map one luminance value to a ramp index.

    Args:
        luma: Luminance in [0, 1] (values outside are clamped)
        ramp_length: Number of glyphs in the ramp

    Returns:
        Index in [0, ramp_length - 1]
    """
    return int(glyph_indices(np.asarray(luma, dtype=np.float64), ramp_length))


def glyph_indices(luma: np.ndarray, ramp_length: int) -> np.ndarray:
    """Vectorised glyph_index over an array of luminance values."""
    if ramp_length < 1:
        raise ValueError("ramp_length must be >= 1")
    raw = np.floor(np.asarray(luma, dtype=np.float64) * (ramp_length - 1))
    return np.clip(raw, 0, ramp_length - 1).astype(np.intp)


def select_glyphs(tones: ToneMap, config: RenderConfig) -> CharacterGrid:
    """
    Turn a tone map into a character grid.

    Args:
        tones: Per-cell luminance (and colors in color mode)
        config: Render configuration (selects the ramp)

    Returns:
        CharacterGrid with one glyph per cell
    """
    ramp = select_ramp(config.color)
    lookup = np.array(list(ramp))
    chars = lookup[glyph_indices(tones.luminance, len(ramp))]
    glyphs = ["".join(row) for row in chars]
    return CharacterGrid(glyphs=glyphs, colors=tones.colors if config.color else None)
