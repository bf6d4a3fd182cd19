"""
Grid Models
===========

Per-frame intermediate and output values of the conversion pipeline.

    ToneMap        - per-cell luminance (and blurred colors in color mode)
    CharacterGrid  - selected glyphs (and colors in color mode)

Both are produced fresh for every frame and have no identity beyond it.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np


@dataclass(frozen=True, slots=True, eq=False)
class ToneMap:
    """
    Output of the tone mapper.

    Attributes:
        luminance: Final luminance per cell (rows, cols), float in [0, 1]
        colors: Blurred RGB per cell (rows, cols, 3) uint8, color mode only
    """

    luminance: np.ndarray
    colors: Optional[np.ndarray] = None

    @property
    def shape(self) -> tuple:
        """(rows, columns) of the cell grid."""
        return tuple(self.luminance.shape[:2])


@dataclass(frozen=True, slots=True, eq=False)
class CharacterGrid:
    """
    Rows x columns matrix of glyphs with optional per-cell color.

    Attributes:
        glyphs: One string per row, each exactly `columns` characters
        colors: RGB per cell (rows, cols, 3) uint8, or None in plain mode
    """

    glyphs: List[str]
    colors: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.glyphs:
            raise ValueError("grid must have at least one row")
        width = len(self.glyphs[0])
        if any(len(row) != width for row in self.glyphs):
            raise ValueError("all grid rows must have the same width")
        if self.colors is not None and self.colors.shape != (len(self.glyphs), width, 3):
            raise ValueError(
                f"colors shape {self.colors.shape} does not match grid "
                f"{len(self.glyphs)}x{width}"
            )

    @property
    def rows(self) -> int:
        return len(self.glyphs)

    @property
    def columns(self) -> int:
        return len(self.glyphs[0])

    @property
    def is_color(self) -> bool:
        return self.colors is not None

    def __repr__(self) -> str:
        return (
            f"CharacterGrid({self.columns}x{self.rows}, "
            f"color={self.is_color})"
        )
