"""
Sampling Module
===============

Maps a source pixel grid onto the target character grid.
"""

from termascii.sampling.resizer import (
    DEFAULT_CELL_ASPECT_RATIO,
    cell_bounds,
    resample,
    target_rows,
)


__all__ = [
    "DEFAULT_CELL_ASPECT_RATIO",
    "cell_bounds",
    "resample",
    "target_rows",
]
