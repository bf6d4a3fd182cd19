"""
Cell Resampler
==============

Downsamples a RawFrame onto the target character grid.

Each output cell covers a rectangle of source pixels:

    x0 = floor(c * W / C),  x1 = floor((c + 1) * W / C)
    y0 = floor(r * H / R),  y1 = floor((r + 1) * H / R)

and takes the box-filter mean of every pixel inside it. When the grid is
finer than the source in some dimension the rectangle can be empty; that
cell then samples the single pixel under its center instead.

Sums are reduced one axis at a time (rows, then columns) with
np.add.reduceat, so the cost is O(H*W) and the largest intermediate is
rows x W cells rather than a full-size table.
"""

import logging
import math
from typing import Tuple

import numpy as np

from termascii.models.frame import RawFrame


logger = logging.getLogger(__name__)


# Terminal character cells are roughly twice as tall as they are wide.
DEFAULT_CELL_ASPECT_RATIO = 2.0


def target_rows(
    columns: int,
    source_width: int,
    source_height: int,
    cell_aspect_ratio: float = DEFAULT_CELL_ASPECT_RATIO,
) -> int:
    """
    Compute the output row count that preserves the source aspect ratio.

    rows = round(columns * H / W / cell_aspect_ratio), halves round up,
    never less than 1.

    Args:
        columns: Target width in characters
        source_width: Source width in pixels
        source_height: Source height in pixels
        cell_aspect_ratio: Character cell height / width

    Returns:
        Row count >= 1
    """
    if columns < 1:
        raise ValueError("columns must be >= 1")
    if source_width < 1 or source_height < 1:
        raise ValueError("source dimensions must be >= 1")
    if cell_aspect_ratio <= 0:
        raise ValueError("cell_aspect_ratio must be positive")

    exact = columns * source_height / source_width / cell_aspect_ratio
    return max(1, int(math.floor(exact + 0.5)))


def cell_bounds(cells: int, size: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Source-space [start, stop) index ranges for each of `cells` cells.

    Empty ranges are replaced by the one pixel nearest the cell center.

    Args:
        cells: Number of output cells along this axis
        size: Number of source pixels along this axis

    Returns:
        (start, stop) integer arrays of length `cells`
    """
    edges = (np.arange(cells + 1, dtype=np.int64) * size) // cells
    start = edges[:-1]
    stop = edges[1:]

    empty = stop <= start
    if np.any(empty):
        centers = ((2 * np.arange(cells, dtype=np.int64) + 1) * size) // (2 * cells)
        nearest = np.minimum(centers, size - 1)
        start = np.where(empty, nearest, start)
        stop = np.where(empty, nearest + 1, stop)

    return start, stop


def resample(
    frame: RawFrame,
    columns: int,
    cell_aspect_ratio: float = DEFAULT_CELL_ASPECT_RATIO,
) -> np.ndarray:
    """
    Aggregate a frame into one RGBA value per character cell.

    Args:
        frame: Decoded source frame
        columns: Target width in characters
        cell_aspect_ratio: Character cell height / width

    Returns:
        np.ndarray (rows, columns, 4), float64, channel values in [0, 255]
    """
    rows = target_rows(columns, frame.width, frame.height, cell_aspect_ratio)

    y0, y1 = cell_bounds(rows, frame.height)
    x0, x1 = cell_bounds(columns, frame.width)

    # Rows first, so the intermediate is (rows, W, 4) rather than (H, W, 4).
    band_sums = _sum_ranges(frame.pixels, y0, y1, axis=0)
    sums = _sum_ranges(band_sums, x0, x1, axis=1)
    area = (y1 - y0)[:, None] * (x1 - x0)[None, :]

    cells = sums / area[..., None]

    logger.debug(
        f"Resampled frame {frame.index}: "
        f"{frame.width}x{frame.height} -> {columns}x{rows}"
    )
    return cells


def _sum_ranges(
    values: np.ndarray,
    start: np.ndarray,
    stop: np.ndarray,
    axis: int,
) -> np.ndarray:
    """
    Sum `values` over each [start, stop) range along `axis`, as int64.

    cell_bounds yields either contiguous ranges tiling the whole axis
    (cells <= size) or single pixels (cells >= size), never a mix.
    """
    if np.all(stop - start == 1):
        return np.take(values, start, axis=axis).astype(np.int64)
    return np.add.reduceat(values, start, axis=axis, dtype=np.int64)
