"""
Tone Mapper
===========

Converts aggregated cell colors into final luminance (and display colors).

Steps, per cell:
    1. Color mode only: 3x3 box blur over the RGB channels of the cell
       grid, borders replicated. Softens color-mode blockiness.
    2. Luminance with Rec. 709 weights, scaled to [0, 1].
    3. Contrast around mid-gray:  l' = clip((l - 0.5) * contrast + 0.5, 0, 1)
    4. Invert if requested:       l'' = 1 - l'

Contrast and invert always run before glyph quantization.
Alpha is ignored, as in a straight RGBA -> RGB conversion.
"""

import logging

import cv2
import numpy as np

from termascii.config import RenderConfig
from termascii.models.grid import ToneMap


logger = logging.getLogger(__name__)


# Rec. 709 luma weights, scaled to integers so a pure white cell maps to
# exactly 1.0.
LUMA_WEIGHTS = (2126.0, 7152.0, 722.0)
_LUMA_SCALE = 255.0 * 10000.0

BLUR_KERNEL_SIZE = (3, 3)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """
    Weighted RGB-to-luminance.

    Args:
        rgb: Array (..., 3) with channel values in [0, 255]

    Returns:
        Array (...) of luminance in [0, 1]
    """
    weights = np.asarray(LUMA_WEIGHTS, dtype=np.float64)
    luma = np.asarray(rgb, dtype=np.float64) @ weights / _LUMA_SCALE
    return np.clip(luma, 0.0, 1.0)


def apply_contrast(luma: np.ndarray, contrast: float) -> np.ndarray:
    """
    Stretch luminance around 0.5 by `contrast`, clamped to [0, 1].

    contrast == 1.0 returns the input unchanged.
    """
    if contrast == 1.0:
        return luma
    return np.clip((luma - 0.5) * contrast + 0.5, 0.0, 1.0)


def apply_invert(luma: np.ndarray) -> np.ndarray:
    """Flip luminance (1 - l)."""
    return 1.0 - luma


def box_blur(rgb: np.ndarray) -> np.ndarray:
    """
    3x3 box blur over a cell grid, edges use replicated borders.

    Args:
        rgb: Array (rows, cols, 3) with channel values in [0, 255]

    Returns:
        Blurred float32 array of the same shape
    """
    src = np.ascontiguousarray(rgb, dtype=np.float32)
    return cv2.blur(src, BLUR_KERNEL_SIZE, borderType=cv2.BORDER_REPLICATE)


def tone_map(cells: np.ndarray, config: RenderConfig) -> ToneMap:
    """
    Produce final per-cell luminance and (color mode) display colors.

    Args:
        cells: Aggregated RGBA cell grid (rows, cols, 4) from the resampler
        config: Render configuration (contrast, invert, color)

    Returns:
        ToneMap with luminance (rows, cols) and colors (rows, cols, 3)
        uint8 in color mode, None otherwise
    """
    if cells.ndim != 3 or cells.shape[2] < 3:
        raise ValueError(f"cells must have shape (rows, cols, 3|4), got {cells.shape}")

    rgb = cells[..., :3]
    colors = None

    if config.color:
        rgb = box_blur(rgb)
        colors = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)

    luma = luminance(rgb)
    luma = apply_contrast(luma, config.contrast)
    if config.invert:
        luma = apply_invert(luma)

    return ToneMap(luminance=luma, colors=colors)
