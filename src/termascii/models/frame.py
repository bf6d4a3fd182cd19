"""
Frame Data Model
=================

Decoded frame representation for the conversion pipeline.

This module defines the typed RawFrame class that is used as the interface
between the decoder and downstream processing stages.

Design Rules:
    - This is the ONLY frame format passed to downstream stages
    - Pixels are always RGBA, uint8, row-major (H, W, 4)
    - Immutable once decoded (frozen dataclass, read-only array)
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True, eq=False)
class RawFrame:
    """
    One decoded image frame.

    Attributes:
        pixels: RGBA samples as np.ndarray (H, W, 4), dtype=uint8
        duration_ms: Display duration in milliseconds (0 for static images)
        index: Position of the frame in the source sequence
    """

    pixels: np.ndarray
    duration_ms: int = 0
    index: int = 0

    def __post_init__(self) -> None:
        """Validate invariants and freeze the pixel buffer."""
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"pixels must have shape (H, W, 4), got {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {self.pixels.dtype}")
        if self.pixels.shape[0] < 1 or self.pixels.shape[1] < 1:
            raise ValueError("frame must be at least 1x1 pixels")
        if self.duration_ms < 0:
            raise ValueError("duration_ms must be non-negative")
        self.pixels.setflags(write=False)

    @property
    def width(self) -> int:
        """Width in pixels."""
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Height in pixels."""
        return int(self.pixels.shape[0])

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixel data."""
        return (
            f"RawFrame(index={self.index}, "
            f"size={self.width}x{self.height}, "
            f"duration_ms={self.duration_ms})"
        )
