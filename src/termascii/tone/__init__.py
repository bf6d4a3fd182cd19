"""
Tone Module
===========

Luminance extraction, contrast, invert and color-mode blur.
"""

from termascii.tone.tone_mapper import (
    apply_contrast,
    apply_invert,
    box_blur,
    luminance,
    tone_map,
)


__all__ = [
    "apply_contrast",
    "apply_invert",
    "box_blur",
    "luminance",
    "tone_map",
]
