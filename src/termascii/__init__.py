"""
termascii
=========

Image and animated GIF to terminal character art.

This package converts a decoded image into a grid of characters chosen by
luminance, optionally colored with 24-bit ANSI escapes, and plays animated
input in the terminal with per-frame timing.

Components:
    - decoding: Image bytes to RawFrame sequences (Pillow)
    - sampling: Box-filter downsampling onto the character grid
    - tone: Luminance, contrast, invert and color-mode blur
    - glyphs: Character ramps and glyph selection
    - render: ANSI text composition and the animation player
    - pipeline: Stage composition
    - cli: Command line entry point

Example:
    from termascii.config import RenderConfig
    from termascii.pipeline import AsciiPipeline

    config = RenderConfig.from_values(width=80, color=True)
    AsciiPipeline(config).run_file("cat.gif")
"""

__version__ = "0.1.0"
__author__ = "termascii contributors"

__all__ = [
    "__version__",
]
