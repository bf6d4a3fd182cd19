"""
Render Module
=============

Terminal output for converted frames.

    - render_grid: CharacterGrid -> printable text (plain or 24-bit color)
    - AnimationPlayer: Writes frames, handles timing, looping and stop
    - Clock / SystemClock: Injectable time source
    - StopToken: Cooperative stop signal polled between frames

Example:
    from termascii.render import AnimationPlayer, RenderedFrame, render_grid

    text = render_grid(grid)
    AnimationPlayer(loop=False).play([RenderedFrame(text=text)])
"""

from termascii.render.ansi import (
    CLEAR_SCREEN,
    CURSOR_HOME,
    RESET,
    render_grid,
    rgb_to_ansi,
)
from termascii.render.clock import Clock, StopToken, SystemClock
from termascii.render.player import (
    MIN_FRAME_DELAY_MS,
    AnimationPlayer,
    PlaybackState,
    PlaybackStats,
    RenderedFrame,
)


__all__ = [
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "RESET",
    "render_grid",
    "rgb_to_ansi",
    "Clock",
    "StopToken",
    "SystemClock",
    "MIN_FRAME_DELAY_MS",
    "AnimationPlayer",
    "PlaybackState",
    "PlaybackStats",
    "RenderedFrame",
]
