"""
Animation Player
================

Writes rendered frames to a terminal stream and drives animation timing.

This module provides the AnimationPlayer class which:
    - Writes a single frame once and returns (static input)
    - Clears the screen once, then redraws each frame from the cursor
      home position to avoid flicker (animated input)
    - Sleeps for each frame's duration between frames, less the time
      spent writing it
    - Wraps to the first frame when looping, or returns after one pass
    - Stops cooperatively when its StopToken is set

State Machine:
    IDLE -> RENDERING(0) -> RENDERING(i + 1) -> ... -> DONE  (play once)
    RENDERING(last) -> RENDERING(0)                          (loop, wrap)
    any -> DONE                                              (stop token)

Design Rules:
    - Does NOT convert images; receives finished text
    - Never sleeps through time.sleep directly (Clock is injected)
    - Writes nothing once the stop token is set
    - Exposes playback stats for observability
"""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, TextIO

from termascii.render.ansi import CLEAR_SCREEN, CURSOR_HOME
from termascii.render.clock import Clock, StopToken, SystemClock


logger = logging.getLogger(__name__)


# Shortest sleep between animated frames, in milliseconds.
MIN_FRAME_DELAY_MS = 20


class PlaybackState(str, Enum):
    """
    Player states.

    Attributes:
        IDLE: Nothing played yet
        RENDERING: Drawing / showing the frame at `frame_index`
        DONE: Playback finished or was stopped
    """

    IDLE = "IDLE"
    RENDERING = "RENDERING"
    DONE = "DONE"


@dataclass(frozen=True, slots=True)
class RenderedFrame:
    """
    Terminal-ready text for one frame.

    Attributes:
        text: Composed frame text (rows ending in newlines)
        duration_ms: Display duration (ignored for single-frame input)
    """

    text: str
    duration_ms: int = 0

    def __repr__(self) -> str:
        return (
            f"RenderedFrame(chars={len(self.text)}, "
            f"duration_ms={self.duration_ms})"
        )


class PlaybackStats:
    """Counters for one play() call."""

    __slots__ = (
        "frames_rendered",
        "loops_completed",
        "stopped",
    )

    def __init__(self) -> None:
        self.frames_rendered: int = 0
        self.loops_completed: int = 0
        self.stopped: bool = False

    def to_dict(self) -> dict:
        """Export stats as dict."""
        return {
            "frames_rendered": self.frames_rendered,
            "loops_completed": self.loops_completed,
            "stopped": self.stopped,
        }


class AnimationPlayer:
    """
    Terminal frame player.

    Attributes:
        out: Text stream frames are written to
        loop: Repeat animated input until stopped
        state: Current PlaybackState
        frame_index: Frame being shown while RENDERING, else None

    Example:
        player = AnimationPlayer(out=sys.stdout, loop=False)
        stats = player.play([
            RenderedFrame(text=frame_a, duration_ms=50),
            RenderedFrame(text=frame_b, duration_ms=150),
        ])
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        loop: bool = False,
        clock: Optional[Clock] = None,
        stop_token: Optional[StopToken] = None,
        min_frame_delay_ms: int = MIN_FRAME_DELAY_MS,
    ) -> None:
        """
        Initialize animation player.

        Args:
            out: Output stream (defaults to sys.stdout)
            loop: Repeat animated input indefinitely
            clock: Time source (defaults to a SystemClock that wakes
                early on the stop token)
            stop_token: Cooperative stop signal polled between frames
            min_frame_delay_ms: Lower bound on inter-frame sleep
        """
        if min_frame_delay_ms < 0:
            raise ValueError("min_frame_delay_ms must be non-negative")

        self.out = out if out is not None else sys.stdout
        self.loop = loop
        self.stop_token = stop_token if stop_token is not None else StopToken()
        self.clock = clock if clock is not None else SystemClock(self.stop_token)
        self.min_frame_delay_ms = min_frame_delay_ms

        self._state: PlaybackState = PlaybackState.IDLE
        self._frame_index: Optional[int] = None

    @property
    def state(self) -> PlaybackState:
        """Current playback state."""
        return self._state

    @property
    def frame_index(self) -> Optional[int]:
        """Index of the frame on screen while RENDERING."""
        return self._frame_index

    def play(self, frames: Sequence[RenderedFrame]) -> PlaybackStats:
        """
        Play frames to the output stream.

        Single-frame input is written once; loop and duration are ignored.
        Multi-frame input is animated, once or (loop=True) until the stop
        token is set.

        Args:
            frames: Non-empty sequence of rendered frames

        Returns:
            PlaybackStats for this call

        Raises:
            ValueError: If frames is empty
        """
        if not frames:
            raise ValueError("frames must not be empty")

        stats = PlaybackStats()
        try:
            if len(frames) == 1:
                self._show_still(frames[0], stats)
            else:
                self._animate(frames, stats)
        finally:
            self._state = PlaybackState.DONE
            self._frame_index = None

        logger.debug(f"Playback finished: {stats.to_dict()}")
        return stats

    def _show_still(self, frame: RenderedFrame, stats: PlaybackStats) -> None:
        """Single-frame output: one write, no clear, no sleep."""
        if self._stop_requested(stats):
            return
        self._enter(0)
        self._write(frame.text)
        stats.frames_rendered = 1

    def _animate(self, frames: Sequence[RenderedFrame], stats: PlaybackStats) -> None:
        """Frame loop for multi-frame input."""
        if self._stop_requested(stats):
            return

        logger.info(
            f"Starting animation: {len(frames)} frames, loop={self.loop}"
            + (" (Ctrl+C to stop)" if self.loop else "")
        )

        # Full clear once; every frame afterwards only homes the cursor.
        self._write(CLEAR_SCREEN + CURSOR_HOME)

        index = 0
        while True:
            if self._stop_requested(stats):
                return

            frame = frames[index]
            started = self.clock.monotonic()
            self._enter(index)
            self._write(CURSOR_HOME + frame.text)
            stats.frames_rendered += 1

            if self._stop_requested(stats):
                return

            elapsed = self.clock.monotonic() - started
            self.clock.sleep(max(self._delay_seconds(frame) - elapsed, 0.0))

            if index + 1 < len(frames):
                index += 1
                continue

            stats.loops_completed += 1
            if not self.loop:
                return
            index = 0

    def _stop_requested(self, stats: PlaybackStats) -> bool:
        if not self.stop_token.is_set():
            return False
        stats.stopped = True
        logger.info("Playback stopped")
        return True

    def _enter(self, index: int) -> None:
        self._state = PlaybackState.RENDERING
        self._frame_index = index

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def _delay_seconds(self, frame: RenderedFrame) -> float:
        return max(frame.duration_ms, self.min_frame_delay_ms) / 1000.0
