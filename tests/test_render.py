"""
Render Tests
============

Tests for ANSI text composition and the animation player.
"""

import io
import threading
import time

import numpy as np
import pytest

from termascii.models import CharacterGrid
from termascii.render import (
    CLEAR_SCREEN,
    CURSOR_HOME,
    RESET,
    AnimationPlayer,
    PlaybackState,
    RenderedFrame,
    StopToken,
    SystemClock,
    render_grid,
    rgb_to_ansi,
)


class TestRenderGrid:
    """Tests for grid -> text composition."""

    def test_plain_rows_end_with_newline(self):
        grid = CharacterGrid(glyphs=["ab", "cd"])
        assert render_grid(grid) == "ab\ncd\n"

    def test_color_cells_prefixed_and_rows_reset(self):
        colors = np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8)
        grid = CharacterGrid(glyphs=["xy"], colors=colors)

        text = render_grid(grid)
        assert text == (
            "\x1b[38;2;1;2;3mx"
            "\x1b[38;2;4;5;6my"
            "\x1b[0m\n"
        )

    def test_rgb_to_ansi(self):
        assert rgb_to_ansi(255, 0, 10) == "\x1b[38;2;255;0;10m"
        assert RESET == "\x1b[0m"

    def test_grid_rejects_ragged_rows(self):
        with pytest.raises(ValueError):
            CharacterGrid(glyphs=["abc", "d"])

    def test_grid_rejects_mismatched_colors(self):
        with pytest.raises(ValueError):
            CharacterGrid(glyphs=["ab"], colors=np.zeros((1, 3, 3), dtype=np.uint8))


class TestPlayerSingleFrame:
    """Tests for static (single-frame) playback."""

    def test_writes_once_without_sleeping(self, fake_clock):
        out = io.StringIO()
        player = AnimationPlayer(out=out, loop=True, clock=fake_clock)

        stats = player.play([RenderedFrame(text="@@\n", duration_ms=500)])

        assert out.getvalue() == "@@\n"
        assert fake_clock.sleeps == []
        assert stats.frames_rendered == 1
        assert player.state == PlaybackState.DONE

    def test_starts_idle(self):
        player = AnimationPlayer(out=io.StringIO())
        assert player.state == PlaybackState.IDLE
        assert player.frame_index is None

    def test_stop_before_write_skips_frame(self, fake_clock):
        token = StopToken()
        token.set()
        out = io.StringIO()
        player = AnimationPlayer(out=out, clock=fake_clock, stop_token=token)

        stats = player.play([RenderedFrame(text="@@\n")])

        assert out.getvalue() == ""
        assert stats.frames_rendered == 0
        assert stats.stopped is True
        assert player.state == PlaybackState.DONE

    def test_empty_sequence_rejected(self, fake_clock):
        player = AnimationPlayer(out=io.StringIO(), clock=fake_clock)
        with pytest.raises(ValueError):
            player.play([])


class TestPlayerAnimation:
    """Tests for multi-frame playback."""

    def test_plays_once_with_frame_durations(self, fake_clock):
        """Two frames, 50 ms and 150 ms, no loop."""
        out = io.StringIO()
        player = AnimationPlayer(out=out, loop=False, clock=fake_clock)
        frames = [
            RenderedFrame(text="A\n", duration_ms=50),
            RenderedFrame(text="B\n", duration_ms=150),
        ]

        stats = player.play(frames)

        assert out.getvalue() == (
            CLEAR_SCREEN + CURSOR_HOME
            + CURSOR_HOME + "A\n"
            + CURSOR_HOME + "B\n"
        )
        assert fake_clock.sleeps == pytest.approx([0.05, 0.15])
        assert stats.to_dict() == {
            "frames_rendered": 2,
            "loops_completed": 1,
            "stopped": False,
        }
        assert player.state == PlaybackState.DONE
        assert player.frame_index is None

    def test_state_while_rendering(self, clock_factory):
        seen = []
        frames = [RenderedFrame(text=f"{i}\n", duration_ms=30) for i in range(3)]

        def on_sleep(_count):
            seen.append((player.state, player.frame_index))

        player = AnimationPlayer(out=io.StringIO(), clock=clock_factory(on_sleep))
        player.play(frames)

        assert seen == [
            (PlaybackState.RENDERING, 0),
            (PlaybackState.RENDERING, 1),
            (PlaybackState.RENDERING, 2),
        ]

    def test_minimum_frame_delay(self, fake_clock):
        player = AnimationPlayer(out=io.StringIO(), clock=fake_clock)
        player.play([
            RenderedFrame(text="a\n", duration_ms=5),
            RenderedFrame(text="b\n", duration_ms=0),
        ])
        assert fake_clock.sleeps == pytest.approx([0.02, 0.02])

    def test_loop_wraps_until_stopped(self, clock_factory):
        """Looping replays from frame 0 until the stop token is set."""
        token = StopToken()
        out = io.StringIO()

        def on_sleep(count):
            if count == 5:
                token.set()

        player = AnimationPlayer(
            out=out,
            loop=True,
            clock=clock_factory(on_sleep),
            stop_token=token,
        )
        stats = player.play([
            RenderedFrame(text="A\n", duration_ms=40),
            RenderedFrame(text="B\n", duration_ms=60),
        ])

        assert stats.frames_rendered == 5
        assert stats.loops_completed == 2
        assert stats.stopped is True
        assert out.getvalue().count("A\n") == 3
        assert out.getvalue().count("B\n") == 2
        assert player.state == PlaybackState.DONE

    def test_stop_before_start_writes_no_frames(self, fake_clock):
        token = StopToken()
        token.set()
        out = io.StringIO()
        player = AnimationPlayer(out=out, loop=True, clock=fake_clock, stop_token=token)

        stats = player.play([
            RenderedFrame(text="A\n", duration_ms=40),
            RenderedFrame(text="B\n", duration_ms=60),
        ])

        assert stats.frames_rendered == 0
        assert stats.stopped is True
        assert "A\n" not in out.getvalue()
        assert fake_clock.sleeps == []

    def test_stop_during_frame_skips_sleep(self, fake_clock):
        """A stop requested while a frame is drawn returns before sleeping."""
        token = StopToken()
        player = AnimationPlayer(
            out=_HookedStream(lambda text: "A\n" in text and token.set()),
            clock=fake_clock,
            stop_token=token,
        )

        stats = player.play([
            RenderedFrame(text="A\n", duration_ms=5000),
            RenderedFrame(text="B\n", duration_ms=60),
        ])

        assert fake_clock.sleeps == []
        assert stats.frames_rendered == 1
        assert stats.stopped is True
        assert "B\n" not in player.out.getvalue()

    def test_write_time_deducted_from_delay(self, fake_clock):
        def advance(_text):
            fake_clock.now += 0.01

        player = AnimationPlayer(out=_HookedStream(advance), clock=fake_clock)
        player.play([
            RenderedFrame(text="a\n", duration_ms=50),
            RenderedFrame(text="b\n", duration_ms=150),
        ])

        assert fake_clock.sleeps == pytest.approx([0.04, 0.14])

    def test_negative_min_delay_rejected(self):
        with pytest.raises(ValueError):
            AnimationPlayer(out=io.StringIO(), min_frame_delay_ms=-1)


class TestStopToken:
    """Tests for the cooperative stop signal."""

    def test_set_and_clear(self):
        token = StopToken()
        assert not token.is_set()
        token.set()
        assert token.is_set()
        token.clear()
        assert not token.is_set()


class TestSystemClock:
    """Tests for the real-time clock."""

    def test_sleep_returns_early_when_token_already_set(self):
        token = StopToken()
        token.set()
        clock = SystemClock(token)

        started = time.monotonic()
        clock.sleep(5.0)
        assert time.monotonic() - started < 1.0

    def test_sleep_wakes_when_token_set_from_another_thread(self):
        token = StopToken()
        clock = SystemClock(token, poll_interval=0.01)
        timer = threading.Timer(0.05, token.set)
        timer.start()
        try:
            started = time.monotonic()
            clock.sleep(5.0)
            assert time.monotonic() - started < 2.0
        finally:
            timer.cancel()

    def test_sleep_without_token_waits(self):
        clock = SystemClock()
        started = clock.monotonic()
        clock.sleep(0.02)
        assert clock.monotonic() - started >= 0.015

    def test_rejects_non_positive_poll_interval(self):
        with pytest.raises(ValueError):
            SystemClock(StopToken(), poll_interval=0)


class _HookedStream(io.StringIO):
    """StringIO that calls a hook with each written chunk."""

    def __init__(self, hook):
        super().__init__()
        self._hook = hook

    def write(self, text):
        self._hook(text)
        return super().write(text)
