"""
Test Configuration
==================

Pytest fixtures and test configuration for termascii.

Images are built in memory with Pillow; no sample files are needed.
"""

import io
import logging

import pytest
from PIL import Image


class FakeClock:
    """Clock double that records sleeps instead of waiting."""

    def __init__(self, on_sleep=None):
        self.now = 0.0
        self.sleeps = []
        self._on_sleep = on_sleep

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        if self._on_sleep is not None:
            self._on_sleep(len(self.sleeps))


def _encode(image: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt, **params)
    return buf.getvalue()


@pytest.fixture
def fake_clock():
    """Provide a FakeClock."""
    return FakeClock()


@pytest.fixture
def clock_factory():
    """Provide the FakeClock class for tests that need a sleep hook."""
    return FakeClock


@pytest.fixture
def gray_png_bytes():
    """Provide a 100x50 solid mid-gray (128, 128, 128) PNG."""
    return _encode(Image.new("RGB", (100, 50), (128, 128, 128)), "PNG")


@pytest.fixture
def two_frame_gif_bytes():
    """Provide a 20x10 two-frame GIF (black, white) with durations 50/150 ms."""
    black = Image.new("RGB", (20, 10), (0, 0, 0))
    white = Image.new("RGB", (20, 10), (255, 255, 255))
    return _encode(
        black,
        "GIF",
        save_all=True,
        append_images=[white],
        duration=[50, 150],
        loop=0,
    )


@pytest.fixture
def zero_duration_gif_bytes():
    """Provide a two-frame GIF whose frames declare no duration."""
    black = Image.new("RGB", (20, 10), (0, 0, 0))
    white = Image.new("RGB", (20, 10), (255, 255, 255))
    return _encode(black, "GIF", save_all=True, append_images=[white], duration=0)


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
