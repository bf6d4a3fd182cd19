"""
Image Decoder
=============

Dedicated module for decoding image bytes into RawFrame sequences.

Design Rules:
    - This is the ONLY place in the codebase that decodes images
    - Always yields at least one frame, or raises
    - Static images yield exactly one frame with duration_ms == 0
    - Animated images keep source frame order and per-frame durations
    - Fails fast on corrupt, truncated or unrecognized input
"""

import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
from PIL import Image, ImageSequence, UnidentifiedImageError

from termascii.errors import (
    EmptyAnimation,
    ImageTooLarge,
    InputNotFound,
    UnsupportedFormat,
)
from termascii.models.frame import RawFrame


logger = logging.getLogger(__name__)


# Many GIF encoders write 0 to mean "use the viewer's default".
DEFAULT_FRAME_DURATION_MS = 100

# Exceptions Pillow raises for bad or truncated data.
_PIL_DECODE_ERRORS = (UnidentifiedImageError, OSError, SyntaxError, EOFError, ValueError)


def detect_format(path: Union[str, Path]) -> Optional[str]:
    """
    Map a file extension to a Pillow format name.

    Args:
        path: Input file path

    Returns:
        Pillow format id (e.g. "GIF", "PNG"), or None if the
        extension is unknown and content sniffing should decide.
    """
    suffix = Path(path).suffix.lower()
    if not suffix:
        return None
    return Image.registered_extensions().get(suffix)


def decode_bytes(
    data: bytes,
    format_hint: Optional[str] = None,
    default_duration_ms: int = DEFAULT_FRAME_DURATION_MS,
) -> List[RawFrame]:
    """
    Decode an image byte stream into frames.

    Args:
        data: Raw file contents
        format_hint: Pillow format id to restrict decoding to, or None
            to let Pillow sniff the content
        default_duration_ms: Duration for animated frames declaring zero

    Returns:
        Non-empty list of RawFrame in source order

    Raises:
        UnsupportedFormat: If the bytes are not a valid image of a
            supported (or the hinted) format, or are truncated
        EmptyAnimation: If no frame could be decoded
        ImageTooLarge: If the image exceeds Pillow's pixel limit
    """
    if not data:
        raise UnsupportedFormat("Input is empty")

    formats = [format_hint.upper()] if format_hint else None

    try:
        with Image.open(io.BytesIO(data), formats=formats) as image:
            detected = image.format
            animated = getattr(image, "is_animated", False)
            frames = _collect_frames(image, animated, default_duration_ms)
    except Image.DecompressionBombError as e:
        raise ImageTooLarge(f"Image exceeds the decoder pixel limit: {e}") from e
    except _PIL_DECODE_ERRORS as e:
        hint = f" as {format_hint}" if format_hint else ""
        raise UnsupportedFormat(f"Cannot decode input{hint}: {e}") from e

    if not frames:
        raise EmptyAnimation(f"{detected or 'Image'} contains no frames")

    logger.debug(
        f"Decoded {len(frames)} frame(s) from {detected} "
        f"({frames[0].width}x{frames[0].height}, animated={animated})"
    )
    return frames


def decode_file(
    path: Union[str, Path],
    default_duration_ms: int = DEFAULT_FRAME_DURATION_MS,
) -> List[RawFrame]:
    """
    Read and decode an image file.

    The format hint is derived from the file extension; unknown
    extensions fall back to content sniffing.

    Args:
        path: Input file path
        default_duration_ms: Duration for animated frames declaring zero

    Returns:
        Non-empty list of RawFrame in source order

    Raises:
        InputNotFound: If the file is missing or unreadable
        UnsupportedFormat: If the content cannot be decoded
        EmptyAnimation: If no frame could be decoded
        ImageTooLarge: If the image exceeds Pillow's pixel limit
    """
    path = Path(path).expanduser()
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputNotFound(f"Cannot read input file {path}: {e.strerror or e}") from e

    return decode_bytes(
        data,
        format_hint=detect_format(path),
        default_duration_ms=default_duration_ms,
    )


def _collect_frames(
    image: Image.Image,
    animated: bool,
    default_duration_ms: int,
) -> List[RawFrame]:
    """Convert every frame of an open Pillow image to RawFrame."""
    frames: List[RawFrame] = []
    for index, frame in enumerate(ImageSequence.Iterator(image)):
        pixels = _to_rgba(frame)
        duration = _frame_duration(frame, default_duration_ms) if animated else 0
        frames.append(RawFrame(pixels=pixels, duration_ms=duration, index=index))
    return frames


def _frame_duration(frame: Image.Image, default_duration_ms: int) -> int:
    """Declared frame duration in ms, with the zero/missing fallback."""
    declared = frame.info.get("duration") or 0
    duration = int(round(declared))
    if duration <= 0:
        return default_duration_ms
    return duration


def _to_rgba(frame: Image.Image) -> np.ndarray:
    """
    RGBA uint8 pixels for one frame.

    Wide integer grayscale (16-bit PNG/TIFF) keeps its high byte;
    Image.convert would clip those values to 255 instead.
    """
    if frame.mode == "I" or frame.mode.startswith("I;16"):
        wide = np.asarray(frame).astype(np.int64)
        gray = np.clip(wide >> 8, 0, 255).astype(np.uint8)
        alpha = np.full(gray.shape, 255, dtype=np.uint8)
        return np.dstack([gray, gray, gray, alpha])
    return np.array(frame.convert("RGBA"), dtype=np.uint8)
