"""
Decoding Module
===============

Turns input bytes into RawFrame sequences.

    - decode_bytes: Decode an in-memory byte stream
    - decode_file: Read and decode a file (extension gives the format hint)
    - detect_format: Extension to Pillow format id

Example:
    from termascii.decoding import decode_file

    frames = decode_file("cat.gif")
    for frame in frames:
        print(frame.index, frame.duration_ms)
"""

from termascii.decoding.image_decoder import (
    DEFAULT_FRAME_DURATION_MS,
    decode_bytes,
    decode_file,
    detect_format,
)


__all__ = [
    "DEFAULT_FRAME_DURATION_MS",
    "decode_bytes",
    "decode_file",
    "detect_format",
]
