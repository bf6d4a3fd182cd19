"""
Error Types
===========

Exception hierarchy for the termascii pipeline.

Every error raised by the core derives from TermAsciiError, so the CLI
can report any pipeline failure with a single handler.

Rules:
    - All errors are terminal for the current invocation
    - No partial output: errors surface before any art is written
    - DecodeError covers everything the decoder can reject
"""


class TermAsciiError(Exception):
    """Base class for all termascii errors."""
    pass


class InputNotFound(TermAsciiError):
    """Raised when the input file is missing or unreadable."""
    pass


class InvalidConfig(TermAsciiError):
    """Raised when render settings are out of range (e.g. width <= 0)."""
    pass


class DecodeError(TermAsciiError):
    """Raised when an input byte stream cannot be turned into frames."""
    pass


class UnsupportedFormat(DecodeError):
    """Raised when the bytes are not a recognizable or valid image."""
    pass


class EmptyAnimation(DecodeError):
    """Raised when decoding produced zero frames."""
    pass


class ImageTooLarge(DecodeError):
    """Raised when the image exceeds Pillow's decompression-bomb limit."""
    pass
