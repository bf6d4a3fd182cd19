"""
termascii Command Line
======================

Entry point that resolves flags into a RenderConfig and runs the pipeline.

Usage:
    termascii -i cat.gif --loop-gif --color
    termascii -i photo.png -w 80 --invert --contrast 1.4

Exit codes:
    0   - success
    1   - input, config or decode error
    130 - interrupted (SIGINT / SIGTERM) while converting or playing
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from termascii import __version__
from termascii.config import RenderConfig, load_config, setup_logging
from termascii.errors import TermAsciiError
from termascii.pipeline import AsciiPipeline
from termascii.render import StopToken


logger = logging.getLogger(__name__)

# Conventional shell status for a process ended by SIGINT (128 + 2).
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="termascii",
        description="Convert an image or animated GIF to ASCII art in the terminal",
    )
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="Input image file or GIF",
    )
    parser.add_argument(
        "-w", "--width",
        type=int,
        default=None,
        help="Width of the output in characters (default: 100)",
    )
    parser.add_argument(
        "--invert",
        action="store_true",
        help="Invert the character map (use for dark backgrounds)",
    )
    parser.add_argument(
        "--contrast",
        type=float,
        default=None,
        help="Adjust contrast (1.0 = normal, >1.0 = higher contrast)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Output with 24-bit ANSI colors",
    )
    parser.add_argument(
        "--loop-gif",
        action="store_true",
        help="Loop GIF animation until interrupted",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML settings file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_config(args.config)
    except TermAsciiError as e:
        print(f"termascii: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        settings.logging.level = args.log_level
    setup_logging(settings)

    try:
        config = RenderConfig.from_values(
            width=args.width if args.width is not None else settings.render.width,
            contrast=args.contrast if args.contrast is not None else settings.render.contrast,
            invert=args.invert,
            color=args.color,
            loop=args.loop_gif,
            cell_aspect_ratio=settings.render.cell_aspect_ratio,
        )
    except TermAsciiError as e:
        logger.error(str(e))
        return 1

    stop_token = StopToken()
    previous = _install_stop_handlers(stop_token)
    try:
        pipeline = AsciiPipeline(
            config,
            playback=settings.playback,
            out=sys.stdout,
            stop_token=stop_token,
        )
        stats = pipeline.run_file(args.input)
    except TermAsciiError as e:
        logger.error(str(e))
        return 1
    finally:
        _restore_handlers(previous)

    logger.debug(f"Playback stats: {stats.to_dict()}")
    if stats.stopped or stop_token.is_set():
        return EXIT_INTERRUPTED
    return 0


# =============================================================================
# Signal Handlers
# =============================================================================

def _install_stop_handlers(stop_token: StopToken) -> dict:
    """Route SIGINT/SIGTERM to the stop token; returns previous handlers."""

    def _handle_stop(signum, frame):
        stop_token.set()

    previous = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        previous[signum] = signal.signal(signum, _handle_stop)
    return previous


def _restore_handlers(previous: dict) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


if __name__ == "__main__":
    sys.exit(main())
