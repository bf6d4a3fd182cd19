"""
Conversion Pipeline
===================

Composes the per-frame stages and hands the result to the player.

    decode -> [per frame] resample -> tone_map -> select_glyphs -> render_grid
           -> AnimationPlayer

Every frame is converted before anything is written, so a failure in any
frame aborts the run without partial output. A stop requested before
playback begins ends the run with nothing written.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Union

from termascii.config import PlaybackConfig, RenderConfig
from termascii.decoding import decode_bytes, decode_file
from termascii.glyphs import select_glyphs
from termascii.models.frame import RawFrame
from termascii.models.grid import CharacterGrid
from termascii.render import (
    AnimationPlayer,
    Clock,
    PlaybackStats,
    RenderedFrame,
    StopToken,
    render_grid,
)
from termascii.sampling import resample
from termascii.tone import tone_map


logger = logging.getLogger(__name__)


def convert_frame(frame: RawFrame, config: RenderConfig) -> CharacterGrid:
    """
    Convert one decoded frame into a character grid.

    Pure function of its inputs.

    Args:
        frame: Decoded frame
        config: Render configuration

    Returns:
        CharacterGrid of config.width columns
    """
    cells = resample(frame, config.width, config.cell_aspect_ratio)
    tones = tone_map(cells, config)
    return select_glyphs(tones, config)


def frame_to_text(frame: RawFrame, config: RenderConfig) -> str:
    """Convert one decoded frame straight to terminal text."""
    return render_grid(convert_frame(frame, config))


class AsciiPipeline:
    """
    End-to-end image to terminal-art pipeline.

    Attributes:
        config: Resolved render configuration
        playback: Animation timing settings

    Example:
        config = RenderConfig.from_values(width=80, color=True)
        pipeline = AsciiPipeline(config)
        stats = pipeline.run_file("cat.gif")
    """

    def __init__(
        self,
        config: RenderConfig,
        playback: Optional[PlaybackConfig] = None,
        out: Optional[TextIO] = None,
        clock: Optional[Clock] = None,
        stop_token: Optional[StopToken] = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            config: Resolved render configuration
            playback: Frame timing defaults (defaults to PlaybackConfig())
            out: Output stream (defaults to sys.stdout)
            clock: Time source for animation (defaults to SystemClock)
            stop_token: Cooperative stop signal for looping playback
        """
        self.config = config
        self.playback = playback if playback is not None else PlaybackConfig()
        self.player = AnimationPlayer(
            out=out,
            loop=config.loop,
            clock=clock,
            stop_token=stop_token,
            min_frame_delay_ms=self.playback.min_frame_ms,
        )

    @property
    def stop_token(self) -> StopToken:
        """Stop signal shared with the player."""
        return self.player.stop_token

    def convert(self, frames: Sequence[RawFrame]) -> List[RenderedFrame]:
        """
        Convert decoded frames into rendered text.

        Conversion ends early, returning the frames finished so far, once
        the player's stop token is set.

        Args:
            frames: Decoded frames in display order

        Returns:
            RenderedFrame per converted input frame, durations preserved
        """
        total = len(frames)
        rendered: List[RenderedFrame] = []
        for frame in frames:
            if self.stop_token.is_set():
                logger.info(f"Conversion stopped after {len(rendered)}/{total} frames")
                break
            if total > 1:
                logger.debug(f"Converting frame {frame.index + 1}/{total}")
            rendered.append(
                RenderedFrame(
                    text=frame_to_text(frame, self.config),
                    duration_ms=frame.duration_ms,
                )
            )
        else:
            if total > 1:
                logger.info(f"Frame conversion complete: {total} frames")
        return rendered

    def run_frames(self, frames: Sequence[RawFrame]) -> PlaybackStats:
        """Convert and play already decoded frames."""
        rendered = self.convert(frames)
        if self.stop_token.is_set():
            stats = PlaybackStats()
            stats.stopped = True
            return stats
        return self.player.play(rendered)

    def run_file(self, path: Union[str, Path]) -> PlaybackStats:
        """
        Decode, convert and play an image file.

        Raises:
            InputNotFound: If the file cannot be read
            DecodeError: If the file cannot be decoded
        """
        logger.info(f"Processing input: {path}")
        frames = decode_file(path, default_duration_ms=self.playback.default_frame_ms)
        self._log_decoded(frames)
        return self.run_frames(frames)

    def run_bytes(self, data: bytes, format_hint: Optional[str] = None) -> PlaybackStats:
        """
        Decode, convert and play an in-memory image.

        Raises:
            DecodeError: If the bytes cannot be decoded
        """
        frames = decode_bytes(
            data,
            format_hint=format_hint,
            default_duration_ms=self.playback.default_frame_ms,
        )
        self._log_decoded(frames)
        return self.run_frames(frames)

    def _log_decoded(self, frames: Sequence[RawFrame]) -> None:
        first = frames[0]
        if len(frames) > 1:
            logger.info(f"Detected animation: {len(frames)} frames ({first.width}x{first.height})")
        else:
            logger.info(f"Loaded static image ({first.width}x{first.height})")
