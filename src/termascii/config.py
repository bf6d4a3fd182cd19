"""
termascii Configuration
=======================

This module handles configuration loading for the renderer.

Two layers live here:
    - Settings: process-wide defaults (render defaults, playback timing,
      logging), loaded once from YAML and the environment.
    - RenderConfig: the resolved, immutable per-run settings the pipeline
      consumes. Built from CLI flags on top of Settings defaults.

Configuration Sources for Settings (in order of precedence):
    1. Environment variables (highest priority)
    2. termascii.yaml (working dir) or ~/.config/termascii/config.yaml
    3. Default values (lowest priority)

Environment Variable Mapping:
    TERMASCII_WIDTH            -> render.width
    TERMASCII_CONTRAST         -> render.contrast
    TERMASCII_CELL_ASPECT      -> render.cell_aspect_ratio
    TERMASCII_DEFAULT_FRAME_MS -> playback.default_frame_ms
    TERMASCII_MIN_FRAME_MS     -> playback.min_frame_ms
    TERMASCII_LOG_LEVEL        -> logging.level
    TERMASCII_LOG_FORMAT       -> logging.format

Example:
    from termascii.config import RenderConfig, load_config

    settings = load_config()
    config = RenderConfig.from_values(
        width=80,
        color=True,
        cell_aspect_ratio=settings.render.cell_aspect_ratio,
    )
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from termascii.errors import InvalidConfig


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class RenderDefaults(BaseModel):
    """Defaults applied when the caller does not pass a value."""

    width: int = Field(default=100, gt=0, description="Output width in characters")
    contrast: float = Field(default=1.0, gt=0, description="Contrast factor (1.0 = neutral)")
    cell_aspect_ratio: float = Field(
        default=2.0,
        gt=0,
        description="Character cell height / width",
    )


class PlaybackConfig(BaseModel):
    """Animation timing configuration."""

    default_frame_ms: int = Field(
        default=100,
        gt=0,
        description="Duration used for GIF frames that declare zero",
    )
    min_frame_ms: int = Field(
        default=20,
        ge=0,
        description="Lower bound on the sleep between frames",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for termascii.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    render: RenderDefaults = Field(default_factory=RenderDefaults)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class RenderConfig(BaseModel):
    """
    Resolved, immutable render settings for one invocation.

    Constructed once before any frame is decoded and never mutated
    while rendering (the model is frozen).

    Attributes:
        width: Target width in characters
        invert: Invert luminance (for light-on-dark mapping)
        contrast: Contrast factor around mid-gray (1.0 = neutral)
        color: Emit 24-bit ANSI color per cell
        loop: Repeat animated input until interrupted
        cell_aspect_ratio: Terminal cell height / width correction
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=100, gt=0)
    invert: bool = False
    contrast: float = Field(default=1.0, gt=0)
    color: bool = False
    loop: bool = False
    cell_aspect_ratio: float = Field(default=2.0, gt=0)

    @classmethod
    def from_values(cls, **values) -> "RenderConfig":
        """
        Build a RenderConfig, reporting range errors as InvalidConfig.

        Args:
            **values: Field values; None entries fall back to defaults

        Returns:
            RenderConfig: Validated configuration

        Raises:
            InvalidConfig: If width or contrast is not positive
        """
        cleaned = {k: v for k, v in values.items() if v is not None}
        try:
            return cls(**cleaned)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidConfig(f"Invalid render configuration: {problems}") from e


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to a YAML file. If None, searches common locations.

    Returns:
        Settings: Loaded configuration

    Raises:
        InvalidConfig: If the file or environment holds out-of-range values
    """
    # Find config file
    if config_path is None:
        search_paths = [
            Path("termascii.yaml"),
            Path("termascii.yml"),
            Path.home() / ".config" / "termascii" / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfig(f"Cannot parse config file {config_path}: {e}") from e
        if not isinstance(config_data, dict):
            raise InvalidConfig(f"Config file must hold a mapping: {config_path}")
    elif config_path:
        raise InvalidConfig(f"Config file not found: {config_path}")
    else:
        logger.debug("No config file found, using defaults and environment variables")

    try:
        _apply_env_overrides(config_data)
        return Settings.model_validate(config_data)
    except (ValueError, ValidationError) as e:
        raise InvalidConfig(f"Invalid settings: {e}") from e


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Render defaults
    if env_width := os.environ.get("TERMASCII_WIDTH"):
        config_data.setdefault("render", {})["width"] = int(env_width)
    if env_contrast := os.environ.get("TERMASCII_CONTRAST"):
        config_data.setdefault("render", {})["contrast"] = float(env_contrast)
    if env_aspect := os.environ.get("TERMASCII_CELL_ASPECT"):
        config_data.setdefault("render", {})["cell_aspect_ratio"] = float(env_aspect)

    # Playback timing
    if env_default_ms := os.environ.get("TERMASCII_DEFAULT_FRAME_MS"):
        config_data.setdefault("playback", {})["default_frame_ms"] = int(env_default_ms)
    if env_min_ms := os.environ.get("TERMASCII_MIN_FRAME_MS"):
        config_data.setdefault("playback", {})["min_frame_ms"] = int(env_min_ms)

    # Logging settings
    if env_log := os.environ.get("TERMASCII_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_fmt := os.environ.get("TERMASCII_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_fmt


def setup_logging(settings: Settings) -> None:
    """
    Configure logging based on settings.

    Logs go to stderr; stdout carries the rendered art.
    """
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
