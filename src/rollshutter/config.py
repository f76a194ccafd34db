"""
Consolidated configuration system for rollshutter.

This module provides the Pydantic-based settings (with environment variable
support), the scan direction enum, the frame selectors and the immutable run
configuration handed from the CLI to the compositor.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

# =============================================================================
# PROGRESS SETTINGS
# =============================================================================

class ProgressSettings(BaseModel):
    """Progress reporting configuration."""

    report_every: Annotated[int, Field(
        default=40,
        gt=0,
        description="Frames between progress log lines when no terminal is attached"
    )] = 40

    refresh_per_second: Annotated[float, Field(
        default=10.0,
        gt=0.0,
        description="Refresh rate of the terminal progress bar"
    )] = 10.0


# =============================================================================
# IMAGE SETTINGS
# =============================================================================

class ImageSettings(BaseModel):
    """Output image format settings."""

    supported_output_exts: Annotated[set[str], Field(
        default={".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"},
        description="Output file extensions the encoder can write"
    )] = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"}

    alpha_less_exts: Annotated[set[str], Field(
        default={".jpg", ".jpeg", ".bmp"},
        description="Output formats written without an alpha channel"
    )] = {".jpg", ".jpeg", ".bmp"}

    @field_validator("supported_output_exts", "alpha_less_exts")
    @classmethod
    def validate_extension_format(cls, v):
        """Ensure every extension starts with a dot and is lowercase."""
        for ext in v:
            if not ext.startswith("."):
                raise ValueError(f"Extension must start with dot, got: {ext}")
        return {ext.lower() for ext in v}


# =============================================================================
# LOGGING SETTINGS
# =============================================================================

class LoggingSettings(BaseModel):
    """Console and file logging configuration."""

    log_file: Annotated[Path | None, Field(
        default=None,
        description="Optional file every log line is appended to"
    )] = None

    timestamps: Annotated[bool, Field(
        default=True,
        description="Prefix console lines with an HH:MM:SS timestamp"
    )] = True


# =============================================================================
# DIRECTION ENUM
# =============================================================================

class Direction(str, Enum):
    """Cardinal edge the shutter *starts* from before sweeping to the opposite side."""

    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lookup = {
                "north": cls.N,
                "east": cls.E,
                "south": cls.S,
                "west": cls.W,
            }
            key = value.strip().lower()
            if key in lookup:
                return lookup[key]
            for member in cls:
                if member.value.lower() == key:
                    return member
        return None

    @property
    def is_vertical(self) -> bool:
        """True when the band is a row (the sweep runs along the y axis)."""
        return self in (Direction.N, Direction.S)


# =============================================================================
# PATH SELECTORS
# =============================================================================

class MaskSelector(BaseModel):
    """Frames named by a sequential file mask such as ``foo%03d.png``."""

    kind: Literal["mask"] = "mask"
    pattern: str

    class Config:
        frozen = True


class FolderSelector(BaseModel):
    """Frames taken from a folder. Not implemented; always fails when resolved."""

    kind: Literal["folder"] = "folder"
    path: str

    class Config:
        frozen = True


PathSelector = Annotated[Union[MaskSelector, FolderSelector], Field(discriminator="kind")]


# =============================================================================
# MAIN APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseSettings):
    """
    Main application configuration with environment variable support.

    All settings can be overridden via environment variables with ROLLSHUTTER_ prefix.
    Example: ROLLSHUTTER_PROGRESS__REPORT_EVERY=10
    """

    progress: ProgressSettings = ProgressSettings()
    image: ImageSettings = ImageSettings()
    logging: LoggingSettings = LoggingSettings()

    class Config:
        env_prefix = "ROLLSHUTTER_"
        env_nested_delimiter = "__"
        case_sensitive = False

    def is_supported_output_file(self, path: Path) -> bool:
        """Check if file has supported output extension."""
        return path.suffix.lower() in self.image.supported_output_exts

    def keeps_alpha(self, path: Path) -> bool:
        """Check if the output format at ``path`` stores an alpha channel."""
        return path.suffix.lower() not in self.image.alpha_less_exts


# =============================================================================
# RUN CONFIGURATION
# =============================================================================

class RunConfig(BaseModel):
    """Immutable parameters of a single compositing run."""

    selector: PathSelector
    output: Path
    direction: Direction = Direction.N
    quiet: bool = False

    class Config:
        frozen = True

    @field_validator("output")
    @classmethod
    def validate_output_extension(cls, v):
        """Reject outputs whose extension no encoder is configured for."""
        if not app_config.is_supported_output_file(v):
            supported = ", ".join(sorted(app_config.image.supported_output_exts))
            raise ValueError(f"Unsupported output format '{v.suffix or v.name}'; expected one of: {supported}")
        return v


# =============================================================================
# DEFAULT INSTANCE
# =============================================================================

# Create default configuration instance for easy importing
app_config = AppConfig()

SUPPORTED_OUTPUT_EXTS = app_config.image.supported_output_exts


def create_config_from_env() -> AppConfig:
    """Create a new configuration instance from environment variables."""
    return AppConfig()
