"""Configuration settings for rastertrace."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class PixelOrigin(str, Enum):
    """Where a pixel's integer coordinate sits within the pixel."""

    CENTER = "center"
    CORNER = "corner"


class SaddlePolicy(str, Enum):
    """How saddle cells (two set corners on one diagonal) are resolved."""

    CONNECT = "connect"
    SEPARATE = "separate"


class ContourConfig(BaseModel):
    """Configuration for contour tracing."""

    pixel_origin: PixelOrigin = Field(
        default=PixelOrigin.CENTER,
        description="Pixel coordinate convention; corner shifts output by +0.5",
    )
    join_straight_segments: bool = Field(
        default=True,
        description="Collapse runs of collinear unit segments into a single edge",
    )
    saddle_policy: SaddlePolicy = Field(
        default=SaddlePolicy.CONNECT,
        description="Connect or separate diagonally touching set pixels",
    )

    @property
    def offset(self) -> float:
        """Offset added to every output coordinate."""
        if self.pixel_origin == PixelOrigin.CORNER:
            return 0.5
        return 0.0


class SimplifyConfig(BaseModel):
    """Configuration for ring simplification."""

    enabled: bool = Field(
        default=True,
        description="Simplify rings after tracing",
    )
    area_threshold: float = Field(
        default=10.0,
        ge=0.0,
        description="Largest triangle area (in squared pixels) a removed vertex may span",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RasterTraceSettings(BaseModel):
    """Main application settings."""

    contour: ContourConfig = Field(default_factory=ContourConfig)
    simplify: SimplifyConfig = Field(default_factory=SimplifyConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterTraceSettings:
    """Get default application settings."""
    return RasterTraceSettings()
