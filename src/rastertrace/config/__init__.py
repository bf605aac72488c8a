"""Configuration management for rastertrace.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ContourConfig: Tracing settings (pixel origin, straight-run joining, saddles)
- SimplifyConfig: Ring simplification settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- RasterTraceSettings: Main application settings
"""

from rastertrace.config.settings import (
    ContourConfig,
    LoggingConfig,
    PixelOrigin,
    ProcessingConfig,
    RasterTraceSettings,
    SaddlePolicy,
    SimplifyConfig,
    get_default_settings,
)

__all__ = [
    "ContourConfig",
    "LoggingConfig",
    "PixelOrigin",
    "ProcessingConfig",
    "RasterTraceSettings",
    "SaddlePolicy",
    "SimplifyConfig",
    "get_default_settings",
]
