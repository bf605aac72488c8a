"""Utility functions for rastertrace.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics tracking
"""

from rastertrace.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
