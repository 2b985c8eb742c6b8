"""Utility functions for gerberview.

This module provides utility functions including:

- Logging setup and configuration
- Render and build statistics
"""

from gerberview.utils.logging import (
    BuildStats,
    RenderLogger,
    RenderStats,
    configure_logging,
)

__all__ = [
    "BuildStats",
    "RenderLogger",
    "RenderStats",
    "configure_logging",
]
