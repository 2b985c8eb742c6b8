"""Configuration management for gerberview.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RenderConfiguration: Debug overlays and colouring options for a render
- GeometryConfig: Arc discretisation settings
- ViewConfig: Fit, zoom and animation settings
- PlacementConfig: Initial user placement of a layer
- ProcessingConfig: Document building settings
- LoggingConfig: Logging settings
- GerberViewSettings: Main application settings
"""

from gerberview.config.settings import (
    GeometryConfig,
    GerberViewSettings,
    LoggingConfig,
    PlacementConfig,
    ProcessingConfig,
    RenderConfiguration,
    ViewConfig,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "GerberViewSettings",
    "LoggingConfig",
    "PlacementConfig",
    "ProcessingConfig",
    "RenderConfiguration",
    "ViewConfig",
    "get_default_settings",
]
