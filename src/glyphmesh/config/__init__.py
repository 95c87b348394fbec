"""Configuration management for glyphmesh.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Outline flattening settings
- LayoutOptions: Outline-font text layout options
- AtlasTextOptions: SDF atlas text options
- LoggingConfig: Logging settings
- GlyphMeshSettings: Main application settings
"""

from glyphmesh.config.settings import (
    Align,
    AtlasTextOptions,
    GeometryConfig,
    GlyphMeshSettings,
    LayoutOptions,
    LoggingConfig,
    Overflow,
    WordWrap,
    get_default_settings,
)

__all__ = [
    "Align",
    "AtlasTextOptions",
    "GeometryConfig",
    "GlyphMeshSettings",
    "LayoutOptions",
    "LoggingConfig",
    "Overflow",
    "WordWrap",
    "get_default_settings",
]
