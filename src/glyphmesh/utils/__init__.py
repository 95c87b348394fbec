"""Utility functions for glyphmesh.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics tracking
"""

from glyphmesh.utils.logging import (
    BuildStats,
    GeometryLogger,
    configure_logging,
)

__all__ = [
    "BuildStats",
    "GeometryLogger",
    "configure_logging",
]
