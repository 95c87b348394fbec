"""Command-line interface for glyphmesh.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- mesh: triangulate text set in an outline font
- atlas: build quads from an SDF/MSDF atlas descriptor
- inspect: per-glyph contour hierarchy and triangle counts
- .npz export of vertex and index buffers
"""

from glyphmesh.cli.app import cli, main

__all__ = ["cli", "main"]
