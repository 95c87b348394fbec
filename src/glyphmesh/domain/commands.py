"""Glyph outline drawing commands.

A glyph outline is an ordered sequence of path commands in font design
units with the Y axis pointing up, the same stream a fontTools pen
receives.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment from the current point to (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic Bezier segment with control point (cx, cy) ending at (x, y)."""

    cx: float
    cy: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier segment with control points c1, c2 ending at (x, y)."""

    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Close:
    """Close the current contour."""


PathCommand = Union[MoveTo, LineTo, QuadTo, CubicTo, Close]
