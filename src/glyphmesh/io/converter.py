"""Converters between fonttools and domain models.

This module turns fonttools glyphs into ``GlyphOutline`` objects carrying
the path commands the geometry core consumes.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont

from glyphmesh.domain import (
    Close,
    CubicTo,
    GlyphOutline,
    LineTo,
    MoveTo,
    PathCommand,
    QuadTo,
)


class PathCommandPen(BasePen):
    """Pen that records a glyph outline as glyphmesh path commands.

    ``BasePen`` already resolves the parts of the fonttools pen protocol the
    core does not understand: implied on-curve points in TrueType
    quadratic runs, contours made only of off-curve points, super-Bezier
    cubic runs and composite glyphs (drawn through ``glyphSet`` with their
    transformation applied).

    Example:
        pen = PathCommandPen(font.getGlyphSet())
        font.getGlyphSet()["A"].draw(pen)
        commands = pen.commands
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(MoveTo(pt[0], pt[1]))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(LineTo(pt[0], pt[1]))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(QuadTo(pt1[0], pt1[1], pt2[0], pt2[1]))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(CubicTo(pt1[0], pt1[1], pt2[0], pt2[1], pt3[0], pt3[1]))

    def _closePath(self) -> None:
        self.commands.append(Close())

    def _endPath(self) -> None:
        # Open contours are closed by the contour builder when it flushes them
        pass


def fonttools_glyph_to_outline(
    name: str,
    fonttools_glyph: Any,
    font: TTFont,
    unicode_value: int | None = None,
) -> GlyphOutline:
    """Convert a fonttools glyph to a domain ``GlyphOutline``.

    Handles both TrueType (quadratic curves) and OpenType/CFF (cubic
    curves). Winding is left as drawn; the hierarchy resolver classifies
    contours geometrically.

    Args:
        name: Name of the glyph
        fonttools_glyph: The fonttools glyph object from GlyphSet
        font: The TTFont object for accessing metrics
        unicode_value: Code point the glyph was looked up by, if any

    Returns:
        Domain GlyphOutline

    Raises:
        Exception: If fonttools cannot draw the glyph
    """
    pen = PathCommandPen(font.getGlyphSet())
    fonttools_glyph.draw(pen)

    advance_width = 0
    hmtx = font.get("hmtx")
    if hmtx and name in hmtx.metrics:
        advance_width, _lsb = hmtx.metrics[name]

    return GlyphOutline(
        index=font.getGlyphID(name),
        name=name,
        unicode=unicode_value,
        advance_width=float(advance_width),
        commands=tuple(pen.commands),
    )
