"""Results of text layout.

All layout results are immutable: a layout call returns fresh objects and
never mutates them afterwards.
"""

from dataclasses import dataclass

from glyphmesh.domain.glyph import GlyphOutline


@dataclass(frozen=True, slots=True)
class GlyphLayout:
    """A glyph placed at a pen position.

    Attributes:
        glyph: The outline glyph to draw
        x: Pen x in layout units
        y: Baseline y in layout units (increases downward per line)
        line: Index of the line the glyph belongs to
    """

    glyph: GlyphOutline
    x: float
    y: float
    line: int = 0


@dataclass(frozen=True, slots=True)
class TextMetrics:
    """Result of laying out one string.

    Attributes:
        width: Width of the widest emitted line
        height: Number of emitted lines times the line height
        line_count: Number of emitted lines
        glyphs: Positioned glyphs in reading order
    """

    width: float
    height: float
    line_count: int
    glyphs: tuple[GlyphLayout, ...]


@dataclass(frozen=True, slots=True)
class AtlasTextMetrics:
    """Metrics returned by the atlas text builder."""

    width: float
    height: float
    line_count: int
    glyph_count: int
