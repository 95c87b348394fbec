"""Glyph representation and triangulation results.

This module defines the glyph domain models: the outline a font collaborator
hands over, and the triangulated geometry produced from it.
"""

from dataclasses import dataclass, field

import numpy as np

from glyphmesh.domain.commands import PathCommand

UINT16_MAX_VERTICES = 65535


def index_dtype_for(vertex_count: int) -> type[np.unsignedinteger]:
    """Pick the narrowest index type able to address ``vertex_count`` vertices.

    Args:
        vertex_count: Number of vertices the indices refer to

    Returns:
        ``np.uint16`` up to 65535 vertices, ``np.uint32`` above that
    """
    return np.uint32 if vertex_count > UINT16_MAX_VERTICES else np.uint16


@dataclass(frozen=True)
class GlyphOutline:
    """A glyph as provided by the font collaborator.

    Attributes:
        index: Glyph index in the font (cache key)
        name: Glyph name (e.g., "A", "eight", "percent")
        unicode: Unicode code point (None for unencoded glyphs)
        advance_width: Horizontal advance in font units
        commands: Outline drawing commands in font units, Y up
    """

    index: int
    name: str
    unicode: int | None
    advance_width: float
    commands: tuple[PathCommand, ...] = field(default=(), repr=False)

    def is_empty(self) -> bool:
        """Check if glyph has no outline (e.g. space)."""
        return len(self.commands) == 0


@dataclass(frozen=True, eq=False)
class TriangulatedGlyph:
    """Triangulated glyph data ready for upload.

    Attributes:
        vertices: Flat float32 positions ``[x, y, z, x, y, z, ...]`` in font units
        indices: Triangle list, uint16 or uint32 depending on vertex count
    """

    vertices: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> "TriangulatedGlyph":
        """Create a glyph with no vertices and no indices."""
        return cls(
            vertices=np.zeros(0, dtype=np.float32),
            indices=np.zeros(0, dtype=np.uint16),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def is_empty(self) -> bool:
        """Check if the triangulation produced no geometry."""
        return self.vertex_count == 0
