"""Domain models for glyphmesh.

This module contains the core domain models representing outline commands,
contours, glyphs, layout results, SDF atlases and GPU buffers. Models are:

- Immutable where possible (using frozen dataclasses)
- Independent of fonttools implementation details

Key classes:
- MoveTo/LineTo/QuadTo/CubicTo/Close: Outline drawing commands
- Point, Contour: Flattened polyline geometry
- GlyphOutline, TriangulatedGlyph: Glyph input and triangulated output
- GlyphLayout, TextMetrics: Layout results
- SDFFont, SDFGlyph: Normalized atlas descriptor
- VertexLayout, MeshData: GPU buffers
- FontMetrics: Protocol a font collaborator implements
"""

from glyphmesh.domain.atlas import (
    FieldType,
    SDFCommon,
    SDFDistanceField,
    SDFFont,
    SDFGlyph,
    SDFInfo,
    kerning_key,
)
from glyphmesh.domain.commands import Close, CubicTo, LineTo, MoveTo, PathCommand, QuadTo
from glyphmesh.domain.contour import (
    Contour,
    Point,
    WindingDirection,
    point_in_polygon,
    signed_area,
)
from glyphmesh.domain.font import FontMetrics
from glyphmesh.domain.glyph import GlyphOutline, TriangulatedGlyph, index_dtype_for
from glyphmesh.domain.layout import AtlasTextMetrics, GlyphLayout, TextMetrics
from glyphmesh.domain.mesh import (
    POSITION_NORMAL_UV,
    POSITION_UV,
    AtlasTextMesh,
    MeshData,
    TextMesh,
    VertexAttribute,
    VertexLayout,
)

__all__: list[str] = [
    # Enums
    "FieldType",
    "WindingDirection",
    # Commands
    "Close",
    "CubicTo",
    "LineTo",
    "MoveTo",
    "PathCommand",
    "QuadTo",
    # Geometry
    "Contour",
    "Point",
    "point_in_polygon",
    "signed_area",
    # Glyphs
    "FontMetrics",
    "GlyphOutline",
    "TriangulatedGlyph",
    "index_dtype_for",
    # Layout
    "AtlasTextMetrics",
    "GlyphLayout",
    "TextMetrics",
    # Atlas
    "SDFCommon",
    "SDFDistanceField",
    "SDFFont",
    "SDFGlyph",
    "SDFInfo",
    "kerning_key",
    # Buffers
    "POSITION_NORMAL_UV",
    "POSITION_UV",
    "AtlasTextMesh",
    "MeshData",
    "TextMesh",
    "VertexAttribute",
    "VertexLayout",
]
