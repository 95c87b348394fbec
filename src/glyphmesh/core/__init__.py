"""Core geometry and layout algorithms for glyphmesh.

This module contains the core algorithms for:

- Outline flattening (quadratic and cubic Bezier subdivision)
- Contour hierarchy resolution (roots, holes, islands)
- Ear-clipping triangulation with holes
- Text layout (wrapping, overflow, alignment)
- Mesh building for vector and atlas text

All services are designed to be:
- Synchronous and free of I/O
- Deterministic for equal inputs
- Safe to share between threads (the triangulation cache is locked)

Key functions:
- layout_text: Lay out a string with default options

Key classes:
- ContourBuilder: Converts outline commands into closed polylines
- ContourHierarchyResolver: Assigns holes to their containing roots
- GlyphTriangulator: Outline commands to triangle buffers
- GlyphTriangulationCache: Weak per-font triangulation cache
- TextLayoutEngine: Positions glyphs for a string
- VectorTextGeometryBuilder: Triangle meshes for outline fonts
- AtlasTextGeometryBuilder: Textured quads for SDF/MSDF atlases
"""

from glyphmesh.core.atlas_geometry import AtlasTextGeometryBuilder
from glyphmesh.core.cache import GlyphTriangulationCache
from glyphmesh.core.contours import ContourBuilder
from glyphmesh.core.hierarchy import (
    ContourHierarchy,
    ContourHierarchyResolver,
    ContourRole,
)
from glyphmesh.core.layout import TextLayoutEngine, layout_text
from glyphmesh.core.text_geometry import VectorTextGeometryBuilder
from glyphmesh.core.triangulator import GlyphTriangulator, PolygonTriangulator

__all__ = [
    # Geometry classes
    "ContourBuilder",
    "ContourHierarchy",
    "ContourHierarchyResolver",
    "ContourRole",
    "GlyphTriangulationCache",
    "GlyphTriangulator",
    "PolygonTriangulator",
    # Layout and meshes
    "AtlasTextGeometryBuilder",
    "TextLayoutEngine",
    "VectorTextGeometryBuilder",
    # Functions
    "layout_text",
]
