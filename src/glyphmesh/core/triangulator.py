"""Glyph outline triangulation.

This module turns resolved contours into one triangle buffer per glyph:
- PolygonTriangulator: ear-clips each root with its holes and merges the results
- GlyphTriangulator: outline commands -> contours -> hierarchy -> triangles
"""

from collections.abc import Iterable

import mapbox_earcut
import numpy as np

from glyphmesh.config import GeometryConfig
from glyphmesh.core.contours import ContourBuilder
from glyphmesh.core.hierarchy import MIN_CONTOUR_POINTS, ContourHierarchyResolver
from glyphmesh.domain import Contour, PathCommand, TriangulatedGlyph, index_dtype_for


def _ring_points(contour: Contour) -> np.ndarray:
    return np.array([(p.x, p.y) for p in contour.points], dtype=np.float64).reshape(-1, 2)


class PolygonTriangulator:
    """Triangulates root contours (with holes) into a single buffer.

    Each root is ear-clipped on its own, with vertex positions laid out as
    root outline first and then every hole. The per-root index lists are
    rebased by the number of vertices emitted before that root.
    """

    def triangulate(self, roots: Iterable[Contour]) -> TriangulatedGlyph:
        """Triangulate roots and merge them into one glyph buffer.

        Args:
            roots: Root contours with their ``holes`` resolved

        Returns:
            TriangulatedGlyph in font units (z = 0); empty if nothing qualifies
        """
        batches: list[tuple[np.ndarray, np.ndarray]] = []
        total_vertices = 0
        total_indices = 0

        for root in roots:
            if len(root.points) < MIN_CONTOUR_POINTS:
                continue

            rings = [_ring_points(root)]
            ring_ends = [len(root.points)]

            for hole in root.holes:
                if len(hole.points) < MIN_CONTOUR_POINTS:
                    continue
                rings.append(_ring_points(hole))
                ring_ends.append(ring_ends[-1] + len(hole.points))

            xy = np.concatenate(rings)
            triangles = mapbox_earcut.triangulate_float64(
                xy, np.array(ring_ends, dtype=np.uint32)
            )
            batches.append((xy, np.asarray(triangles, dtype=np.int64).ravel()))
            total_vertices += len(xy)
            total_indices += len(triangles)

        if total_vertices == 0:
            return TriangulatedGlyph.empty()

        vertices = np.zeros(total_vertices * 3, dtype=np.float32)
        indices = np.zeros(total_indices, dtype=index_dtype_for(total_vertices))

        v_offset = 0
        i_offset = 0

        for xy, triangles in batches:
            count = len(xy)
            block = vertices[v_offset * 3 : (v_offset + count) * 3].reshape(count, 3)
            block[:, 0:2] = xy

            indices[i_offset : i_offset + len(triangles)] = triangles + v_offset

            v_offset += count
            i_offset += len(triangles)

        return TriangulatedGlyph(vertices=vertices, indices=indices)


class GlyphTriangulator:
    """Converts glyph outline commands into triangulated geometry.

    Example:
        triangulator = GlyphTriangulator(GeometryConfig())
        tri = triangulator.triangulate(glyph.commands, upm=1000)
    """

    def __init__(
        self,
        config: GeometryConfig | None = None,
        resolver: ContourHierarchyResolver | None = None,
        polygon_triangulator: PolygonTriangulator | None = None,
    ) -> None:
        self._config = config or GeometryConfig()
        self._resolver = resolver or ContourHierarchyResolver()
        self._polygons = polygon_triangulator or PolygonTriangulator()

    @property
    def config(self) -> GeometryConfig:
        return self._config

    def contour_builder(self, upm: int | None = None) -> ContourBuilder:
        """Create a contour builder with the tolerance scaled for ``upm``.

        Args:
            upm: Font units per em (None = use the tolerance unscaled)
        """
        tolerance = (
            self._config.get_bezier_tolerance(upm)
            if upm is not None
            else self._config.bezier_flatten_tolerance
        )
        return ContourBuilder(
            tolerance=tolerance,
            max_depth=self._config.max_subdivision_depth,
            close_epsilon=self._config.close_epsilon,
        )

    def triangulate(
        self, commands: Iterable[PathCommand], upm: int | None = None
    ) -> TriangulatedGlyph:
        """Triangulate one glyph outline.

        Args:
            commands: Outline commands in font units
            upm: Font units per em, used to scale the flattening tolerance

        Returns:
            Triangulated glyph (empty for outlines without usable contours)

        Raises:
            ContourError: If the outline contains non-finite coordinates
        """
        contours = self.contour_builder(upm).build(commands)
        if not contours:
            return TriangulatedGlyph.empty()

        roots = self._resolver.resolve(contours)
        return self._polygons.triangulate(roots)
