"""Vector text geometry.

Builds one interleaved triangle mesh for a string by laying it out and
placing each glyph's cached triangulation at its pen position.
"""

import time

import numpy as np

from glyphmesh.config import GeometryConfig, LayoutOptions
from glyphmesh.core.cache import GlyphTriangulationCache
from glyphmesh.core.layout import TextLayoutEngine
from glyphmesh.core.triangulator import GlyphTriangulator
from glyphmesh.domain import (
    POSITION_NORMAL_UV,
    FontMetrics,
    GlyphOutline,
    MeshData,
    TextMesh,
    TriangulatedGlyph,
    index_dtype_for,
)
from glyphmesh.exceptions import GlyphMeshError, TriangulationError
from glyphmesh.utils.logging import GeometryLogger

_FLOATS_PER_VERTEX = POSITION_NORMAL_UV.floats_per_vertex


class VectorTextGeometryBuilder:
    """Builds triangle meshes for text set in an outline font.

    Output positions are in layout units with Y growing downward from the
    first line's top, matching ``TextMetrics``. Each vertex carries a
    +Z normal and a zero UV.

    Example:
        builder = VectorTextGeometryBuilder()
        text_mesh = builder.build("Hello", font, LayoutOptions(font_size=48))
        upload(text_mesh.mesh.vertices, text_mesh.mesh.indices)
    """

    def __init__(
        self,
        config: GeometryConfig | None = None,
        cache: GlyphTriangulationCache | None = None,
        logger: GeometryLogger | None = None,
        layout_engine: TextLayoutEngine | None = None,
    ) -> None:
        self._triangulator = GlyphTriangulator(config)
        self._cache = cache if cache is not None else GlyphTriangulationCache()
        self._logger = logger or GeometryLogger()
        self._layout = layout_engine or TextLayoutEngine()

    @property
    def cache(self) -> GlyphTriangulationCache:
        return self._cache

    @property
    def logger(self) -> GeometryLogger:
        return self._logger

    def triangulate_glyph(self, font: FontMetrics, glyph: GlyphOutline) -> TriangulatedGlyph:
        """Return the glyph's triangulation, computing it on first use.

        Args:
            font: Font the glyph belongs to (cache key, held weakly)
            glyph: Glyph outline in font units

        Returns:
            Triangulation in font units

        Raises:
            GeometryError: If the outline cannot be triangulated
        """

        def compute() -> TriangulatedGlyph:
            start = time.perf_counter()
            try:
                result = self._triangulator.triangulate(glyph.commands, upm=font.units_per_em)
            except (ArithmeticError, RecursionError) as e:
                raise TriangulationError(glyph.index, str(e)) from e
            self._logger.log_glyph_triangulated(
                glyph.name,
                result.vertex_count,
                result.triangle_count,
                (time.perf_counter() - start) * 1000,
            )
            return result

        return self._cache.get_or_compute(font, glyph.index, compute)

    def build(self, text: str, font: FontMetrics, options: LayoutOptions | None = None) -> TextMesh:
        """Lay out ``text`` and merge the placed glyphs into one mesh.

        Args:
            text: Text to render
            font: Outline font
            options: Layout options

        Returns:
            TextMesh with the merged buffers and the layout metrics
        """
        options = options or LayoutOptions()
        self._logger.log_build_started()
        metrics = self._layout.layout(text, font, options)
        scale = options.font_size / font.units_per_em

        placed: list[tuple[TriangulatedGlyph, float, float]] = []
        total_vertices = 0
        total_indices = 0

        for item in metrics.glyphs:
            if item.glyph.is_empty():
                continue

            hits_before = self._cache.hits
            try:
                tri = self.triangulate_glyph(font, item.glyph)
            except GlyphMeshError as e:
                self._logger.log_glyph_error(item.glyph.name, e)
                continue

            if tri.is_empty():
                self._logger.log_glyph_skipped(item.glyph.name, "no geometry")
                continue

            self._logger.log_glyph_placed(
                tri.vertex_count, tri.triangle_count, cached=self._cache.hits > hits_before
            )
            placed.append((tri, item.x, item.y))
            total_vertices += tri.vertex_count
            total_indices += len(tri.indices)

        vertices = np.zeros(total_vertices * _FLOATS_PER_VERTEX, dtype=np.float32)
        indices = np.zeros(total_indices, dtype=index_dtype_for(total_vertices))
        rows = vertices.reshape(total_vertices, _FLOATS_PER_VERTEX)

        v_offset = 0
        i_offset = 0

        for tri, gx, gy in placed:
            count = tri.vertex_count
            src = tri.vertices.reshape(count, 3)
            block = rows[v_offset : v_offset + count]
            block[:, 0] = src[:, 0] * scale + gx
            block[:, 1] = gy - src[:, 1] * scale
            block[:, 2] = src[:, 2] * scale
            block[:, 5] = 1.0

            n = len(tri.indices)
            indices[i_offset : i_offset + n] = tri.indices.astype(np.int64) + v_offset

            v_offset += count
            i_offset += n

        self._logger.log_build_complete(text[:32])

        return TextMesh(
            mesh=MeshData(vertices=vertices, indices=indices, layout=POSITION_NORMAL_UV),
            metrics=metrics,
        )
