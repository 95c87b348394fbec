"""Unit tests for vector text mesh building."""

import math

import numpy as np
import pytest

from glyphmesh.config import LayoutOptions
from glyphmesh.core import GlyphTriangulationCache, VectorTextGeometryBuilder
from glyphmesh.domain import POSITION_NORMAL_UV, Close, GlyphOutline, LineTo, MoveTo


@pytest.fixture
def builder():
    return VectorTextGeometryBuilder()


class TestVectorTextGeometryBuilder:
    """Tests for VectorTextGeometryBuilder.build."""

    def test_buffers(self, builder, stub_font):
        """Two square glyphs give two closed rings of two triangles each."""
        result = builder.build("ab", stub_font, LayoutOptions(font_size=16))
        mesh = result.mesh

        assert mesh.layout is POSITION_NORMAL_UV
        assert mesh.layout.stride == 32
        assert mesh.vertex_count == 10
        assert mesh.triangle_count == 4
        assert mesh.vertices.dtype == np.float32
        assert mesh.indices.dtype == np.uint16

    def test_positions_are_scaled_and_placed(self, builder, stub_font):
        """Glyph geometry is scaled to font size and flipped below the baseline."""
        result = builder.build("ab", stub_font, LayoutOptions(font_size=16))
        positions = result.mesh.positions()

        assert positions[:, 0].min() == pytest.approx(0)
        assert positions[:, 0].max() == pytest.approx(16)
        assert positions[:, 1].min() == pytest.approx(4.8)
        assert positions[:, 1].max() == pytest.approx(12.8)
        assert np.all(positions[:, 2] == 0)

    def test_second_glyph_is_offset(self, builder, stub_font):
        """Each glyph's vertices start at its pen position."""
        result = builder.build("ab", stub_font, LayoutOptions(font_size=16))
        positions = result.mesh.positions()

        assert positions[5:, 0].min() == pytest.approx(8)

    def test_normals_face_forward(self, builder, stub_font):
        """Every vertex has a +Z normal and zero UV."""
        result = builder.build("ab", stub_font, LayoutOptions(font_size=16))
        rows = result.mesh.vertices.reshape(-1, 8)

        assert np.all(rows[:, 3:6] == [0, 0, 1])
        assert np.all(rows[:, 6:8] == 0)

    def test_indices_in_range(self, builder, stub_font):
        """All indices refer to emitted vertices."""
        result = builder.build("abc\ndef", stub_font, LayoutOptions(font_size=16))
        mesh = result.mesh

        assert int(mesh.indices.max()) < mesh.vertex_count
        assert mesh.indices.min() == 0

    def test_metrics_are_returned(self, builder, stub_font):
        """The layout the mesh was built from comes back with it."""
        result = builder.build("ab\ncd", stub_font, LayoutOptions(font_size=16))

        assert result.metrics.line_count == 2
        assert result.metrics.width == pytest.approx(16)

    def test_spaces_contribute_no_geometry(self, builder, stub_font):
        """Empty glyphs are skipped but still advance the pen."""
        result = builder.build("a b", stub_font, LayoutOptions(font_size=16))
        positions = result.mesh.positions()

        assert result.mesh.vertex_count == 10
        assert positions[5:, 0].min() == pytest.approx(16)

    def test_empty_text(self, builder, stub_font):
        """Empty text gives empty buffers."""
        result = builder.build("", stub_font)

        assert result.mesh.vertex_count == 0
        assert result.mesh.triangle_count == 0

    def test_repeated_glyphs_use_cache(self, stub_font):
        """A glyph is triangulated once per font."""
        cache = GlyphTriangulationCache()
        builder = VectorTextGeometryBuilder(cache=cache)

        result = builder.build("aaa", stub_font, LayoutOptions(font_size=16))

        stats = builder.logger.stats
        assert result.mesh.vertex_count == 15
        assert stats.triangulated_count == 1
        assert stats.cache_hits == 2
        assert stats.glyph_count == 3
        assert cache.glyph_count(stub_font) == 1

    def test_cache_shared_between_builds(self, builder, stub_font):
        """A second build reuses earlier triangulations."""
        builder.build("ab", stub_font)
        builder.build("ba", stub_font)

        assert builder.logger.stats.triangulated_count == 2
        assert builder.cache.hits == 2

    def test_stats_totals(self, builder, stub_font):
        """Vertex and triangle totals match the output buffers."""
        result = builder.build("abc", stub_font)
        stats = builder.logger.stats

        assert stats.vertex_count == result.mesh.vertex_count
        assert stats.triangle_count == result.mesh.triangle_count
        assert stats.start_time is not None
        assert stats.end_time >= stats.start_time

    def test_failing_glyph_is_logged_and_skipped(self, builder, stub_font):
        """A glyph that cannot be triangulated does not abort the build."""
        broken = GlyphOutline(
            index=ord("b"),
            name="b",
            unicode=ord("b"),
            advance_width=500,
            commands=(MoveTo(0, 0), LineTo(math.nan, 0), LineTo(0, 500), Close()),
        )
        stub_font._glyphs["b"] = broken

        result = builder.build("ab", stub_font, LayoutOptions(font_size=16))
        stats = builder.logger.stats

        assert result.mesh.vertex_count == 5
        assert stats.error_count == 1
        assert stats.errors[0][0] == "b"

    def test_wide_text_switches_to_uint32(self, stub_font_class):
        """Meshes over 65535 vertices use 32-bit indices."""
        font = stub_font_class()
        builder = VectorTextGeometryBuilder()
        text = "a" * 13108

        result = builder.build(text, font, LayoutOptions(word_wrap="nowrap"))

        assert result.mesh.vertex_count == 65540
        assert result.mesh.indices.dtype == np.uint32
        assert result.mesh.index_format == "uint32"
