"""Unit tests for configuration models and logging utilities."""

import logging

import pytest
from pydantic import ValidationError

from glyphmesh.config import (
    Align,
    AtlasTextOptions,
    GeometryConfig,
    LayoutOptions,
    Overflow,
    WordWrap,
    get_default_settings,
)
from glyphmesh.utils import GeometryLogger, configure_logging


class TestLayoutOptions:
    """Tests for LayoutOptions."""

    def test_defaults(self):
        """Defaults describe unbounded, left-aligned text."""
        options = LayoutOptions()

        assert options.font_size == 16
        assert options.line_height == 1.2
        assert options.letter_spacing == 0
        assert options.max_width is None
        assert options.max_height is None
        assert options.align is Align.LEFT
        assert options.overflow is Overflow.VISIBLE
        assert options.word_wrap is WordWrap.NORMAL

    def test_line_advance(self):
        """Line advance is line height times font size."""
        assert LayoutOptions(font_size=20, line_height=1.5).line_advance == pytest.approx(30)

    def test_enum_values_from_strings(self):
        """Enums accept their CSS-style names."""
        options = LayoutOptions(align="center", overflow="ellipsis", word_wrap="break-word")

        assert options.align is Align.CENTER
        assert options.overflow is Overflow.ELLIPSIS
        assert options.word_wrap is WordWrap.BREAK_WORD

    def test_word_wrap_values(self):
        """All four wrapping modes are available."""
        assert {w.value for w in WordWrap} == {"normal", "break-word", "break-all", "nowrap"}

    def test_infinite_height_is_unbounded(self):
        """Infinity normalizes to None."""
        assert LayoutOptions(max_height=float("inf")).max_height is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"font_size": 0},
            {"font_size": -1},
            {"line_height": 0},
            {"max_width": -10},
            {"max_height": 0},
            {"align": "justify"},
            {"word_wrap": "anywhere"},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            LayoutOptions(**kwargs)


class TestAtlasTextOptions:
    """Tests for AtlasTextOptions."""

    def test_defaults(self):
        """By default text is set at the atlas size without wrapping."""
        options = AtlasTextOptions()

        assert options.font_size is None
        assert options.line_height == 1.0
        assert options.max_width == 0

    def test_negative_max_width_rejected(self):
        """max_width cannot be negative."""
        with pytest.raises(ValidationError):
            AtlasTextOptions(max_width=-1)


class TestGeometryConfig:
    """Tests for GeometryConfig."""

    def test_defaults(self):
        """Default tolerance is one unit at 1000 UPM."""
        config = GeometryConfig()

        assert config.bezier_flatten_tolerance == 1.0
        assert config.reference_upm == 1000
        assert config.max_subdivision_depth == 16

    @pytest.mark.parametrize(("upm", "expected"), [(1000, 1.0), (2048, 2.048), (500, 0.5)])
    def test_tolerance_scaling(self, upm, expected):
        """Tolerance scales linearly with UPM."""
        assert GeometryConfig().get_bezier_tolerance(upm) == pytest.approx(expected)

    def test_tolerance_bounds(self):
        """Tolerance outside the allowed range is rejected."""
        with pytest.raises(ValidationError):
            GeometryConfig(bezier_flatten_tolerance=0)
        with pytest.raises(ValidationError):
            GeometryConfig(bezier_flatten_tolerance=50)

    def test_default_settings(self):
        """The settings bundle holds every section."""
        settings = get_default_settings()

        assert isinstance(settings.geometry, GeometryConfig)
        assert isinstance(settings.layout, LayoutOptions)
        assert settings.atlas.max_width == 0
        assert settings.logging.log_file is None


class TestLogging:
    """Tests for logging setup and build statistics."""

    def test_configure_logging_writes_file(self, tmp_path):
        """A log file is created when requested."""
        log_file = tmp_path / "glyphmesh.log"

        logger = configure_logging(log_file=log_file, quiet=True)
        logger.info("hello")

        assert log_file.exists()
        configure_logging(quiet=True)

    def test_reconfiguring_replaces_handlers(self):
        """Repeated setup does not stack handlers."""
        configure_logging(quiet=True)
        configure_logging(quiet=True)

        named = [h for h in logging.getLogger().handlers if h.get_name() == "glyphmesh"]
        assert len(named) == 1

    def test_quiet_console_only_shows_errors(self):
        """Quiet mode raises the console threshold."""
        configure_logging(quiet=True)

        handler = next(h for h in logging.getLogger().handlers if h.get_name() == "glyphmesh")
        assert handler.level == logging.ERROR

    def test_geometry_logger_stats(self):
        """Counters track triangulations, placements and failures."""
        geometry_logger = GeometryLogger()

        geometry_logger.log_glyph_triangulated("A", 10, 8, 1.5)
        geometry_logger.log_glyph_placed(10, 8, cached=False)
        geometry_logger.log_glyph_placed(10, 8, cached=True)
        geometry_logger.log_glyph_skipped("space", "no geometry")
        geometry_logger.log_glyph_error("B", ValueError("bad outline"))

        stats = geometry_logger.stats
        assert stats.triangulated_count == 1
        assert stats.glyph_count == 2
        assert stats.cache_hits == 1
        assert stats.vertex_count == 20
        assert stats.triangle_count == 16
        assert stats.skipped_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("B", "bad outline")]

    def test_reset(self):
        """reset() starts a fresh set of counters."""
        geometry_logger = GeometryLogger()
        geometry_logger.log_glyph_placed(4, 2, cached=False)

        geometry_logger.reset()

        assert geometry_logger.stats.glyph_count == 0

    def test_duration(self):
        """Duration is zero until both timestamps are set."""
        stats = GeometryLogger().stats
        assert stats.duration_seconds == 0.0

        stats.start_time = 10.0
        stats.end_time = 12.5
        assert stats.duration_seconds == pytest.approx(2.5)
