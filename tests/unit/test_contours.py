"""Unit tests for the contour builder."""

import math

import pytest

from glyphmesh.core import ContourBuilder
from glyphmesh.domain import Close, CubicTo, LineTo, MoveTo, Point, QuadTo
from glyphmesh.exceptions import ContourError


def square_commands(x0=0.0, y0=0.0, size=10.0, close=True):
    commands = [
        MoveTo(x0, y0),
        LineTo(x0 + size, y0),
        LineTo(x0 + size, y0 + size),
        LineTo(x0, y0 + size),
    ]
    if close:
        commands.append(Close())
    return commands


class TestContourBuilder:
    """Tests for ContourBuilder.build."""

    def test_empty_commands(self):
        """No commands give no contours."""
        assert ContourBuilder().build([]) == []

    def test_close_appends_start_point(self):
        """Close adds the start point when the pen is elsewhere."""
        contours = ContourBuilder().build(square_commands())

        assert len(contours) == 1
        points = contours[0].points
        assert points[0] == Point(0, 0)
        assert points[-1] == Point(0, 0)
        assert len(points) == 5

    def test_close_does_not_duplicate_start_point(self):
        """An outline that already returned to its start is not extended."""
        commands = square_commands(close=False) + [LineTo(0, 0), Close()]
        contours = ContourBuilder().build(commands)

        assert len(contours[0].points) == 5

    def test_close_within_epsilon(self):
        """A gap below close_epsilon counts as closed."""
        commands = square_commands(close=False) + [LineTo(0.00001, 0), Close()]
        contours = ContourBuilder(close_epsilon=1e-4).build(commands)

        assert contours[0].points[-1] == Point(0.00001, 0)
        assert len(contours[0].points) == 5

    def test_move_to_starts_new_contour(self):
        """An unclosed contour is flushed by the next MoveTo."""
        commands = square_commands(close=False) + square_commands(20, 0)
        contours = ContourBuilder().build(commands)

        assert len(contours) == 2
        assert contours[1].points[0] == Point(20, 0)

    def test_trailing_open_contour_is_kept(self):
        """Points left at the end of the stream form a contour."""
        contours = ContourBuilder().build(square_commands(close=False))

        assert len(contours) == 1
        assert len(contours[0].points) == 4

    def test_close_without_points(self):
        """A stray Close is ignored."""
        assert ContourBuilder().build([Close()]) == []

    def test_quadratic_segment_is_flattened(self):
        """QuadTo adds flattened points ending at its end point."""
        commands = [MoveTo(0, 0), QuadTo(50, 100, 100, 0), Close()]
        contours = ContourBuilder(tolerance=1.0).build(commands)

        points = contours[0].points
        assert len(points) > 4
        assert Point(100, 0) in points
        assert points[-1] == Point(0, 0)

    def test_cubic_segment_is_flattened(self):
        """CubicTo adds flattened points ending at its end point."""
        commands = [MoveTo(0, 0), CubicTo(0, 100, 100, 100, 100, 0), Close()]
        contours = ContourBuilder(tolerance=1.0).build(commands)

        points = contours[0].points
        assert len(points) > 4
        assert Point(100, 0) in points

    def test_coarser_tolerance_gives_fewer_points(self):
        """The builder passes its tolerance to the flattener."""
        commands = [MoveTo(0, 0), QuadTo(50, 100, 100, 0), Close()]
        fine = ContourBuilder(tolerance=0.1).build(commands)
        coarse = ContourBuilder(tolerance=10.0).build(commands)

        assert len(coarse[0].points) < len(fine[0].points)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_coordinate_raises(self, bad):
        """Non-finite coordinates are rejected."""
        with pytest.raises(ContourError, match="Non-finite"):
            ContourBuilder().build([MoveTo(0, 0), LineTo(bad, 10), Close()])

    def test_non_finite_control_point_raises(self):
        """Control points are validated too."""
        with pytest.raises(ContourError):
            ContourBuilder().build([MoveTo(0, 0), QuadTo(math.nan, 5, 10, 0), Close()])
