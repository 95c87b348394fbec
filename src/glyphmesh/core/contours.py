"""Turn a glyph's path command stream into closed polylines."""

import math
from collections.abc import Iterable

from glyphmesh.core._bezier import DEFAULT_MAX_DEPTH, flatten_cubic, flatten_quadratic
from glyphmesh.domain import (
    Close,
    Contour,
    CubicTo,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadTo,
)
from glyphmesh.exceptions import ContourError

DEFAULT_CLOSE_EPSILON = 1e-4


class ContourBuilder:
    """Walks outline commands and produces raw contours.

    Curves are flattened with the adaptive subdivision in ``_bezier``. The
    builder only produces point data; classification into roots and holes
    happens in the hierarchy resolver.

    Example:
        builder = ContourBuilder(tolerance=1.0)
        contours = builder.build(glyph.commands)
    """

    def __init__(
        self,
        tolerance: float = 1.0,
        max_depth: int = DEFAULT_MAX_DEPTH,
        close_epsilon: float = DEFAULT_CLOSE_EPSILON,
    ) -> None:
        """Initialize the builder.

        Args:
            tolerance: Bezier flattening tolerance in font units
            max_depth: Maximum subdivision depth per curve segment
            close_epsilon: Gap above which Close appends the start point
        """
        self._tolerance = tolerance
        self._max_depth = max_depth
        self._close_epsilon = close_epsilon

    def build(self, commands: Iterable[PathCommand]) -> list[Contour]:
        """Convert path commands into contours.

        Args:
            commands: Outline commands in font units

        Returns:
            Contours in the order they were drawn

        Raises:
            ContourError: If a command carries a non-finite coordinate
        """
        contours: list[Contour] = []
        current: list[Point] = []
        cx = cy = 0.0
        sx = sy = 0.0

        for command in commands:
            if isinstance(command, MoveTo):
                if current:
                    contours.append(Contour(points=current))
                    current = []
                cx, cy = self._checked(command.x, command.y)
                sx, sy = cx, cy
                current.append(Point(cx, cy))

            elif isinstance(command, LineTo):
                cx, cy = self._checked(command.x, command.y)
                current.append(Point(cx, cy))

            elif isinstance(command, QuadTo):
                self._checked(command.cx, command.cy)
                x, y = self._checked(command.x, command.y)
                flatten_quadratic(
                    Point(cx, cy),
                    Point(command.cx, command.cy),
                    Point(x, y),
                    self._tolerance,
                    current,
                    self._max_depth,
                )
                cx, cy = x, y

            elif isinstance(command, CubicTo):
                self._checked(command.c1x, command.c1y)
                self._checked(command.c2x, command.c2y)
                x, y = self._checked(command.x, command.y)
                flatten_cubic(
                    Point(cx, cy),
                    Point(command.c1x, command.c1y),
                    Point(command.c2x, command.c2y),
                    Point(x, y),
                    self._tolerance,
                    current,
                    self._max_depth,
                )
                cx, cy = x, y

            elif isinstance(command, Close):
                if current and (
                    abs(cx - sx) > self._close_epsilon or abs(cy - sy) > self._close_epsilon
                ):
                    current.append(Point(sx, sy))
                if current:
                    contours.append(Contour(points=current))
                    current = []
                cx, cy = sx, sy

        if current:
            contours.append(Contour(points=current))

        return contours

    @staticmethod
    def _checked(x: float, y: float) -> tuple[float, float]:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ContourError(f"Non-finite outline coordinate ({x}, {y})")
        return float(x), float(y)
