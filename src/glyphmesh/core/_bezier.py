"""Internal Bezier curve flattening algorithms.

This is an internal module used by the contour builder. Curves are
subdivided at t=0.5 (De Casteljau) until every control point lies within
``tolerance`` of the chord. Work is kept on an explicit stack, with the
right half pushed before the left half so points come out in curve order.
"""

import math

from glyphmesh.domain import Point

DEFAULT_MAX_DEPTH = 16


def _distance_to_chord(
    px: float, py: float, x0: float, y0: float, x1: float, y1: float
) -> float:
    """Perpendicular distance of (px, py) to the line through the chord.

    A zero-length chord counts as flat.
    """
    dx = x1 - x0
    dy = y1 - y0
    if dx == 0 and dy == 0:
        return 0.0
    return abs(dx * (y0 - py) - (x0 - px) * dy) / math.hypot(dx, dy)


def flatten_quadratic(
    p0: Point,
    p1: Point,
    p2: Point,
    tolerance: float,
    out: list[Point],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Flatten a quadratic Bezier curve, appending points to ``out``.

    The start point is not emitted; the caller already has it.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        tolerance: Maximum distance of the control point from the chord
        out: List the flattened points are appended to
        max_depth: Subdivision depth at which a piece is emitted as-is
    """
    stack = [(p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, 0)]

    while stack:
        x0, y0, x1, y1, x2, y2, depth = stack.pop()

        if depth >= max_depth or _distance_to_chord(x1, y1, x0, y0, x2, y2) < tolerance:
            out.append(Point(x2, y2))
            continue

        x01 = (x0 + x1) * 0.5
        y01 = (y0 + y1) * 0.5
        x12 = (x1 + x2) * 0.5
        y12 = (y1 + y2) * 0.5
        x012 = (x01 + x12) * 0.5
        y012 = (y01 + y12) * 0.5

        stack.append((x012, y012, x12, y12, x2, y2, depth + 1))
        stack.append((x0, y0, x01, y01, x012, y012, depth + 1))


def flatten_cubic(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    tolerance: float,
    out: list[Point],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Flatten a cubic Bezier curve, appending points to ``out``.

    Both control points must be within ``tolerance`` of the chord for a
    piece to count as flat.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        tolerance: Maximum distance of the control points from the chord
        out: List the flattened points are appended to
        max_depth: Subdivision depth at which a piece is emitted as-is
    """
    stack = [(p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, p3.x, p3.y, 0)]

    while stack:
        x0, y0, x1, y1, x2, y2, x3, y3, depth = stack.pop()

        if depth >= max_depth or (
            _distance_to_chord(x1, y1, x0, y0, x3, y3) < tolerance
            and _distance_to_chord(x2, y2, x0, y0, x3, y3) < tolerance
        ):
            out.append(Point(x3, y3))
            continue

        # First level
        x01 = (x0 + x1) * 0.5
        y01 = (y0 + y1) * 0.5
        x12 = (x1 + x2) * 0.5
        y12 = (y1 + y2) * 0.5
        x23 = (x2 + x3) * 0.5
        y23 = (y2 + y3) * 0.5

        # Second level
        x012 = (x01 + x12) * 0.5
        y012 = (y01 + y12) * 0.5
        x123 = (x12 + x23) * 0.5
        y123 = (y12 + y23) * 0.5

        # Midpoint
        x0123 = (x012 + x123) * 0.5
        y0123 = (y012 + y123) * 0.5

        stack.append((x0123, y0123, x123, y123, x23, y23, x3, y3, depth + 1))
        stack.append((x0, y0, x01, y01, x012, y012, x0123, y0123, depth + 1))
