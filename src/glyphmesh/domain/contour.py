"""Core geometric types for contour representation.

This module defines the fundamental geometric types used throughout glyphmesh:
- Point: A 2D point in font units
- Contour: A closed polyline representing a shape boundary
- WindingDirection: Enum for contour winding direction
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto


class WindingDirection(Enum):
    """Contour winding direction.

    In TrueType/OpenType convention:
    - Outer contours typically wind clockwise
    - Inner contours (holes) typically wind counter-clockwise

    Note: PostScript/CFF fonts use the opposite convention, which is why the
    hierarchy resolver classifies by containment instead of winding.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)]
        >>> signed_area(square)
        1.0
        >>> signed_area(list(reversed(square)))
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(x: float, y: float, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray from the point to the right and counts
    intersections with polygon edges. Odd number of intersections means
    inside, even means outside.

    Args:
        x: X coordinate of the point to test
        y: Y coordinate of the point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


@dataclass
class Contour:
    """A closed polyline representing a shape boundary.

    The last point conceptually connects back to the first. Contours start
    out as raw point data; the hierarchy resolver fills in ``holes`` for the
    contours it classifies as roots.

    Attributes:
        points: List of points forming the contour
        holes: Contours cut out of this one (roots only)
    """

    points: list[Point]
    holes: list["Contour"] = field(default_factory=list)
    _cached_area: float | None = field(default=None, repr=False, init=False)
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Result is cached for efficiency.

        Returns:
            Signed area of the contour (positive = counter-clockwise)
        """
        if self._cached_area is None:
            self._cached_area = signed_area(self.points)
        return self._cached_area

    @property
    def direction(self) -> WindingDirection | None:
        """Winding direction derived from the signed area (None if degenerate)."""
        area = self.signed_area()
        if area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        if area < 0:
            return WindingDirection.CLOCKWISE
        return None

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Result is cached for efficiency.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point is inside the contour (ray casting)."""
        return point_in_polygon(x, y, self.points)

    def contains(self, other: "Contour") -> bool:
        """Check whether another contour lies inside this one.

        Rejects on bounding boxes first, then tests the other contour's
        first point against this outline.

        Args:
            other: Candidate inner contour

        Returns:
            True if ``other`` is contained in this contour
        """
        if not other.points:
            return False

        min_x, min_y, max_x, max_y = self.bounding_box()
        o_min_x, o_min_y, o_max_x, o_max_y = other.bounding_box()
        if o_min_x < min_x or o_max_x > max_x or o_min_y < min_y or o_max_y > max_y:
            return False

        first = other.points[0]
        return self.contains_point(first.x, first.y)

    def flat_coordinates(self) -> list[float]:
        """Return the points as a flat ``[x0, y0, x1, y1, ...]`` list."""
        coords: list[float] = []
        for p in self.points:
            coords.append(p.x)
            coords.append(p.y)
        return coords
