"""Contour hierarchy resolution.

This module classifies the flattened contours of a glyph into:
- Roots (filled outer shapes)
- Holes (cut out of the smallest root that contains them)
- Islands (shapes sitting inside a hole, such as the inner ring of "®"),
  which become roots of their own

Classification is purely geometric (area ordering plus point-in-polygon
containment), so it works for TrueType and CFF winding conventions alike.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from glyphmesh.domain import Contour

MIN_CONTOUR_POINTS = 3


class ContourRole(Enum):
    """Role a contour plays after classification."""

    ROOT = auto()
    HOLE = auto()


@dataclass
class ClassifiedContour:
    """A contour with its role and the absolute area used for ordering.

    Attributes:
        contour: The classified contour
        role: Root or hole
        abs_area: Absolute signed area
        is_island: True for roots found inside a hole
    """

    contour: Contour
    role: ContourRole
    abs_area: float
    is_island: bool = False


@dataclass
class ContourHierarchy:
    """Result of resolving a glyph's contours.

    Attributes:
        roots: Root contours, each carrying its resolved holes
        hole_count: Number of contours classified as holes
        island_count: Number of roots nested inside a hole
        discarded_count: Number of contours dropped for having < 3 points
    """

    roots: list[Contour] = field(default_factory=list)
    hole_count: int = 0
    island_count: int = 0
    discarded_count: int = 0

    def has_holes(self) -> bool:
        return self.hole_count > 0


class ContourHierarchyResolver:
    """Resolves which contours are shapes and which are holes.

    Contours are visited from largest to smallest absolute area. Each one
    is attached to the smallest already-visited contour that contains it:
    inside a root makes it a hole of that root, inside a hole makes it an
    island (a new root), inside nothing makes it a root.

    The resolver is stateless and safe to share between threads.
    """

    def analyze(self, contours: list[Contour]) -> ContourHierarchy:
        """Classify contours and report the resulting hierarchy.

        Args:
            contours: Raw contours of one glyph; their ``holes`` lists are reset

        Returns:
            ContourHierarchy with the roots and classification counts
        """
        hierarchy = ContourHierarchy()

        usable: list[Contour] = []
        for contour in contours:
            if len(contour.points) < MIN_CONTOUR_POINTS:
                hierarchy.discarded_count += 1
                continue
            contour.holes = []
            usable.append(contour)

        # sorted() is stable, so equal areas keep drawing order
        ordered = sorted(usable, key=lambda c: abs(c.signed_area()), reverse=True)
        classified: list[ClassifiedContour] = []

        for contour in ordered:
            parent = self._find_smallest_container(contour, classified)

            if parent is None:
                hierarchy.roots.append(contour)
                classified.append(
                    ClassifiedContour(contour, ContourRole.ROOT, abs(contour.signed_area()))
                )
            elif parent.role is ContourRole.ROOT:
                parent.contour.holes.append(contour)
                hierarchy.hole_count += 1
                classified.append(
                    ClassifiedContour(contour, ContourRole.HOLE, abs(contour.signed_area()))
                )
            else:
                hierarchy.roots.append(contour)
                hierarchy.island_count += 1
                classified.append(
                    ClassifiedContour(
                        contour,
                        ContourRole.ROOT,
                        abs(contour.signed_area()),
                        is_island=True,
                    )
                )

        return hierarchy

    def resolve(self, contours: list[Contour]) -> list[Contour]:
        """Classify contours and return only the roots.

        Args:
            contours: Raw contours of one glyph

        Returns:
            Root contours, each with its ``holes`` filled in
        """
        return self.analyze(contours).roots

    def _find_smallest_container(
        self,
        contour: Contour,
        classified: list[ClassifiedContour],
    ) -> ClassifiedContour | None:
        """Find the smallest classified contour that contains ``contour``.

        Args:
            contour: Contour being classified
            classified: Contours classified so far (all at least as large)

        Returns:
            The containing entry with the smallest area, or None
        """
        best: ClassifiedContour | None = None
        best_area = float("inf")

        for entry in classified:
            if entry.abs_area < best_area and entry.contour.contains(contour):
                best = entry
                best_area = entry.abs_area

        return best
