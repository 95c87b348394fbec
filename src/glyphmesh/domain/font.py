"""The boundary between glyphmesh and a font-parsing collaborator."""

from typing import Protocol, runtime_checkable

from glyphmesh.domain.glyph import GlyphOutline


@runtime_checkable
class FontMetrics(Protocol):
    """What the layout engine and geometry builder need from a font.

    Implementations must be weak-referenceable and hash by identity, since
    triangulation results are cached per font object.
    """

    @property
    def units_per_em(self) -> int: ...

    @property
    def ascender(self) -> float: ...

    def char_to_glyph(self, char: str) -> GlyphOutline | None:
        """Map a character to its glyph, or None if the font lacks it."""
        ...

    def kerning(self, left: GlyphOutline, right: GlyphOutline) -> float:
        """Pair kerning adjustment in font units (0 if none)."""
        ...
