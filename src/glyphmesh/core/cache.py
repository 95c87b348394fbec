"""Per-font memoization of glyph triangulations."""

import threading
import weakref
from collections.abc import Callable

from glyphmesh.domain import TriangulatedGlyph


class GlyphTriangulationCache:
    """Caches triangulated glyphs keyed by (font, glyph index).

    Fonts are held weakly: once the last outside reference to a font goes
    away, its entries disappear with it. The cache never keeps a font
    alive. ``get_or_compute`` is guarded by a lock, so one instance can be
    shared between threads.

    Example:
        cache = GlyphTriangulationCache()
        tri = cache.get_or_compute(font, glyph.index, lambda: triangulate(glyph))
    """

    def __init__(self) -> None:
        self._fonts: weakref.WeakKeyDictionary[object, dict[int, TriangulatedGlyph]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, font: object, glyph_index: int) -> TriangulatedGlyph | None:
        """Return the cached triangulation, or None."""
        with self._lock:
            glyphs = self._fonts.get(font)
            if glyphs is None:
                return None
            return glyphs.get(glyph_index)

    def get_or_compute(
        self,
        font: object,
        glyph_index: int,
        compute: Callable[[], TriangulatedGlyph],
    ) -> TriangulatedGlyph:
        """Return the cached triangulation, computing it on first use.

        ``compute`` runs outside the lock. If two threads race on the same
        glyph, the first stored result wins and both callers get it.

        Args:
            font: Font object the glyph belongs to (held weakly)
            glyph_index: Glyph index within the font
            compute: Produces the triangulation on a miss

        Returns:
            The cached or freshly computed triangulation
        """
        with self._lock:
            glyphs = self._fonts.get(font)
            if glyphs is not None and glyph_index in glyphs:
                self.hits += 1
                return glyphs[glyph_index]
            self.misses += 1

        result = compute()

        with self._lock:
            glyphs = self._fonts.get(font)
            if glyphs is None:
                glyphs = {}
                self._fonts[font] = glyphs
            return glyphs.setdefault(glyph_index, result)

    def release(self, font: object) -> None:
        """Drop every entry belonging to ``font``."""
        with self._lock:
            self._fonts.pop(font, None)

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._fonts.clear()
            self.hits = 0
            self.misses = 0

    def glyph_count(self, font: object) -> int:
        """Number of glyphs cached for ``font``."""
        with self._lock:
            glyphs = self._fonts.get(font)
            return len(glyphs) if glyphs is not None else 0

    def font_count(self) -> int:
        """Number of fonts that currently have cached glyphs."""
        with self._lock:
            return len(self._fonts)

    def __contains__(self, key: tuple[object, int]) -> bool:
        font, glyph_index = key
        return self.get(font, glyph_index) is not None

    def __len__(self) -> int:
        with self._lock:
            return sum(len(glyphs) for glyphs in self._fonts.values())
