"""Font reader for loading TTF/OTF fonts.

This module provides the FontFace class, which loads a font file with
fonttools and exposes it through the ``FontMetrics`` interface used by the
layout engine and the geometry builders.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from fontTools.ttLib import TTFont

from glyphmesh.domain import GlyphOutline
from glyphmesh.exceptions import FontFormatError, FontLoadError, GlyphNotFoundError
from glyphmesh.io.converter import fonttools_glyph_to_outline

DEFAULT_ASCENDER_EM = 0.8
_PAIR_ADJUSTMENT = 2
_EXTENSION = 9


class _PairKerning:
    """Pair adjustments of one GPOS lookup, flattened for quick queries.

    Subtables are tried in order and the first one that matches the pair
    supplies the value, mirroring how a shaping engine applies a lookup.
    """

    def __init__(self) -> None:
        self._subtables: list[Any] = []

    def add_subtable(self, subtable: Any) -> None:
        if subtable.Format == 1:
            pairs: dict[str, dict[str, float]] = {}
            for first, pair_set in zip(subtable.Coverage.glyphs, subtable.PairSet):
                pairs[first] = {
                    record.SecondGlyph: _x_advance(record.Value1)
                    for record in pair_set.PairValueRecord
                }
            self._subtables.append(pairs)
        elif subtable.Format == 2:
            self._subtables.append(
                (
                    set(subtable.Coverage.glyphs),
                    dict(subtable.ClassDef1.classDefs) if subtable.ClassDef1 else {},
                    dict(subtable.ClassDef2.classDefs) if subtable.ClassDef2 else {},
                    [
                        [_x_advance(c2.Value1) for c2 in c1.Class2Record]
                        for c1 in subtable.Class1Record
                    ],
                )
            )

    def lookup(self, left: str, right: str) -> float | None:
        for subtable in self._subtables:
            if isinstance(subtable, dict):
                seconds = subtable.get(left)
                if seconds is not None and right in seconds:
                    return seconds[right]
                continue

            coverage, class_def1, class_def2, matrix = subtable
            if left not in coverage:
                continue
            row = matrix[class_def1.get(left, 0)]
            column = class_def2.get(right, 0)
            return row[column] if column < len(row) else 0.0

        return None


def _x_advance(value: Any) -> float:
    if value is None:
        return 0.0
    return float(getattr(value, "XAdvance", 0) or 0)


class FontFace:
    """Loads TTF/OTF fonts and serves glyph outlines and metrics.

    FontFace implements the ``FontMetrics`` protocol. Glyph outlines are
    converted on first use and memoized per glyph name. Instances hash by
    identity, so they can key the weak triangulation cache directly.

    Example:
        with FontFace(Path("font.ttf")) as face:
            glyph = face.char_to_glyph("A")
            print(glyph.name, glyph.advance_width)
    """

    def __init__(self, font_path: Path | str) -> None:
        """Initialize the font face.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = Path(font_path)
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._reverse_cmap: dict[str, int] = {}
        self._outlines: dict[str, GlyphOutline] = {}
        self._kern_lookups: list[_PairKerning] | None = None
        self._kern_table: dict[tuple[str, str], float] | None = None

    @classmethod
    def from_ttfont(cls, font: TTFont, name: str = "<memory>") -> "FontFace":
        """Wrap an already loaded fonttools font.

        Args:
            font: Loaded TTFont
            name: Label used in error messages
        """
        face = cls(name)
        face._attach(font)
        return face

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file does not exist or cannot be parsed
            FontFormatError: If the font has no outline table
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            font = TTFont(str(self._font_path))
        except Exception as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        self._attach(font)

    def _attach(self, font: TTFont) -> None:
        if "glyf" not in font and "CFF " not in font and "CFF2" not in font:
            raise FontFormatError(str(self._font_path), "no glyf, CFF or CFF2 outline table")

        self._font = font
        self._cmap = dict(font.getBestCmap() or {})
        self._reverse_cmap = {}
        for code_point in sorted(self._cmap):
            self._reverse_cmap.setdefault(self._cmap[code_point], code_point)
        self._outlines = {}
        self._kern_lookups = None
        self._kern_table = None

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def path(self) -> Path:
        return self._font_path

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for CFF-flavoured fonts
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        The units per em (UPM) defines the resolution of the font's
        coordinate system. Common values are 1000 or 2048.
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def ascender(self) -> float:
        """Return the ascender in font units (hhea, then OS/2, then 0.8 em)."""
        font = self._require_font()
        if "hhea" in font:
            return float(font["hhea"].ascent)  # type: ignore[attr-defined]
        if "OS/2" in font:
            return float(font["OS/2"].sTypoAscender)  # type: ignore[attr-defined]
        return self.units_per_em * DEFAULT_ASCENDER_EM

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return self._require_font()["maxp"].numGlyphs  # type: ignore[attr-defined]

    def char_to_glyph(self, char: str) -> GlyphOutline | None:
        """Map a single character to its glyph.

        Args:
            char: One character

        Returns:
            GlyphOutline, or None if the font has no glyph for ``char``
        """
        self._require_font()
        if len(char) != 1:
            return None
        name = self._cmap.get(ord(char))
        if name is None:
            return None
        return self.glyph(name)

    def glyph(self, name: str) -> GlyphOutline:
        """Get a glyph by name.

        Args:
            name: Name of the glyph to retrieve

        Returns:
            GlyphOutline domain model

        Raises:
            GlyphNotFoundError: If the font has no glyph with that name
            FontFormatError: If fonttools cannot draw the glyph
        """
        cached = self._outlines.get(name)
        if cached is not None:
            return cached

        font = self._require_font()
        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            raise GlyphNotFoundError(name)

        try:
            outline = fonttools_glyph_to_outline(
                name=name,
                fonttools_glyph=glyph_set[name],
                font=font,
                unicode_value=self._reverse_cmap.get(name),
            )
        except Exception as e:
            raise FontFormatError(str(self._font_path), f"cannot draw glyph '{name}': {e}") from e

        self._outlines[name] = outline
        return outline

    def iter_glyphs(self) -> Iterator[GlyphOutline]:
        """Iterate over all glyphs in glyph order."""
        for name in self._require_font().getGlyphOrder():
            yield self.glyph(name)

    def kerning(self, left: GlyphOutline, right: GlyphOutline) -> float:
        """Pair kerning in font units.

        GPOS ``kern`` feature lookups are used when present; otherwise the
        legacy ``kern`` table. Values from several lookups add up.

        Args:
            left: First glyph of the pair
            right: Second glyph of the pair

        Returns:
            Horizontal adjustment (0 if the pair is not kerned)
        """
        lookups = self._gpos_kerning()
        if lookups:
            total = 0.0
            for lookup in lookups:
                value = lookup.lookup(left.name, right.name)
                if value is not None:
                    total += value
            return total

        return self._legacy_kerning().get((left.name, right.name), 0.0)

    def _gpos_kerning(self) -> list[_PairKerning]:
        if self._kern_lookups is not None:
            return self._kern_lookups

        font = self._require_font()
        lookups: list[_PairKerning] = []

        if "GPOS" in font:
            table = font["GPOS"].table  # type: ignore[attr-defined]
            if table.FeatureList is not None and table.LookupList is not None:
                indices: set[int] = set()
                for record in table.FeatureList.FeatureRecord:
                    if record.FeatureTag == "kern":
                        indices.update(record.Feature.LookupListIndex)

                for index in sorted(indices):
                    lookup = table.LookupList.Lookup[index]
                    pair_kerning = _PairKerning()
                    for subtable in lookup.SubTable:
                        lookup_type = lookup.LookupType
                        if lookup_type == _EXTENSION:
                            lookup_type = subtable.ExtensionLookupType
                            subtable = subtable.ExtSubTable
                        if lookup_type == _PAIR_ADJUSTMENT:
                            pair_kerning.add_subtable(subtable)
                    lookups.append(pair_kerning)

        self._kern_lookups = lookups
        return lookups

    def _legacy_kerning(self) -> dict[tuple[str, str], float]:
        if self._kern_table is not None:
            return self._kern_table

        font = self._require_font()
        pairs: dict[tuple[str, str], float] = {}

        if "kern" in font:
            for subtable in font["kern"].kernTables:  # type: ignore[attr-defined]
                for pair, value in getattr(subtable, "kernTable", {}).items():
                    pairs.setdefault(pair, float(value))

        self._kern_table = pairs
        return pairs

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
        self._outlines = {}

    def __enter__(self) -> "FontFace":
        """Context manager entry."""
        if self._font is None:
            self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
