"""Shared fixtures for glyphmesh tests.

Fonts are built in memory with fontTools' FontBuilder so the suite needs
no binary fixtures. The test font has 1000 UPM, an 800 unit ascender and
these glyphs:

- space (advance 250, no outline)
- H: one rectangle
- O: square ring (one hole)
- eight: rectangle with two holes
- o: ring drawn with quadratic curves
- A, V, T: simple polygons, kerned through GPOS
- period, ellipsis: small squares
"""

import io
import logging
from pathlib import Path

import pytest
import structlog
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont, newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0

from glyphmesh.domain import Close, GlyphOutline, LineTo, MoveTo
from glyphmesh.io import FontFace

UPM = 1000
ASCENT = 800
DESCENT = -200

KERN_FEATURES = """
languagesystem DFLT dflt;

@ROUND = [O o];

feature kern {
    pos A V -80;
    pos T @ROUND -40;
} kern;
"""


def _rect(pen: TTGlyphPen, x0: float, y0: float, x1: float, y1: float, clockwise: bool = True) -> None:
    if clockwise:
        points = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
    else:
        points = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    pen.closePath()


def _polygon(pen: TTGlyphPen, points: list[tuple[float, float]]) -> None:
    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    pen.closePath()


def _ring(pen: TTGlyphPen, cx: float, cy: float, r: float, clockwise: bool) -> None:
    """Round contour made of four quadratic segments."""
    right, top, left, bottom = (cx + r, cy), (cx, cy + r), (cx - r, cy), (cx, cy - r)
    if clockwise:
        pen.moveTo(bottom)
        pen.qCurveTo((cx - r, cy - r), left)
        pen.qCurveTo((cx - r, cy + r), top)
        pen.qCurveTo((cx + r, cy + r), right)
        pen.qCurveTo((cx + r, cy - r), bottom)
    else:
        pen.moveTo(bottom)
        pen.qCurveTo((cx + r, cy - r), right)
        pen.qCurveTo((cx + r, cy + r), top)
        pen.qCurveTo((cx - r, cy + r), left)
        pen.qCurveTo((cx - r, cy - r), bottom)
    pen.closePath()


def _draw_glyphs() -> tuple[dict, dict[str, int]]:
    glyphs = {}
    advances = {}

    def add(name: str, advance: int, draw=None) -> None:
        pen = TTGlyphPen(None)
        if draw is not None:
            draw(pen)
        glyphs[name] = pen.glyph()
        advances[name] = advance

    add(".notdef", 500)
    add("space", 250)
    add("H", 600, lambda p: _rect(p, 50, 0, 550, 700))
    add("O", 600, lambda p: (_rect(p, 50, 0, 550, 700), _rect(p, 150, 100, 450, 600, clockwise=False)))
    add(
        "eight",
        500,
        lambda p: (
            _rect(p, 0, 0, 500, 700),
            _rect(p, 100, 100, 400, 300, clockwise=False),
            _rect(p, 100, 400, 400, 600, clockwise=False),
        ),
    )
    add("o", 600, lambda p: (_ring(p, 300, 250, 250, True), _ring(p, 300, 250, 150, False)))
    add("A", 600, lambda p: _polygon(p, [(0, 0), (300, 700), (600, 0)]))
    add("V", 600, lambda p: _polygon(p, [(0, 700), (600, 700), (300, 0)]))
    add(
        "T",
        500,
        lambda p: _polygon(
            p, [(0, 700), (500, 700), (500, 600), (300, 600), (300, 0), (200, 0), (200, 600), (0, 600)]
        ),
    )
    add("period", 200, lambda p: _rect(p, 50, 0, 150, 100))
    add(
        "ellipsis",
        600,
        lambda p: (_rect(p, 50, 0, 150, 100), _rect(p, 250, 0, 350, 100), _rect(p, 450, 0, 550, 100)),
    )
    return glyphs, advances


CMAP = {
    ord(" "): "space",
    ord("H"): "H",
    ord("O"): "O",
    ord("8"): "eight",
    ord("o"): "o",
    ord("A"): "A",
    ord("V"): "V",
    ord("T"): "T",
    ord("."): "period",
    ord("…"): "ellipsis",
}


def build_test_font(with_features: bool = True) -> TTFont:
    """Build the test font and round-trip it through its binary form."""
    glyphs, advances = _draw_glyphs()
    glyph_order = list(glyphs)

    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(CMAP)
    fb.setupGlyf(glyphs)
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (advances[name], getattr(glyf[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({"familyName": "Glyphmesh Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, sTypoDescender=DESCENT, usWinAscent=ASCENT, usWinDescent=-DESCENT)
    fb.setupPost()
    if with_features:
        fb.addOpenTypeFeatures(KERN_FEATURES)

    buffer = io.BytesIO()
    fb.save(buffer)
    buffer.seek(0)
    return TTFont(buffer)


class StubFont:
    """Minimal FontMetrics implementation with fixed advances.

    Every character in ``chars`` maps to a square glyph whose index is its
    code point. Characters outside ``chars`` are missing.
    """

    def __init__(
        self,
        chars: str = " abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ.…",
        advance: float = 500.0,
        advances: dict[str, float] | None = None,
        kerning: dict[tuple[str, str], float] | None = None,
        units_per_em: int = 1000,
        ascender: float = 800.0,
    ) -> None:
        self._units_per_em = units_per_em
        self._ascender = ascender
        self._kerning = kerning or {}
        self._glyphs: dict[str, GlyphOutline] = {}
        for char in chars:
            width = (advances or {}).get(char, advance)
            commands = ()
            if char != " ":
                commands = (
                    MoveTo(0, 0),
                    LineTo(width, 0),
                    LineTo(width, 500),
                    LineTo(0, 500),
                    Close(),
                )
            self._glyphs[char] = GlyphOutline(
                index=ord(char),
                name=char,
                unicode=ord(char),
                advance_width=width,
                commands=commands,
            )

    @property
    def units_per_em(self) -> int:
        return self._units_per_em

    @property
    def ascender(self) -> float:
        return self._ascender

    def char_to_glyph(self, char: str) -> GlyphOutline | None:
        return self._glyphs.get(char)

    def kerning(self, left: GlyphOutline, right: GlyphOutline) -> float:
        return self._kerning.get((left.name, right.name), 0.0)


@pytest.fixture
def stub_font_class() -> type[StubFont]:
    """The StubFont class, for tests that need custom metrics."""
    return StubFont


@pytest.fixture
def stub_font() -> StubFont:
    """A stub font with 500-unit advances at 1000 UPM."""
    return StubFont()


@pytest.fixture
def test_ttfont() -> TTFont:
    """The in-memory test font with GPOS kerning."""
    return build_test_font()


@pytest.fixture
def font_face(test_ttfont: TTFont) -> FontFace:
    """FontFace over the in-memory test font."""
    return FontFace.from_ttfont(test_ttfont, name="test-font")


@pytest.fixture
def legacy_kern_face() -> FontFace:
    """FontFace over a test font that kerns through the legacy kern table."""
    font = build_test_font(with_features=False)
    subtable = KernTable_format_0()
    subtable.version = 0
    subtable.coverage = 1
    subtable.kernTable = {("A", "V"): -50}
    kern = newTable("kern")
    kern.version = 0
    kern.kernTables = [subtable]
    font["kern"] = kern
    return FontFace.from_ttfont(font, name="legacy-kern-font")


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """The test font written to a temporary .ttf file."""
    path = tmp_path / "GlyphmeshTest-Regular.ttf"
    build_test_font().save(str(path))
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging configuration done by a test (e.g. through the CLI)."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == "glyphmesh":
            root.removeHandler(handler)
            handler.close()
    structlog.reset_defaults()
