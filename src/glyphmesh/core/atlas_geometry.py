"""Quad geometry for SDF/MSDF atlas fonts.

Each visible glyph becomes one textured quad sampling its atlas
rectangle; the distance field itself is evaluated by the shader.
"""

import re

import numpy as np

from glyphmesh.config import Align, AtlasTextOptions
from glyphmesh.domain import (
    POSITION_UV,
    AtlasTextMesh,
    AtlasTextMetrics,
    MeshData,
    SDFFont,
    SDFGlyph,
    index_dtype_for,
)

SPACE_CODEPOINT = 32
MISSING_ADVANCE_EM = 0.3

_VERTICES_PER_QUAD = 4
_INDICES_PER_QUAD = 6
_FLOATS_PER_VERTEX = POSITION_UV.floats_per_vertex
_QUAD_INDICES = np.array([0, 1, 2, 0, 2, 3], dtype=np.int64)
_TOKEN_RE = re.compile(r"\s+|\S+")


class _AtlasRun:
    """Scaled metrics shared by measurement and emission."""

    def __init__(self, font: SDFFont, options: AtlasTextOptions) -> None:
        self.font = font
        self.font_size = options.font_size if options.font_size is not None else font.info.size
        self.scale = self.font_size / font.info.size
        self.letter_spacing = options.letter_spacing
        space = font.get_glyph(SPACE_CODEPOINT)
        if space is not None:
            self.missing_advance = space.xadvance * self.scale + self.letter_spacing
        else:
            self.missing_advance = self.font_size * MISSING_ADVANCE_EM + self.letter_spacing

    def advance(self, glyph: SDFGlyph | None) -> float:
        if glyph is None:
            return self.missing_advance
        return glyph.xadvance * self.scale + self.letter_spacing

    def kerning(self, previous: int | None, codepoint: int) -> float:
        if previous is None:
            return 0.0
        return self.font.get_kerning(previous, codepoint) * self.scale

    def measure(self, codepoints: list[int]) -> float:
        width = 0.0
        previous: int | None = None
        for cp in codepoints:
            width += self.kerning(previous, cp)
            width += self.advance(self.font.get_glyph(cp))
            previous = cp
        return width


class AtlasTextGeometryBuilder:
    """Builds textured quads for text set in an SDF/MSDF atlas font.

    Positions are in pixels with Y up: the first line's top sits at y=0 and
    each following line moves down by the scaled line height.

    Example:
        font = load_sdf_font("Roboto-msdf.json")
        result = AtlasTextGeometryBuilder().build("Hello", font, AtlasTextOptions(font_size=48))
    """

    def build(
        self,
        text: str,
        font: SDFFont,
        options: AtlasTextOptions | None = None,
    ) -> AtlasTextMesh:
        """Build quad geometry for ``text``.

        Args:
            text: Text to render; ``\\n`` starts a new line
            font: Parsed atlas font
            options: Size, spacing, alignment and wrapping options

        Returns:
            AtlasTextMesh with the quad buffers and text metrics
        """
        options = options or AtlasTextOptions()
        run = _AtlasRun(font, options)
        line_height = font.common.line_height * run.scale * options.line_height

        lines = self._break_lines(text, run, options.max_width)
        glyph_count = sum(1 for chars, _ in lines for cp in chars if cp in font.glyphs)
        vertex_count = glyph_count * _VERTICES_PER_QUAD

        vertices = np.zeros(vertex_count * _FLOATS_PER_VERTEX, dtype=np.float32)
        indices = np.zeros(glyph_count * _INDICES_PER_QUAD, dtype=index_dtype_for(vertex_count))
        rows = vertices.reshape(vertex_count, _FLOATS_PER_VERTEX)

        quad = 0
        cursor_y = 0.0
        max_line_width = 0.0

        for chars, line_width in lines:
            max_line_width = max(max_line_width, line_width)

            if options.align is Align.CENTER:
                cursor_x = -line_width / 2
            elif options.align is Align.RIGHT:
                cursor_x = -line_width
            else:
                cursor_x = 0.0

            previous: int | None = None
            for cp in chars:
                cursor_x += run.kerning(previous, cp)
                glyph = font.get_glyph(cp)
                if glyph is not None:
                    self._write_quad(rows, indices, quad, glyph, cursor_x, cursor_y, run.scale, font)
                    quad += 1
                cursor_x += run.advance(glyph)
                previous = cp

            cursor_y -= line_height

        return AtlasTextMesh(
            mesh=MeshData(vertices=vertices, indices=indices, layout=POSITION_UV, label="sdf-text"),
            metrics=AtlasTextMetrics(
                width=max_line_width,
                height=len(lines) * line_height,
                line_count=len(lines),
                glyph_count=glyph_count,
            ),
        )

    @staticmethod
    def _break_lines(text: str, run: _AtlasRun, max_width: float) -> list[tuple[list[int], float]]:
        lines: list[tuple[list[int], float]] = []

        for raw_line in text.split("\n"):
            if max_width <= 0:
                chars = [ord(c) for c in raw_line]
                lines.append((chars, run.measure(chars)))
                continue

            current: list[int] = []
            width = 0.0
            for token in _TOKEN_RE.findall(raw_line):
                token_chars = [ord(c) for c in token]
                token_width = run.measure(token_chars)
                if current and width + token_width > max_width:
                    lines.append((current, width))
                    current = []
                    width = 0.0
                current.extend(token_chars)
                width += token_width

            if current:
                lines.append((current, width))

        return lines

    @staticmethod
    def _write_quad(
        rows: np.ndarray,
        indices: np.ndarray,
        quad: int,
        glyph: SDFGlyph,
        cursor_x: float,
        cursor_y: float,
        scale: float,
        font: SDFFont,
    ) -> None:
        x0 = cursor_x + glyph.xoffset * scale
        y0 = cursor_y - glyph.yoffset * scale
        x1 = x0 + glyph.width * scale
        y1 = y0 - glyph.height * scale

        atlas_w = font.common.scale_w
        atlas_h = font.common.scale_h
        u0 = glyph.x / atlas_w
        v0 = glyph.y / atlas_h
        u1 = (glyph.x + glyph.width) / atlas_w
        v1 = (glyph.y + glyph.height) / atlas_h

        base = quad * _VERTICES_PER_QUAD
        # top-left, top-right, bottom-right, bottom-left
        rows[base : base + _VERTICES_PER_QUAD] = (
            (x0, y0, 0.0, u0, v0),
            (x1, y0, 0.0, u1, v0),
            (x1, y1, 0.0, u1, v1),
            (x0, y1, 0.0, u0, v1),
        )
        start = quad * _INDICES_PER_QUAD
        indices[start : start + _INDICES_PER_QUAD] = _QUAD_INDICES + base
