"""Text layout for outline fonts.

Positions the glyphs of a string given font metrics and ``LayoutOptions``:
paragraphs split on newlines, words split on spaces, greedy word wrap,
per-line width overflow (hidden or ellipsis), block height overflow and
horizontal alignment. Layout is a pure function of its inputs.
"""

import math
from dataclasses import dataclass, field

from glyphmesh.config import Align, LayoutOptions, Overflow, WordWrap
from glyphmesh.domain import FontMetrics, GlyphLayout, GlyphOutline, TextMetrics

ELLIPSIS_CHAR = "…"
ELLIPSIS_FALLBACK_CHAR = "."
SPACE_CHAR = " "
MISSING_ADVANCE_EM = 0.3


@dataclass
class _Placed:
    """A glyph positioned relative to the start of its word or line."""

    glyph: GlyphOutline
    x: float
    advance: float


@dataclass
class _Line:
    glyphs: list[_Placed] = field(default_factory=list)
    width: float = 0.0


@dataclass
class _LayoutContext:
    font: FontMetrics
    options: LayoutOptions
    scale: float
    missing_advance: float


class TextLayoutEngine:
    """Lays out text with an outline font.

    Example:
        engine = TextLayoutEngine()
        metrics = engine.layout("Hello\\nWorld", font, LayoutOptions(font_size=32))
        for placed in metrics.glyphs:
            print(placed.glyph.name, placed.x, placed.y)
    """

    def layout(self, text: str, font: FontMetrics, options: LayoutOptions) -> TextMetrics:
        """Compute glyph positions for ``text``.

        Args:
            text: Text to lay out; ``\\n`` starts a new paragraph
            font: Font metrics provider
            options: Layout options

        Returns:
            Immutable TextMetrics; the same inputs always give equal results
        """
        scale = options.font_size / font.units_per_em
        ctx = _LayoutContext(
            font=font,
            options=options,
            scale=scale,
            missing_advance=self._missing_advance(font, options, scale),
        )

        lines = self._break_lines(text, ctx)
        emitted = self._apply_overflow(lines, ctx)
        return self._position(emitted, ctx)

    def measure(self, text: str, font: FontMetrics, options: LayoutOptions) -> float:
        """Measure the unwrapped advance width of a single run of text."""
        scale = options.font_size / font.units_per_em
        ctx = _LayoutContext(
            font=font,
            options=options,
            scale=scale,
            missing_advance=self._missing_advance(font, options, scale),
        )
        _, width = self._measure_word(text, ctx)
        return width

    @staticmethod
    def _missing_advance(font: FontMetrics, options: LayoutOptions, scale: float) -> float:
        space = font.char_to_glyph(SPACE_CHAR)
        if space is not None:
            return space.advance_width * scale + options.letter_spacing
        return options.font_size * MISSING_ADVANCE_EM + options.letter_spacing

    def _measure_word(self, chars: str, ctx: _LayoutContext) -> tuple[list[_Placed], float]:
        """Place the glyphs of one word starting at x=0.

        Kerning between consecutive glyphs is applied before the second
        glyph. Characters the font lacks advance the pen without placing
        anything.
        """
        placed: list[_Placed] = []
        width = 0.0
        previous: GlyphOutline | None = None

        for char in chars:
            glyph = ctx.font.char_to_glyph(char)
            if glyph is None:
                width += ctx.missing_advance
                previous = None
                continue

            if previous is not None:
                width += ctx.font.kerning(previous, glyph) * ctx.scale

            advance = glyph.advance_width * ctx.scale + ctx.options.letter_spacing
            placed.append(_Placed(glyph=glyph, x=width, advance=advance))
            width += advance
            previous = glyph

        return placed, width

    def _break_lines(self, text: str, ctx: _LayoutContext) -> list[_Line]:
        options = ctx.options
        max_width = options.max_width
        wraps = options.word_wrap is not WordWrap.NOWRAP and max_width is not None
        lines: list[_Line] = []
        limit = max_width if max_width is not None else math.inf

        for paragraph in text.split("\n"):
            words = paragraph.split(SPACE_CHAR)
            line = _Line()

            for w_idx, word in enumerate(words):
                chars = word if w_idx == len(words) - 1 else word + SPACE_CHAR
                pieces, word_width = self._measure_word(chars, ctx)

                if not wraps:
                    self._append(line, pieces, word_width)
                    continue

                if line.glyphs and line.width + word_width > limit:
                    if options.word_wrap is WordWrap.BREAK_ALL:
                        head, head_width, pieces, word_width = self._split(
                            pieces, word_width, limit - line.width, require_head=False
                        )
                        self._append(line, head, head_width)
                    lines.append(line)
                    line = _Line()

                if options.word_wrap in (WordWrap.BREAK_WORD, WordWrap.BREAK_ALL):
                    while len(pieces) > 1 and line.width + word_width > limit:
                        head, head_width, pieces, word_width = self._split(
                            pieces, word_width, limit - line.width, require_head=not line.glyphs
                        )
                        self._append(line, head, head_width)
                        lines.append(line)
                        line = _Line()

                self._append(line, pieces, word_width)

            if line.glyphs or line.width > 0 or paragraph == "":
                lines.append(line)

        return lines

    @staticmethod
    def _append(line: _Line, pieces: list[_Placed], width: float) -> None:
        for piece in pieces:
            line.glyphs.append(_Placed(glyph=piece.glyph, x=piece.x + line.width, advance=piece.advance))
        line.width += width

    @staticmethod
    def _split(
        pieces: list[_Placed],
        width: float,
        available: float,
        require_head: bool,
    ) -> tuple[list[_Placed], float, list[_Placed], float]:
        """Split a word's glyphs at the first glyph that would overflow.

        Args:
            pieces: Glyphs of the word, positioned from x=0
            width: Total word width
            available: Room left on the line
            require_head: Keep at least one glyph in the head so a line
                always makes progress

        Returns:
            (head, head_width, tail rebased to x=0, tail_width)
        """
        cut = 0
        for piece in pieces:
            if piece.x + piece.advance > available:
                break
            cut += 1

        if require_head and cut == 0:
            cut = 1

        head = pieces[:cut]
        tail = pieces[cut:]
        head_width = head[-1].x + head[-1].advance if head else 0.0

        if not tail:
            return head, width, [], 0.0

        start = tail[0].x
        rebased = [_Placed(glyph=p.glyph, x=p.x - start, advance=p.advance) for p in tail]
        return head, head_width, rebased, width - start

    def _apply_overflow(self, lines: list[_Line], ctx: _LayoutContext) -> list[_Line]:
        options = ctx.options
        clips = options.overflow in (Overflow.HIDDEN, Overflow.ELLIPSIS)
        line_advance = options.line_advance
        emitted: list[_Line] = []

        ellipsis = None
        ellipsis_width = 0.0
        if options.overflow is Overflow.ELLIPSIS:
            ellipsis = ctx.font.char_to_glyph(ELLIPSIS_CHAR) or ctx.font.char_to_glyph(
                ELLIPSIS_FALLBACK_CHAR
            )
            if ellipsis is not None:
                ellipsis_width = ellipsis.advance_width * ctx.scale + options.letter_spacing

        for line in lines:
            if (
                clips
                and options.max_height is not None
                and (len(emitted) + 1) * line_advance > options.max_height
            ):
                break

            if clips and options.max_width is not None and line.width > options.max_width:
                line = self._truncate(line, options.max_width, ellipsis, ellipsis_width)

            emitted.append(line)

        return emitted

    @staticmethod
    def _truncate(
        line: _Line,
        max_width: float,
        ellipsis: GlyphOutline | None,
        ellipsis_width: float,
    ) -> _Line:
        target = max_width - ellipsis_width if ellipsis is not None else max_width
        kept: list[_Placed] = []
        width = 0.0

        for piece in line.glyphs:
            if piece.x + piece.advance > target:
                break
            kept.append(piece)
            width = piece.x + piece.advance

        if ellipsis is not None:
            kept.append(_Placed(glyph=ellipsis, x=width, advance=ellipsis_width))
            width += ellipsis_width

        return _Line(glyphs=kept, width=width)

    @staticmethod
    def _position(lines: list[_Line], ctx: _LayoutContext) -> TextMetrics:
        options = ctx.options
        line_advance = options.line_advance
        block_width = max((line.width for line in lines), default=0.0)
        reference = options.max_width if options.max_width is not None else block_width

        glyphs: list[GlyphLayout] = []
        y = ctx.font.ascender * ctx.scale

        for line_idx, line in enumerate(lines):
            if options.align is Align.CENTER:
                x_offset = (reference - line.width) / 2
            elif options.align is Align.RIGHT:
                x_offset = reference - line.width
            else:
                x_offset = 0.0

            for piece in line.glyphs:
                glyphs.append(GlyphLayout(glyph=piece.glyph, x=piece.x + x_offset, y=y, line=line_idx))

            y += line_advance

        return TextMetrics(
            width=block_width,
            height=len(lines) * line_advance,
            line_count=len(lines),
            glyphs=tuple(glyphs),
        )


def layout_text(text: str, font: FontMetrics, options: LayoutOptions | None = None) -> TextMetrics:
    """Lay out ``text`` with a default ``TextLayoutEngine``."""
    return TextLayoutEngine().layout(text, font, options or LayoutOptions())
