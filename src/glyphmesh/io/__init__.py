"""Font I/O layer for glyphmesh.

This module handles reading outline fonts with fonttools and parsing
SDF/MSDF atlas descriptors. It provides a clean abstraction layer between
file formats and the domain models.

Key responsibilities:
- Load TTF/OTF fonts and convert glyphs to path commands
- Read pair kerning from GPOS or the legacy kern table
- Parse msdfgen and BMFont atlas JSON

Key classes:
- FontFace: Loaded font implementing FontMetrics
- PathCommandPen: fonttools pen recording path commands
"""

from glyphmesh.io.atlas import load_sdf_font, parse_sdf_font_json
from glyphmesh.io.converter import PathCommandPen, fonttools_glyph_to_outline
from glyphmesh.io.reader import FontFace

__all__ = [
    "FontFace",
    "PathCommandPen",
    "fonttools_glyph_to_outline",
    "load_sdf_font",
    "parse_sdf_font_json",
]
