"""SDF/MSDF font atlas representation.

Both supported descriptor schemas (BMFont JSON and msdfgen JSON) are
normalized into these types by ``glyphmesh.io.atlas``. Atlas rectangles are
always expressed in pixels with a top-left origin.
"""

from dataclasses import dataclass, field
from enum import Enum


class FieldType(str, Enum):
    """Kind of distance field stored in the atlas."""

    SDF = "sdf"
    PSDF = "psdf"
    MSDF = "msdf"
    MTSDF = "mtsdf"
    SOFTMASK = "softmask"
    HARDMASK = "hardmask"


@dataclass(frozen=True, slots=True)
class SDFGlyph:
    """Metrics for a single character in the atlas.

    Attributes:
        id: Character code (unicode)
        x: X position in atlas (pixels)
        y: Y position in atlas (pixels, top-left origin)
        width: Width in atlas (pixels)
        height: Height in atlas (pixels)
        xoffset: X offset from the pen when rendering (pixels)
        yoffset: Y offset from the line top when rendering (pixels)
        xadvance: Pen advance (pixels)
        page: Atlas page index
    """

    id: int
    x: float
    y: float
    width: float
    height: float
    xoffset: float
    yoffset: float
    xadvance: float
    page: int = 0


@dataclass(frozen=True, slots=True)
class SDFInfo:
    """Font info from the atlas generator."""

    face: str = "Unknown"
    size: float = 32.0
    bold: bool = False
    italic: bool = False
    padding: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    spacing: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True, slots=True)
class SDFCommon:
    """Common metrics shared by all glyphs.

    Attributes:
        line_height: Line height (pixels)
        base: Distance from line top to baseline (pixels)
        scale_w: Atlas texture width (pixels)
        scale_h: Atlas texture height (pixels)
        pages: Number of atlas pages
    """

    line_height: float
    base: float
    scale_w: float = 512.0
    scale_h: float = 512.0
    pages: int = 1


@dataclass(frozen=True, slots=True)
class SDFDistanceField:
    """Distance field parameters."""

    field_type: FieldType = FieldType.MSDF
    distance_range: float = 4.0


@dataclass
class SDFFont:
    """Complete SDF/MSDF font data.

    Attributes:
        info: Generator info (face, size, ...)
        common: Common metrics
        distance_field: Distance field parameters
        pages: Atlas page file names
        glyphs: Glyph data indexed by character code
        kernings: Kerning amounts (pixels) keyed by ``"first-second"``
    """

    info: SDFInfo
    common: SDFCommon
    distance_field: SDFDistanceField = field(default_factory=SDFDistanceField)
    pages: list[str] = field(default_factory=lambda: ["atlas.png"])
    glyphs: dict[int, SDFGlyph] = field(default_factory=dict)
    kernings: dict[str, float] = field(default_factory=dict)

    def get_glyph(self, codepoint: int) -> SDFGlyph | None:
        """Look up a glyph by character code."""
        return self.glyphs.get(codepoint)

    def get_kerning(self, first: int, second: int) -> float:
        """Get the kerning amount between two character codes (0 if none)."""
        return self.kernings.get(kerning_key(first, second), 0.0)


def kerning_key(first: int, second: int) -> str:
    """Build the ``"first-second"`` key used by ``SDFFont.kernings``."""
    return f"{first}-{second}"
