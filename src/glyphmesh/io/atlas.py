"""SDF/MSDF atlas descriptor parsing.

Two JSON schemas are recognized and normalized into ``SDFFont``:

- msdfgen / msdf-atlas-gen (``atlas`` + ``metrics`` + ``glyphs`` in em units)
- BMFont JSON (``info``/``common``/``chars`` in pixels, as written by
  msdf-bmfont-xml and similar tools)

Both are normalized so that atlas rectangles use a top-left origin and
``yoffset`` is measured from the line top.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from glyphmesh.domain import (
    FieldType,
    SDFCommon,
    SDFDistanceField,
    SDFFont,
    SDFGlyph,
    SDFInfo,
    kerning_key,
)
from glyphmesh.exceptions import AtlasFormatError

DEFAULT_SIZE = 32.0
DEFAULT_ATLAS_SIZE = 512.0
DEFAULT_DISTANCE_RANGE = 4.0
DEFAULT_ASCENDER_EM = 0.8
DEFAULT_ADVANCE_EM = 0.5
DEFAULT_PAGE = "atlas.png"


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


# msdfgen schema


class _MsdfAtlas(_RawModel):
    type: FieldType = FieldType.MSDF
    distanceRange: float = 0.0
    size: float = 0.0
    width: float = 0.0
    height: float = 0.0
    yOrigin: str = "bottom"
    filename: str | None = None


class _MsdfMetrics(_RawModel):
    family: str | None = None
    emSize: float = 0.0
    lineHeight: float = 0.0
    ascender: float = 0.0
    descender: float = 0.0


class _Bounds(_RawModel):
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0
    top: float = 0.0


class _MsdfGlyph(_RawModel):
    unicode: int
    advance: float = 0.0
    planeBounds: _Bounds | None = None
    atlasBounds: _Bounds | None = None


class _MsdfKerning(_RawModel):
    unicode1: int
    unicode2: int
    advance: float = 0.0


class _MsdfDocument(_RawModel):
    atlas: _MsdfAtlas
    metrics: _MsdfMetrics
    glyphs: list[_MsdfGlyph] = Field(default_factory=list)
    kerning: list[_MsdfKerning] = Field(default_factory=list)


# BMFont schema


class _BMInfo(_RawModel):
    face: str | None = None
    size: float = 0.0
    bold: bool = False
    italic: bool = False
    padding: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    spacing: tuple[float, float] = (0.0, 0.0)


class _BMCommon(_RawModel):
    lineHeight: float = 0.0
    base: float = 0.0
    scaleW: float = 0.0
    scaleH: float = 0.0
    pages: int = 0


class _BMDistanceField(_RawModel):
    fieldType: FieldType = FieldType.MSDF
    distanceRange: float = 0.0


class _BMChar(_RawModel):
    id: int = 0
    unicode: int = 0
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    xoffset: float = 0.0
    yoffset: float = 0.0
    xadvance: float = 0.0
    page: int = 0


class _BMKerning(_RawModel):
    first: int
    second: int
    amount: float = 0.0


class _BMDocument(_RawModel):
    info: _BMInfo = Field(default_factory=_BMInfo)
    common: _BMCommon = Field(default_factory=_BMCommon)
    distanceField: _BMDistanceField | None = None
    pages: list[str] = Field(default_factory=list)
    chars: list[_BMChar] = Field(default_factory=list)
    glyphs: list[_BMChar] = Field(default_factory=list)
    kernings: list[_BMKerning] = Field(default_factory=list)


def parse_sdf_font_json(data: Any, source: str | None = None) -> SDFFont:
    """Parse a decoded atlas descriptor.

    Args:
        data: Decoded JSON document
        source: Label for error messages (usually the file path)

    Returns:
        Normalized SDFFont

    Raises:
        AtlasFormatError: If the schema is unknown or a field has the wrong type
    """
    if not isinstance(data, dict):
        raise AtlasFormatError(f"expected a JSON object, got {type(data).__name__}", source)

    try:
        if "atlas" in data and "metrics" in data:
            return _from_msdfgen(_MsdfDocument.model_validate(data))
        if "chars" in data or "glyphs" in data:
            return _from_bmfont(_BMDocument.model_validate(data), source)
    except ValidationError as e:
        raise AtlasFormatError(str(e), source) from e

    raise AtlasFormatError("unknown SDF font format", source)


def load_sdf_font(path: Path | str) -> SDFFont:
    """Load and parse an atlas descriptor from a JSON file.

    Args:
        path: Path to the descriptor

    Returns:
        Normalized SDFFont

    Raises:
        AtlasFormatError: If the file is not valid JSON or not a known schema
        OSError: If the file cannot be read
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AtlasFormatError(f"invalid JSON: {e}", str(path)) from e
    return parse_sdf_font_json(data, source=str(path))


def _from_msdfgen(doc: _MsdfDocument) -> SDFFont:
    """Convert an msdfgen document to BMFont-style pixel metrics.

    Unlike raw msdfgen output, atlas rectangles are rewritten to a top-left
    origin and ``yoffset`` is measured down from the ascender (the line top)
    rather than from the em box top.
    """
    size = doc.metrics.emSize or DEFAULT_SIZE
    ascender = doc.metrics.ascender or DEFAULT_ASCENDER_EM

    info = SDFInfo(face=doc.metrics.family or "Unknown", size=size)
    common = SDFCommon(
        line_height=(doc.metrics.lineHeight or 1.0) * size,
        base=ascender * size,
        scale_w=doc.atlas.width or DEFAULT_ATLAS_SIZE,
        scale_h=doc.atlas.height or DEFAULT_ATLAS_SIZE,
        pages=1,
    )
    distance_field = SDFDistanceField(
        field_type=doc.atlas.type,
        distance_range=doc.atlas.distanceRange or DEFAULT_DISTANCE_RANGE,
    )
    top_origin = doc.atlas.yOrigin == "top"

    glyphs: dict[int, SDFGlyph] = {}
    for g in doc.glyphs:
        bounds = g.atlasBounds
        if bounds is None:
            continue

        height = abs(bounds.top - bounds.bottom)
        if top_origin:
            y = min(bounds.top, bounds.bottom)
        else:
            y = common.scale_h - max(bounds.top, bounds.bottom)

        plane = g.planeBounds
        glyphs[g.unicode] = SDFGlyph(
            id=g.unicode,
            x=bounds.left,
            y=y,
            width=bounds.right - bounds.left,
            height=height,
            xoffset=plane.left * size if plane else 0.0,
            yoffset=(ascender - plane.top) * size if plane else 0.0,
            xadvance=(g.advance or DEFAULT_ADVANCE_EM) * size,
        )

    kernings = {kerning_key(k.unicode1, k.unicode2): k.advance * size for k in doc.kerning}

    return SDFFont(
        info=info,
        common=common,
        distance_field=distance_field,
        pages=[doc.atlas.filename or DEFAULT_PAGE],
        glyphs=glyphs,
        kernings=kernings,
    )


def _from_bmfont(doc: _BMDocument, source: str | None) -> SDFFont:
    size = doc.info.size or DEFAULT_SIZE

    info = SDFInfo(
        face=doc.info.face or "Unknown",
        size=size,
        bold=doc.info.bold,
        italic=doc.info.italic,
        padding=doc.info.padding,
        spacing=doc.info.spacing,
    )
    common = SDFCommon(
        line_height=doc.common.lineHeight or size,
        base=doc.common.base or size * DEFAULT_ASCENDER_EM,
        scale_w=doc.common.scaleW or DEFAULT_ATLAS_SIZE,
        scale_h=doc.common.scaleH or DEFAULT_ATLAS_SIZE,
        pages=doc.common.pages or 1,
    )
    if doc.distanceField is not None:
        distance_field = SDFDistanceField(
            field_type=doc.distanceField.fieldType,
            distance_range=doc.distanceField.distanceRange or DEFAULT_DISTANCE_RANGE,
        )
    else:
        # BMFont files from A-Frame style tools omit this block but are MSDF
        distance_field = SDFDistanceField()

    glyphs: dict[int, SDFGlyph] = {}
    for c in doc.chars or doc.glyphs:
        code = c.id or c.unicode
        if not code:
            raise AtlasFormatError("character entry without id or unicode", source)
        glyphs[code] = SDFGlyph(
            id=code,
            x=c.x,
            y=c.y,
            width=c.width,
            height=c.height,
            xoffset=c.xoffset,
            yoffset=c.yoffset,
            xadvance=c.xadvance,
            page=c.page,
        )

    kernings = {kerning_key(k.first, k.second): k.amount for k in doc.kernings}

    return SDFFont(
        info=info,
        common=common,
        distance_field=distance_field,
        pages=doc.pages or [DEFAULT_PAGE],
        glyphs=glyphs,
        kernings=kernings,
    )
