"""Exception hierarchy for glyphmesh."""


class GlyphMeshError(Exception):
    """Base exception for all glyphmesh errors."""

    pass


class FontError(GlyphMeshError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class GlyphError(GlyphMeshError):
    """Errors related to glyph lookup."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class GeometryError(GlyphMeshError):
    """Errors in geometric calculations."""

    pass


class ContourError(GeometryError):
    """Error with contour data or operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TriangulationError(GeometryError):
    """Error triangulating a glyph outline."""

    def __init__(self, glyph_index: int, reason: str) -> None:
        self.glyph_index = glyph_index
        self.reason = reason
        super().__init__(f"Triangulation failed for glyph {glyph_index}: {reason}")


class AtlasError(GlyphMeshError):
    """Errors related to SDF/MSDF atlas descriptors."""

    pass


class AtlasFormatError(AtlasError):
    """Atlas descriptor is malformed or uses an unknown schema."""

    def __init__(self, reason: str, source: str | None = None) -> None:
        self.reason = reason
        self.source = source
        where = f" '{source}'" if source else ""
        super().__init__(f"Invalid atlas descriptor{where}: {reason}")
