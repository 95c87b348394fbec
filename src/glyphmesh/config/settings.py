"""Configuration settings for glyphmesh."""

import math
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class Align(str, Enum):
    """Horizontal alignment of each line."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Overflow(str, Enum):
    """What happens to text that does not fit the layout box."""

    VISIBLE = "visible"
    HIDDEN = "hidden"
    ELLIPSIS = "ellipsis"


class WordWrap(str, Enum):
    """Line breaking policy."""

    NORMAL = "normal"
    BREAK_WORD = "break-word"
    BREAK_ALL = "break-all"
    NOWRAP = "nowrap"


class GeometryConfig(BaseModel):
    """Configuration for outline flattening with scale-relative tolerances.

    Tolerance values are specified at a reference UPM of 1000 and are
    scaled proportionally for fonts with different UPM values.
    """

    reference_upm: int = Field(
        default=1000,
        gt=0,
        description="Reference UPM for tolerance values",
    )
    bezier_flatten_tolerance: float = Field(
        default=1.0,
        ge=0.01,
        le=10.0,
        description="Maximum control point distance from the chord (at reference UPM)",
    )
    max_subdivision_depth: int = Field(
        default=16,
        ge=1,
        le=32,
        description="Maximum De Casteljau subdivision depth per curve segment",
    )
    close_epsilon: float = Field(
        default=1e-4,
        ge=0.0,
        description="Gap (font units) above which closePath appends the start point",
    )

    def scale_tolerance(self, base_value: float, upm: int) -> float:
        """Scale a tolerance value for the given UPM.

        Args:
            base_value: The tolerance value at reference UPM
            upm: The actual UPM of the font

        Returns:
            Scaled tolerance value
        """
        return base_value * (upm / self.reference_upm)

    def get_bezier_tolerance(self, upm: int) -> float:
        """Get Bezier flattening tolerance scaled for UPM."""
        return self.scale_tolerance(self.bezier_flatten_tolerance, upm)


def _unbounded_to_none(value: float | None) -> float | None:
    if value is None or math.isinf(value):
        return None
    return value


class LayoutOptions(BaseModel):
    """Options for laying out text with an outline font.

    ``max_width`` and ``max_height`` of ``None`` (or infinity) mean
    unbounded.
    """

    font_size: float = Field(default=16.0, gt=0, description="Font size in layout units")
    line_height: float = Field(
        default=1.2,
        gt=0,
        description="Line height as a multiple of the font size",
    )
    letter_spacing: float = Field(default=0.0, description="Extra advance after each glyph")
    max_width: float | None = Field(default=None, gt=0, description="Wrapping width")
    max_height: float | None = Field(default=None, gt=0, description="Maximum block height")
    align: Align = Field(default=Align.LEFT)
    overflow: Overflow = Field(default=Overflow.VISIBLE)
    word_wrap: WordWrap = Field(default=WordWrap.NORMAL)

    @field_validator("max_width", "max_height")
    @classmethod
    def _normalize_unbounded(cls, value: float | None) -> float | None:
        return _unbounded_to_none(value)

    @property
    def line_advance(self) -> float:
        """Vertical distance between consecutive baselines."""
        return self.line_height * self.font_size


class AtlasTextOptions(BaseModel):
    """Options for building quad geometry from an SDF/MSDF atlas."""

    font_size: float | None = Field(
        default=None,
        gt=0,
        description="Font size in pixels (None = size the atlas was generated at)",
    )
    line_height: float = Field(
        default=1.0,
        gt=0,
        description="Multiplier applied to the atlas line height",
    )
    letter_spacing: float = Field(default=0.0, description="Letter spacing in pixels")
    align: Align = Field(default=Align.LEFT)
    max_width: float = Field(
        default=0.0,
        ge=0,
        description="Maximum width for word wrapping (0 = no wrapping)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphMeshSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    layout: LayoutOptions = Field(default_factory=LayoutOptions)
    atlas: AtlasTextOptions = Field(default_factory=AtlasTextOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphMeshSettings:
    """Get default application settings."""
    return GlyphMeshSettings()
