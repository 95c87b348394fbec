"""Logging utilities for glyphmesh."""

import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "glyphmesh"


@dataclass
class BuildStats:
    """Statistics from a geometry build."""

    glyph_count: int = 0
    triangulated_count: int = 0
    cache_hits: int = 0
    skipped_count: int = 0
    error_count: int = 0
    vertex_count: int = 0
    triangle_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Console output goes to stderr so exported data on stdout stays clean.
    A file handler is only added when ``log_file`` is given.

    Args:
        log_file: Path to log file (None = no file output)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces the handlers installed by a previous call
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphmesh")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class GeometryLogger:
    """Logger for tracking glyph builds and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("glyphmesh.geometry")
        self._stats = BuildStats()

    def log_glyph_triangulated(
        self,
        glyph_name: str,
        vertex_count: int,
        triangle_count: int,
        duration_ms: float,
    ) -> None:
        """Log a glyph triangulated on a cache miss."""
        self._logger.debug(
            "Glyph triangulated",
            glyph=glyph_name,
            vertices=vertex_count,
            triangles=triangle_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.triangulated_count += 1

    def log_glyph_placed(self, vertex_count: int, triangle_count: int, cached: bool) -> None:
        """Count a glyph instance written to the output buffer."""
        self._stats.glyph_count += 1
        self._stats.vertex_count += vertex_count
        self._stats.triangle_count += triangle_count
        if cached:
            self._stats.cache_hits += 1

    def log_glyph_skipped(self, glyph_name: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=glyph_name, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(self, glyph_name: str, error: Exception) -> None:
        """Log a glyph that failed to triangulate."""
        self._logger.warning(
            "Glyph triangulation failed",
            glyph=glyph_name,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_name, str(error)))

    def log_build_started(self) -> None:
        """Mark the start of the first build these statistics cover."""
        if self._stats.start_time is None:
            self._stats.start_time = time.time()

    def log_build_complete(self, label: str) -> None:
        """Log a finished build with its totals."""
        self._stats.end_time = time.time()
        self._logger.info(
            "Geometry built",
            label=label,
            glyphs=self._stats.glyph_count,
            vertices=self._stats.vertex_count,
            triangles=self._stats.triangle_count,
            errors=self._stats.error_count,
        )

    @property
    def stats(self) -> BuildStats:
        """Get current build statistics."""
        return self._stats

    def reset(self) -> None:
        """Start a fresh set of statistics."""
        self._stats = BuildStats()
