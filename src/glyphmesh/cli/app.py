"""CLI application entry point for glyphmesh.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import numpy as np
import typer
from pydantic import ValidationError

from glyphmesh import __version__
from glyphmesh.cli.output import (
    console,
    create_glyph_table,
    print_atlas_info,
    print_error,
    print_font_info,
    print_header,
    print_mesh_summary,
    print_saved,
    print_step,
)
from glyphmesh.config import (
    Align,
    AtlasTextOptions,
    GeometryConfig,
    GlyphMeshSettings,
    LayoutOptions,
    LoggingConfig,
    Overflow,
    WordWrap,
    get_default_settings,
)
from glyphmesh.core import (
    AtlasTextGeometryBuilder,
    ContourHierarchyResolver,
    GlyphTriangulator,
    PolygonTriangulator,
    VectorTextGeometryBuilder,
)
from glyphmesh.domain import GlyphOutline, MeshData
from glyphmesh.exceptions import FontLoadError, GlyphMeshError
from glyphmesh.io import FontFace, load_sdf_font
from glyphmesh.utils.logging import GeometryLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphmesh",
    help="Triangulate font glyphs and build GPU-ready text meshes.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphmesh[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Triangulate font glyphs and build GPU-ready text meshes."""
    settings = GlyphMeshSettings(logging=LoggingConfig(log_file=log_file, log_level=log_level))
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"quiet": quiet, "settings": settings}


def _is_quiet(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("quiet"))


def _settings(ctx: typer.Context) -> GlyphMeshSettings:
    if ctx.obj and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return get_default_settings()


def _unescape(text: str) -> str:
    """Turn a literal ``\\n`` typed on the command line into a line break."""
    return text.replace("\\n", "\n")


@app.command()
def mesh(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="Text to triangulate (\\n starts a new line)",
            show_default=False,
        ),
    ],
    font_size: Annotated[
        float,
        typer.Option("--font-size", "-s", help="Font size in layout units"),
    ] = 16.0,
    line_height: Annotated[
        float,
        typer.Option("--line-height", help="Line height as a multiple of the font size"),
    ] = 1.2,
    letter_spacing: Annotated[
        float,
        typer.Option("--letter-spacing", help="Extra advance after each glyph"),
    ] = 0.0,
    max_width: Annotated[
        float | None,
        typer.Option("--max-width", "-w", help="Wrapping width (default: unbounded)"),
    ] = None,
    max_height: Annotated[
        float | None,
        typer.Option("--max-height", help="Maximum block height (default: unbounded)"),
    ] = None,
    align: Annotated[
        Align,
        typer.Option("--align", "-a", help="Horizontal alignment"),
    ] = Align.LEFT,
    overflow: Annotated[
        Overflow,
        typer.Option("--overflow", help="Overflow handling"),
    ] = Overflow.VISIBLE,
    word_wrap: Annotated[
        WordWrap,
        typer.Option("--word-wrap", help="Line breaking policy"),
    ] = WordWrap.NORMAL,
    tolerance: Annotated[
        float,
        typer.Option("--tolerance", help="Curve flattening tolerance at 1000 UPM"),
    ] = 1.0,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write vertices and indices to a .npz file"),
    ] = None,
) -> None:
    """Lay out TEXT with an outline font and triangulate it into one mesh.

    Example:
        glyphmesh mesh Roboto-Regular.ttf "Hello\\nWorld" --font-size 48 -o hello.npz
    """
    quiet = _is_quiet(ctx)

    try:
        settings = _settings(ctx).model_copy(
            update={
                "layout": LayoutOptions(
                    font_size=font_size,
                    line_height=line_height,
                    letter_spacing=letter_spacing,
                    max_width=max_width,
                    max_height=max_height,
                    align=align,
                    overflow=overflow,
                    word_wrap=word_wrap,
                ),
                "geometry": GeometryConfig(bezier_flatten_tolerance=tolerance),
            }
        )

        if not quiet:
            print_header(__version__)
            print_step("Loading font")

        with FontFace(font_path) as face:
            if not quiet:
                print_font_info(str(font_path), face.format, face.glyph_count, face.units_per_em)
                print_step("Triangulating")

            geometry_logger = GeometryLogger()
            builder = VectorTextGeometryBuilder(config=settings.geometry, logger=geometry_logger)
            start = time.perf_counter()
            result = builder.build(_unescape(text), face, settings.layout)
            elapsed = time.perf_counter() - start

        if output is not None:
            _save_mesh(output, result.mesh, width=result.metrics.width, height=result.metrics.height)

        if not quiet:
            print_mesh_summary(
                result.mesh,
                width=result.metrics.width,
                height=result.metrics.height,
                line_count=result.metrics.line_count,
                glyph_count=len(result.metrics.glyphs),
                total_time_s=elapsed,
                errors=geometry_logger.stats.error_count,
            )
            if output is not None:
                print_saved(str(output))

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)
    except GlyphMeshError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write output: {e}")
        raise typer.Exit(code=1)


@app.command()
def atlas(
    ctx: typer.Context,
    descriptor: Annotated[
        Path,
        typer.Argument(
            help="Path to an msdfgen or BMFont JSON atlas descriptor",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="Text to lay out (\\n starts a new line)",
            show_default=False,
        ),
    ],
    font_size: Annotated[
        float | None,
        typer.Option("--font-size", "-s", help="Font size in pixels (default: atlas size)"),
    ] = None,
    line_height: Annotated[
        float,
        typer.Option("--line-height", help="Multiplier applied to the atlas line height"),
    ] = 1.0,
    letter_spacing: Annotated[
        float,
        typer.Option("--letter-spacing", help="Letter spacing in pixels"),
    ] = 0.0,
    align: Annotated[
        Align,
        typer.Option("--align", "-a", help="Horizontal alignment"),
    ] = Align.LEFT,
    max_width: Annotated[
        float,
        typer.Option("--max-width", "-w", help="Wrapping width in pixels (0 = no wrapping)"),
    ] = 0.0,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write vertices and indices to a .npz file"),
    ] = None,
) -> None:
    """Build textured quads for TEXT from an SDF/MSDF atlas descriptor.

    Example:
        glyphmesh atlas Roboto-msdf.json "Hello" --font-size 48 -o hello.npz
    """
    quiet = _is_quiet(ctx)

    try:
        settings = _settings(ctx).model_copy(
            update={
                "atlas": AtlasTextOptions(
                    font_size=font_size,
                    line_height=line_height,
                    letter_spacing=letter_spacing,
                    align=align,
                    max_width=max_width,
                ),
            }
        )

        if not quiet:
            print_header(__version__)
            print_step("Loading atlas")

        font = load_sdf_font(descriptor)

        if not quiet:
            print_atlas_info(
                str(descriptor),
                font.info.face,
                font.info.size,
                font.distance_field.field_type.value,
                len(font.glyphs),
            )
            print_step("Building quads")

        start = time.perf_counter()
        result = AtlasTextGeometryBuilder().build(_unescape(text), font, settings.atlas)
        elapsed = time.perf_counter() - start

        if output is not None:
            _save_mesh(output, result.mesh, width=result.metrics.width, height=result.metrics.height)

        if not quiet:
            print_mesh_summary(
                result.mesh,
                width=result.metrics.width,
                height=result.metrics.height,
                line_count=result.metrics.line_count,
                glyph_count=result.metrics.glyph_count,
                total_time_s=elapsed,
            )
            if output is not None:
                print_saved(str(output))

    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)
    except GlyphMeshError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not read or write file: {e}")
        raise typer.Exit(code=1)


@app.command()
def inspect(
    ctx: typer.Context,
    font_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    chars: Annotated[
        str | None,
        typer.Option("--chars", "-c", help="Only inspect these characters (default: all glyphs)"),
    ] = None,
) -> None:
    """Show the contour hierarchy and triangle counts of each glyph."""
    quiet = _is_quiet(ctx)

    try:
        with FontFace(font_path) as face:
            if not quiet:
                print_header(__version__)
                print_font_info(str(font_path), face.format, face.glyph_count, face.units_per_em)
                print_step("Inspecting glyphs")

            if chars is None:
                glyphs: list[GlyphOutline] = list(face.iter_glyphs())
            else:
                glyphs = []
                for char in chars:
                    glyph = face.char_to_glyph(char)
                    if glyph is None:
                        console.print(f"  [yellow]no glyph for {char!r}[/yellow]")
                        continue
                    glyphs.append(glyph)

            table = create_glyph_table()
            triangulator = GlyphTriangulator()
            resolver = ContourHierarchyResolver()
            polygons = PolygonTriangulator()

            for glyph in glyphs:
                contours = triangulator.contour_builder(face.units_per_em).build(glyph.commands)
                hierarchy = resolver.analyze(contours)
                tri = polygons.triangulate(hierarchy.roots)
                table.add_row(
                    glyph.name,
                    f"U+{glyph.unicode:04X}" if glyph.unicode is not None else "-",
                    str(len(contours)),
                    str(len(hierarchy.roots)),
                    str(hierarchy.hole_count),
                    str(hierarchy.island_count),
                    str(tri.vertex_count),
                    str(tri.triangle_count),
                )

            console.print(table)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphMeshError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _save_mesh(path: Path, mesh_data: MeshData, width: float, height: float) -> None:
    """Write a mesh to an uncompressed .npz archive."""
    np.savez(
        path,
        vertices=mesh_data.vertices,
        indices=mesh_data.indices,
        stride=np.int32(mesh_data.layout.stride),
        size=np.array([width, height], dtype=np.float32),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
