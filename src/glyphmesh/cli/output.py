"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glyphmesh.domain import MeshData

console = Console()
err_console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphmesh[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_atlas_info(source: str, face: str, size: float, field_type: str, glyph_count: int) -> None:
    """Print atlas descriptor information."""
    line1 = Text("  ")
    line1.append(source)
    line1.append(f" ({face})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {size:g}px {SYM_DOT} {field_type}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def print_mesh_summary(
    mesh: MeshData,
    width: float,
    height: float,
    line_count: int,
    glyph_count: int,
    total_time_s: float,
    errors: int = 0,
) -> None:
    """Print a summary of a built mesh.

    Args:
        mesh: Built vertex and index buffers
        width: Text block width
        height: Text block height
        line_count: Number of lines laid out
        glyph_count: Number of glyphs placed
        total_time_s: Build time in seconds
        errors: Number of glyphs that failed to triangulate
    """
    console.print(f"\n[bold green]{SYM_OK} Built[/bold green] in {_format_time(total_time_s)}")
    console.print(
        f"  {mesh.vertex_count:,} vertices {SYM_DOT} {mesh.triangle_count:,} triangles "
        f"{SYM_DOT} {mesh.index_format} indices {SYM_DOT} stride {mesh.layout.stride}"
    )
    console.print(
        f"  {glyph_count} glyphs {SYM_DOT} {line_count} lines {SYM_DOT} {width:.1f} x {height:.1f}"
    )
    if errors:
        console.print(f"  [red]{errors} glyphs failed[/red]")


def print_saved(path: str) -> None:
    """Print the path an export was written to."""
    line = Text("  ")
    line.append(path, style="bold")
    console.print(line)


def create_glyph_table() -> Table:
    """Create the table used by ``inspect``."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("glyph")
    table.add_column("unicode")
    table.add_column("contours", justify="right")
    table.add_column("roots", justify="right")
    table.add_column("holes", justify="right")
    table.add_column("islands", justify="right")
    table.add_column("vertices", justify="right")
    table.add_column("triangles", justify="right")
    return table


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    err_console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        err_console.print(f"  {details}")
