"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from gerberview.domain import Layer
from gerberview.utils import BuildStats, RenderStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for document building.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]GerberView[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(document_path: str, command_count: int, layer: Layer) -> None:
    """Print document and layer information.

    Args:
        document_path: Path to the command document
        command_count: Number of commands in the document
        layer: Layer built from the document
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(document_path)
    console.print(line)

    bbox = layer.bounding_box()
    console.print(
        f"  {command_count:,} commands {SYM_DOT} {len(layer.primitives):,} primitives "
        f"{SYM_DOT} {bbox.width():.3f} x {bbox.height():.3f}"
    )
    if not layer.image_transform.is_identity():
        console.print(f"  image transform: {layer.image_transform.to_dict()}")


def _format_counts(counts: dict[str, int]) -> str:
    return f" {SYM_DOT} ".join(f"{count} {name}" for name, count in sorted(counts.items()))


def print_render_summary(
    stats: RenderStats, op_counts: dict[str, int], scale: float, verbose: bool
) -> None:
    """Print the outcome of a render.

    Args:
        stats: Render statistics
        op_counts: Draw operations per kind
        scale: Fitted view scale
        verbose: Whether to list skipped primitives
    """
    console.print(
        f"  [green]{stats.drawn_count}[/green] drawn {SYM_DOT} {stats.skipped_count} skipped "
        f"{SYM_DOT} scale {scale:.4g}"
    )
    if op_counts:
        console.print(f"  {_format_counts(op_counts)}")
    if stats.rotated_rects or stats.meshes:
        console.print(
            f"  {stats.fast_path_rects} axis-aligned rects {SYM_DOT} "
            f"{stats.rotated_rects} rotated rects {SYM_DOT} {stats.meshes} meshes"
        )
    if verbose and stats.skipped:
        for index, reason in stats.skipped[:20]:
            console.print(f"  [yellow]#{index}[/yellow] {reason}")
        if len(stats.skipped) > 20:
            console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(stats.skipped) - 20} more)")


def print_layer_table(layers: dict[str, Layer]) -> None:
    """Print one table row per built layer.

    Args:
        layers: Layers by document name
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Document")
    table.add_column("Primitives", justify="right")
    table.add_column("Kinds")
    table.add_column("Size", justify="right")

    for name in sorted(layers):
        layer = layers[name]
        bbox = layer.bounding_box()
        table.add_row(
            name,
            str(len(layer.primitives)),
            _format_counts(layer.primitive_counts()),
            f"{bbox.width():.3f} x {bbox.height():.3f}",
        )

    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_build_summary(stats: BuildStats) -> None:
    """Print build summary.

    Args:
        stats: Build statistics
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(stats.duration_seconds)}"
    )

    error_style = "red" if stats.error_count > 0 else "green"
    console.print(
        f"  {stats.built_count} documents {SYM_DOT} {stats.primitive_count} primitives "
        f"{SYM_DOT} [{error_style}]{stats.error_count} errors[/{error_style}]"
    )
    if stats.avg_document_time_ms is not None:
        console.print(f"  {stats.avg_document_time_ms:.1f}ms avg")
    for name, error in stats.errors:
        line = Text(f"  {SYM_ERR} ")
        line.append(name, style="bold")
        line.append(f": {error}")
        console.print(line)


def print_saved(output_path: str, file_size: str) -> None:
    """Print the location of a written draw list.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
    """
    console.print(f"\n[bold green]{SYM_OK} Saved[/bold green]")
    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress documents")
