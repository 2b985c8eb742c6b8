"""CLI application entry point for gerberview.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from gerberview import __version__
from gerberview.cli.output import (
    console,
    create_progress,
    print_build_summary,
    print_cancellation_notice,
    print_document_info,
    print_error,
    print_header,
    print_layer_table,
    print_processing_info,
    print_render_summary,
    print_saved,
    print_step,
)
from gerberview.config import (
    GerberViewSettings,
    LoggingConfig,
    PlacementConfig,
    ProcessingConfig,
    RenderConfiguration,
    ViewConfig,
)
from gerberview.core import (
    DocumentProcessor,
    GerberViewer,
    RecordingSurface,
    Viewport,
    build_layer,
)
from gerberview.exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    GerberViewError,
    ParseFailure,
)
from gerberview.io import CommandReader, DrawListWriter
from gerberview.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="gerberview",
    help="Render parsed PCB artwork documents into screen-space draw lists.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]GerberView[/bold blue] v{__version__}")
        raise typer.Exit()


def _parse_pair(value: str, option: str) -> tuple[float, float]:
    """Parse an ``x,y`` option value.

    Raises:
        typer.BadParameter: If the value is not two comma-separated numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"expected 'x,y', got '{value}'", param_hint=option)
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise typer.BadParameter(f"expected 'x,y', got '{value}'", param_hint=option) from None


@app.command()
def render(
    input_document: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON command document",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the draw list as JSON to this path",
        ),
    ] = None,
    width: Annotated[
        int,
        typer.Option("--width", help="Viewport width in pixels", min=1),
    ] = 800,
    height: Annotated[
        int,
        typer.Option("--height", help="Viewport height in pixels", min=1),
    ] = 600,
    zoom: Annotated[
        float,
        typer.Option(
            "--zoom",
            "-z",
            help="Fraction of the viewport the artwork may occupy (0-1]",
            min=0.01,
            max=1.0,
        ),
    ] = 1.0,
    rotation: Annotated[
        float,
        typer.Option("--rotation", "-r", help="Placement rotation in degrees"),
    ] = 0.0,
    mirror_x: Annotated[
        bool,
        typer.Option("--mirror-x", help="Mirror X about the placement origin"),
    ] = False,
    mirror_y: Annotated[
        bool,
        typer.Option("--mirror-y", help="Mirror Y about the placement origin"),
    ] = False,
    origin: Annotated[
        str,
        typer.Option("--origin", help="Rotation/mirroring pivot as 'x,y'"),
    ] = "0,0",
    offset: Annotated[
        str,
        typer.Option("--offset", help="Placement offset as 'x,y'"),
    ] = "0,0",
    scale: Annotated[
        float,
        typer.Option("--scale", help="Uniform placement scale", min=0.0),
    ] = 1.0,
    unique_colors: Annotated[
        bool,
        typer.Option("--unique-colors", help="Give each shape its own colour"),
    ] = False,
    shape_numbers: Annotated[
        bool,
        typer.Option("--shape-numbers", help="Label each shape with its index"),
    ] = False,
    vertex_numbers: Annotated[
        bool,
        typer.Option("--vertex-numbers", help="Label polygon vertices with their index"),
    ] = False,
    shape_bboxes: Annotated[
        bool,
        typer.Option("--shape-bboxes", help="Outline each shape's bounding box"),
    ] = False,
    layer_bbox: Annotated[
        bool,
        typer.Option("--layer-bbox", help="Outline the transformed layer bounds"),
    ] = False,
    markers: Annotated[
        bool,
        typer.Option("--markers", help="Draw placement origin and offset markers"),
    ] = False,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
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
    """Fit a document into a viewport and render it to a draw list.

    Example:
        gerberview render top_copper.json --rotation 45 -o frame.json
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_document.is_file():
        print_error(
            f"Input file not found: {input_document}",
            details=f"The file '{input_document}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    origin_xy = _parse_pair(origin, "--origin")
    offset_xy = _parse_pair(offset, "--offset")

    if not quiet:
        print_header(__version__)

    settings = GerberViewSettings(
        render=RenderConfiguration(
            use_unique_shape_colors=unique_colors,
            use_shape_numbering=shape_numbers,
            use_vertex_numbering=vertex_numbers,
            use_shape_bboxes=shape_bboxes,
        ),
        view=ViewConfig(zoom_factor=zoom, show_layer_bbox=layer_bbox, show_markers=markers),
        placement=PlacementConfig(
            rotation_degrees=rotation,
            mirror_x=mirror_x,
            mirror_y=mirror_y,
            origin=origin_xy,
            offset=offset_xy,
            scale=scale,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        if not quiet:
            print_step("Loading document")

        with CommandReader(input_document) as reader:
            command_count = reader.command_count
            layer = build_layer(reader.commands(), reader.name, settings.geometry)

        if not quiet:
            print_document_info(str(input_document), command_count, layer)
            print_step("Rendering")

        viewer = GerberViewer(layer, settings)
        surface = RecordingSurface()
        stats = viewer.frame(surface, Viewport.from_size(width, height))

        if not quiet:
            print_render_summary(stats, surface.counts(), viewer.view.scale, verbose)

        if output is not None:
            DrawListWriter(output).write(
                surface,
                metadata={
                    "document": reader.name,
                    "viewport": [width, height],
                    "scale": viewer.view.scale,
                    "translation": list(viewer.view.translation.to_tuple()),
                },
            )
            if not quiet:
                print_saved(str(output), _format_file_size(output))

    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)
    except ParseFailure as e:
        print_error(f"Could not build document: {e.reason}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save draw list: {e.reason}")
        raise typer.Exit(code=1)
    except GerberViewError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def info(
    input_documents: Annotated[
        list[Path],
        typer.Argument(
            help="Paths to JSON command documents",
            show_default=False,
        ),
    ],
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
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
) -> None:
    """Build one or more documents in parallel and summarize their layers.

    Example:
        gerberview info top_copper.json bottom_copper.json outline.json
    """
    documents = {}
    try:
        for path in input_documents:
            with CommandReader(path) as reader:
                documents[reader.name] = reader.document
    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}", details=e.path)
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step(f"Building {len(documents)} documents")
        actual_workers = workers if workers else os.cpu_count() or 1
        print_processing_info(actual_workers, is_auto=(workers is None))

    settings = GerberViewSettings(
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    processor = DocumentProcessor(settings)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(
                    f"Building {len(documents)} documents", total=len(documents)
                )

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                layers, stats = processor.build_all(
                    documents, max_workers=workers, progress_callback=update_progress
                )
        else:
            layers, stats = processor.build_all(documents, max_workers=workers)
    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

    if not quiet:
        print_layer_table(layers)
        print_build_summary(stats)

    if stats.error_count:
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.0f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
    except OSError:
        return "unknown"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
