"""CLI application entry point for rastertrace.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from rastertrace import __version__
from rastertrace.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_header,
    print_mask_info,
    print_processing_info,
    print_step,
    print_success,
    print_trace_summary,
)
from rastertrace.config import (
    ContourConfig,
    LoggingConfig,
    PixelOrigin,
    ProcessingConfig,
    RasterTraceSettings,
    SaddlePolicy,
    SimplifyConfig,
)
from rastertrace.core import ContourFinder, RasterProcessor, simplify
from rastertrace.exceptions import (
    ProcessingCancelledError,
    RasterLoadError,
    RasterTraceError,
    UnsupportedFormatError,
)
from rastertrace.io import ContourWriter, MaskReader

# Create the Typer app
app = typer.Typer(
    name="rastertrace",
    help="Trace binary raster masks into polygon rings and simplify them.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]rastertrace[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def trace(
    masks: Annotated[
        list[Path],
        typer.Argument(
            help="Text mask files ('#' set, '.' unset)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {first mask}.contours.json)",
        ),
    ] = None,
    pixel_origin: Annotated[
        str,
        typer.Option(
            "--pixel-origin",
            help="Pixel coordinate convention (center|corner)",
        ),
    ] = "center",
    join: Annotated[
        bool,
        typer.Option(
            "--join/--no-join",
            help="Collapse collinear unit steps into straight edges",
        ),
    ] = True,
    saddle: Annotated[
        str,
        typer.Option(
            "--saddle",
            help="Diagonal pixel handling (connect|separate)",
        ),
    ] = "connect",
    simplify_rings: Annotated[
        bool,
        typer.Option(
            "--simplify/--no-simplify",
            help="Simplify rings after tracing",
        ),
    ] = True,
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="Largest triangle area (square pixels) removed by simplification",
            min=0.0,
        ),
    ] = 10.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Trace and report ring counts without writing output",
        ),
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
    """Trace the boundaries of binary masks into closed polygon rings.

    Every boundary between set and unset pixels becomes one ring; holes run
    opposite to outer boundaries. Rings from all masks are simplified
    together so that points where three or more rings meet stay in place.

    Example:
        rastertrace shapes.txt

    This will create shapes.contours.json next to the mask.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    for mask in masks:
        if not mask.is_file():
            print_error(
                f"Input file not found: {mask}",
                details=f"The file '{mask}' does not exist or is not accessible.",
            )
            raise typer.Exit(code=1)

    try:
        origin = PixelOrigin(pixel_origin.lower())
    except ValueError:
        print_error(
            f"Invalid pixel origin: {pixel_origin}",
            details="Valid values: center, corner",
        )
        raise typer.Exit(code=1)

    try:
        saddle_policy = SaddlePolicy(saddle.lower())
    except ValueError:
        print_error(
            f"Invalid saddle policy: {saddle}",
            details="Valid values: connect, separate",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = RasterTraceSettings(
        contour=ContourConfig(
            pixel_origin=origin,
            join_straight_segments=join,
            saddle_policy=saddle_policy,
        ),
        simplify=SimplifyConfig(
            enabled=simplify_rings,
            area_threshold=threshold,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        if dry_run:
            _handle_dry_run(masks, settings, quiet, verbose)
            raise typer.Exit(code=0)

        processor = RasterProcessor(settings)

        if not quiet:
            print_step("Loading masks")
        rasters = processor.load_masks(masks)
        if not quiet:
            for mask, raster in zip(masks, rasters.values()):
                print_mask_info(str(mask), raster.width, raster.height, raster.count())
            print_step("Tracing")
            print_processing_info(workers or os.cpu_count() or 1, is_auto=workers is None)

        actual_output_path = output or ContourWriter.get_output_path(masks[0])

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Tracing {len(masks)} masks",
                        total=len(masks),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        mask_paths=masks,
                        output_path=actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                        rasters=rasters,
                    )
            else:
                stats = processor.process(
                    mask_paths=masks,
                    output_path=actual_output_path,
                    max_workers=workers,
                    rasters=rasters,
                )
        except (KeyboardInterrupt, ProcessingCancelledError):
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=processor.stats.processed_count,
                    cancelled=processor.stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                rings=stats.ring_count,
                vertices=stats.vertex_count,
                simplified_vertices=stats.simplified_vertex_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_raster_time_ms,
            )

        if stats.error_count:
            raise typer.Exit(code=1)

    except RasterLoadError as e:
        print_error(f"Could not load mask: {e.reason}")
        raise typer.Exit(code=1)
    except UnsupportedFormatError as e:
        print_error(f"Unsupported mask '{e.path}'", details=e.details)
        raise typer.Exit(code=1)
    except RasterTraceError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_dry_run(
    masks: list[Path], settings: RasterTraceSettings, quiet: bool, verbose: bool
) -> None:
    """Handle --dry-run mode.

    Traces in-process and reports what would be written.

    Args:
        masks: Mask files
        settings: Application settings
        quiet: Suppress output
        verbose: Show per-ring output
    """
    finder = ContourFinder(settings.contour)

    names: list[str] = []
    contours = []
    for mask in masks:
        reader = MaskReader(mask)
        raster = reader.load()
        names.append(reader.name)
        contours.append(finder.find(raster))

    if settings.simplify.enabled:
        simplified = simplify(contours, settings.simplify.area_threshold)
    else:
        simplified = contours

    if quiet:
        return

    print_step("Analyzing (dry run)")
    for name, contour, reduced in zip(names, contours, simplified):
        print_trace_summary(
            name,
            rings=len(contour.rings),
            holes=len(contour.holes()),
            vertices=reduced.vertex_count(),
        )
        if verbose:
            for idx, ring in enumerate(reduced.rings):
                kind = "hole" if ring.is_hole() else "outer"
                min_x, min_y, max_x, max_y = ring.bounding_box()
                console.print(
                    f"    #{idx} {kind}: {len(ring)} points, area {abs(ring.signed_area()):g}, "
                    f"bbox ({min_x:g}, {min_y:g})-({max_x:g}, {max_y:g})"
                )

    console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] – no output written")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
