"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""


from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for raster tracing.

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
    console.print(f"\n[bold]rastertrace[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_mask_info(mask_path: str, width: int, height: int, set_pixels: int) -> None:
    """Print mask information.

    Args:
        mask_path: Path to the mask file
        width: Raster width in pixels
        height: Raster height in pixels
        set_pixels: Number of set pixels
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(mask_path)
    line.append(f" ({width}x{height} {SYM_DOT} {set_pixels:,} set)")
    console.print(line)


def print_trace_summary(name: str, rings: int, holes: int, vertices: int) -> None:
    """Print the rings traced from one mask."""
    console.print(
        f"  {name}: [green]{rings}[/green] rings {SYM_DOT} {holes} holes "
        f"{SYM_DOT} {vertices:,} vertices"
    )


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


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    rings: int,
    vertices: int,
    simplified_vertices: int | None,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        processed: Number of rasters traced
        rings: Total number of rings
        vertices: Total number of traced vertices
        simplified_vertices: Vertex count after simplification (None if skipped)
        errors: Number of errors encountered
        avg_time_ms: Average tracing time per raster in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} rasters {SYM_DOT} {rings} rings {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if simplified_vertices is not None:
        console.print(f"  {vertices:,} vertices → {simplified_vertices:,} after simplification")
    else:
        console.print(f"  {vertices:,} vertices")

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per raster")


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
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress rasters")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of rasters traced before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} rasters completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
