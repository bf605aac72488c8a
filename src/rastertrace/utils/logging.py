"""Logging utilities for rastertrace."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

# Handlers installed on the root logger by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    error_count: int = 0
    ring_count: int = 0
    vertex_count: int = 0
    simplified_vertex_count: int | None = None
    locked_point_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    raster_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_raster_time_ms(self) -> float | None:
        if not self.raster_timings_ms:
            return None
        return sum(self.raster_timings_ms) / len(self.raster_timings_ms)

    @property
    def min_raster_time_ms(self) -> float | None:
        return min(self.raster_timings_ms, default=None)

    @property
    def max_raster_time_ms(self) -> float | None:
        return max(self.raster_timings_ms, default=None)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"rastertrace_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    while _installed_handlers:
        old = _installed_handlers.pop()
        root_logger.removeHandler(old)
        old.close()
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.extend([file_handler, console_handler])

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

    logger = structlog.get_logger("rastertrace")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_raster_start(self, name: str, width: int, height: int) -> None:
        """Log start of raster tracing."""
        self._logger.debug("Tracing raster", raster=name, width=width, height=height)

    def log_raster_complete(
        self,
        name: str,
        rings: int,
        vertices: int,
        duration_ms: float,
    ) -> None:
        """Log successful raster tracing."""
        self._logger.info(
            "Raster traced",
            raster=name,
            rings=rings,
            vertices=vertices,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.ring_count += rings
        self._stats.vertex_count += vertices
        self._stats.raster_timings_ms.append(duration_ms)

    def log_raster_error(
        self,
        name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log raster tracing error."""
        self._logger.error(
            "Raster tracing failed",
            raster=name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    def log_simplification(
        self,
        contours: int,
        vertices_before: int,
        vertices_after: int,
        locked_points: int,
        threshold: float,
    ) -> None:
        """Log collection-wide simplification results."""
        self._logger.info(
            "Contours simplified",
            contours=contours,
            vertices_before=vertices_before,
            vertices_after=vertices_after,
            locked_points=locked_points,
            threshold=threshold,
        )
        self._stats.simplified_vertex_count = vertices_after
        self._stats.locked_point_count = locked_points

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
