"""Parallel processing orchestration for the tracing pipeline.

This module coordinates the full workflow: rasters are traced in parallel
with ProcessPoolExecutor, then the complete collection is simplified in the
parent process so junction locking sees every ring.

Key components:
- process_raster: Top-level picklable function for parallel execution
- RasterProcessor: Main orchestrator class for batch processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from rastertrace.config import ContourConfig, RasterTraceSettings, get_default_settings
from rastertrace.core.simplify import PolygonSimplifier, find_locked_points
from rastertrace.core.tracer import ContourFinder
from rastertrace.domain import Contour, MaskRaster
from rastertrace.exceptions import ProcessingCancelledError
from rastertrace.io import ContourWriter, MaskReader
from rastertrace.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_raster(
    name: str,
    raster_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Trace a single raster.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the raster, traces it, and returns the serialized contour.

    Args:
        name: Raster name (for error reporting)
        raster_dict: Serialized raster (from MaskRaster.to_dict())
        config_dict: Serialized contour configuration

    Returns:
        Dictionary containing either:
        - Success: {"contour": contour_dict, "rings": int, "vertices": int, "duration_ms": float}
        - Error: {"error": str, "name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        raster = MaskRaster.from_dict(raster_dict)
        finder = ContourFinder(ContourConfig(**config_dict))
        contour = finder.find(raster)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "contour": contour.to_dict(),
            "rings": len(contour.rings),
            "vertices": contour.vertex_count(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "name": name,
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class RasterProcessor:
    """Orchestrates parallel raster tracing.

    Manages the complete workflow:
    1. Load mask files
    2. Trace rasters in parallel using worker processes
    3. Collect results and update statistics
    4. Simplify the whole collection (locked points first)
    5. Save contours

    Example:
        settings = RasterTraceSettings()
        processor = RasterProcessor(settings)
        stats = processor.process(
            mask_paths=[Path("a.txt"), Path("b.txt")],
            output_path=Path("shapes.contours.json"),
            max_workers=4
        )
    """

    def __init__(self, config: RasterTraceSettings | None = None) -> None:
        """Initialize raster processor with configuration.

        Args:
            config: Settings containing contour, simplify and processing config
                (defaults when None)
        """
        if config is None:
            config = get_default_settings()
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)
        self.simplifier = PolygonSimplifier(config.simplify)

    def process(
        self,
        mask_paths: list[Path],
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
        rasters: dict[str, MaskRaster] | None = None,
    ) -> ProcessingStats:
        """Trace mask files and write their contours.

        Args:
            mask_paths: Paths to input masks
            output_path: Path for the JSON output (derived from the first mask if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, name, success)
                for progress updates
            rasters: Rasters already returned by load_masks(mask_paths);
                the files are read again when None

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            RasterLoadError: If a mask file cannot be read
            UnsupportedFormatError: If a mask file is not a text mask
            ProcessingCancelledError: If processing is cancelled by user
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = ContourWriter.get_output_path(mask_paths[0])

        self.logger.info(
            "Starting raster processing",
            inputs=[str(p) for p in mask_paths],
            output=str(output_path),
            max_workers=max_workers,
        )

        if rasters is None:
            rasters = self.load_masks(mask_paths)

        contours = self.trace_all(
            rasters=rasters,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        if self.config.simplify.enabled and contours:
            contours = self.simplify_all(contours)

        self._save_contours(output_path, contours)

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            rings=stats.ring_count,
            vertices=stats.vertex_count,
            simplified_vertices=stats.simplified_vertex_count,
            duration_seconds=round(stats.duration_seconds, 2),
            min_raster_ms=stats.min_raster_time_ms,
            max_raster_ms=stats.max_raster_time_ms,
        )

        return stats

    def load_masks(self, mask_paths: list[Path]) -> dict[str, MaskRaster]:
        """Read mask files.

        Args:
            mask_paths: Paths to input masks

        Returns:
            Rasters keyed by unique name, in input order

        Raises:
            RasterLoadError: If a mask file cannot be read
            UnsupportedFormatError: If a mask file is not a text mask
        """
        rasters: dict[str, MaskRaster] = {}
        for path in mask_paths:
            reader = MaskReader(path)
            name = self._unique_name(reader.name, rasters)
            rasters[name] = reader.load()
            self.logger.debug("Mask loaded", mask=str(path), name=name)
        return rasters

    def trace_all(
        self,
        rasters: dict[str, MaskRaster],
        max_workers: int | None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, Contour]:
        """Trace rasters in parallel using ProcessPoolExecutor.

        Args:
            rasters: Rasters keyed by name
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, name, success)
                for progress updates

        Returns:
            Contours keyed by raster name, in input order; failed rasters are left out
        """
        stats = self.processing_logger.stats
        traced: dict[str, Contour] = {}

        config_dict = self.config.contour.model_dump()

        self.logger.info(
            "Starting parallel tracing",
            raster_count=len(rasters),
            max_workers=max_workers,
        )

        total = len(rasters)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for name, raster in rasters.items():
                self.processing_logger.log_raster_start(name, raster.width, raster.height)
                future = executor.submit(
                    process_raster,
                    name,
                    raster.to_dict(),
                    config_dict,
                )
                pending_futures[future] = name

            try:
                for future in as_completed(pending_futures):
                    name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_raster_error(
                                name=result["name"],
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            traced[name] = Contour.from_dict(result["contour"])
                            self.processing_logger.log_raster_complete(
                                name=name,
                                rings=result["rings"],
                                vertices=result["vertices"],
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        tb = traceback.format_exc()
                        self.processing_logger.log_raster_error(
                            name=name,
                            error=e,
                            traceback=tb,
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    stats.processed_count, stats.cancelled_count
                ) from None

        return {name: traced[name] for name in rasters if name in traced}

    def simplify_all(self, contours: dict[str, Contour]) -> dict[str, Contour]:
        """Simplify the whole collection.

        Locked points are computed over every contour before any ring is
        simplified.

        Args:
            contours: Traced contours keyed by raster name

        Returns:
            Simplified contours keyed by raster name
        """
        names = list(contours)
        originals = [contours[name] for name in names]

        locked = find_locked_points(originals)
        simplified = self.simplifier.simplify(originals, locked)

        self.processing_logger.log_simplification(
            contours=len(originals),
            vertices_before=sum(c.vertex_count() for c in originals),
            vertices_after=sum(c.vertex_count() for c in simplified),
            locked_points=len(locked),
            threshold=self.simplifier.threshold,
        )

        return dict(zip(names, simplified))

    def _save_contours(self, output_path: Path, contours: dict[str, Contour]) -> None:
        """Save contours to output path.

        Args:
            output_path: Path of the JSON document
            contours: Contours keyed by raster name
        """
        writer = ContourWriter(
            output_path,
            pixel_origin=self.config.contour.pixel_origin,
            simplified=self.config.simplify.enabled,
        )
        for name, contour in contours.items():
            writer.add(name, contour)
        writer.save()

        self.logger.info(
            "Contours saved",
            output=str(output_path),
            contours=len(contours),
        )

    @staticmethod
    def _unique_name(name: str, taken: dict[str, MaskRaster]) -> str:
        if name not in taken:
            return name
        suffix = 2
        while f"{name}-{suffix}" in taken:
            suffix += 1
        return f"{name}-{suffix}"

    @property
    def stats(self) -> ProcessingStats:
        return self.processing_logger.stats
