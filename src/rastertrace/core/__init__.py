"""Core processing algorithms for rastertrace.

This module contains the core algorithms for:

- Cell classification (marching-squares codes)
- Segment tables (interior, border and saddle cells)
- Segment graph assembly (incremental ring closure)
- Ring extraction and simplification

Tracing and simplification are designed to be:
- Stateless between calls (safe for use in worker processes)
- Pure (no side effects beyond the returned contours)

Key functions:
- classify_cell: Compute the 4-bit code of a 2x2 cell
- scan_cells: Enumerate cells in scan order
- find_contour: Trace a raster with default settings
- find_locked_points: Junction points shared by three or more rings
- simplify_ring: Area-based vertex decimation of one ring
- simplify: Simplify a contour collection

Key classes:
- SegmentTable: Cell code to segment lookup
- SegmentGraph, SegmentGraphBuilder: Incremental ring assembly
- RingExtractor: Converts closed chains into rings
- ContourFinder: Raster scan driver
- PolygonSimplifier: Collection-wide simplification
- RasterProcessor: Parallel batch tracing
"""

from rastertrace.core.cells import classify_cell, is_saddle, scan_cells
from rastertrace.core.extractor import RingExtractor
from rastertrace.core.graph import SegmentGraph, SegmentGraphBuilder
from rastertrace.core.processor import RasterProcessor, process_raster
from rastertrace.core.simplify import (
    PolygonSimplifier,
    find_locked_points,
    simplify,
    simplify_ring,
)
from rastertrace.core.tables import (
    SegmentTable,
    SignalResolver,
    connect_diagonals,
    separate_diagonals,
)
from rastertrace.core.tracer import ContourFinder, find_contour

__all__ = [
    # Tracing classes
    "ContourFinder",
    "RingExtractor",
    "SegmentGraph",
    "SegmentGraphBuilder",
    "SegmentTable",
    "SignalResolver",
    # Simplification classes
    "PolygonSimplifier",
    # Processor classes
    "RasterProcessor",
    # Functions
    "classify_cell",
    "connect_diagonals",
    "find_contour",
    "find_locked_points",
    "is_saddle",
    "process_raster",
    "scan_cells",
    "separate_diagonals",
    "simplify",
    "simplify_ring",
]
