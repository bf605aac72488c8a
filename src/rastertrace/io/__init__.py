"""Mask and contour I/O layer for rastertrace.

This module handles reading text raster masks and writing traced
contours. It keeps file formats out of the domain models and the core
algorithms.

Key classes:
- MaskReader: Load text masks into MaskRaster
- ContourWriter: Save traced contours as JSON
"""

from rastertrace.io.reader import MaskReader
from rastertrace.io.writer import ContourWriter

__all__ = [
    "ContourWriter",
    "MaskReader",
]
