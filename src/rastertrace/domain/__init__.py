"""Domain models for rastertrace.

This module contains the core domain models representing rasters, boundary
segments and traced contours. Output models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of any image decoding library

Key classes:
- BinaryRaster: Protocol for boolean pixel samplers
- MaskRaster: In-memory binary mask
- Direction, Segment: Boundary segment graph nodes
- Point, Ring: Output polygon geometry
- BorderMask, Contour: All rings traced from one raster
"""

from rastertrace.domain.contour import BorderMask, Contour, Point, Ring
from rastertrace.domain.raster import BinaryRaster, MaskRaster
from rastertrace.domain.segment import Direction, Segment, Vertex

__all__: list[str] = [
    # Raster
    "BinaryRaster",
    "MaskRaster",
    # Segment graph
    "Direction",
    "Segment",
    "Vertex",
    # Output geometry
    "Point",
    "Ring",
    "BorderMask",
    "Contour",
]
