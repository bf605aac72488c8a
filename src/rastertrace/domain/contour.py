"""Core geometric types for traced contours.

This module defines the output types of the tracer:
- Point: A 2D point in raster pixel units
- Ring: A closed ring of points
- BorderMask: Per-pixel flags for pixels carrying a boundary vertex
- Contour: All rings traced from one raster
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in pixel units
        y: Y coordinate in pixel units (rows grow downward)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class Ring:
    """A closed ring of points.

    The first point implicitly follows the last one. Rings traced from a
    raster run so that outer boundaries have positive signed area and holes
    negative signed area (in y-down raster coordinates).

    Attributes:
        points: Points forming the ring
    """

    points: list[Point]
    _cached_area: float | None = field(default=None, repr=False, init=False)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Result is cached for efficiency.

        Returns:
            Signed area of the ring
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    def is_hole(self) -> bool:
        """Check whether the ring bounds a hole."""
        return self.signed_area() < 0

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the ring.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_list(self) -> list[list[float]]:
        """Serialize to a list of [x, y] pairs."""
        return [[p.x, p.y] for p in self.points]

    @classmethod
    def from_list(cls, data: Iterable[Iterable[float]]) -> "Ring":
        """Deserialize from a list of [x, y] pairs."""
        return cls(points=[Point(*pair) for pair in data])


class BorderMask:
    """Per-pixel flags marking raster pixels that carry a boundary vertex.

    Marks outside the raster are ignored.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._flags = bytearray(width * height)

    def mark(self, x: int, y: int) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._flags[y * self.width + x] = 1

    def __contains__(self, pixel: tuple[int, int]) -> bool:
        x, y = pixel
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._flags[y * self.width + x] != 0
        return False

    def count(self) -> int:
        """Number of marked pixels."""
        return sum(1 for f in self._flags if f)

    def pixels(self) -> list[tuple[int, int]]:
        """Marked pixels in row-major order."""
        return [
            (i % self.width, i // self.width)
            for i, f in enumerate(self._flags)
            if f
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "pixels": self.pixels(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BorderMask":
        mask = cls(data["width"], data["height"])
        for x, y in data["pixels"]:
            mask.mark(x, y)
        return mask


@dataclass
class Contour:
    """All rings traced from a single raster.

    Attributes:
        rings: Closed rings in the order they were closed during the scan
        border: Pixels carrying boundary vertices
    """

    rings: list[Ring]
    border: BorderMask

    @classmethod
    def empty(cls, width: int, height: int) -> "Contour":
        """Create a contour without rings for a raster of the given size."""
        return cls(rings=[], border=BorderMask(width, height))

    @property
    def width(self) -> int:
        return self.border.width

    @property
    def height(self) -> int:
        return self.border.height

    def __bool__(self) -> bool:
        return bool(self.rings)

    def vertex_count(self) -> int:
        """Total number of points over all rings."""
        return sum(len(ring) for ring in self.rings)

    def holes(self) -> list[Ring]:
        """Rings bounding holes."""
        return [ring for ring in self.rings if ring.is_hole()]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the contour
        """
        return {
            "rings": [ring.to_list() for ring in self.rings],
            "border": self.border.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls(
            rings=[Ring.from_list(r) for r in data["rings"]],
            border=BorderMask.from_dict(data["border"]),
        )
