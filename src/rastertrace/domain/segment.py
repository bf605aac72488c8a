"""Boundary segment types used while assembling rings.

Vertices live in a doubled coordinate space (raster coordinates times 2)
so that cell centers and edge midpoints stay integral.
"""

from dataclasses import dataclass
from enum import Enum

Vertex = tuple[int, int]


class Direction(Enum):
    """Orientation of a unit boundary segment.

    Rows grow downward, so UP means decreasing y.
    """

    R = (1, 0)
    L = (-1, 0)
    U = (0, -1)
    D = (0, 1)
    LU = (-1, -1)
    LD = (-1, 1)
    RU = (1, -1)
    RD = (1, 1)

    @classmethod
    def between(cls, start: Vertex, end: Vertex) -> "Direction":
        """Direction of the step from start to end.

        Raises:
            ValueError: If start and end coincide
        """
        dx = (end[0] > start[0]) - (end[0] < start[0])
        dy = (end[1] > start[1]) - (end[1] < start[1])
        if dx == 0 and dy == 0:
            raise ValueError(f"Zero-length segment at {start}")
        return cls((dx, dy))

    @property
    def arrow(self) -> str:
        return _ARROWS[self]


_ARROWS = {
    Direction.R: "→",
    Direction.L: "←",
    Direction.U: "↑",
    Direction.D: "↓",
    Direction.LU: "↖",
    Direction.LD: "↙",
    Direction.RU: "↗",
    Direction.RD: "↘",
}


@dataclass(slots=True)
class Segment:
    """A directed boundary edge in the segment graph.

    ``start``, ``end``, ``code`` and ``direction`` never change. The link
    fields hold arena indices of neighbouring segments and are rewritten
    while chains are merged.

    Attributes:
        code: Cell code of the cell that emitted the segment
        direction: Orientation of the segment
        start: Start vertex (doubled coordinates)
        end: End vertex (doubled coordinates)
        prev: Index of the segment ending at ``start``
        next: Index of the segment starting at ``end``
        leader: Index of the segment identifying the owning chain
    """

    code: int
    direction: Direction
    start: Vertex
    end: Vertex
    prev: int | None = None
    next: int | None = None
    leader: int | None = None

    def __str__(self) -> str:
        return (
            f"[{self.code:04b}/{self.direction.name}] "
            f"<{self.start} {self.direction.arrow} {self.end}>"
        )
