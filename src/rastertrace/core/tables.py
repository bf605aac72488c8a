"""Marching-squares segment tables.

Every table entry lists the oriented segments a cell emits, as pairs of
(start, end) offsets in doubled coordinates relative to the cell origin
(2i, 2j). Offsets on the cell edges are the edge midpoints (1, 0), (2, 1),
(1, 2) and (0, 1); border cells may also route through the cell center
(1, 1) or through the corners.

All segments run with the set samples on the same side, which makes outer
rings positive and holes negative under the shoelace formula in y-down
raster coordinates.
"""

from collections.abc import Callable
from typing import NamedTuple

from rastertrace.config import ContourConfig, SaddlePolicy
from rastertrace.core.cells import FULL, is_saddle
from rastertrace.domain import BinaryRaster, Direction, Vertex

Offset = tuple[int, int]
Edge = tuple[Offset, Offset]

# Resolves a saddle cell: returns ``code`` to keep the set diagonal
# connected or ``code ^ FULL`` to cut it apart.
SaddleResolver = Callable[[BinaryRaster, int, int, int], int]


INTERIOR_SEGMENTS: dict[int, tuple[Edge, ...]] = {
    0b0000: (),
    0b0001: (((0, 1), (1, 2)),),
    0b0010: (((1, 2), (2, 1)),),
    0b0011: (((0, 1), (2, 1)),),
    0b0100: (((2, 1), (1, 0)),),
    0b0110: (((1, 2), (1, 0)),),
    0b0111: (((0, 1), (1, 0)),),
    0b1000: (((1, 0), (0, 1)),),
    0b1001: (((1, 0), (1, 2)),),
    0b1011: (((1, 0), (2, 1)),),
    0b1100: (((2, 1), (0, 1)),),
    0b1101: (((2, 1), (1, 2)),),
    0b1110: (((1, 2), (0, 1)),),
    0b1111: (),
}

# Saddle pairs keeping the set diagonal joined: 0101 = 0111 + 1101,
# 1010 = 1011 + 1110.
SADDLE_CONNECTED: dict[int, tuple[Edge, ...]] = {
    0b0101: (((0, 1), (1, 0)), ((2, 1), (1, 2))),
    0b1010: (((1, 0), (2, 1)), ((1, 2), (0, 1))),
}

# Saddle pairs isolating each set corner: 0101 = 0100 + 0001,
# 1010 = 1000 + 0010.
SADDLE_SEPARATED: dict[int, tuple[Edge, ...]] = {
    0b0101: (((2, 1), (1, 0)), ((0, 1), (1, 2))),
    0b1010: (((1, 0), (0, 1)), ((1, 2), (2, 1))),
}

BORDER_SEGMENTS: dict[int, tuple[Edge, ...]] = {
    0b0000: (),
    0b0001: (((0, 1), (1, 1)), ((1, 1), (1, 2))),
    0b0010: (((1, 2), (1, 1)), ((1, 1), (2, 1))),
    0b0011: (((0, 1), (2, 1)),),
    0b0100: (((2, 1), (1, 1)), ((1, 1), (1, 0))),
    0b0101: (((0, 1), (0, 0)), ((0, 0), (1, 0)), ((2, 1), (2, 2)), ((2, 2), (1, 2))),
    0b0110: (((1, 2), (1, 0)),),
    0b0111: (((0, 1), (0, 0)), ((0, 0), (1, 0))),
    0b1000: (((1, 0), (1, 1)), ((1, 1), (0, 1))),
    0b1001: (((1, 0), (1, 2)),),
    0b1010: (((1, 0), (2, 0)), ((2, 0), (2, 1)), ((1, 2), (0, 2)), ((0, 2), (0, 1))),
    0b1011: (((1, 0), (2, 0)), ((2, 0), (2, 1))),
    0b1100: (((2, 1), (0, 1)),),
    0b1101: (((2, 1), (2, 2)), ((2, 2), (1, 2))),
    0b1110: (((1, 2), (0, 2)), ((0, 2), (0, 1))),
    0b1111: (),
}

_ALL_CORNERS: tuple[Offset, ...] = ((0, 0), (1, 0), (0, 1), (1, 1))

# Pixels (relative to the cell's top-left sample) carrying a boundary vertex.
BORDER_MARKS: dict[int, tuple[Offset, ...]] = {
    0b0000: (),
    0b0001: ((0, 1),),
    0b0010: ((1, 1),),
    0b0100: ((1, 0),),
    0b1000: ((0, 0),),
    0b0011: ((0, 1), (1, 1)),
    0b0110: ((1, 0), (1, 1)),
    0b1100: ((0, 0), (1, 0)),
    0b1001: ((0, 0), (0, 1)),
    0b0101: _ALL_CORNERS,
    0b0111: _ALL_CORNERS,
    0b1010: _ALL_CORNERS,
    0b1011: _ALL_CORNERS,
    0b1101: _ALL_CORNERS,
    0b1110: _ALL_CORNERS,
    0b1111: (),
}


class Emission(NamedTuple):
    """A segment produced by a table lookup, in absolute doubled coordinates."""

    code: int
    direction: Direction
    start: Vertex
    end: Vertex


def connect_diagonals(raster: BinaryRaster, i: int, j: int, code: int) -> int:  # noqa: ARG001
    """Resolve every saddle as connected (8-connected foreground)."""
    return code


def separate_diagonals(raster: BinaryRaster, i: int, j: int, code: int) -> int:  # noqa: ARG001
    """Resolve every saddle as separated (4-connected foreground)."""
    return code ^ FULL


class SignalResolver:
    """Resolve saddles by sampling a secondary signal at the cell center.

    The signal is typically the source image thresholded at a finer
    resolution. When it reports the center (i + 0.5, j + 0.5) as set, the
    set diagonal stays connected.

    Example:
        resolver = SignalResolver(lambda x, y: image.value(x, y) > 0.5)
        finder = ContourFinder(saddle_resolver=resolver)
    """

    def __init__(self, signal: Callable[[float, float], bool]) -> None:
        self.signal = signal

    def __call__(self, raster: BinaryRaster, i: int, j: int, code: int) -> int:  # noqa: ARG002
        if self.signal(i + 0.5, j + 0.5):
            return code
        return code ^ FULL


_POLICY_RESOLVERS: dict[SaddlePolicy, SaddleResolver] = {
    SaddlePolicy.CONNECT: connect_diagonals,
    SaddlePolicy.SEPARATE: separate_diagonals,
}


def resolver_for(policy: SaddlePolicy) -> SaddleResolver:
    """Get the built-in resolver for a saddle policy."""
    return _POLICY_RESOLVERS[policy]


class SegmentTable:
    """Maps cell codes to oriented boundary segments.

    Interior cells use the classic marching-squares cuts across the cell
    corners. Border cells (the extra ring of cells around the raster) close
    rings along the cell center lines instead.
    """

    def __init__(
        self,
        config: ContourConfig | None = None,
        saddle_resolver: SaddleResolver | None = None,
    ) -> None:
        self.config = config or ContourConfig()
        self.saddle_resolver = saddle_resolver or resolver_for(self.config.saddle_policy)

    def interior(self, raster: BinaryRaster, i: int, j: int, code: int) -> list[Emission]:
        """Segments for interior cell (i, j).

        Saddle codes are handed to the saddle resolver.

        Args:
            raster: Raster being traced (passed through to the resolver)
            i: Cell column
            j: Cell row
            code: Cell code from classify_cell

        Returns:
            Zero, one or two emitted segments

        Raises:
            ValueError: If the resolver returns neither the code nor its inverse
        """
        if is_saddle(code):
            resolved = self.saddle_resolver(raster, i, j, code)
            if resolved == code:
                edges = SADDLE_CONNECTED[code]
            elif resolved == code ^ FULL:
                edges = SADDLE_SEPARATED[code]
            else:
                raise ValueError(
                    f"Saddle resolver returned {resolved:04b} for cell [{code:04b}]"
                )
        else:
            edges = INTERIOR_SEGMENTS[code]

        return self._emit(code, i, j, edges)

    def border(self, i: int, j: int, code: int) -> list[Emission]:
        """Segments for border cell (i, j)."""
        return self._emit(code, i, j, BORDER_SEGMENTS[code])

    @staticmethod
    def border_marks(i: int, j: int, code: int) -> list[tuple[int, int]]:
        """Raster pixels touched by the boundary of cell (i, j)."""
        return [(i + dx, j + dy) for dx, dy in BORDER_MARKS[code]]

    @staticmethod
    def _emit(code: int, i: int, j: int, edges: tuple[Edge, ...]) -> list[Emission]:
        x = i * 2
        y = j * 2
        emissions = []
        for (sx, sy), (ex, ey) in edges:
            start = (x + sx, y + sy)
            end = (x + ex, y + ey)
            emissions.append(Emission(code, Direction.between(start, end), start, end))
        return emissions
