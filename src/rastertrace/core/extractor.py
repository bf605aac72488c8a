"""Ring extraction from a closed segment chain."""

from typing import TYPE_CHECKING

from rastertrace.config import ContourConfig
from rastertrace.domain import Point, Ring, Segment, Vertex
from rastertrace.exceptions import GraphCorruptionError

if TYPE_CHECKING:
    from rastertrace.core.graph import SegmentGraph


class RingExtractor:
    """Walks a closed chain once and converts it into a Ring.

    Vertices are mapped from doubled coordinates to pixel units and shifted
    by the pixel-origin offset. With straight-run joining enabled only the
    vertices where the direction changes are kept.
    """

    def __init__(self, config: ContourConfig | None = None) -> None:
        self.config = config or ContourConfig()
        self.offset = self.config.offset
        self.join_straight_segments = self.config.join_straight_segments

    def to_point(self, vertex: Vertex) -> Point:
        """Convert a doubled-coordinate vertex to an output point."""
        return Point(vertex[0] / 2.0 + self.offset, vertex[1] / 2.0 + self.offset)

    def walk(self, graph: "SegmentGraph", leader: int) -> list[int]:
        """Collect the indices of a closed ring, starting at its leader.

        Args:
            graph: Graph holding the ring
            leader: Index of the ring leader

        Returns:
            Segment indices in ring order

        Raises:
            GraphCorruptionError: If a segment has no successor, belongs to a
                different ring, or the walk never returns to the leader
        """
        members: list[int] = []
        limit = len(graph)
        index = leader

        while True:
            segment = graph[index]
            if segment.leader != leader:
                raise GraphCorruptionError(
                    f"Segment #{index} doesn't belong to ring #{leader} but #{segment.leader}",
                    start=segment.start,
                    end=segment.end,
                    code=segment.code,
                    leader=leader,
                )
            if segment.next is None:
                raise GraphCorruptionError(
                    f"Segment #{index} in ring #{leader} has no next segment",
                    start=segment.start,
                    end=segment.end,
                    code=segment.code,
                    leader=leader,
                )

            members.append(index)
            index = segment.next
            if index == leader:
                return members

            if len(members) > limit:
                raise GraphCorruptionError(
                    f"Ring #{leader} does not close through its leader",
                    start=segment.start,
                    end=segment.end,
                    code=segment.code,
                    leader=leader,
                )

    def extract(self, graph: "SegmentGraph", leader: int) -> tuple[Ring, list[int]]:
        """Extract the closed ring containing ``leader``.

        Args:
            graph: Graph holding the ring
            leader: Index of the ring leader

        Returns:
            Tuple of (ring, member segment indices)
        """
        members = self.walk(graph, leader)
        segments = [graph[index] for index in members]
        return Ring(points=self._vertices(segments)), members

    def _vertices(self, segments: list[Segment]) -> list[Point]:
        if not self.join_straight_segments:
            return [self.to_point(s.start) for s in segments]

        # segments[-1] precedes segments[0] in the cycle
        corners = [
            s.start
            for k, s in enumerate(segments)
            if s.direction != segments[k - 1].direction
        ]
        return [self.to_point(v) for v in corners]
