"""Incremental segment graph assembly.

Segments arrive in scan order. Each one is linked to the segment ending at
its start and the segment starting at its end, and chains are labelled
with a ring leader. When a new segment joins two ends of the same chain,
the ring is complete and is extracted right away, so the graph only ever
holds open chains.
"""

from collections.abc import Callable, Iterator

from rastertrace.core.extractor import RingExtractor
from rastertrace.core.tables import Emission
from rastertrace.domain import Ring, Segment, Vertex
from rastertrace.exceptions import GraphCorruptionError


class SegmentGraph:
    """Arena of segments indexed by start vertex and by end vertex.

    Segments are addressed by stable integer index. Each vertex is the start
    of at most one live segment and the end of at most one live segment.
    """

    def __init__(self) -> None:
        self._segments: list[Segment | None] = []
        self._by_start: dict[Vertex, int] = {}
        self._by_end: dict[Vertex, int] = {}

    def __len__(self) -> int:
        return len(self._by_start)

    def __getitem__(self, index: int) -> Segment:
        segment = self._segments[index]
        if segment is None:
            raise GraphCorruptionError(f"Segment #{index} was already discarded")
        return segment

    def __iter__(self) -> Iterator[int]:
        return iter(self._by_start.values())

    def find_by_start(self, vertex: Vertex) -> int | None:
        return self._by_start.get(vertex)

    def find_by_end(self, vertex: Vertex) -> int | None:
        return self._by_end.get(vertex)

    def add(self, segment: Segment) -> int:
        """Add a segment to the arena and both indices.

        Raises:
            GraphCorruptionError: If another live segment already starts or
                ends at the same vertex
        """
        if segment.start in self._by_start or segment.end in self._by_end:
            raise GraphCorruptionError(
                "Duplicate segment endpoint",
                start=segment.start,
                end=segment.end,
                code=segment.code,
            )

        index = len(self._segments)
        self._segments.append(segment)
        self._by_start[segment.start] = index
        self._by_end[segment.end] = index
        return index

    def discard(self, index: int) -> None:
        """Drop a segment whose ring has been extracted."""
        segment = self[index]
        del self._by_start[segment.start]
        del self._by_end[segment.end]
        self._segments[index] = None


class SegmentGraphBuilder:
    """Links segments into chains and emits rings as soon as they close.

    Ring identity is tracked by propagation: every segment of an open chain
    carries the index of the chain's leader, and merging two chains rewrites
    the leader along one of them. A new segment whose predecessor and
    successor already share a leader closes that ring.

    Example:
        rings = []
        builder = SegmentGraphBuilder(extractor, on_ring=rings.append)
        for emission in table.border(-1, -1, code):
            builder.insert(emission)
    """

    def __init__(
        self,
        extractor: RingExtractor,
        on_ring: Callable[[Ring], None],
    ) -> None:
        self.graph = SegmentGraph()
        self.extractor = extractor
        self.on_ring = on_ring

    def insert(self, emission: Emission) -> int:
        """Insert one segment, linking it and closing a ring if possible.

        Args:
            emission: Segment produced by the segment table

        Returns:
            Arena index of the new segment
        """
        graph = self.graph
        prev = graph.find_by_end(emission.start)
        next_ = graph.find_by_start(emission.end)

        index = graph.add(
            Segment(
                code=emission.code,
                direction=emission.direction,
                start=emission.start,
                end=emission.end,
                prev=prev,
                next=next_,
            )
        )

        # stranded segment, wait for neighbours
        if prev is None and next_ is None:
            return index

        segment = graph[index]

        prev_leader = None
        if prev is not None:
            graph[prev].next = index
            prev_leader = graph[prev].leader

        next_leader = None
        if next_ is not None:
            graph[next_].prev = index
            next_leader = graph[next_].leader

        if prev_leader is None and next_leader is None:
            # neighbours are single stranded segments
            segment.leader = index
            if prev is not None:
                graph[prev].leader = index
            if next_ is not None:
                graph[next_].leader = index
        elif prev_leader is None:
            self._spread_backward(next_leader, index)
        elif next_leader is None:
            self._spread_forward(prev_leader, index)
        elif prev_leader != next_leader:
            self._spread_forward(prev_leader, index)
        else:
            segment.leader = prev_leader
            self._close(prev_leader)

        return index

    def _spread_forward(self, leader: int, index: int | None) -> None:
        graph = self.graph
        while index is not None:
            segment = graph[index]
            segment.leader = leader
            index = segment.next

    def _spread_backward(self, leader: int, index: int | None) -> None:
        graph = self.graph
        while index is not None:
            segment = graph[index]
            segment.leader = leader
            index = segment.prev

    def _close(self, leader: int) -> None:
        ring, members = self.extractor.extract(self.graph, leader)
        for member in members:
            self.graph.discard(member)
        self.on_ring(ring)

    def finish(self) -> None:
        """Verify no open chain survived the scan.

        Raises:
            GraphCorruptionError: If any segment is still waiting for a ring
        """
        for index in self.graph:
            segment = self.graph[index]
            raise GraphCorruptionError(
                f"{len(self.graph)} segments left unclosed after scan",
                start=segment.start,
                end=segment.end,
                code=segment.code,
                leader=segment.leader,
            )
