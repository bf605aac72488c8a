"""Tests for marching-squares segment tables and saddle resolution."""

import pytest

from rastertrace.config import ContourConfig, SaddlePolicy
from rastertrace.core.cells import SADDLES
from rastertrace.core.tables import (
    BORDER_SEGMENTS,
    SegmentTable,
    SignalResolver,
    connect_diagonals,
    separate_diagonals,
)
from rastertrace.domain import Direction, MaskRaster

# Doubled-coordinate corners of cell (0, 0) by code bit
CORNERS = {3: (0, 0), 2: (2, 0), 1: (2, 2), 0: (0, 2)}


@pytest.fixture
def table() -> SegmentTable:
    return SegmentTable()


@pytest.fixture
def blank() -> MaskRaster:
    return MaskRaster(width=0, height=0)


def _cross(start: tuple[int, int], end: tuple[int, int], point: tuple[int, int]) -> int:
    dx, dy = end[0] - start[0], end[1] - start[1]
    px, py = point[0] - start[0], point[1] - start[1]
    return dx * py - dy * px


class TestInteriorSegments:
    """Tests for interior cell lookups."""

    @pytest.mark.parametrize("code", range(16))
    def test_segment_count(self, table: SegmentTable, blank: MaskRaster, code: int) -> None:
        emissions = table.interior(blank, 0, 0, code)
        if code in (0b0000, 0b1111):
            assert emissions == []
        elif code in SADDLES:
            assert len(emissions) == 2
        else:
            assert len(emissions) == 1

    @pytest.mark.parametrize("code", [c for c in range(1, 15) if c not in SADDLES])
    def test_set_corners_on_consistent_side(
        self, table: SegmentTable, blank: MaskRaster, code: int
    ) -> None:
        """Set corners lie on one side of the segment, unset corners on the other."""
        (emission,) = table.interior(blank, 0, 0, code)
        for bit, corner in CORNERS.items():
            side = _cross(emission.start, emission.end, corner)
            if code & (1 << bit):
                assert side > 0, f"set corner {corner} of [{code:04b}]"
            else:
                assert side < 0, f"unset corner {corner} of [{code:04b}]"

    def test_offsets_are_absolute(self, table: SegmentTable, blank: MaskRaster) -> None:
        (emission,) = table.interior(blank, 3, 5, 0b0011)
        assert emission.start == (6, 11)
        assert emission.end == (8, 11)
        assert emission.direction is Direction.R
        assert emission.code == 0b0011

    def test_segments_cross_edge_midpoints(self, table: SegmentTable, blank: MaskRaster) -> None:
        midpoints = {(1, 0), (2, 1), (1, 2), (0, 1)}
        for code in range(16):
            for emission in table.interior(blank, 0, 0, code):
                assert emission.start in midpoints
                assert emission.end in midpoints


class TestSaddles:
    """Tests for saddle resolution."""

    def test_connected_pairs(self, blank: MaskRaster) -> None:
        table = SegmentTable(saddle_resolver=connect_diagonals)
        edges = {(e.start, e.end) for e in table.interior(blank, 0, 0, 0b1010)}
        assert edges == {((1, 0), (2, 1)), ((1, 2), (0, 1))}

    def test_separated_pairs(self, blank: MaskRaster) -> None:
        table = SegmentTable(saddle_resolver=separate_diagonals)
        edges = {(e.start, e.end) for e in table.interior(blank, 0, 0, 0b1010)}
        assert edges == {((1, 0), (0, 1)), ((1, 2), (2, 1))}

    def test_policy_from_config(self, blank: MaskRaster) -> None:
        table = SegmentTable(ContourConfig(saddle_policy=SaddlePolicy.SEPARATE))
        edges = {(e.start, e.end) for e in table.interior(blank, 0, 0, 0b0101)}
        assert edges == {((2, 1), (1, 0)), ((0, 1), (1, 2))}

    def test_saddle_keeps_original_code(self, blank: MaskRaster) -> None:
        table = SegmentTable(saddle_resolver=separate_diagonals)
        assert all(e.code == 0b0101 for e in table.interior(blank, 0, 0, 0b0101))

    def test_signal_resolver_samples_cell_center(self, blank: MaskRaster) -> None:
        calls: list[tuple[float, float]] = []

        def signal(x: float, y: float) -> bool:
            calls.append((x, y))
            return True

        table = SegmentTable(saddle_resolver=SignalResolver(signal))
        edges = {(e.start, e.end) for e in table.interior(blank, 2, 3, 0b0101)}

        assert calls == [(2.5, 3.5)]
        assert edges == {((4, 7), (5, 6)), ((6, 7), (5, 8))}

    def test_signal_resolver_unset_separates(self, blank: MaskRaster) -> None:
        table = SegmentTable(saddle_resolver=SignalResolver(lambda x, y: False))
        edges = {(e.start, e.end) for e in table.interior(blank, 0, 0, 0b0101)}
        assert edges == {((2, 1), (1, 0)), ((0, 1), (1, 2))}

    def test_resolver_not_consulted_for_plain_codes(self, blank: MaskRaster) -> None:
        def explode(*_: object) -> int:
            raise AssertionError("resolver called")

        table = SegmentTable(saddle_resolver=explode)
        assert len(table.interior(blank, 0, 0, 0b0011)) == 1

    def test_bad_resolver_result(self, blank: MaskRaster) -> None:
        table = SegmentTable(saddle_resolver=lambda raster, i, j, code: 0b0011)
        with pytest.raises(ValueError, match="Saddle resolver"):
            table.interior(blank, 0, 0, 0b1010)


class TestBorderSegments:
    """Tests for border cell lookups."""

    @pytest.mark.parametrize("code", [c for c, edges in BORDER_SEGMENTS.items() if len(edges) > 1])
    def test_multi_segment_entries_are_chained(self, table: SegmentTable, code: int) -> None:
        """Each corner route is a contiguous path of unit steps."""
        emissions = table.border(0, 0, code)
        for first, second in zip(emissions[0::2], emissions[1::2]):
            assert first.end == second.start

    def test_single_corner_emits_both_halves(self, table: SegmentTable) -> None:
        """Code 0010 turns through the cell center."""
        emissions = table.border(-1, -1, 0b0010)
        assert [(e.start, e.end) for e in emissions] == [((-1, 0), (-1, -1)), ((-1, -1), (0, -1))]
        assert [e.direction for e in emissions] == [Direction.U, Direction.R]

    @pytest.mark.parametrize("code", range(16))
    def test_endpoints_unique_within_cell(self, table: SegmentTable, code: int) -> None:
        emissions = table.border(0, 0, code)
        starts = [e.start for e in emissions]
        ends = [e.end for e in emissions]
        assert len(set(starts)) == len(starts)
        assert len(set(ends)) == len(ends)

    def test_empty_and_full_emit_nothing(self, table: SegmentTable) -> None:
        assert table.border(0, 0, 0b0000) == []
        assert table.border(0, 0, 0b1111) == []


class TestBorderMarks:
    """Tests for border pixel marks."""

    def test_no_marks_for_empty(self) -> None:
        assert SegmentTable.border_marks(0, 0, 0b0000) == []

    def test_single_corner(self) -> None:
        assert SegmentTable.border_marks(3, 4, 0b0001) == [(3, 5)]
        assert SegmentTable.border_marks(3, 4, 0b1000) == [(3, 4)]

    def test_edge_pair(self) -> None:
        assert SegmentTable.border_marks(0, 0, 0b0110) == [(1, 0), (1, 1)]

    def test_three_corners_mark_all(self) -> None:
        assert len(SegmentTable.border_marks(0, 0, 0b0111)) == 4
