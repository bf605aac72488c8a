"""Tests for the contour tracing driver."""

import random

import pytest

from rastertrace.config import ContourConfig, PixelOrigin, SaddlePolicy
from rastertrace.core.cells import classify_cell, scan_cells
from rastertrace.core.tables import Emission, SegmentTable
from rastertrace.core.tracer import ContourFinder, find_contour
from rastertrace.domain import MaskRaster, Point, Ring
from rastertrace.exceptions import GraphCorruptionError


def _random_raster(width: int, height: int, seed: int, density: float = 0.45) -> MaskRaster:
    rng = random.Random(seed)
    return MaskRaster.from_rows(
        [[rng.random() < density for _ in range(width)] for _ in range(height)]
    )


def _emissions(raster: MaskRaster, table: SegmentTable) -> list[Emission]:
    emitted: list[Emission] = []
    for i, j, is_border in scan_cells(raster.width, raster.height):
        code = classify_cell(raster, i, j)
        if is_border:
            emitted.extend(table.border(i, j, code))
        else:
            emitted.extend(table.interior(raster, i, j, code))
    return emitted


def _point_set(ring: Ring) -> set[tuple[float, float]]:
    return {p.to_tuple() for p in ring}


class TestEmptyRasters:
    """Rasters without boundaries."""

    def test_zero_size(self) -> None:
        contour = find_contour(MaskRaster(width=0, height=0))
        assert contour.rings == []

    def test_all_unset(self) -> None:
        contour = find_contour(MaskRaster.from_text("...\n...\n..."))
        assert contour.rings == []
        assert contour.border.count() == 0


class TestSinglePixel:
    """Boundaries of one set pixel."""

    def test_pixel_on_raster_border(self) -> None:
        """Border cells route through pixel centers, enclosing a unit square."""
        contour = find_contour(MaskRaster.from_text("#"))

        assert len(contour.rings) == 1
        ring = contour.rings[0]
        assert _point_set(ring) == {(-0.5, -0.5), (0.5, -0.5), (0.5, 0.5), (-0.5, 0.5)}
        assert ring.signed_area() == pytest.approx(1.0)
        assert (0, 0) in contour.border

    def test_corner_origin_shift(self) -> None:
        contour = find_contour(
            MaskRaster.from_text("#"), ContourConfig(pixel_origin=PixelOrigin.CORNER)
        )
        assert _point_set(contour.rings[0]) == {(0, 0), (1, 0), (1, 1), (0, 1)}

    def test_interior_pixel_is_diamond(self) -> None:
        contour = find_contour(MaskRaster.from_text("...\n.#.\n..."))

        assert len(contour.rings) == 1
        ring = contour.rings[0]
        assert ring.points == [Point(1, 0.5), Point(1.5, 1), Point(1, 1.5), Point(0.5, 1)]
        assert ring.signed_area() == pytest.approx(0.5)
        assert contour.border.pixels() == [(1, 1)]


class TestBlocks:
    """Boundaries of solid blocks."""

    def test_full_raster(self) -> None:
        contour = find_contour(MaskRaster.from_text("##\n##"))

        assert len(contour.rings) == 1
        ring = contour.rings[0]
        assert len(ring) == 4
        assert _point_set(ring) == {(-0.5, -0.5), (1.5, -0.5), (1.5, 1.5), (-0.5, 1.5)}
        assert ring.signed_area() == pytest.approx(4.0)

    def test_interior_block_has_cut_corners(self) -> None:
        contour = find_contour(MaskRaster.from_text("....\n.##.\n.##.\n...."))

        assert len(contour.rings) == 1
        ring = contour.rings[0]
        assert len(ring) == 8
        assert ring.signed_area() == pytest.approx(3.5)

    def test_join_reduces_vertices(self) -> None:
        raster = MaskRaster.from_text("#####\n#####\n#####")
        joined = find_contour(raster)
        unjoined = find_contour(raster, ContourConfig(join_straight_segments=False))

        assert len(joined.rings[0]) == 4
        assert len(unjoined.rings[0]) > len(joined.rings[0])
        assert unjoined.rings[0].signed_area() == pytest.approx(joined.rings[0].signed_area())


class TestHoles:
    """Rings around unset regions."""

    def test_ring_with_hole(self) -> None:
        contour = find_contour(MaskRaster.from_text("###\n#.#\n###"))

        assert len(contour.rings) == 2
        areas = sorted(ring.signed_area() for ring in contour.rings)
        assert areas == [pytest.approx(-0.5), pytest.approx(9.0)]
        assert len(contour.holes()) == 1

    def test_separate_blobs(self) -> None:
        contour = find_contour(MaskRaster.from_text("##...##\n##...##"))
        assert len(contour.rings) == 2
        assert all(not ring.is_hole() for ring in contour.rings)


class TestSaddlePolicy:
    """Diagonally touching pixels."""

    DIAGONAL = "#.\n.#"

    def test_connect(self) -> None:
        contour = find_contour(MaskRaster.from_text(self.DIAGONAL))
        assert len(contour.rings) == 1

    def test_separate(self) -> None:
        config = ContourConfig(saddle_policy=SaddlePolicy.SEPARATE)
        contour = find_contour(MaskRaster.from_text(self.DIAGONAL), config)

        assert len(contour.rings) == 2
        for ring in contour.rings:
            assert ring.signed_area() == pytest.approx(0.875)

    def test_explicit_resolver_overrides_policy(self) -> None:
        finder = ContourFinder(
            ContourConfig(saddle_policy=SaddlePolicy.CONNECT),
            saddle_resolver=lambda raster, i, j, code: code ^ 0b1111,
        )
        assert len(finder.find(MaskRaster.from_text(self.DIAGONAL)).rings) == 2


class TestBoundaryClosure:
    """Properties that hold for arbitrary rasters."""

    @pytest.mark.parametrize("seed", [1, 7, 42])
    @pytest.mark.parametrize("policy", list(SaddlePolicy))
    def test_starts_match_ends(self, seed: int, policy: SaddlePolicy) -> None:
        """Every vertex entered by one segment is left by exactly one other."""
        raster = _random_raster(12, 9, seed)
        emitted = _emissions(raster, SegmentTable(ContourConfig(saddle_policy=policy)))

        starts = [e.start for e in emitted]
        ends = [e.end for e in emitted]
        assert len(set(starts)) == len(starts)
        assert len(set(ends)) == len(ends)
        assert set(starts) == set(ends)

    @pytest.mark.parametrize("seed", [3, 11, 2024])
    def test_every_segment_lands_in_a_ring(self, seed: int) -> None:
        raster = _random_raster(15, 11, seed)
        config = ContourConfig(join_straight_segments=False)
        emitted = _emissions(raster, SegmentTable(config))

        contour = find_contour(raster, config)

        assert contour.vertex_count() == len(emitted)

    @pytest.mark.parametrize("seed", [5, 19])
    def test_holes_never_outweigh_outer_rings(self, seed: int) -> None:
        contour = find_contour(_random_raster(10, 8, seed))
        assert sum(ring.signed_area() for ring in contour.rings) > 0

    def test_finder_is_reusable(self) -> None:
        finder = ContourFinder()
        first = finder.find(MaskRaster.from_text("#."))
        second = finder.find(MaskRaster.from_text("#."))
        assert [r.points for r in first.rings] == [r.points for r in second.rings]


class LossyTable(SegmentTable):
    """Drops the second half of every border corner route."""

    def border(self, i: int, j: int, code: int) -> list[Emission]:
        return super().border(i, j, code)[:1]


class TestCorruption:
    """Broken segment tables surface as GraphCorruptionError."""

    def test_open_chain_detected(self) -> None:
        finder = ContourFinder()
        finder.table = LossyTable()
        with pytest.raises(GraphCorruptionError, match="unclosed"):
            finder.find(MaskRaster.from_text("#"))
