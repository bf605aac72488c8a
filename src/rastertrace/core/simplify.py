"""Topology-preserving ring simplification.

Vertices are removed in order of the area of the triangle they form with
their current neighbours (Visvalingam-Whyatt). Points occurring more than
twice across the whole contour collection are junctions between three or
more rings; they are locked so neighbouring rings keep meeting at the same
place after simplification.
"""

import heapq
import math
from collections import Counter
from collections.abc import Iterable

from rastertrace.config import SimplifyConfig
from rastertrace.core.geometry import parallelogram_area
from rastertrace.domain import Contour, Point, Ring

# Rings of this size or smaller are left alone.
MIN_SIMPLIFY_SIZE = 4

# Never reduce a ring below a triangle.
MIN_RING_SIZE = 3


def find_locked_points(contours: Iterable[Contour]) -> frozenset[Point]:
    """Find points shared by more than two ring occurrences.

    Args:
        contours: Every contour of the collection being simplified

    Returns:
        Set of locked points
    """
    cardinality: Counter[Point] = Counter()
    for contour in contours:
        for ring in contour.rings:
            cardinality.update(ring.points)

    return frozenset(p for p, count in cardinality.items() if count > 2)


def simplify_ring(
    points: list[Point],
    locked: frozenset[Point] | set[Point],
    threshold: float,
) -> list[Point]:
    """Remove low-area vertices from a closed ring.

    Each vertex is scored with twice the area of the triangle it forms
    with its neighbours; locked vertices score infinity and are never
    removed. The lowest score is removed repeatedly until it exceeds the
    threshold. Equal scores are broken by smaller x, then smaller y.

    Args:
        points: Ring points (first follows last)
        locked: Points that must survive
        threshold: Largest triangle area a removed vertex may span

    Returns:
        Surviving points in their original cyclic order
    """
    n = len(points)
    if n <= MIN_SIMPLIFY_SIZE:
        return list(points)

    # scores are parallelogram areas
    stop = threshold * 2.0

    prev = [(i - 1) % n for i in range(n)]
    next_ = [(i + 1) % n for i in range(n)]
    alive = [True] * n
    is_locked = [p in locked for p in points]
    version = [0] * n
    score = [math.inf] * n

    heap: list[tuple[float, float, float, int, int]] = []

    def rescore(i: int) -> None:
        if is_locked[i]:
            return
        score[i] = parallelogram_area(points[prev[i]], points[i], points[next_[i]])
        version[i] += 1
        heapq.heappush(heap, (score[i], points[i].x, points[i].y, i, version[i]))

    for i in range(n):
        rescore(i)

    remaining = n
    while heap and remaining > MIN_RING_SIZE:
        area, _, _, i, stamp = heapq.heappop(heap)
        if not alive[i] or stamp != version[i]:
            continue

        if area > stop:
            break

        # unlink
        p, q = prev[i], next_[i]
        next_[p] = q
        prev[q] = p
        alive[i] = False
        remaining -= 1

        rescore(p)
        rescore(q)

    return [points[i] for i in range(n) if alive[i]]


class PolygonSimplifier:
    """Simplifies a whole contour collection at once.

    Locked points must be computed over the complete collection before any
    ring is touched, so the collection is processed as a unit.

    Example:
        simplifier = PolygonSimplifier(SimplifyConfig(area_threshold=2.0))
        simplified = simplifier.simplify([contour_a, contour_b])
    """

    def __init__(self, config: SimplifyConfig | None = None) -> None:
        self.config = config or SimplifyConfig()

    @property
    def threshold(self) -> float:
        return self.config.area_threshold

    def simplify(
        self,
        contours: list[Contour],
        locked: frozenset[Point] | None = None,
    ) -> list[Contour]:
        """Simplify every ring of every contour.

        Args:
            contours: Contours traced from related rasters
            locked: Precomputed locked points of the same collection

        Returns:
            New contours with simplified rings; border masks are shared
        """
        if locked is None:
            locked = find_locked_points(contours)

        result: list[Contour] = []
        for contour in contours:
            if not contour:
                result.append(contour)
                continue

            rings = [
                Ring(points=simplify_ring(ring.points, locked, self.threshold))
                for ring in contour.rings
            ]
            result.append(Contour(rings=rings, border=contour.border))

        return result


def simplify(contours: list[Contour], threshold: float = 10.0) -> list[Contour]:
    """Simplify a contour collection with the given area threshold."""
    return PolygonSimplifier(SimplifyConfig(area_threshold=threshold)).simplify(contours)
