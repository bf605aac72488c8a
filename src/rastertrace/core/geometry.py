"""Geometric operations for ring simplification.

All functions are pure, stateless, and designed for use in parallel processing.
"""

from rastertrace.domain import Point


def parallelogram_area(a: Point, b: Point, c: Point) -> float:
    """Area of the parallelogram spanned by b - a and c - a.

    This is twice the area of triangle (a, b, c), which saves a division
    per score in the simplifier's inner loop.

    Args:
        a: Shared corner
        b: First neighbour
        c: Second neighbour

    Returns:
        Non-negative area in square units

    Examples:
        >>> parallelogram_area(Point(0.0, 0.0), Point(2.0, 0.0), Point(0.0, 2.0))
        4.0
        >>> parallelogram_area(Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 2.0))
        0.0
    """
    return abs((b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y))
