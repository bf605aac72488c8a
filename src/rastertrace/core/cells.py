"""Marching-squares cell classification.

A cell (i, j) is the 2x2 neighbourhood of raster samples at (i, j),
(i + 1, j), (i + 1, j + 1) and (i, j + 1). Its code packs the four samples
into four bits:

    bit3 (i, j) ------ bit2 (i + 1, j)
       |                   |
    bit0 (i, j + 1) -- bit1 (i + 1, j + 1)
"""

from collections.abc import Iterator

from rastertrace.domain import BinaryRaster

EMPTY = 0b0000
FULL = 0b1111
SADDLES = frozenset({0b0101, 0b1010})


def classify_cell(raster: BinaryRaster, i: int, j: int) -> int:
    """Compute the 4-bit code of cell (i, j).

    Samples outside the raster read as unset, so every integer cell
    position is valid.

    Args:
        raster: Raster to sample
        i: Column of the cell's top-left sample
        j: Row of the cell's top-left sample

    Returns:
        Cell code in range 0..15

    Examples:
        >>> from rastertrace.domain import MaskRaster
        >>> raster = MaskRaster.from_text("#")
        >>> classify_cell(raster, 0, 0)
        8
        >>> classify_cell(raster, -1, -1)
        2
    """
    return (
        int(raster.sample(i, j + 1))
        | (int(raster.sample(i + 1, j + 1)) << 1)
        | (int(raster.sample(i + 1, j)) << 2)
        | (int(raster.sample(i, j)) << 3)
    )


def is_saddle(code: int) -> bool:
    """Check whether a code has set corners on one diagonal only."""
    return code in SADDLES


def scan_cells(width: int, height: int) -> Iterator[tuple[int, int, bool]]:
    """Yield every cell of a raster in row-major scan order.

    The scan adds one border row above and below the raster and one border
    column before and after each row, so every boundary configuration is
    visited exactly once.

    Args:
        width: Raster width
        height: Raster height

    Yields:
        Tuples of (i, j, is_border)
    """
    if width <= 0 or height <= 0:
        return

    xend = width - 1
    yend = height - 1

    for i in range(-1, xend + 1):
        yield i, -1, True

    for j in range(yend):
        yield -1, j, True
        for i in range(xend):
            yield i, j, False
        yield xend, j, True

    for i in range(-1, xend + 1):
        yield i, yend, True
