"""Contour tracing driver.

Scans a raster cell by cell, feeds the emitted segments into a
SegmentGraphBuilder and collects the rings it closes.
"""

from rastertrace.config import ContourConfig
from rastertrace.core.cells import classify_cell, scan_cells
from rastertrace.core.extractor import RingExtractor
from rastertrace.core.graph import SegmentGraphBuilder
from rastertrace.core.tables import SaddleResolver, SegmentTable
from rastertrace.domain import BinaryRaster, Contour


class ContourFinder:
    """Traces all boundaries of a binary raster into closed rings.

    The finder is stateless between calls; each call to ``find`` owns its
    own segment graph, so independent rasters may be traced in parallel.

    Example:
        finder = ContourFinder(ContourConfig(pixel_origin=PixelOrigin.CORNER))
        contour = finder.find(MaskRaster.from_text("##\\n##"))
        print(len(contour.rings))  # 1
    """

    def __init__(
        self,
        config: ContourConfig | None = None,
        saddle_resolver: SaddleResolver | None = None,
    ) -> None:
        self.config = config or ContourConfig()
        self.table = SegmentTable(self.config, saddle_resolver)
        self.extractor = RingExtractor(self.config)

    def find(self, raster: BinaryRaster) -> Contour:
        """Trace a raster.

        Args:
            raster: Raster to trace

        Returns:
            Contour with one ring per boundary, in closing order

        Raises:
            GraphCorruptionError: If segment linking breaks an invariant
        """
        contour = Contour.empty(raster.width, raster.height)
        builder = SegmentGraphBuilder(self.extractor, on_ring=contour.rings.append)
        table = self.table

        for i, j, is_border in scan_cells(raster.width, raster.height):
            code = classify_cell(raster, i, j)
            if is_border:
                emissions = table.border(i, j, code)
            else:
                emissions = table.interior(raster, i, j, code)

            if not emissions:
                continue

            for x, y in table.border_marks(i, j, code):
                contour.border.mark(x, y)

            for emission in emissions:
                builder.insert(emission)

        builder.finish()
        return contour


def find_contour(raster: BinaryRaster, config: ContourConfig | None = None) -> Contour:
    """Trace a raster with a one-off ContourFinder."""
    return ContourFinder(config).find(raster)
