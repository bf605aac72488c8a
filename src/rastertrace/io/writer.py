"""Contour writer for saving traced rings.

This module provides the ContourWriter class for writing traced contours
as a JSON document.
"""

import json
from pathlib import Path
from typing import Any

from rastertrace import __version__
from rastertrace.config import PixelOrigin
from rastertrace.domain import Contour
from rastertrace.exceptions import RasterTraceError

OUTPUT_SUFFIX = ".contours.json"


class ContourWriter:
    """Writes named contours to a JSON file.

    Document layout::

        {
          "version": "0.1.0",
          "pixel_origin": "center",
          "simplified": true,
          "contours": [
            {"name": "mask", "width": 4, "height": 3,
             "rings": [[[x, y], ...], ...]}
          ]
        }

    Example:
        writer = ContourWriter(Path("out.contours.json"))
        writer.add("mask", contour)
        writer.save()
    """

    def __init__(
        self,
        output_path: Path,
        pixel_origin: PixelOrigin = PixelOrigin.CENTER,
        simplified: bool = False,
    ) -> None:
        self._output_path = output_path
        self._pixel_origin = pixel_origin
        self._simplified = simplified
        self._contours: list[tuple[str, Contour]] = []

    @staticmethod
    def get_output_path(mask_path: Path) -> Path:
        """Generate output path for a mask file.

        Args:
            mask_path: Path to the input mask

        Returns:
            Path with the contour suffix, e.g. "shapes.txt" -> "shapes.contours.json"
        """
        return mask_path.with_name(mask_path.stem + OUTPUT_SUFFIX)

    def add(self, name: str, contour: Contour) -> None:
        """Queue a contour for writing."""
        self._contours.append((name, contour))

    def to_dict(self) -> dict[str, Any]:
        """Build the output document."""
        return {
            "version": __version__,
            "pixel_origin": self._pixel_origin.value,
            "simplified": self._simplified,
            "contours": [
                {
                    "name": name,
                    "width": contour.width,
                    "height": contour.height,
                    "rings": [ring.to_list() for ring in contour.rings],
                }
                for name, contour in self._contours
            ],
        }

    def save(self) -> Path:
        """Write the document.

        Returns:
            Path of the written file

        Raises:
            RasterTraceError: If the file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise RasterTraceError(f"Failed to save contours '{self._output_path}': {e}") from e

        return self._output_path
