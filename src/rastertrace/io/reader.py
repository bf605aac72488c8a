"""Mask reader for loading text raster masks.

This module provides the MaskReader class for loading plain-text mask
files into MaskRaster domain models.

Format:
- One raster row per line, top row first
- ``#``, ``1``, ``X``, ``x``, ``*``, ``@`` mark set pixels
- ``.``, ``0``, space, ``-``, ``_`` mark unset pixels
- Lines starting with ``;`` are comments
- Short rows are padded with unset pixels
"""

from pathlib import Path

from rastertrace.domain import MaskRaster
from rastertrace.exceptions import RasterLoadError, UnsupportedFormatError

SUPPORTED_SUFFIXES = frozenset({".txt", ".mask"})


class MaskReader:
    """Loads text mask files.

    Example:
        reader = MaskReader(Path("mask.txt"))
        raster = reader.load()
        print(raster.width, raster.height)
    """

    def __init__(self, mask_path: Path) -> None:
        """Initialize the mask reader.

        Args:
            mask_path: Path to the mask file
        """
        self._mask_path = mask_path

    @property
    def name(self) -> str:
        """Name used to identify the raster in output and logs."""
        return self._mask_path.stem

    def load(self) -> MaskRaster:
        """Load the mask file.

        Returns:
            Loaded raster

        Raises:
            RasterLoadError: If the file does not exist or cannot be read
            UnsupportedFormatError: If the file is not a text mask
        """
        if not self._mask_path.exists():
            raise RasterLoadError(str(self._mask_path), "file not found")

        if self._mask_path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise UnsupportedFormatError(
                str(self._mask_path),
                f"expected one of {', '.join(sorted(SUPPORTED_SUFFIXES))}",
            )

        try:
            text = self._mask_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RasterLoadError(str(self._mask_path), str(e)) from e

        try:
            return MaskRaster.from_text(text)
        except ValueError as e:
            raise UnsupportedFormatError(str(self._mask_path), str(e)) from e
