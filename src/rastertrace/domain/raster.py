"""Binary raster types.

This module defines the raster side of the tracing pipeline:
- BinaryRaster: The protocol the tracer samples
- MaskRaster: An in-memory row-major mask implementing the protocol
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

SET_CHARS = frozenset("#1Xx*@")
UNSET_CHARS = frozenset(".0 -_")


@runtime_checkable
class BinaryRaster(Protocol):
    """A 2D boolean sampler.

    Any coordinate may be queried; reads outside ``width`` x ``height``
    must return False.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def sample(self, x: int, y: int) -> bool: ...


@dataclass
class MaskRaster:
    """Row-major binary mask stored one byte per pixel.

    Attributes:
        width: Number of columns
        height: Number of rows
        bits: Row-major pixel flags (non-zero means set)
    """

    width: int
    height: int
    bits: bytearray = field(default_factory=bytearray, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid raster size {self.width}x{self.height}")
        if not self.bits:
            self.bits = bytearray(self.width * self.height)
        elif len(self.bits) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} pixels, got {len(self.bits)}"
            )

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]]) -> "MaskRaster":
        """Build a mask from nested rows of truthy values.

        Short rows are padded with unset pixels.

        Args:
            rows: Iterable of rows; each value is interpreted with bool()

        Returns:
            MaskRaster instance
        """
        materialized = [[bool(v) for v in row] for row in rows]
        height = len(materialized)
        width = max((len(row) for row in materialized), default=0)

        raster = cls(width=width, height=height)
        for y, row in enumerate(materialized):
            for x, value in enumerate(row):
                if value:
                    raster.bits[y * width + x] = 1
        return raster

    @classmethod
    def from_text(cls, text: str) -> "MaskRaster":
        """Build a mask from a text picture (``#`` set, ``.`` unset).

        Args:
            text: One raster row per line

        Returns:
            MaskRaster instance

        Raises:
            ValueError: If a character is neither a set nor an unset marker
        """
        rows: list[list[bool]] = []
        for line in text.splitlines():
            if line.startswith(";"):
                continue
            row: list[bool] = []
            for ch in line.rstrip("\r\n"):
                if ch in SET_CHARS:
                    row.append(True)
                elif ch in UNSET_CHARS:
                    row.append(False)
                else:
                    raise ValueError(f"Unexpected mask character {ch!r}")
            rows.append(row)

        while rows and not rows[-1]:
            rows.pop()

        return cls.from_rows(rows)

    def sample(self, x: int, y: int) -> bool:
        """Return whether pixel (x, y) is set; out of range reads are unset."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return self.bits[y * self.width + x] != 0

    def count(self) -> int:
        """Number of set pixels."""
        return sum(1 for b in self.bits if b)

    def to_text(self) -> str:
        """Render as a text picture."""
        lines = []
        for y in range(self.height):
            row = self.bits[y * self.width : (y + 1) * self.width]
            lines.append("".join("#" if b else "." for b in row))
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "width": self.width,
            "height": self.height,
            "bits": bytes(self.bits),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaskRaster":
        """Deserialize from dictionary."""
        return cls(
            width=data["width"],
            height=data["height"],
            bits=bytearray(data["bits"]),
        )
