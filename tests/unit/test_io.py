"""Tests for mask reading and contour writing."""

import json
from pathlib import Path

import pytest

from rastertrace.config import PixelOrigin
from rastertrace.domain import BorderMask, Contour, Point, Ring
from rastertrace.exceptions import RasterLoadError, RasterTraceError, UnsupportedFormatError
from rastertrace.io import ContourWriter, MaskReader


@pytest.fixture
def mask_file(tmp_path: Path) -> Path:
    path = tmp_path / "shapes.txt"
    path.write_text("; a small test mask\n.##.\n#..#\n.##\n\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_contour() -> Contour:
    border = BorderMask(2, 2)
    border.mark(0, 0)
    return Contour(
        rings=[Ring(points=[Point(-0.5, -0.5), Point(0.5, -0.5), Point(0.5, 0.5), Point(-0.5, 0.5)])],
        border=border,
    )


class TestMaskReader:
    """Tests for MaskReader."""

    def test_load(self, mask_file: Path) -> None:
        reader = MaskReader(mask_file)
        raster = reader.load()

        assert (raster.width, raster.height) == (4, 3)
        assert raster.sample(1, 0)
        assert not raster.sample(0, 0)
        assert not raster.sample(3, 2)
        assert raster.count() == 6

    def test_name_is_stem(self, mask_file: Path) -> None:
        assert MaskReader(mask_file).name == "shapes"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RasterLoadError) as exc_info:
            MaskReader(tmp_path / "missing.txt").load()
        assert exc_info.value.reason == "file not found"

    def test_wrong_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG")
        with pytest.raises(UnsupportedFormatError):
            MaskReader(path).load()

    def test_mask_suffix_accepted(self, tmp_path: Path) -> None:
        path = tmp_path / "blob.mask"
        path.write_text("11\n11\n", encoding="utf-8")
        assert MaskReader(path).load().count() == 4

    def test_bad_character(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("#?#\n", encoding="utf-8")
        with pytest.raises(UnsupportedFormatError, match="Unexpected mask character"):
            MaskReader(path).load()


class TestContourWriter:
    """Tests for ContourWriter."""

    def test_output_path(self) -> None:
        assert ContourWriter.get_output_path(Path("/data/shapes.txt")) == Path(
            "/data/shapes.contours.json"
        )

    def test_document_layout(self, sample_contour: Contour) -> None:
        writer = ContourWriter(Path("unused.json"), PixelOrigin.CORNER, simplified=True)
        writer.add("pixel", sample_contour)

        doc = writer.to_dict()

        assert doc["pixel_origin"] == "corner"
        assert doc["simplified"] is True
        assert doc["contours"] == [
            {
                "name": "pixel",
                "width": 2,
                "height": 2,
                "rings": [[[-0.5, -0.5], [0.5, -0.5], [0.5, 0.5], [-0.5, 0.5]]],
            }
        ]

    def test_save(self, tmp_path: Path, sample_contour: Contour) -> None:
        output = tmp_path / "nested" / "out.contours.json"
        writer = ContourWriter(output)
        writer.add("a", sample_contour)
        writer.add("b", Contour.empty(1, 1))

        assert writer.save() == output

        doc = json.loads(output.read_text(encoding="utf-8"))
        assert [c["name"] for c in doc["contours"]] == ["a", "b"]
        assert doc["contours"][1]["rings"] == []
        assert doc["pixel_origin"] == "center"

    def test_save_failure(self, tmp_path: Path, sample_contour: Contour) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        writer = ContourWriter(blocker / "out.json")
        writer.add("a", sample_contour)
        with pytest.raises(RasterTraceError, match="Failed to save"):
            writer.save()
