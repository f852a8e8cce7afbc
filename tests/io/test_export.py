from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from photo_resizer.core.pixel_buffer import PixelBuffer, ProcessedResult
from photo_resizer.errors import ExportError
from photo_resizer.io.export import ExportFormat, encode_image, export_filename, export_image


@pytest.mark.parametrize(
    "original,fmt,expected",
    [
        ("photo.jpg", ExportFormat.PNG, "photo-processed.png"),
        ("photo.png", "jpeg", "photo-processed.jpg"),
        ("holiday.final.jpeg", ExportFormat.JPEG, "holiday.final-processed.jpg"),
        ("noext", ExportFormat.PNG, "noext-processed.png"),
    ],
)
def test_export_filename(original: str, fmt, expected: str) -> None:
    assert export_filename(original, fmt) == expected


def test_format_properties() -> None:
    assert ExportFormat.JPEG.extension == "jpg"
    assert ExportFormat.JPEG.mime_type == "image/jpeg"
    assert ExportFormat.PNG.mime_type == "image/png"


def test_png_is_lossless_and_keeps_alpha(random_buffer) -> None:
    buffer = random_buffer(9, 7)

    payload = encode_image(buffer, ExportFormat.PNG)

    with Image.open(io.BytesIO(payload)) as decoded:
        assert decoded.mode == "RGBA"
        np.testing.assert_array_equal(np.asarray(decoded), buffer.data)


def test_jpeg_drops_alpha(random_buffer) -> None:
    result = ProcessedResult(random_buffer(16, 8))

    payload = encode_image(result, "jpeg", quality=80)

    assert payload[:2] == b"\xff\xd8"
    with Image.open(io.BytesIO(payload)) as decoded:
        assert decoded.mode == "RGB"
        assert decoded.size == (16, 8)


def test_lower_quality_gives_smaller_file(random_buffer) -> None:
    buffer = random_buffer(64, 64)

    small = encode_image(buffer, ExportFormat.JPEG, quality=10)
    large = encode_image(buffer, ExportFormat.JPEG, quality=95)

    assert len(small) < len(large)


@pytest.mark.parametrize("quality", [0, 101, -5])
def test_quality_out_of_range(random_buffer, quality: int) -> None:
    with pytest.raises(ValueError):
        encode_image(random_buffer(4, 4), ExportFormat.JPEG, quality=quality)


@pytest.mark.parametrize("quality", [1, 100])
def test_quality_bounds_are_inclusive(random_buffer, quality: int) -> None:
    assert encode_image(random_buffer(4, 4), ExportFormat.JPEG, quality=quality)


def test_encoder_failure_raises_export_error(monkeypatch, random_buffer) -> None:
    buffer = random_buffer(5, 5)
    before = buffer.tobytes()

    def _broken_save(self, fp, format=None, **params):
        raise OSError("disk full")

    monkeypatch.setattr(Image.Image, "save", _broken_save)

    with pytest.raises(ExportError) as excinfo:
        encode_image(buffer, ExportFormat.PNG)

    assert excinfo.value.user_message == "Export failed. Please try again."
    assert buffer.tobytes() == before


def test_empty_encoder_output_raises_export_error(monkeypatch, random_buffer) -> None:
    monkeypatch.setattr(Image.Image, "save", lambda self, fp, format=None, **params: None)

    with pytest.raises(ExportError):
        encode_image(random_buffer(5, 5), ExportFormat.JPEG)


def test_export_image_writes_file(tmp_path: Path) -> None:
    buffer = PixelBuffer.allocate(6, 3, fill=(0, 128, 255, 255))

    target = export_image(buffer, "beach.webp", tmp_path / "out", ExportFormat.PNG)

    assert target == tmp_path / "out" / "beach-processed.png"
    with Image.open(target) as decoded:
        assert decoded.size == (6, 3)
        assert decoded.getpixel((2, 1)) == (0, 128, 255, 255)
