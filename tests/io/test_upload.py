from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image, features

from photo_resizer.config import MAX_UPLOAD_BYTES
from photo_resizer.errors import (
    FileTooLargeError,
    ImageDecodeError,
    UnsupportedMimeTypeError,
    UploadValidationError,
)
from photo_resizer.io.upload import load_source_file, load_source_image, validate_upload


def _encode(image: Image.Image, fmt: str) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def _checker(size=(6, 4)) -> Image.Image:
    image = Image.new("RGBA", size, (10, 20, 30, 255))
    image.putpixel((0, 0), (250, 240, 230, 128))
    return image


def test_png_upload_decodes_to_rgba() -> None:
    data = _encode(_checker(), "PNG")

    source = load_source_image(data, "checker.png", "image/png")

    assert (source.width, source.height) == (6, 4)
    assert source.pixels.pixel(0, 0) == (250, 240, 230, 128)
    assert source.pixels.pixel(5, 3) == (10, 20, 30, 255)
    assert source.pixels.writable is False
    assert source.metadata.filename == "checker.png"
    assert source.metadata.byte_size == len(data)
    assert source.metadata.mime_type == "image/png"
    assert (source.metadata.width, source.metadata.height) == (6, 4)


def test_jpeg_upload_gains_opaque_alpha() -> None:
    data = _encode(Image.new("RGB", (8, 5), (90, 90, 90)), "JPEG")

    source = load_source_image(data, "gray.jpg", "image/jpeg")

    assert source.pixels.size == (8, 5)
    assert np.all(source.pixels.data[..., 3] == 255)


@pytest.mark.skipif(not features.check("webp"), reason="Pillow built without WebP")
def test_webp_upload_is_accepted() -> None:
    data = _encode(Image.new("RGBA", (3, 3), (1, 2, 3, 255)), "WEBP")

    source = load_source_image(data, "tiny.webp", "image/webp")

    assert source.pixels.size == (3, 3)


def test_unsupported_type_is_rejected_with_user_message() -> None:
    with pytest.raises(UnsupportedMimeTypeError) as excinfo:
        validate_upload("anim.gif", 100, "image/gif")

    assert excinfo.value.user_message == "Please upload a JPG, PNG, or WebP image file."
    assert isinstance(excinfo.value, UploadValidationError)


def test_size_limit_is_inclusive() -> None:
    validate_upload("big.png", MAX_UPLOAD_BYTES, "image/png")

    with pytest.raises(FileTooLargeError) as excinfo:
        validate_upload("bigger.png", MAX_UPLOAD_BYTES + 1, "image/png")

    assert excinfo.value.user_message == "File size must be less than 50MB."


def test_garbage_bytes_raise_decode_error() -> None:
    with pytest.raises(ImageDecodeError) as excinfo:
        load_source_image(b"definitely not an image", "broken.png", "image/png")

    assert excinfo.value.user_message == "Failed to load image. Please try another file."


def test_mime_is_checked_before_decoding() -> None:
    data = _encode(_checker(), "PNG")

    with pytest.raises(UnsupportedMimeTypeError):
        load_source_image(data, "checker.png", "image/bmp")


def test_exif_orientation_is_applied() -> None:
    image = Image.new("RGB", (4, 2), (200, 10, 10))
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 degrees clockwise on display
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", exif=exif.tobytes())

    source = load_source_image(buffer.getvalue(), "rotated.jpg", "image/jpeg")

    assert (source.width, source.height) == (2, 4)


def test_load_source_file_guesses_mime(tmp_path: Path) -> None:
    path = tmp_path / "photo.png"
    path.write_bytes(_encode(_checker((5, 5)), "PNG"))

    source = load_source_file(path)

    assert source.metadata.mime_type == "image/png"
    assert source.metadata.filename == "photo.png"
    assert source.pixels.size == (5, 5)


def test_load_source_file_rejects_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("hello")

    with pytest.raises(UnsupportedMimeTypeError):
        load_source_file(path)


def test_load_source_file_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_source_file(tmp_path / "absent.jpg")
