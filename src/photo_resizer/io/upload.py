"""Validate uploads and decode them into :class:`SourceImage` instances."""

from __future__ import annotations

import io
import logging
import mimetypes
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import ACCEPTED_MIME_TYPES, MAX_UPLOAD_BYTES
from ..core.pixel_buffer import ImageMetadata, SourceImage
from ..errors import FileTooLargeError, ImageDecodeError, UnsupportedMimeTypeError

_LOGGER = logging.getLogger(__name__)


def validate_upload(filename: str, byte_size: int, mime_type: str) -> None:
    """Reject files the editor cannot accept before anything is decoded.

    Raises:
        UnsupportedMimeTypeError: *mime_type* is not JPEG, PNG or WebP.
        FileTooLargeError: *byte_size* exceeds :data:`MAX_UPLOAD_BYTES`.
    """

    if mime_type not in ACCEPTED_MIME_TYPES:
        _LOGGER.warning("Rejected upload %s: unsupported type %r", filename, mime_type)
        raise UnsupportedMimeTypeError(f"Unsupported MIME type {mime_type!r} for {filename}")
    if byte_size > MAX_UPLOAD_BYTES:
        _LOGGER.warning("Rejected upload %s: %d bytes exceeds limit", filename, byte_size)
        raise FileTooLargeError(
            f"{filename} is {byte_size} bytes; the limit is {MAX_UPLOAD_BYTES} bytes"
        )


def load_source_image(data: bytes, filename: str, mime_type: str) -> SourceImage:
    """Validate and decode *data* into an immutable RGBA :class:`SourceImage`.

    EXIF orientation is applied so the pixels match what a browser displays.
    """

    validate_upload(filename, len(data), mime_type)

    try:
        with Image.open(io.BytesIO(data)) as opened:
            opened.load()
            oriented = ImageOps.exif_transpose(opened)
            rgba = oriented.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        _LOGGER.warning("Failed to decode upload %s: %s", filename, exc)
        raise ImageDecodeError(f"Could not decode {filename}: {exc}") from exc

    pixels = np.asarray(rgba, dtype=np.uint8)
    height, width = pixels.shape[0], pixels.shape[1]
    if width <= 0 or height <= 0:
        raise ImageDecodeError(f"{filename} decoded to an empty image")

    metadata = ImageMetadata(
        filename=filename,
        byte_size=len(data),
        mime_type=mime_type,
        width=width,
        height=height,
    )
    _LOGGER.info("Loaded %s (%dx%d, %d bytes)", filename, width, height, len(data))
    return SourceImage.from_array(pixels, metadata)


def load_source_file(path: str | Path, mime_type: Optional[str] = None) -> SourceImage:
    """Read *path* from disk and hand it to :func:`load_source_image`.

    The MIME type is guessed from the extension unless given explicitly.
    """

    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")

    if mime_type is None:
        mime_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        if file_path.suffix.lower() == ".webp":
            # Older platform mime tables do not know WebP.
            mime_type = "image/webp"

    size = file_path.stat().st_size
    validate_upload(file_path.name, size, mime_type)
    return load_source_image(file_path.read_bytes(), file_path.name, mime_type)


__all__ = ["load_source_file", "load_source_image", "validate_upload"]
