"""Encode processed buffers as PNG or JPEG for download."""

from __future__ import annotations

import io
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Union

from PIL import Image

from ..config import DEFAULT_JPEG_QUALITY, JPEG_QUALITY_RANGE
from ..core.pixel_buffer import PixelBuffer, ProcessedResult
from ..errors import ExportError

_LOGGER = logging.getLogger(__name__)

_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")


class ExportFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        return "png" if self is ExportFormat.PNG else "jpg"

    @property
    def mime_type(self) -> str:
        return "image/png" if self is ExportFormat.PNG else "image/jpeg"


def export_filename(original_filename: str, fmt: ExportFormat | str) -> str:
    """Return ``<basename>-processed.<ext>`` for *original_filename*.

    Only the last extension is stripped, so ``holiday.final.jpeg`` becomes
    ``holiday.final-processed.png``.
    """

    stem = _EXTENSION_PATTERN.sub("", original_filename)
    return f"{stem}-processed.{ExportFormat(fmt).extension}"


def _validate_quality(quality: int) -> int:
    minimum, maximum = JPEG_QUALITY_RANGE
    value = int(quality)
    if not minimum <= value <= maximum:
        raise ValueError(f"JPEG quality must be between {minimum} and {maximum}, got {quality}")
    return value


def encode_image(
    buffer: Union[PixelBuffer, ProcessedResult],
    fmt: ExportFormat | str,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> bytes:
    """Encode *buffer* and return the file bytes.

    PNG keeps the alpha channel and is lossless.  JPEG has no alpha, so the
    colour channels are written as they are.  The buffer is only read; on
    failure :class:`ExportError` is raised and the caller may simply retry.
    """

    pixels = buffer.buffer if isinstance(buffer, ProcessedResult) else buffer
    export_format = ExportFormat(fmt)
    jpeg_quality = _validate_quality(quality) if export_format is ExportFormat.JPEG else None

    try:
        image = Image.fromarray(pixels.data)
        out = io.BytesIO()
        if jpeg_quality is None:
            image.save(out, format="PNG")
        else:
            image.convert("RGB").save(out, format="JPEG", quality=jpeg_quality)
        payload = out.getvalue()
    except (OSError, ValueError) as exc:
        _LOGGER.warning("Failed to encode %s export: %s", export_format.value, exc)
        raise ExportError(f"Could not encode image as {export_format.value}: {exc}") from exc

    if not payload:
        _LOGGER.warning("Encoder returned no data for %s export", export_format.value)
        raise ExportError(f"Encoder produced no data for {export_format.value}")
    return payload


def export_image(
    buffer: Union[PixelBuffer, ProcessedResult],
    original_filename: str,
    directory: str | Path,
    fmt: ExportFormat | str = ExportFormat.JPEG,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """Encode *buffer* and write it next to other downloads in *directory*."""

    payload = encode_image(buffer, fmt, quality)
    target = Path(directory) / export_filename(original_filename, fmt)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
    except OSError as exc:
        _LOGGER.warning("Failed to write export %s: %s", target, exc)
        raise ExportError(f"Could not write {target}: {exc}") from exc
    _LOGGER.info("Exported %s (%d bytes)", target, len(payload))
    return target


__all__ = ["ExportFormat", "encode_image", "export_filename", "export_image"]
