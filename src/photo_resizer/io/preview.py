"""Bridge pixel buffers to and from ``QImage`` for on-screen previews."""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..core.pixel_buffer import CHANNELS, PixelBuffer


def _resolve_pixel_view(image: QImage) -> tuple[memoryview, object]:
    """Return a read-only 1-D :class:`memoryview` over *image*'s pixels.

    The tuple's second element is the object that owns the exported buffer; it
    has to stay referenced for as long as the view is in use, otherwise the
    wrapper can be collected and the view would dangle.
    """

    expected_size = image.bytesPerLine() * image.height()
    buffer = image.constBits()
    guard: object = buffer

    view = buffer if isinstance(buffer, memoryview) else memoryview(buffer)
    try:
        view = view.cast("B")
    except TypeError:
        view = view.cast("B", (view.nbytes,))

    if len(view) < expected_size:
        raise BufferError("QImage pixel buffer is smaller than expected")
    return view[:expected_size], guard


def to_qimage(buffer: PixelBuffer) -> QImage:
    """Return a detached ``Format_RGBA8888`` copy of *buffer* for display."""

    raw = np.ascontiguousarray(buffer.data).tobytes()
    image = QImage(raw, buffer.width, buffer.height, buffer.width * CHANNELS, QImage.Format.Format_RGBA8888)
    # ``copy`` detaches the image from ``raw`` so the bytes may be released.
    return image.copy()


def from_qimage(image: QImage) -> PixelBuffer:
    """Copy the pixels of *image* into a new RGBA :class:`PixelBuffer`."""

    if image.isNull():
        raise ValueError("Cannot convert a null QImage")
    if image.format() != QImage.Format.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format.Format_RGBA8888)

    width, height = image.width(), image.height()
    bytes_per_line = image.bytesPerLine()
    view, guard = _resolve_pixel_view(image)
    _ = guard

    surface = np.frombuffer(view, dtype=np.uint8).reshape((height, bytes_per_line))
    pixels = surface[:, : width * CHANNELS].reshape((height, width, CHANNELS))
    return PixelBuffer(pixels.copy())


__all__ = ["from_qimage", "to_qimage"]
