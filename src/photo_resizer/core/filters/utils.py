"""Buffer sanity checks shared by the executors."""

from __future__ import annotations

import numpy as np

from ..pixel_buffer import CHANNELS, PixelBuffer


def _resolve_pixel_array(buffer: PixelBuffer, *, writable: bool) -> np.ndarray:
    """Return the ``(height, width, 4)`` sample array backing *buffer*.

    The executors index the array directly, so anything that is not a
    C-contiguous ``uint8`` RGBA block is rejected with :class:`BufferError`
    rather than silently copied.  Writes into a read-only view (for example the
    pixels of a :class:`SourceImage`) are refused the same way.
    """

    array = buffer.data
    if array.dtype != np.uint8 or array.ndim != 3 or array.shape[2] != CHANNELS:
        raise BufferError("Pixel buffer must be a (height, width, 4) uint8 array")
    if not array.flags.c_contiguous:
        raise BufferError("Pixel buffer must be C-contiguous")
    if writable and not array.flags.writeable:
        raise BufferError("Pixel buffer is read-only")
    return array


def _resolve_kernel(kernel: object) -> np.ndarray:
    """Return *kernel* as a contiguous ``float64`` 3x3 array."""

    array = np.ascontiguousarray(kernel, dtype=np.float64)
    if array.size != 9:
        raise ValueError(f"Convolution kernel must have 9 weights, got {array.size}")
    return array.reshape((3, 3))
