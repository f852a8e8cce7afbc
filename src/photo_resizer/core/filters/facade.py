"""Public entry points for colour adjustment and convolution.

The facade validates buffers, resolves slider values into executor inputs and
dispatches to the configured executor (``jit`` by default, ``numpy`` as the
vectorised alternative).
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Optional

import numpy as np

from ...config import EXECUTOR_NAMES, get_settings
from ..pixel_buffer import PixelBuffer
from . import jit_executor, numpy_executor
from .algorithms import resolve_color_terms
from .utils import _resolve_kernel, _resolve_pixel_array

_LOGGER = logging.getLogger(__name__)

_EXECUTORS: dict[str, ModuleType] = {
    "jit": jit_executor,
    "numpy": numpy_executor,
}


def _resolve_executor(name: Optional[str]) -> ModuleType:
    executor = name or get_settings().executor
    try:
        return _EXECUTORS[executor]
    except KeyError:
        raise ValueError(
            f"Unknown executor {executor!r}; expected one of {', '.join(EXECUTOR_NAMES)}"
        ) from None


def adjust_colors(
    buffer: PixelBuffer,
    brightness: int,
    contrast: int,
    saturation: int,
    *,
    executor: Optional[str] = None,
) -> PixelBuffer:
    """Apply brightness, contrast and saturation to *buffer* in-place.

    The three steps run per pixel in that fixed order and every step whose
    slider is zero is skipped outright.  Intermediate values stay unclamped
    ``float64``; each channel is clamped to ``[0, 255]`` only once all steps
    for the pixel are done.  Alpha is never touched.  Returns *buffer* for
    chaining.
    """

    terms = resolve_color_terms(brightness, contrast, saturation)
    if terms.is_identity:
        return buffer

    pixels = _resolve_pixel_array(buffer, writable=True)
    _resolve_executor(executor).apply_color_adjustments(pixels, terms)
    _LOGGER.debug(
        "Adjusted colours of %dx%d buffer (brightness=%s contrast=%s saturation=%s)",
        buffer.width,
        buffer.height,
        brightness,
        contrast,
        saturation,
    )
    return buffer


def convolve(
    buffer: PixelBuffer,
    kernel: np.ndarray,
    *,
    executor: Optional[str] = None,
) -> PixelBuffer:
    """Return a new buffer holding *buffer* convolved with the 3x3 *kernel*.

    Only interior pixels are filtered; the outermost ring and the whole alpha
    channel are copied verbatim.  The input is never written to, so every tap
    reads the original neighbour values.  Buffers without an interior (either
    side shorter than three pixels) come back as an unchanged copy.
    """

    source = _resolve_pixel_array(buffer, writable=False)
    weights = _resolve_kernel(kernel)

    output = buffer.copy()
    if buffer.width < 3 or buffer.height < 3:
        return output

    _resolve_executor(executor).convolve_into(source, output.data, weights)
    return output


__all__ = ["adjust_colors", "convolve"]
