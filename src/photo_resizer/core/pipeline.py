"""Orchestrate resize, colour adjustment and convolution for one request."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .filters import adjust_colors, convolve, sharpen_kernel_for, smoothing_kernel_for
from .params import ProcessingParams
from .pixel_buffer import ProcessedResult, SourceImage
from .resizer import resize

_LOGGER = logging.getLogger(__name__)


def process(
    source: SourceImage,
    params: ProcessingParams,
    *,
    executor: Optional[str] = None,
) -> ProcessedResult:
    """Render *source* with *params* and return a freshly owned result.

    The stages always run in the same order: resize, colour adjustment, then
    sharpen and smoothing when their sliders are non-zero, each convolution
    reading the previous stage's buffer and producing a new one.  The function
    keeps no state between calls, so identical inputs give byte-identical
    output.

    Preconditions: adjustment values lie inside their slider ranges (the
    boundary clamps them).  Non-positive target dimensions raise
    :class:`~photo_resizer.errors.InvalidDimensionsError` before any
    allocation.
    """

    params.validate_dimensions()
    started = time.perf_counter()

    buffer = resize(source, params.width, params.height, params.resize_mode)
    if params.has_color_adjustments:
        buffer = adjust_colors(
            buffer,
            params.brightness,
            params.contrast,
            params.saturation,
            executor=executor,
        )
    if params.has_filters:
        if params.sharpen > 0:
            buffer = convolve(buffer, sharpen_kernel_for(params.sharpen), executor=executor)
        if params.smoothing > 0:
            buffer = convolve(buffer, smoothing_kernel_for(params.smoothing), executor=executor)

    _LOGGER.debug(
        "Processed %dx%d -> %dx%d in %.1f ms",
        source.width,
        source.height,
        buffer.width,
        buffer.height,
        (time.perf_counter() - started) * 1000.0,
    )
    return ProcessedResult(buffer=buffer, params=params)


__all__ = ["process"]
