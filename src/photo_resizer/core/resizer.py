"""Fit a source image into a target canvas under contain or cover semantics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

import numpy as np

from ..config import BACKGROUND_RGBA
from ..errors import InvalidDimensionsError
from .params import ResizeMode
from .pixel_buffer import PixelBuffer, SourceImage

_LOGGER = logging.getLogger(__name__)

_EPSILON = 1e-9


@dataclass(frozen=True)
class FitGeometry:
    """Placement of the scaled source on the target canvas, in canvas pixels.

    ``offset_x``/``offset_y`` may be negative for cover fits, in which case the
    draw rectangle extends past the canvas and the overhang is clipped.
    """

    offset_x: float
    offset_y: float
    draw_width: float
    draw_height: float

    def is_blit(self, source_width: int, source_height: int) -> bool:
        """Return ``True`` when the draw is an unscaled copy at integral offsets."""

        return (
            abs(self.draw_width - source_width) < _EPSILON
            and abs(self.draw_height - source_height) < _EPSILON
            and abs(self.offset_x - round(self.offset_x)) < _EPSILON
            and abs(self.offset_y - round(self.offset_y)) < _EPSILON
        )


def _validate_dimensions(width: int, height: int, label: str) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"{label} dimensions must be positive, got {width}x{height}")


def compute_fit_geometry(
    source_width: int,
    source_height: int,
    target_width: int,
    target_height: int,
    mode: ResizeMode | str,
) -> FitGeometry:
    """Return where the source lands on a ``target_width`` x ``target_height`` canvas.

    Both modes compare ``source_ratio = source_width / source_height`` with
    ``target_ratio = target_width / target_height``:

    * contain: a wider source spans the full width with height
      ``target_width / source_ratio`` and is centred vertically; otherwise it
      spans the full height with width ``target_height * source_ratio`` and is
      centred horizontally.
    * cover: a wider source spans the full height with width
      ``target_height * source_ratio`` and is centred horizontally (negative
      offset); otherwise it spans the full width with height
      ``target_width / source_ratio`` and is centred vertically.

    Matching ratios take the second branch in both modes, which yields a
    full-bleed draw.
    """

    _validate_dimensions(target_width, target_height, "Target")
    _validate_dimensions(source_width, source_height, "Source")
    fit = ResizeMode(mode)

    source_ratio = source_width / source_height
    target_ratio = target_width / target_height

    draw_width = float(target_width)
    draw_height = float(target_height)
    offset_x = 0.0
    offset_y = 0.0

    if fit is ResizeMode.CONTAIN:
        if source_ratio > target_ratio:
            draw_height = target_width / source_ratio
            offset_y = (target_height - draw_height) / 2
        else:
            draw_width = target_height * source_ratio
            offset_x = (target_width - draw_width) / 2
    else:
        if source_ratio > target_ratio:
            draw_width = target_height * source_ratio
            offset_x = (target_width - draw_width) / 2
        else:
            draw_height = target_width / source_ratio
            offset_y = (target_height - draw_height) / 2

    return FitGeometry(offset_x, offset_y, draw_width, draw_height)


def _sample_axis(
    canvas_size: int,
    offset: float,
    draw_size: float,
    source_size: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return bilinear taps for one axis of the canvas.

    Each canvas pixel centre is mapped into source coordinates.  The result is
    the lower and upper source index, the fractional weight of the upper tap,
    and a mask of canvas pixels whose centre falls on the source at all.
    """

    centres = np.arange(canvas_size, dtype=np.float64) + 0.5
    mapped = (centres - offset) * (source_size / draw_size)
    inside = (mapped >= 0.0) & (mapped < source_size)

    position = mapped - 0.5
    lower = np.floor(position)
    weight = position - lower
    lower_index = lower.astype(np.int64)
    upper_index = np.clip(lower_index + 1, 0, source_size - 1)
    lower_index = np.clip(lower_index, 0, source_size - 1)
    return lower_index, upper_index, weight, inside


def _bilinear_draw(source: np.ndarray, geometry: FitGeometry, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Resample *source* onto the canvas; returns float RGBA and the coverage mask.

    Interpolation runs on premultiplied colour so that the RGB stored under
    fully transparent pixels never bleeds into visible ones.  The returned
    colour is straight (unpremultiplied) again, and zero wherever the
    interpolated alpha is zero.
    """

    src_h, src_w = source.shape[0], source.shape[1]
    y0, y1, wy, inside_y = _sample_axis(height, geometry.offset_y, geometry.draw_height, src_h)
    x0, x1, wx, inside_x = _sample_axis(width, geometry.offset_x, geometry.draw_width, src_w)

    samples = source.astype(np.float64)
    samples[..., :3] *= samples[..., 3:4] / 255.0

    # Interpolate rows first so the intermediate only spans the target height.
    wy = wy[:, None, None]
    rows = samples[y0] * (1.0 - wy) + samples[y1] * wy

    wx = wx[None, :, None]
    drawn = rows[:, x0] * (1.0 - wx) + rows[:, x1] * wx

    alpha = drawn[..., 3:4]
    colour = np.zeros_like(drawn[..., :3])
    np.divide(drawn[..., :3] * 255.0, alpha, out=colour, where=alpha > 0.0)
    drawn[..., :3] = colour

    mask = inside_y[:, None] & inside_x[None, :]
    return drawn, mask


def _blit_draw(source: np.ndarray, geometry: FitGeometry, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Copy *source* onto the canvas at integral offsets without resampling."""

    src_h, src_w = source.shape[0], source.shape[1]
    off_x = int(round(geometry.offset_x))
    off_y = int(round(geometry.offset_y))

    drawn = np.zeros((height, width, 4), dtype=np.float64)
    mask = np.zeros((height, width), dtype=bool)

    dst_x0, dst_y0 = max(off_x, 0), max(off_y, 0)
    dst_x1, dst_y1 = min(off_x + src_w, width), min(off_y + src_h, height)
    if dst_x1 <= dst_x0 or dst_y1 <= dst_y0:
        return drawn, mask

    src_x0, src_y0 = dst_x0 - off_x, dst_y0 - off_y
    drawn[dst_y0:dst_y1, dst_x0:dst_x1] = source[
        src_y0 : src_y0 + (dst_y1 - dst_y0),
        src_x0 : src_x0 + (dst_x1 - dst_x0),
    ]
    mask[dst_y0:dst_y1, dst_x0:dst_x1] = True
    return drawn, mask


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def resize(
    source: Union[SourceImage, PixelBuffer],
    target_width: int,
    target_height: int,
    mode: ResizeMode | str = ResizeMode.CONTAIN,
) -> PixelBuffer:
    """Return a new ``target_width`` x ``target_height`` buffer holding *source*.

    Contain fits composite the drawn pixels over an opaque white canvas, so the
    result is always opaque.  Cover fits fully cover the canvas and keep the
    source alpha.  Invalid target dimensions raise
    :class:`~photo_resizer.errors.InvalidDimensionsError` before any buffer is
    allocated.  *source* is never modified.
    """

    _validate_dimensions(target_width, target_height, "Target")
    pixels = source.pixels if isinstance(source, SourceImage) else source
    fit = ResizeMode(mode)

    geometry = compute_fit_geometry(pixels.width, pixels.height, target_width, target_height, fit)
    if geometry.is_blit(pixels.width, pixels.height):
        drawn, mask = _blit_draw(pixels.data, geometry, target_width, target_height)
    else:
        drawn, mask = _bilinear_draw(pixels.data, geometry, target_width, target_height)

    if fit is ResizeMode.CONTAIN:
        background = np.asarray(BACKGROUND_RGBA[:3], dtype=np.float64)
        alpha = drawn[..., 3:4] / 255.0
        composited = drawn[..., :3] * alpha + background * (1.0 - alpha)
        result = np.empty((target_height, target_width, 4), dtype=np.uint8)
        fill = np.asarray(BACKGROUND_RGBA[:3], dtype=np.uint8)
        result[..., :3] = np.where(mask[..., None], _to_uint8(composited), fill)
        result[..., 3] = BACKGROUND_RGBA[3]
    else:
        result = np.where(mask[..., None], _to_uint8(drawn), np.uint8(0))

    _LOGGER.debug(
        "Resized %dx%d -> %dx%d (%s, draw %.2fx%.2f at %.2f,%.2f)",
        pixels.width,
        pixels.height,
        target_width,
        target_height,
        fit.value,
        geometry.draw_width,
        geometry.draw_height,
        geometry.offset_x,
        geometry.offset_y,
    )
    return PixelBuffer(np.ascontiguousarray(result, dtype=np.uint8))


__all__ = ["FitGeometry", "compute_fit_geometry", "resize"]
