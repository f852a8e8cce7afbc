"""JIT-accelerated pixel executor using Numba.

This module provides the default execution path: explicit per-pixel loops
compiled by Numba that walk the RGBA array directly.
"""

from __future__ import annotations

import numpy as np
from numba import jit

from .algorithms import ColorTerms, _apply_color_transform, _float_to_uint8


def apply_color_adjustments(pixels: np.ndarray, terms: ColorTerms) -> None:
    """Mutate ``pixels`` in-place using the JIT-compiled colour kernel."""

    if terms.is_identity:
        return

    height, width = pixels.shape[0], pixels.shape[1]
    if width <= 0 or height <= 0:
        return

    _apply_color_adjustments(
        pixels,
        terms.brightness_term,
        terms.contrast_factor,
        terms.saturation_factor,
        terms.apply_brightness,
        terms.apply_contrast,
        terms.apply_saturation,
    )


@jit(nopython=True, cache=True)
def _apply_color_adjustments(
    pixels: np.ndarray,
    brightness_term: float,
    contrast_factor: float,
    saturation_factor: float,
    apply_brightness: bool,
    apply_contrast: bool,
    apply_saturation: bool,
) -> None:
    """JIT-compiled colour adjustment kernel."""
    height = pixels.shape[0]
    width = pixels.shape[1]

    for y in range(height):
        for x in range(width):
            r = float(pixels[y, x, 0])
            g = float(pixels[y, x, 1])
            b = float(pixels[y, x, 2])

            r, g, b = _apply_color_transform(
                r,
                g,
                b,
                brightness_term,
                contrast_factor,
                saturation_factor,
                apply_brightness,
                apply_contrast,
                apply_saturation,
            )

            pixels[y, x, 0] = _float_to_uint8(r)
            pixels[y, x, 1] = _float_to_uint8(g)
            pixels[y, x, 2] = _float_to_uint8(b)


def convolve_into(source: np.ndarray, output: np.ndarray, kernel: np.ndarray) -> None:
    """Write the convolved interior of ``source`` into ``output``.

    ``output`` must already hold a copy of ``source``; only interior colour
    samples are overwritten, leaving the border ring and alpha untouched.
    """

    _convolve_interior(source, output, kernel)


@jit(nopython=True, cache=True)
def _convolve_interior(source: np.ndarray, output: np.ndarray, kernel: np.ndarray) -> None:
    """JIT-compiled 3x3 convolution over the RGB channels."""
    height = source.shape[0]
    width = source.shape[1]

    for y in range(1, height - 1):
        for x in range(1, width - 1):
            for c in range(3):
                total = 0.0
                for ky in range(3):
                    for kx in range(3):
                        total += source[y + ky - 1, x + kx - 1, c] * kernel[ky, kx]
                output[y, x, c] = _float_to_uint8(total)
