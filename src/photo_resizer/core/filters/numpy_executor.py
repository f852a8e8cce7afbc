"""NumPy vectorized executor for colour adjustments and convolution.

This module mirrors :mod:`.jit_executor` with whole-array operations.  The
arithmetic is performed in ``float64`` in the same order as the scalar kernels
so both executors agree on the rounded output.
"""

from __future__ import annotations

import numpy as np

from .algorithms import LUMA_B, LUMA_G, LUMA_R, ColorTerms


def _to_uint8(values: np.ndarray) -> np.ndarray:
    """Clamp to ``[0, 255]`` and round half to even, like ``_float_to_uint8``."""

    return np.rint(np.clip(values, 0.0, 255.0)).astype(np.uint8)


def apply_color_adjustments(pixels: np.ndarray, terms: ColorTerms) -> None:
    """Mutate ``pixels`` in-place using a fully vectorised path."""

    if terms.is_identity:
        return

    height, width = pixels.shape[0], pixels.shape[1]
    if width <= 0 or height <= 0:
        return

    rgb = pixels[..., :3].astype(np.float64)
    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    if terms.apply_brightness:
        r = r + terms.brightness_term
        g = g + terms.brightness_term
        b = b + terms.brightness_term

    if terms.apply_contrast:
        factor = terms.contrast_factor
        r = factor * (r - 128.0) + 128.0
        g = factor * (g - 128.0) + 128.0
        b = factor * (b - 128.0) + 128.0

    if terms.apply_saturation:
        gray = LUMA_R * r + LUMA_G * g + LUMA_B * b
        factor = terms.saturation_factor
        r = gray + factor * (r - gray)
        g = gray + factor * (g - gray)
        b = gray + factor * (b - gray)

    pixels[..., 0] = _to_uint8(r)
    pixels[..., 1] = _to_uint8(g)
    pixels[..., 2] = _to_uint8(b)


def convolve_into(source: np.ndarray, output: np.ndarray, kernel: np.ndarray) -> None:
    """Write the convolved interior of ``source`` into ``output``.

    Each of the nine taps is accumulated as a shifted view of the source, in
    the same row-major order as the scalar kernel.
    """

    height, width = source.shape[0], source.shape[1]
    if width < 3 or height < 3:
        return

    inner_h = height - 2
    inner_w = width - 2
    colour = source[..., :3]
    total = np.zeros((inner_h, inner_w, 3), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            window = colour[ky : ky + inner_h, kx : kx + inner_w]
            total += window * kernel[ky, kx]

    output[1:-1, 1:-1, :3] = _to_uint8(total)
