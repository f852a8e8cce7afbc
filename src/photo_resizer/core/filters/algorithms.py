"""Scalar colour math shared by the JIT and NumPy executors.

Every helper here works on unclamped ``float`` channel values in the
``[0, 255]`` scale.  The functions are compiled with Numba so the JIT executor
can inline them into its pixel loops, while remaining callable from plain
Python for the slower paths and for tests.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from numba import jit

BRIGHTNESS_SCALE = 2.55
"""Channel offset per brightness step; +100 adds roughly a full 255."""

LUMA_R = 0.2989
LUMA_G = 0.587
LUMA_B = 0.114


@dataclass(frozen=True)
class ColorTerms:
    """Pre-computed per-image factors for the colour adjustment pass."""

    brightness_term: float
    contrast_factor: float
    saturation_factor: float
    apply_brightness: bool
    apply_contrast: bool
    apply_saturation: bool

    @property
    def is_identity(self) -> bool:
        return not (self.apply_brightness or self.apply_contrast or self.apply_saturation)


def contrast_factor(contrast: float) -> float:
    """Return the classic ``259 (c + 255) / (255 (259 - c))`` contrast gain.

    ``contrast`` is limited to ``[-100, 100]`` by the parameter boundary, so
    the denominator can never reach zero.
    """

    return (259.0 * (contrast + 255.0)) / (255.0 * (259.0 - contrast))


def resolve_color_terms(brightness: float, contrast: float, saturation: float) -> ColorTerms:
    """Translate slider values into the factors consumed by the executors."""

    return ColorTerms(
        brightness_term=brightness * BRIGHTNESS_SCALE,
        contrast_factor=contrast_factor(contrast) if contrast != 0 else 1.0,
        saturation_factor=1.0 + saturation / 100.0,
        apply_brightness=brightness != 0,
        apply_contrast=contrast != 0,
        apply_saturation=saturation != 0,
    )


@jit(nopython=True, cache=True)
def _float_to_uint8(value: float) -> int:
    """Clamp *value* to ``[0, 255]`` and round half to even."""

    if value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    lower = math.floor(value)
    remainder = value - lower
    if remainder > 0.5:
        return lower + 1
    if remainder < 0.5:
        return lower
    return lower + (lower & 1)


@jit(nopython=True, cache=True)
def _luminance(r: float, g: float, b: float) -> float:
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


@jit(nopython=True, cache=True)
def _apply_color_transform(
    r: float,
    g: float,
    b: float,
    brightness_term: float,
    contrast_factor: float,
    saturation_factor: float,
    apply_brightness: bool,
    apply_contrast: bool,
    apply_saturation: bool,
) -> tuple[float, float, float]:
    """Run brightness, contrast and saturation on one pixel without clamping."""

    if apply_brightness:
        r += brightness_term
        g += brightness_term
        b += brightness_term

    if apply_contrast:
        r = contrast_factor * (r - 128.0) + 128.0
        g = contrast_factor * (g - 128.0) + 128.0
        b = contrast_factor * (b - 128.0) + 128.0

    if apply_saturation:
        # Luminance comes from the post-contrast values of the same pixel.
        gray = _luminance(r, g, b)
        r = gray + saturation_factor * (r - gray)
        g = gray + saturation_factor * (g - gray)
        b = gray + saturation_factor * (b - gray)

    return r, g, b
