"""3x3 convolution kernels for the sharpen and smoothing sliders."""

from __future__ import annotations

import numpy as np


def _slider_to_amount(value: float) -> float:
    return float(value) / 100.0


def sharpen_kernel(amount: float) -> np.ndarray:
    """Return the cross shaped sharpen kernel for *amount* in ``(0, 1]``.

    The centre weight is ``1 + 4 * amount`` and the four orthogonal neighbours
    carry ``-amount``, so the weights always sum to one and flat regions pass
    through unchanged.
    """

    a = float(amount)
    return np.array(
        [
            [0.0, -a, 0.0],
            [-a, 1.0 + 4.0 * a, -a],
            [0.0, -a, 0.0],
        ],
        dtype=np.float64,
    )


def smoothing_kernel(amount: float) -> np.ndarray:
    """Return the box blend kernel for *amount* in ``(0, 1]``.

    Each neighbour receives ``amount / 9`` and the centre keeps the remaining
    weight, blending between the identity and a 3x3 box blur.
    """

    neighbour = (1.0 / 9.0) * float(amount)
    kernel = np.full((3, 3), neighbour, dtype=np.float64)
    kernel[1, 1] = 1.0 - 8.0 * (1.0 / 9.0) * float(amount)
    return kernel


def sharpen_kernel_for(sharpen: int) -> np.ndarray:
    """Kernel for the ``0..100`` sharpen slider value."""

    return sharpen_kernel(_slider_to_amount(sharpen))


def smoothing_kernel_for(smoothing: int) -> np.ndarray:
    """Kernel for the ``0..100`` smoothing slider value."""

    return smoothing_kernel(_slider_to_amount(smoothing))


__all__ = ["sharpen_kernel", "sharpen_kernel_for", "smoothing_kernel", "smoothing_kernel_for"]
