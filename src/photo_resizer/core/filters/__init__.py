"""Pixel filters for the processing pipeline.

This package keeps the per-pixel work separate from the orchestration:
- algorithms: scalar colour math compiled with Numba
- kernels: 3x3 weights for sharpen and smoothing
- executors: JIT (default) and NumPy implementations of the pixel loops
- facade: validated entry points used by the pipeline
"""

from __future__ import annotations

from .facade import adjust_colors, convolve
from .kernels import sharpen_kernel, sharpen_kernel_for, smoothing_kernel, smoothing_kernel_for

__all__ = [
    "adjust_colors",
    "convolve",
    "sharpen_kernel",
    "sharpen_kernel_for",
    "smoothing_kernel",
    "smoothing_kernel_for",
]
