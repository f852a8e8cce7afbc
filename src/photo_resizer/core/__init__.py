"""Pixel processing pipeline: buffers, parameters, resize, filters."""

from __future__ import annotations

from .filters import (
    adjust_colors,
    convolve,
    sharpen_kernel,
    sharpen_kernel_for,
    smoothing_kernel,
    smoothing_kernel_for,
)
from .params import ProcessingParams, ResizeMode, default_params_for
from .pipeline import process
from .pixel_buffer import ImageMetadata, PixelBuffer, ProcessedResult, SourceImage
from .resizer import FitGeometry, compute_fit_geometry, resize

__all__ = [
    "FitGeometry",
    "ImageMetadata",
    "PixelBuffer",
    "ProcessedResult",
    "ProcessingParams",
    "ResizeMode",
    "SourceImage",
    "adjust_colors",
    "compute_fit_geometry",
    "convolve",
    "default_params_for",
    "process",
    "resize",
    "sharpen_kernel",
    "sharpen_kernel_for",
    "smoothing_kernel",
    "smoothing_kernel_for",
]
