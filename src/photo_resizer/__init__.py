"""Resize photos and apply tone and sharpness adjustments to RGBA buffers."""

from __future__ import annotations

from .core import (
    ImageMetadata,
    PixelBuffer,
    ProcessedResult,
    ProcessingParams,
    ResizeMode,
    SourceImage,
    adjust_colors,
    convolve,
    default_params_for,
    process,
    resize,
)
from .errors import (
    ExportError,
    InvalidDimensionsError,
    PhotoResizerError,
    UploadValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ExportError",
    "ImageMetadata",
    "InvalidDimensionsError",
    "PhotoResizerError",
    "PixelBuffer",
    "ProcessedResult",
    "ProcessingParams",
    "ResizeMode",
    "SourceImage",
    "UploadValidationError",
    "adjust_colors",
    "convolve",
    "default_params_for",
    "process",
    "resize",
]
