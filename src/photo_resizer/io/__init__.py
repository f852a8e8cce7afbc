"""Upload, export and preview boundaries around the pipeline."""

from __future__ import annotations

from .export import ExportFormat, encode_image, export_filename, export_image
from .upload import load_source_file, load_source_image, validate_upload

__all__ = [
    "ExportFormat",
    "encode_image",
    "export_filename",
    "export_image",
    "load_source_file",
    "load_source_image",
    "validate_upload",
]
