"""Exception hierarchy shared by the processing pipeline and its boundaries."""

from __future__ import annotations


class PhotoResizerError(Exception):
    """Base class for every error raised by :mod:`photo_resizer`."""


class UploadValidationError(PhotoResizerError):
    """Raised when an uploaded file is rejected before processing.

    ``user_message`` is the short sentence the front end shows next to the
    drop zone; ``str(exc)`` keeps the technical detail for the log.
    """

    user_message = "Failed to load image. Please try another file."

    def __init__(self, detail: str, *, user_message: str | None = None) -> None:
        super().__init__(detail)
        if user_message is not None:
            self.user_message = user_message


class UnsupportedMimeTypeError(UploadValidationError):
    """The upload is not a JPEG, PNG or WebP file."""

    user_message = "Please upload a JPG, PNG, or WebP image file."


class FileTooLargeError(UploadValidationError):
    """The upload exceeds the configured byte limit."""

    user_message = "File size must be less than 50MB."


class ImageDecodeError(UploadValidationError):
    """Pillow could not decode the uploaded bytes."""


class InvalidDimensionsError(PhotoResizerError, ValueError):
    """Target width or height is zero or negative."""


class ExportError(PhotoResizerError):
    """Encoding the processed buffer failed or produced no data."""

    user_message = "Export failed. Please try again."


__all__ = [
    "ExportError",
    "FileTooLargeError",
    "ImageDecodeError",
    "InvalidDimensionsError",
    "PhotoResizerError",
    "UnsupportedMimeTypeError",
    "UploadValidationError",
]
