"""RGBA raster containers shared by every stage of the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .params import ProcessingParams

CHANNELS = 4
"""Samples per pixel, always stored in R, G, B, A order."""


class PixelBuffer:
    """Owned ``(height, width, 4)`` ``uint8`` RGBA raster.

    The dimensions are fixed once the buffer exists.  Colour adjustments are
    allowed to write into :attr:`data` directly while convolution always
    allocates a fresh buffer, so callers must treat a buffer handed to the
    pipeline as consumed.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray) -> None:
        if not isinstance(data, np.ndarray):
            raise TypeError("PixelBuffer expects a numpy.ndarray")
        if data.dtype != np.uint8:
            raise BufferError(f"PixelBuffer requires uint8 samples, got {data.dtype}")
        if data.ndim != 3 or data.shape[2] != CHANNELS:
            raise BufferError(f"PixelBuffer requires shape (height, width, 4), got {data.shape}")
        if not data.flags.c_contiguous:
            data = np.ascontiguousarray(data)
        self._data = data

    # ------------------------------------------------------------------
    @classmethod
    def allocate(
        cls,
        width: int,
        height: int,
        fill: Sequence[int] = (0, 0, 0, 0),
    ) -> "PixelBuffer":
        """Return a new ``width`` x ``height`` buffer filled with *fill*."""

        if width < 0 or height < 0:
            raise ValueError("PixelBuffer dimensions must not be negative")
        data = np.empty((height, width, CHANNELS), dtype=np.uint8)
        data[...] = np.asarray(fill, dtype=np.uint8)
        return cls(data)

    @classmethod
    def from_array(cls, array: np.ndarray, *, copy: bool = True) -> "PixelBuffer":
        """Wrap *array*, copying it unless the caller hands over ownership."""

        data = np.array(array, dtype=np.uint8, copy=True) if copy else array
        return cls(data)

    # ------------------------------------------------------------------
    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def writable(self) -> bool:
        return bool(self._data.flags.writeable)

    def copy(self) -> "PixelBuffer":
        """Return a deep, writable copy."""

        return PixelBuffer(self._data.copy())

    def readonly(self) -> "PixelBuffer":
        """Return a read-only view sharing this buffer's memory."""

        view = self._data.view()
        view.flags.writeable = False
        return PixelBuffer(view)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self._data[y, x])
        return r, g, b, a

    def tobytes(self) -> bytes:
        return self._data.tobytes()

    def equals(self, other: "PixelBuffer") -> bool:
        """Return ``True`` when *other* has identical dimensions and samples."""

        return self._data.shape == other.data.shape and bool(np.array_equal(self._data, other.data))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class ImageMetadata:
    """Details reported by the upload collaborator for a decoded file."""

    filename: str
    byte_size: int
    mime_type: str
    width: int
    height: int


@dataclass(frozen=True)
class SourceImage:
    """Immutable decoded upload; the pipeline only ever reads from it."""

    pixels: PixelBuffer
    metadata: Optional[ImageMetadata] = None

    @classmethod
    def from_array(
        cls,
        array: np.ndarray,
        metadata: Optional[ImageMetadata] = None,
    ) -> "SourceImage":
        """Copy *array* into a read-only buffer and wrap it."""

        return cls(PixelBuffer.from_array(array).readonly(), metadata)

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class ProcessedResult:
    """Final raster handed to the caller for preview or export."""

    buffer: PixelBuffer
    params: Optional["ProcessingParams"] = None

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


__all__ = ["CHANNELS", "ImageMetadata", "PixelBuffer", "ProcessedResult", "SourceImage"]
