import os
from typing import Callable

import numpy as np
import pytest

# Run Qt headless; the workers only need a core event loop.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication  # noqa: E402

from photo_resizer.config import reset_settings  # noqa: E402
from photo_resizer.core.pixel_buffer import ImageMetadata, PixelBuffer, SourceImage  # noqa: E402


@pytest.fixture(scope="session")
def qapp_cls():
    return QCoreApplication


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


def _metadata(width: int, height: int) -> ImageMetadata:
    return ImageMetadata(
        filename="fixture.png",
        byte_size=width * height * 4,
        mime_type="image/png",
        width=width,
        height=height,
    )


@pytest.fixture
def solid_source() -> Callable[..., SourceImage]:
    """Factory for a single-colour opaque (or custom alpha) source image."""

    def _make(width: int, height: int, rgba=(128, 128, 128, 255)) -> SourceImage:
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = np.asarray(rgba, dtype=np.uint8)
        return SourceImage.from_array(pixels, _metadata(width, height))

    return _make


@pytest.fixture
def gradient_source() -> Callable[[int, int], SourceImage]:
    """Factory for an opaque image whose channels vary with x and y."""

    def _make(width: int, height: int) -> SourceImage:
        xs = np.linspace(0, 255, width, dtype=np.float64)[None, :]
        ys = np.linspace(0, 255, height, dtype=np.float64)[:, None]
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[..., 0] = np.rint(np.broadcast_to(xs, (height, width)))
        pixels[..., 1] = np.rint(np.broadcast_to(ys, (height, width)))
        pixels[..., 2] = np.rint((xs + ys) / 2.0)
        pixels[..., 3] = 255
        return SourceImage.from_array(pixels, _metadata(width, height))

    return _make


@pytest.fixture
def random_buffer() -> Callable[..., PixelBuffer]:
    """Factory for a reproducible noisy RGBA buffer with varying alpha."""

    def _make(width: int, height: int, seed: int = 1234) -> PixelBuffer:
        rng = np.random.default_rng(seed)
        return PixelBuffer(rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))

    return _make
