from __future__ import annotations

import numpy as np
import pytest
from PySide6.QtGui import QColor, QImage

from photo_resizer.core.pixel_buffer import PixelBuffer
from photo_resizer.io.preview import from_qimage, to_qimage


def test_to_qimage_preserves_pixels(qapp) -> None:
    data = np.zeros((3, 4, 4), dtype=np.uint8)
    data[..., 3] = 255
    data[1, 2] = (10, 200, 30, 255)

    image = to_qimage(PixelBuffer(data))

    assert image.format() == QImage.Format.Format_RGBA8888
    assert (image.width(), image.height()) == (4, 3)
    color = image.pixelColor(2, 1)
    assert (color.red(), color.green(), color.blue(), color.alpha()) == (10, 200, 30, 255)


def test_round_trip_through_qimage(qapp, random_buffer) -> None:
    buffer = random_buffer(7, 5)

    restored = from_qimage(to_qimage(buffer))

    assert restored.equals(buffer)


def test_from_qimage_converts_other_formats(qapp) -> None:
    image = QImage(3, 2, QImage.Format.Format_RGB32)
    image.fill(QColor(0x33, 0x66, 0x99))

    buffer = from_qimage(image)

    assert buffer.size == (3, 2)
    assert buffer.pixel(1, 1) == (0x33, 0x66, 0x99, 255)


def test_from_null_qimage_raises(qapp) -> None:
    with pytest.raises(ValueError):
        from_qimage(QImage())
