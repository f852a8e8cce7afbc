"""User facing processing parameters and the clamping rules of the sliders."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

from ..config import ADJUSTMENT_KEYS, ADJUSTMENT_RANGES
from ..errors import InvalidDimensionsError
from .pixel_buffer import ImageMetadata


class ResizeMode(str, Enum):
    """How the source is fitted into the target canvas."""

    CONTAIN = "contain"
    COVER = "cover"


def _clamp(value: int, minimum: int, maximum: int) -> int:
    """Return *value* limited to the inclusive ``[minimum, maximum]`` range."""

    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def _round_half_up(value: float) -> int:
    # Matches the rounding of the dimension inputs: 2.5 -> 3, -2.5 -> -2.
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ProcessingParams:
    """Immutable snapshot of every control that drives :func:`process`.

    The pipeline trusts these values: adjustment ranges are enforced by
    :meth:`clamped` / :meth:`from_mapping` at the boundary and never
    re-validated downstream.  Only the target dimensions are checked again,
    because a zero sized canvas cannot be allocated meaningfully.
    """

    width: int
    height: int
    maintain_aspect: bool = True
    resize_mode: ResizeMode = ResizeMode.CONTAIN
    brightness: int = 0
    contrast: int = 0
    saturation: int = 0
    sharpen: int = 0
    smoothing: int = 0

    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ProcessingParams":
        """Build parameters from loosely typed control values.

        Missing adjustments default to zero and out of range values are
        clamped to the slider limits.  ``width`` and ``height`` are required.
        """

        try:
            width = int(values["width"])
            height = int(values["height"])
        except KeyError as exc:
            raise KeyError(f"Processing parameters require {exc.args[0]!r}") from None

        params = cls(
            width=width,
            height=height,
            maintain_aspect=bool(values.get("maintain_aspect", True)),
            resize_mode=ResizeMode(values.get("resize_mode", ResizeMode.CONTAIN)),
            **{key: int(values.get(key, 0) or 0) for key in ADJUSTMENT_KEYS},
        )
        return params.clamped()

    def clamped(self) -> "ProcessingParams":
        """Return a copy whose adjustments lie inside :data:`ADJUSTMENT_RANGES`."""

        updates = {
            key: _clamp(int(getattr(self, key)), *ADJUSTMENT_RANGES[key])
            for key in ADJUSTMENT_KEYS
        }
        return replace(self, **updates)

    # ------------------------------------------------------------------
    def validate_dimensions(self) -> None:
        """Raise :class:`InvalidDimensionsError` unless both dimensions are positive."""

        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionsError(
                f"Target dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def has_color_adjustments(self) -> bool:
        return self.brightness != 0 or self.contrast != 0 or self.saturation != 0

    @property
    def has_filters(self) -> bool:
        return self.sharpen > 0 or self.smoothing > 0

    # ------------------------------------------------------------------
    def with_width(self, width: int, source_ratio: float) -> "ProcessingParams":
        """Return a copy with *width*, deriving the height when aspect is locked."""

        if self.maintain_aspect and width > 0:
            return replace(self, width=width, height=_round_half_up(width / source_ratio))
        return replace(self, width=width)

    def with_height(self, height: int, source_ratio: float) -> "ProcessingParams":
        """Return a copy with *height*, deriving the width when aspect is locked."""

        if self.maintain_aspect and height > 0:
            return replace(self, height=height, width=_round_half_up(height * source_ratio))
        return replace(self, height=height)

    def updated(self, **changes: Any) -> "ProcessingParams":
        """Return a copy with *changes* applied and adjustments re-clamped."""

        if "resize_mode" in changes:
            changes["resize_mode"] = ResizeMode(changes["resize_mode"])
        return replace(self, **changes).clamped()


def default_params_for(metadata: ImageMetadata) -> ProcessingParams:
    """Return the reset state for an upload: source size, contain, no adjustments."""

    return ProcessingParams(width=metadata.width, height=metadata.height)


__all__ = ["ProcessingParams", "ResizeMode", "default_params_for"]
