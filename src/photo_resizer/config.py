"""Static limits and environment driven settings for the resizer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ADJUSTMENT_KEYS = ("brightness", "contrast", "saturation", "sharpen", "smoothing")
"""Order in which the tone and filter sliders are presented and applied."""

ADJUSTMENT_RANGES: Mapping[str, tuple[int, int]] = {
    "brightness": (-100, 100),
    "contrast": (-100, 100),
    "saturation": (-100, 100),
    "sharpen": (0, 100),
    "smoothing": (0, 100),
}
"""Inclusive slider ranges enforced at the parameter boundary."""

ACCEPTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")

MAX_UPLOAD_BYTES = 50 * 1024 * 1024

JPEG_QUALITY_RANGE = (1, 100)
DEFAULT_JPEG_QUALITY = 90

BACKGROUND_RGBA = (255, 255, 255, 255)
"""Fill used by the contain fit mode for the uncovered canvas area."""

EXECUTOR_NAMES = ("jit", "numpy")

_ENV_EXECUTOR = "PHOTO_RESIZER_EXECUTOR"
_ENV_LOG_LEVEL = "PHOTO_RESIZER_LOG_LEVEL"
_ENV_MAX_THREADS = "PHOTO_RESIZER_MAX_THREADS"


@dataclass(frozen=True)
class Settings:
    """Process wide knobs read from the environment."""

    executor: str = "jit"
    log_level: str = "INFO"
    max_threads: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        executor = env.get(_ENV_EXECUTOR, cls.executor).strip().lower() or cls.executor
        if executor not in EXECUTOR_NAMES:
            raise ValueError(
                f"{_ENV_EXECUTOR} must be one of {', '.join(EXECUTOR_NAMES)}; got {executor!r}"
            )

        log_level = env.get(_ENV_LOG_LEVEL, cls.log_level).strip().upper() or cls.log_level

        max_threads: Optional[int] = None
        raw_threads = env.get(_ENV_MAX_THREADS, "").strip()
        if raw_threads:
            try:
                max_threads = int(raw_threads)
            except ValueError as exc:
                raise ValueError(f"{_ENV_MAX_THREADS} must be an integer") from exc
            if max_threads < 1:
                raise ValueError(f"{_ENV_MAX_THREADS} must be at least 1")

        return cls(executor=executor, log_level=log_level, max_threads=max_threads)


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached :class:`Settings`, reading the environment on first use."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    """Forget the cached settings so the next lookup re-reads the environment."""

    global _SETTINGS
    _SETTINGS = None


__all__ = [
    "ACCEPTED_MIME_TYPES",
    "ADJUSTMENT_KEYS",
    "ADJUSTMENT_RANGES",
    "BACKGROUND_RGBA",
    "DEFAULT_JPEG_QUALITY",
    "EXECUTOR_NAMES",
    "JPEG_QUALITY_RANGE",
    "MAX_UPLOAD_BYTES",
    "Settings",
    "get_settings",
    "reset_settings",
]
