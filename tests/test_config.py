from __future__ import annotations

import logging

import pytest

from photo_resizer.config import Settings, get_settings, reset_settings
from photo_resizer.utils.logging import configure_logging, get_logger


def test_defaults_without_environment() -> None:
    settings = Settings.from_env({})

    assert settings == Settings(executor="jit", log_level="INFO", max_threads=None)


def test_environment_overrides() -> None:
    settings = Settings.from_env(
        {
            "PHOTO_RESIZER_EXECUTOR": " NumPy ",
            "PHOTO_RESIZER_LOG_LEVEL": "debug",
            "PHOTO_RESIZER_MAX_THREADS": "3",
        }
    )

    assert settings.executor == "numpy"
    assert settings.log_level == "DEBUG"
    assert settings.max_threads == 3


def test_unknown_executor_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings.from_env({"PHOTO_RESIZER_EXECUTOR": "gpu"})


@pytest.mark.parametrize("raw", ["many", "0", "-2"])
def test_bad_thread_count_is_rejected(raw: str) -> None:
    with pytest.raises(ValueError):
        Settings.from_env({"PHOTO_RESIZER_MAX_THREADS": raw})


def test_settings_are_cached_until_reset(monkeypatch) -> None:
    monkeypatch.setenv("PHOTO_RESIZER_EXECUTOR", "numpy")
    first = get_settings()
    monkeypatch.setenv("PHOTO_RESIZER_EXECUTOR", "jit")

    assert get_settings() is first
    assert first.executor == "numpy"

    reset_settings()
    assert get_settings().executor == "jit"


def test_package_logger_has_a_handler() -> None:
    logger = get_logger()

    assert logger.name == "photo_resizer"
    assert logger.handlers
    assert get_logger() is logger


def test_child_loggers_live_under_the_package() -> None:
    assert get_logger("worker").name == "photo_resizer.worker"
    assert get_logger("photo_resizer.core").name == "photo_resizer.core"


def test_configure_logging_does_not_stack_handlers() -> None:
    logger = configure_logging("DEBUG")
    handlers = list(logger.handlers)

    configure_logging("WARNING")

    assert logger.handlers == handlers
    assert logger.level == logging.WARNING
