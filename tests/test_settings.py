"""Tests for environment settings and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from quiz_service.config.settings import Settings, get_settings
from quiz_service.utils.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("ENV", "LOG_LEVEL", "SERVER_PORT", "QUIZ_TIMEOUT_SECONDS", "SESSION_MAX_AGE_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.SERVER_PORT == 8080
    assert settings.QUIZ_TIMEOUT_SECONDS == 600
    assert not settings.is_production
    assert settings.effective_log_level == "DEBUG"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("SERVER_PORT", ":9090")
    monkeypatch.setenv("QUIZ_TIMEOUT_SECONDS", "30")

    settings = Settings(_env_file=None)

    assert settings.is_production
    assert settings.effective_log_level == "INFO"
    assert settings.SERVER_PORT == 9090
    assert settings.QUIZ_TIMEOUT_SECONDS == 30.0


def test_explicit_log_level_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert Settings(_env_file=None).effective_log_level == "WARNING"


@pytest.mark.parametrize("name, value", [("SERVER_PORT", "0"), ("QUIZ_TIMEOUT_SECONDS", "-1")])
def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_configure_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    log_path = tmp_path / "logs" / "app.log"

    try:
        logger = configure_logging("debug", log_path)
        logger.info("hello from the test")
        for handler in root.handlers:
            handler.flush()

        assert logger.name == "quiz_service"
        assert root.level == logging.DEBUG
        assert " | INFO | quiz_service | hello from the test" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
