"""Tests for runtime settings validation and loading."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from app.config import AppSettings, SettingsLoadError, config_configure_logging, config_load_settings


def test_settings_normalize_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    settings = AppSettings(_env_file=None)

    assert settings.log_level == "DEBUG"


def test_settings_reject_max_limit_below_default() -> None:
    with pytest.raises(ValidationError, match="api_max_limit"):
        AppSettings(_env_file=None, api_default_limit=100, api_max_limit=10)


@pytest.mark.parametrize("workers", [0, 33])
def test_settings_bound_analytics_fetch_workers(workers: int) -> None:
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, analytics_fetch_workers=workers)


def test_config_load_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Invalid environment values surface as one startup error."""

    monkeypatch.setenv("DATABASE_URL", "   ")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()


def test_config_configure_logging_applies_level(monkeypatch: pytest.MonkeyPatch) -> None:
    captured_arguments: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured_arguments.update(kwargs))

    config_configure_logging(AppSettings(_env_file=None, log_level="warning"))

    assert captured_arguments["level"] == "WARNING"
    assert captured_arguments["format"] == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
