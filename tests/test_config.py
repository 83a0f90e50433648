"""Tests for settings loading and the user .env writer."""

import pytest
from pydantic import ValidationError

from core import config
from core.config import AppSettings
from core.domain.mode import SilenceMode
from core.errors import RequestValidationError


def test_defaults():
    settings = AppSettings(_env_file=None)

    assert settings.alertmanager_url == "http://127.0.0.1"
    assert settings.timeout_seconds == 3
    assert settings.silence_period_hours == 2
    assert settings.creator == "auto-silencer"
    assert settings.mode is SilenceMode.SHOW


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AM_SILENCE_ALERTMANAGER_URL", "http://am.internal:9093")
    monkeypatch.setenv("AM_SILENCE_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("AM_SILENCE_MODE", "delete")

    settings = AppSettings(_env_file=None)

    assert settings.alertmanager_url == "http://am.internal:9093"
    assert settings.timeout_seconds == 7.5
    assert settings.mode is SilenceMode.DELETE


def test_non_positive_timeout_rejected(monkeypatch):
    monkeypatch.setenv("AM_SILENCE_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_user_env_file_lives_in_app_dir():
    path = config.get_user_env_file()

    assert path.name == ".env"
    assert "am-silence" in path.parent.name


@pytest.mark.parametrize("raw", ["create", "delete", "show", SilenceMode.SHOW])
def test_mode_parse(raw):
    assert isinstance(SilenceMode.parse(raw), SilenceMode)


@pytest.mark.parametrize("raw", ["purge", "CREATE", " delete ", "Show", ""])
def test_mode_parse_is_exact(raw):
    with pytest.raises(RequestValidationError, match="Unrecognized mode"):
        SilenceMode.parse(raw)
