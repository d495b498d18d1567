from pathlib import Path

import pytest
from pydantic import ValidationError

from sqlstate_classifier.config.settings import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("ENV", "LOG_LEVEL", "LOG_FORMAT", "LOG_TO_STDOUT", "LOG_DIR", "LOG_REDACT_STATEMENTS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.ENV == "development"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FORMAT == "json"
    assert settings.LOG_TO_STDOUT is True
    assert isinstance(settings.LOG_DIR, Path)
    assert settings.LOG_REDACT_STATEMENTS is True


def test_values_are_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    monkeypatch.setenv("LOG_REDACT_STATEMENTS", "false")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"
    assert settings.LOG_REDACT_STATEMENTS is False


def test_invalid_level_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
