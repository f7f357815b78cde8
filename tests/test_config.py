"""Settings loading and validation tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from weather_backends.config import (
    DEFAULT_CAIYUN_LATITUDE,
    DEFAULT_CAIYUN_LONGITUDE,
    Settings,
    load_settings,
)
from weather_backends.exceptions import ConfigError

_ENV_VARS = (
    "CAIYUN_API_TOKEN",
    "CAIYUN_LATITUDE",
    "CAIYUN_LONGITUDE",
    "CAIYUN_API_BASE_URL",
    "WEATHER_TIMEOUT_SECONDS",
    "WEATHER_BACKEND",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of these tests.
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.caiyun_api_token == ""
    assert settings.caiyun_latitude == DEFAULT_CAIYUN_LATITUDE
    assert settings.caiyun_longitude == DEFAULT_CAIYUN_LONGITUDE
    assert settings.caiyun_api_base_url == "https://api.caiyunapp.com"
    assert settings.weather_backend == "caiyun.com"
    assert settings.weather_timeout_seconds == 5.0
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAIYUN_API_TOKEN", "abc123")
    monkeypatch.setenv("CAIYUN_LATITUDE", "39.9042")
    monkeypatch.setenv("CAIYUN_LONGITUDE", "116.4074")
    monkeypatch.setenv("CAIYUN_API_BASE_URL", "https://proxy.example.com/")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.caiyun_api_token == "abc123"
    assert settings.caiyun_latitude == 39.9042
    assert settings.caiyun_longitude == 116.4074
    assert settings.caiyun_api_base_url == "https://proxy.example.com"
    assert settings.log_level == "DEBUG"


def test_token_hidden_from_repr_and_summary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAIYUN_API_TOKEN", "abc123")
    settings = Settings(_env_file=None)
    assert "abc123" not in repr(settings)
    summary = settings.safe_summary()
    assert "abc123" not in str(summary)
    assert summary["caiyun_token_set"] is True


def test_empty_coordinates_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAIYUN_LATITUDE", "")
    monkeypatch.setenv("CAIYUN_LONGITUDE", " ")
    settings = Settings(_env_file=None)
    assert settings.caiyun_latitude == DEFAULT_CAIYUN_LATITUDE
    assert settings.caiyun_longitude == DEFAULT_CAIYUN_LONGITUDE


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("CAIYUN_LATITUDE", "91"),
        ("CAIYUN_LONGITUDE", "-181"),
        ("WEATHER_TIMEOUT_SECONDS", "0"),
        ("LOG_LEVEL", "CHATTY"),
        ("CAIYUN_API_BASE_URL", "ftp://api.caiyunapp.com"),
        ("CAIYUN_LATITUDE", "north"),
    ],
)
def test_invalid_values_raise_config_error(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()


def test_load_settings_reads_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("CAIYUN_API_TOKEN=from-dotenv\n", encoding="utf-8")
    settings = load_settings()
    assert settings.caiyun_api_token == "from-dotenv"
