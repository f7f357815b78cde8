"""Typed settings loader for weather backends."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

DEFAULT_CAIYUN_LATITUDE = 30.274085
DEFAULT_CAIYUN_LONGITUDE = 120.15507


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weather_backend: str = Field(default="caiyun.com", alias="WEATHER_BACKEND")
    weather_timeout_seconds: float = Field(default=5.0, alias="WEATHER_TIMEOUT_SECONDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    caiyun_api_token: str = Field(default="", alias="CAIYUN_API_TOKEN", repr=False)
    caiyun_api_base_url: str = Field(
        default="https://api.caiyunapp.com",
        alias="CAIYUN_API_BASE_URL",
    )
    caiyun_latitude: float = Field(default=DEFAULT_CAIYUN_LATITUDE, alias="CAIYUN_LATITUDE")
    caiyun_longitude: float = Field(default=DEFAULT_CAIYUN_LONGITUDE, alias="CAIYUN_LONGITUDE")

    @field_validator("caiyun_latitude", "caiyun_longitude", mode="before")
    @classmethod
    def empty_string_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat empty env-string coordinates as unset."""
        if isinstance(value, str) and value.strip() == "":
            if info.field_name == "caiyun_latitude":
                return DEFAULT_CAIYUN_LATITUDE
            return DEFAULT_CAIYUN_LONGITUDE
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate coordinate ranges, timeouts and log level."""
        if not (-90 <= self.caiyun_latitude <= 90):
            raise ValueError("CAIYUN_LATITUDE must be between -90 and 90.")
        if not (-180 <= self.caiyun_longitude <= 180):
            raise ValueError("CAIYUN_LONGITUDE must be between -180 and 180.")
        if self.weather_timeout_seconds <= 0:
            raise ValueError("WEATHER_TIMEOUT_SECONDS must be > 0.")
        if not self.weather_backend.strip():
            raise ValueError("WEATHER_BACKEND must not be empty.")
        if not self.caiyun_api_base_url.startswith(("http://", "https://")):
            raise ValueError("CAIYUN_API_BASE_URL must be an http(s) URL.")
        self.caiyun_api_base_url = self.caiyun_api_base_url.rstrip("/")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL '{self.log_level}' is not a known logging level.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "weather_backend": self.weather_backend,
            "weather_timeout_seconds": self.weather_timeout_seconds,
            "log_level": self.log_level,
            "caiyun_api_base_url": self.caiyun_api_base_url,
            "caiyun_token_set": bool(self.caiyun_api_token),
            "caiyun_latitude": self.caiyun_latitude,
            "caiyun_longitude": self.caiyun_longitude,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
