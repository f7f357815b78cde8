"""Redaction helpers and JSON log formatting."""

from __future__ import annotations

import json
import logging

from weather_backends.log_setup import JsonConsoleFormatter, setup_logger
from weather_backends.redaction import (
    REDACTED,
    mask_secret,
    sanitize_for_logging,
    sanitize_text,
)


def test_sanitize_text_masks_caiyun_path_token() -> None:
    url = "https://api.caiyunapp.com/v2.5/TAkhjf8d1nlSlspN/120.155070,30.274085/weather.json"
    sanitized = sanitize_text(url)
    assert "TAkhjf8d1nlSlspN" not in sanitized
    assert f"/v2.5/{REDACTED}/120.155070,30.274085/" in sanitized


def test_sanitize_text_masks_key_value_pairs() -> None:
    assert sanitize_text("token=abc123 other=1") == f"token={REDACTED} other=1"
    assert sanitize_text("api_key: xyz") == f"api_key={REDACTED}"


def test_mask_secret() -> None:
    assert mask_secret("a/secret/b", "secret") == f"a/{REDACTED}/b"
    assert mask_secret("unchanged", "") == "unchanged"
    assert mask_secret("unchanged", None) == "unchanged"


def test_sanitize_for_logging_nested() -> None:
    payload = {"caiyun_api_token": "abc", "coords": [{"latitude": 30.27}], "note": "token=abc"}
    sanitized = sanitize_for_logging(payload)
    assert sanitized["caiyun_api_token"] == REDACTED
    assert sanitized["coords"] == [{"latitude": 30.27}]
    assert sanitized["note"] == f"token={REDACTED}"


def test_json_formatter_includes_context_and_redacts() -> None:
    record = logging.LogRecord(
        name="weather_backends",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="caiyun fetch error: %s",
        args=("unable to get (https://api.caiyunapp.com/v2.5/leaked/1.0,2.0/weather.json)",),
        exc_info=None,
    )
    record.backend = "caiyun.com"
    record.url = "https://api.caiyunapp.com/v2.5/leaked/1.0,2.0/weather.json"

    event = json.loads(JsonConsoleFormatter().format(record))

    assert event["level"] == "ERROR"
    assert event["backend"] == "caiyun.com"
    assert "leaked" not in event["message"]
    assert "leaked" not in event["url"]
    assert "status_code" not in event


def test_setup_logger_is_idempotent() -> None:
    first = setup_logger("weather_backends.test_setup", level="DEBUG")
    second = setup_logger("weather_backends.test_setup", level=logging.WARNING)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING
    assert isinstance(second.handlers[0].formatter, JsonConsoleFormatter)
