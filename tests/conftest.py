"""Shared fixtures for backend tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

MINIMAL_PAYLOAD: dict[str, Any] = {
    "status": "ok",
    "api_version": "v2.5",
    "api_status": "active",
    "result": {
        "realtime": {"temperature": 21.5, "skycon": "CLEAR_DAY"},
        "hourly": {
            "temperature": [{"datetime": "2024-06-01T08:00+08:00", "value": 22.1}],
        },
    },
}


def _hourly_series(values: list[Any], start_hour: int = 22) -> list[dict[str, Any]]:
    series = []
    for offset, value in enumerate(values):
        hour = start_hour + offset
        day = 1 + hour // 24
        series.append({"datetime": f"2024-06-{day:02d}T{hour % 24:02d}:00+08:00", "value": value})
    return series


FULL_PAYLOAD: dict[str, Any] = {
    "status": "ok",
    "api_version": "v2.5",
    "api_status": "active",
    "lang": "zh_CN",
    "unit": "metric",
    "tzshift": 28800,
    "timezone": "Asia/Shanghai",
    "server_time": 1717236000,
    "location": [30.274085, 120.15507],
    "result": {
        "primary": 0,
        "forecast_keypoint": "Light rain expected after midnight",
        "realtime": {
            "status": "ok",
            "temperature": 24.0,
            "humidity": 0.82,
            "cloudrate": 0.6,
            "skycon": "PARTLY_CLOUDY_NIGHT",
            "visibility": 12.5,
            "dswrf": 0.0,
            "wind": {"speed": 9.4, "direction": 135.6},
            "pressure": 100420.5,
            "apparent_temperature": 26.1,
            "precipitation": {
                "local": {"status": "ok", "datasource": "radar", "intensity": 0.0},
                "nearest": {"status": "ok", "distance": 40.2, "intensity": 0.19},
            },
            "air_quality": {
                "pm25": 18,
                "pm10": 31,
                "o3": 60,
                "so2": 4,
                "no2": 22,
                "co": 0.6,
                "aqi": {"chn": 35, "usa": 62},
                "description": {"chn": "优", "usa": "Moderate"},
            },
            "life_index": {
                "ultraviolet": {"index": 0.0, "desc": "None"},
                "comfort": {"index": 4, "desc": "Warm"},
            },
            "unmodeled_field": {"ignored": True},
        },
        "hourly": {
            "status": "ok",
            "description": "Cloudy overnight",
            "temperature": _hourly_series([23.5, 23.0, 22.4, 22.0]),
            "apparent_temperature": _hourly_series([25.0, 24.6, 24.1]),
            "humidity": _hourly_series([0.8, 0.85, 0.9, 0.92]),
            "precipitation": _hourly_series([0.0, 0.0, 0.3, 1.2]),
            "skycon": _hourly_series(["CLOUDY", "CLOUDY", "LIGHT_RAIN", "MODERATE_RAIN"]),
            "visibility": _hourly_series([10.0, 9.0, 6.5, 4.0]),
            "air_quality": {"pm25": _hourly_series([18, 19, 21, 20])},
        },
        "alert": {
            "status": "ok",
            "content": [
                {
                    "alertId": "33010041600000_20240601",
                    "title": "Rainstorm blue warning",
                    "status": "预警中",
                    "code": "0201",
                    "source": "国家预警信息发布中心",
                    "pubtimestamp": 1717230000.0,
                }
            ],
        },
    },
}


def make_settings(**overrides: Any) -> Any:
    defaults = {
        "caiyun_api_token": "secret-token-123",
        "caiyun_latitude": 30.274085,
        "caiyun_longitude": 120.15507,
        "caiyun_api_base_url": "https://api.caiyunapp.com",
        "weather_timeout_seconds": 5.0,
        "weather_backend": "caiyun.com",
        "log_level": "INFO",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def json_handler(
    payload: Any, status_code: int = 200, seen: list[httpx.Request] | None = None
) -> Callable[[httpx.Request], httpx.Response]:
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")

    def _handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, content=body)

    return _handler


@pytest.fixture
def settings() -> Any:
    return make_settings()
