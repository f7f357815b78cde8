"""Caiyun (caiyunapp.com) weather backend."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime, timedelta, timezone
from typing import TypeVar

import httpx

from ..config import Settings
from ..exceptions import BackendError, DecodeError, NotConfiguredError
from ..models import Condition, Data, Day, FetchResult, LatLon, WeatherCode
from ..timeseries import TimeSeriesValue
from .base import WeatherBackend
from .caiyun_client import CaiyunClient, CaiyunConfig
from .caiyun_models import Hourly, Realtime, WeatherResponse

T = TypeVar("T")

SKYCON_CODES: dict[str, WeatherCode] = {
    "CLEAR_DAY": "sunny",
    "CLEAR_NIGHT": "sunny",
    "PARTLY_CLOUDY_DAY": "partly_cloudy",
    "PARTLY_CLOUDY_NIGHT": "partly_cloudy",
    "CLOUDY": "cloudy",
    "LIGHT_HAZE": "haze",
    "MODERATE_HAZE": "haze",
    "HEAVY_HAZE": "haze",
    "LIGHT_RAIN": "light_rain",
    "MODERATE_RAIN": "moderate_rain",
    "HEAVY_RAIN": "heavy_rain",
    "STORM_RAIN": "thundery_heavy_rain",
    "FOG": "fog",
    "LIGHT_SNOW": "light_snow",
    "MODERATE_SNOW": "moderate_snow",
    "HEAVY_SNOW": "heavy_snow",
    "STORM_SNOW": "heavy_snow",
    "DUST": "dust",
    "SAND": "dust",
    "WIND": "wind",
}


class CaiyunBackend(WeatherBackend):
    """Fetches Caiyun realtime and hourly data for the configured point.

    The request always uses the coordinates bound by ``setup``. The
    ``location`` passed to ``fetch`` only labels the output and ``numdays``
    only bounds how many forecast days are kept.
    """

    name = "caiyun.com"

    def __init__(
        self,
        logger: logging.Logger | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._http_client = http_client
        self._config: CaiyunConfig | None = None
        self._client: CaiyunClient | None = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    @property
    def config(self) -> CaiyunConfig | None:
        return self._config

    def setup(self, settings: Settings) -> None:
        config = CaiyunConfig(
            token=settings.caiyun_api_token,
            latitude=settings.caiyun_latitude,
            longitude=settings.caiyun_longitude,
            base_url=settings.caiyun_api_base_url,
            timeout_seconds=settings.weather_timeout_seconds,
        )
        if config == self._config:
            return
        if not config.token:
            self.logger.warning(
                "caiyun backend configured without CAIYUN_API_TOKEN; upstream will reject requests"
            )
        if self._client is not None:
            self._client.close()
        self._config = config
        self._client = CaiyunClient(config, self.logger, http_client=self._http_client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        # Back to unconfigured so a later setup() rebinds a fresh client.
        self._client = None
        self._config = None

    def fetch(self, location: str, numdays: int, *, timeout: float | None = None) -> FetchResult:
        if self._client is None or self._config is None:
            raise NotConfiguredError(f"Backend {self.name} used before setup().")

        try:
            response = self._client.fetch(timeout=timeout)
        except BackendError as exc:
            self.logger.error(
                "caiyun fetch error: %s",
                exc,
                extra={"backend": self.name, "url": getattr(exc, "url", None)},
            )
            if isinstance(exc, DecodeError):
                self.logger.debug(
                    "caiyun raw body: %s", exc.raw_body.decode("utf-8", errors="replace")
                )
            return FetchResult(backend=self.name, error=exc)

        self.logger.info(
            "caiyun %s server_time=%d skycon=%s",
            response.api_version,
            response.server_time,
            response.result.realtime.skycon,
        )
        data = normalize_response(
            response,
            location=location,
            numdays=numdays,
            fallback=LatLon(latitude=self._config.latitude, longitude=self._config.longitude),
        )
        return FetchResult(backend=self.name, data=data, response=response)


def create_backend(
    logger: logging.Logger | None = None, http_client: httpx.Client | None = None
) -> CaiyunBackend:
    """Factory used by the composition root."""
    return CaiyunBackend(logger=logger, http_client=http_client)


def normalize_response(
    response: WeatherResponse,
    *,
    location: str,
    numdays: int,
    fallback: LatLon,
) -> Data:
    """Map a decoded Caiyun payload onto the provider-agnostic ``Data``."""
    lat, lon = response.location
    geo = LatLon(latitude=lat, longitude=lon) if (lat, lon) != (0.0, 0.0) else fallback
    return Data(
        current=_current_condition(response),
        forecast=_forecast_days(response.result.hourly, numdays),
        location=location or f"{geo.latitude:f},{geo.longitude:f}",
        geo_location=geo,
    )


def _skycon_code(skycon: str) -> WeatherCode:
    return SKYCON_CODES.get(skycon, "unknown")


def _skycon_desc(skycon: str) -> str:
    return skycon.replace("_", " ").capitalize()


def _round(value: float | None) -> int | None:
    if value is None or not math.isfinite(value):
        return None
    return round(value)


def _percent(fraction: float | None) -> int | None:
    return None if fraction is None else _round(fraction * 100)


def _km_to_m(km: float | None) -> float | None:
    return None if km is None else km * 1000


def _observed_at(server_time: int, tzshift: int) -> datetime | None:
    """Observation time in the payload's zone; None when it cannot be represented."""
    if not server_time:
        return None
    try:
        tz = timezone(timedelta(seconds=tzshift)) if tzshift else UTC
        return datetime.fromtimestamp(server_time, tz=tz)
    except (ValueError, OverflowError, OSError):
        return None


def _current_condition(response: WeatherResponse) -> Condition:
    realtime: Realtime = response.result.realtime
    return Condition(
        time=_observed_at(response.server_time, response.tzshift),
        code=_skycon_code(realtime.skycon),
        desc=_skycon_desc(realtime.skycon),
        temp_c=realtime.temperature,
        feels_like_c=realtime.apparent_temperature,
        humidity=_percent(realtime.humidity),
        visible_dist_m=_km_to_m(realtime.visibility),
        windspeed_kmph=realtime.wind.speed,
        winddir_degree=_round(realtime.wind.direction),
        precip_mm_per_hour=realtime.precipitation.local.intensity,
    )


def _at(series: list[TimeSeriesValue[T]], index: int) -> T | None:
    return series[index].value if index < len(series) else None


def _forecast_days(hourly: Hourly, numdays: int) -> list[Day]:
    if numdays <= 0:
        return []
    # Series are parallel but not length-checked; the first non-empty one
    # provides the timestamps.
    anchor = next(
        (
            series
            for series in (hourly.temperature, hourly.skycon, hourly.humidity, hourly.precipitation)
            if series
        ),
        [],
    )

    days: list[Day] = []
    for index, point in enumerate(anchor):
        skycon = _at(hourly.skycon, index) or ""
        slot = Condition(
            time=point.date_time,
            code=_skycon_code(skycon),
            desc=_skycon_desc(skycon),
            temp_c=_at(hourly.temperature, index),
            feels_like_c=_at(hourly.apparent_temperature, index),
            humidity=_percent(_at(hourly.humidity, index)),
            visible_dist_m=_km_to_m(_at(hourly.visibility, index)),
            precip_mm_per_hour=_at(hourly.precipitation, index),
        )
        slot_date = point.date_time.date()
        if not days or days[-1].local_date != slot_date:
            if len(days) == numdays:
                break
            days.append(Day(local_date=slot_date))
        days[-1].slots.append(slot)
    return days
