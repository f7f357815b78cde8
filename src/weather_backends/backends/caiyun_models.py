"""Typed decode target for the Caiyun v2.5 ``weather.json`` payload.

Units follow the provider's metric defaults: temperatures in Celsius,
humidity and cloud rate as 0..1 fractions, visibility in kilometres, wind
speed in km/h, wind direction in compass degrees, pressure in Pa and
downward shortwave radiation flux (dswrf) in W/m2.

Fields absent from the payload fall back to their zero value and fields the
models do not declare are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..timeseries import Int32, TimeSeriesValue


class _CaiyunModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def null_fields_to_zero(cls, data: Any) -> Any:
        # An explicit null leaves the field at its zero value.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class LifeIndex(_CaiyunModel):
    index: float = 0.0
    desc: str = ""


class LifeIndices(_CaiyunModel):
    ultraviolet: LifeIndex = Field(default_factory=LifeIndex)
    comfort: LifeIndex = Field(default_factory=LifeIndex)


class Aqi(_CaiyunModel):
    """Air quality index split by national standard."""

    chn: Int32 = 0
    usa: Int32 = 0


class AirDescription(_CaiyunModel):
    chn: str = ""
    usa: str = ""


class RealtimeAirQuality(_CaiyunModel):
    """Pollutant concentrations in ug/m3 (CO in mg/m3)."""

    pm25: Int32 = 0
    pm10: Int32 = 0
    o3: Int32 = 0
    so2: Int32 = 0
    no2: Int32 = 0
    co: float = 0.0
    aqi: Aqi = Field(default_factory=Aqi)
    description: AirDescription = Field(default_factory=AirDescription)


class RealtimeWind(_CaiyunModel):
    speed: float = 0.0
    direction: float = Field(default=0.0, description="Compass degrees, 0 = north")


class LocalPrecipitation(_CaiyunModel):
    status: str = ""
    datasource: str = ""
    intensity: float = 0.0


class NearestPrecipitation(_CaiyunModel):
    status: str = ""
    distance: float = 0.0
    intensity: float = 0.0


class RealtimePrecipitation(_CaiyunModel):
    local: LocalPrecipitation = Field(default_factory=LocalPrecipitation)
    nearest: NearestPrecipitation = Field(default_factory=NearestPrecipitation)


class Realtime(_CaiyunModel):
    """Instantaneous observation at the requested point."""

    status: str = ""
    temperature: float = 0.0
    humidity: float = 0.0
    cloudrate: float = 0.0
    skycon: str = ""
    visibility: float = 0.0
    dswrf: float = 0.0
    wind: RealtimeWind = Field(default_factory=RealtimeWind)
    pressure: float = 0.0
    apparent_temperature: float = 0.0
    precipitation: RealtimePrecipitation = Field(default_factory=RealtimePrecipitation)
    air_quality: RealtimeAirQuality = Field(default_factory=RealtimeAirQuality)
    life_index: LifeIndices = Field(default_factory=LifeIndices)


class HourlyAirQuality(_CaiyunModel):
    pm25: list[TimeSeriesValue[Int32]] = Field(default_factory=list)


class Hourly(_CaiyunModel):
    """Hourly forecast as parallel series on the same hourly cadence."""

    status: str = ""
    description: str = ""
    temperature: list[TimeSeriesValue[float]] = Field(default_factory=list)
    apparent_temperature: list[TimeSeriesValue[float]] = Field(default_factory=list)
    humidity: list[TimeSeriesValue[float]] = Field(default_factory=list)
    pressure: list[TimeSeriesValue[float]] = Field(default_factory=list)
    visibility: list[TimeSeriesValue[float]] = Field(default_factory=list)
    dswrf: list[TimeSeriesValue[float]] = Field(default_factory=list)
    cloudrate: list[TimeSeriesValue[float]] = Field(default_factory=list)
    precipitation: list[TimeSeriesValue[float]] = Field(default_factory=list)
    skycon: list[TimeSeriesValue[str]] = Field(default_factory=list)
    air_quality: HourlyAirQuality = Field(default_factory=HourlyAirQuality)


class AlertContent(_CaiyunModel):
    alert_id: str = Field(default="", alias="alertId")
    title: str = ""
    description: str = ""
    status: str = ""
    code: str = ""
    source: str = ""
    location: str = ""
    pubtimestamp: float = 0.0


class Alert(_CaiyunModel):
    status: str = ""
    content: list[AlertContent] = Field(default_factory=list)


class WeatherResult(_CaiyunModel):
    primary: int = 0
    forecast_keypoint: str = ""
    realtime: Realtime = Field(default_factory=Realtime)
    hourly: Hourly = Field(default_factory=Hourly)
    alert: Alert = Field(default_factory=Alert)


class WeatherResponse(_CaiyunModel):
    """Top-level ``weather.json`` envelope."""

    status: str = ""
    api_version: str = ""
    api_status: str = ""
    lang: str = ""
    unit: str = ""
    tzshift: Int32 = 0
    timezone: str = ""
    server_time: int = 0
    location: tuple[float, float] = (0.0, 0.0)
    result: WeatherResult = Field(default_factory=WeatherResult)
