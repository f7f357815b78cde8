"""Provider-agnostic output consumed by the aggregation layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import BackendError

WeatherCode = Literal[
    "unknown",
    "cloudy",
    "fog",
    "heavy_rain",
    "heavy_snow",
    "light_rain",
    "light_snow",
    "moderate_rain",
    "moderate_snow",
    "partly_cloudy",
    "sunny",
    "thundery_heavy_rain",
    "haze",
    "dust",
    "wind",
]


class LatLon(BaseModel):
    latitude: float
    longitude: float


class Condition(BaseModel):
    """Weather condition at a single point in time."""

    time: datetime | None = None
    code: WeatherCode = "unknown"
    desc: str = ""
    temp_c: float | None = None
    feels_like_c: float | None = None
    humidity: int | None = Field(default=None, description="Relative humidity in percent")
    visible_dist_m: float | None = None
    windspeed_kmph: float | None = None
    winddir_degree: int | None = None
    precip_mm_per_hour: float | None = None


class Day(BaseModel):
    """Forecast slots sharing one local calendar date."""

    local_date: date
    slots: list[Condition] = Field(default_factory=list)


class Data(BaseModel):
    """Normalized weather data; ``Data()`` is the empty result."""

    current: Condition = Field(default_factory=Condition)
    forecast: list[Day] = Field(default_factory=list)
    location: str = ""
    geo_location: LatLon | None = None


class FetchResult(BaseModel):
    """Outcome of one backend fetch: normalized data or the error that prevented it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    backend: str
    data: Data = Field(default_factory=Data)
    response: BaseModel | None = Field(
        default=None, description="Decoded provider payload (e.g. WeatherResponse) on success"
    )
    error: BackendError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
