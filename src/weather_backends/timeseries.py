"""Decoding of ``{"datetime": ..., "value": ...}`` observation series.

Hourly series from the provider share one element shape and differ only in
the payload type, so a single generic model covers all of them::

    TimeSeriesValue[float].model_validate(
        {"datetime": "2024-06-01T08:00+08:00", "value": 22.1}
    )

Timestamps use a fixed minute-resolution layout with an explicit offset
(``YYYY-MM-DDThh:mm±hh:mm``). Any other layout raises
:class:`TimestampFormatError`; a default timestamp is never substituted.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import DecodeError, TimestampFormatError

T = TypeVar("T")

Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M%z"
_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}[+-]\d{2}:\d{2}")


def parse_timestamp(raw: Any) -> datetime:
    """Parse a provider timestamp into a timezone-aware datetime."""
    if not isinstance(raw, str) or not _TIMESTAMP_RE.fullmatch(raw):
        raise TimestampFormatError(raw)
    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise TimestampFormatError(raw) from exc


def format_timestamp(value: datetime) -> str:
    """Render a timezone-aware datetime in the provider layout."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("Series timestamps must carry a UTC offset.")
    return value.isoformat(timespec="minutes")


class TimeSeriesValue(BaseModel, Generic[T]):
    """One ``(timestamp, value)`` observation of an hourly series."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date_time: datetime = Field(alias="datetime")
    value: T

    @field_validator("date_time", mode="before")
    @classmethod
    def parse_provider_timestamp(cls, value: Any) -> datetime:
        # TimestampFormatError is not a ValueError, so pydantic lets it through
        # instead of folding it into a ValidationError.
        return parse_timestamp(value)


def decode_time_series_value(raw: Mapping[str, Any], value_type: type[T]) -> TimeSeriesValue[T]:
    """Decode one series element whose ``value`` is of ``value_type``."""
    try:
        return TimeSeriesValue[value_type].model_validate(raw)  # type: ignore[valid-type]
    except ValidationError as exc:
        raw_body = json.dumps(raw, default=str).encode("utf-8")
        raise DecodeError(
            f"Series element does not match the expected shape: {exc}",
            raw_body=raw_body,
        ) from exc


def decode_series(
    items: Iterable[Mapping[str, Any]], value_type: type[T]
) -> list[TimeSeriesValue[T]]:
    """Decode a whole series, preserving upstream order."""
    return [decode_time_series_value(item, value_type) for item in items]
