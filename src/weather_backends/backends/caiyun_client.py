"""HTTP client for the Caiyun v2.5 realtime + hourly endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import (
    BodyReadError,
    DecodeError,
    HttpStatusError,
    TimestampFormatError,
    TransportError,
)
from ..redaction import mask_secret, sanitize_text
from .caiyun_models import WeatherResponse

CAIYUN_URL_TEMPLATE = "{base_url}/v2.5/{token}/{longitude:f},{latitude:f}/weather.json?alert=true"


class CaiyunConfig(BaseModel):
    """Settings bound to a Caiyun backend by ``setup``."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(repr=False)
    latitude: float
    longitude: float
    base_url: str = "https://api.caiyunapp.com"
    timeout_seconds: float = 5.0


class CaiyunClient:
    """Issues one GET per fetch and decodes the body into a WeatherResponse."""

    def __init__(
        self,
        config: CaiyunConfig,
        logger: logging.Logger,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=config.timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> CaiyunClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def url(self) -> str:
        return CAIYUN_URL_TEMPLATE.format(
            base_url=self.config.base_url,
            token=self.config.token,
            longitude=self.config.longitude,
            latitude=self.config.latitude,
        )

    @property
    def display_url(self) -> str:
        """Request URL with the path token masked, safe for logs and errors."""
        return sanitize_text(self.url)

    def fetch(self, timeout: float | None = None) -> WeatherResponse:
        """Fetch and decode the current payload.

        ``timeout`` overrides the client timeout for this call only.
        """
        display_url = self.display_url
        self.logger.info("caiyun url: %s", display_url)
        body = self._get_body(display_url, timeout)
        return self._decode(body, display_url)

    def _get_body(self, display_url: str, timeout: float | None) -> bytes:
        # Passing timeout=None to httpx disables the timeout, so only forward overrides.
        options: dict[str, Any] = {} if timeout is None else {"timeout": timeout}
        try:
            with self._client.stream("GET", self.url, **options) as response:
                if response.status_code != 200:
                    raise HttpStatusError(
                        f"unable to get ({display_url}): http status {response.status_code}",
                        url=display_url,
                        status_code=response.status_code,
                    )
                try:
                    return response.read()
                except httpx.HTTPError as exc:
                    raise BodyReadError(
                        f"unable to read response body ({display_url}): {self._scrub(exc)}",
                        url=display_url,
                    ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"unable to get ({display_url}): {self._scrub(exc)}",
                url=display_url,
            ) from exc

    def _decode(self, body: bytes, display_url: str) -> WeatherResponse:
        try:
            return WeatherResponse.model_validate_json(body)
        except (ValidationError, TimestampFormatError) as exc:
            preview = sanitize_text(body[:300].decode("utf-8", errors="replace"))
            raise DecodeError(
                f"unable to unmarshal response ({display_url}): {self._scrub(exc)}\n"
                f"The json body is: {preview}",
                raw_body=body,
                url=display_url,
            ) from exc

    def _scrub(self, exc: Exception) -> str:
        return mask_secret(str(exc), self.config.token)
