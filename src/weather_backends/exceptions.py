"""Application exception classes."""

from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class NotConfiguredError(Exception):
    """Raised when a backend is fetched before ``setup`` bound its settings."""


class UnknownBackendError(KeyError):
    """Raised when a registry lookup names a backend that was never registered."""

    def __init__(self, name: str, known: list[str]) -> None:
        super().__init__(name)
        self.name = name
        self.known = known

    def __str__(self) -> str:
        known = ", ".join(self.known) or "none"
        return f"Unknown weather backend '{self.name}' (registered: {known})."


class BackendError(Exception):
    """Raised when a backend request or decode step fails."""


class TransportError(BackendError):
    """Raised when the HTTP request could not be sent or answered."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class HttpStatusError(BackendError):
    """Raised when the provider answers with a non-200 status."""

    def __init__(self, message: str, *, url: str, status_code: int) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class BodyReadError(BackendError):
    """Raised when a 200 response body cannot be read."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class DecodeError(BackendError):
    """Raised when a response body is not a structurally valid payload."""

    def __init__(self, message: str, *, raw_body: bytes, url: str | None = None) -> None:
        super().__init__(message)
        self.raw_body = raw_body
        self.url = url


class TimestampFormatError(BackendError):
    """Raised when a series timestamp does not match ``YYYY-MM-DDThh:mm±hh:mm``."""

    def __init__(self, raw: Any) -> None:
        super().__init__(
            f"Invalid series timestamp {raw!r}; expected layout YYYY-MM-DDThh:mm+hh:mm."
        )
        self.raw = raw
