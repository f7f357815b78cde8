"""Provider-agnostic backend contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..config import Settings
from ..models import FetchResult


class WeatherBackend(ABC):
    """Base contract for weather backends selectable through the registry.

    A backend starts unconfigured; ``setup`` binds its settings and must run
    before ``fetch``. Configuration is read-only afterwards, so concurrent
    fetches on one configured backend are safe.
    """

    name: ClassVar[str]

    @abstractmethod
    def setup(self, settings: Settings) -> None:
        """Bind credentials and default coordinates from settings."""

    @abstractmethod
    def fetch(self, location: str, numdays: int) -> FetchResult:
        """Query upstream and return normalized data or the failure."""

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Whether ``setup`` has run."""

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self) -> WeatherBackend:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()
