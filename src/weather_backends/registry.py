"""Name -> backend registry built once by the composition root."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from .backends import BACKEND_FACTORIES
from .backends.base import WeatherBackend
from .config import Settings
from .exceptions import UnknownBackendError

BackendFactory = Callable[..., WeatherBackend]


class BackendRegistry:
    """Mapping of provider name to backend instance.

    Filled at start-up and read-only afterwards. Registering an existing name
    replaces the earlier backend (last write wins).
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._backends: dict[str, WeatherBackend] = {}

    def register(self, name: str, backend: WeatherBackend) -> None:
        if not name.strip():
            raise ValueError("Backend name must not be empty.")
        if name in self._backends:
            self.logger.warning("Backend %s registered twice; replacing earlier instance", name)
        self._backends[name] = backend

    def get(self, name: str) -> WeatherBackend:
        try:
            return self._backends[name]
        except KeyError:
            raise UnknownBackendError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self._backends)

    def setup_all(self, settings: Settings) -> None:
        """Run ``setup`` on every registered backend."""
        for name, backend in self._backends.items():
            self.logger.debug("Setting up backend %s", name)
            backend.setup(settings)

    def close(self) -> None:
        for backend in self._backends.values():
            backend.close()

    def __contains__(self, name: object) -> bool:
        return name in self._backends

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._backends)


def build_registry(
    factories: Iterable[BackendFactory] | None = None,
    logger: logging.Logger | None = None,
) -> BackendRegistry:
    """Instantiate each factory and register the backend under its own name."""
    if factories is None:
        factories = BACKEND_FACTORIES

    registry = BackendRegistry(logger=logger)
    for factory in factories:
        backend = factory(logger=logger)
        registry.register(backend.name, backend)
    return registry
