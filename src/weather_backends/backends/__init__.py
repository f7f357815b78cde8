"""Weather backend implementations.

Adding a backend: implement ``WeatherBackend`` in a new module, expose a
``create_backend(logger=None)`` factory and append it to
``BACKEND_FACTORIES``. The composition root builds the registry from this
tuple; modules never register themselves on import.
"""

from .base import WeatherBackend
from .caiyun import CaiyunBackend, create_backend as create_caiyun_backend

BACKEND_FACTORIES = (create_caiyun_backend,)

__all__ = [
    "BACKEND_FACTORIES",
    "CaiyunBackend",
    "WeatherBackend",
    "create_caiyun_backend",
]
