"""Local JSON-file backend.

Usage:
    >>> from smarthome.core.registry import BackendRegistry
    >>> from smarthome.adapters.local import LocalBackend
    >>>
    >>> BackendRegistry.register("local", LocalBackend)
    >>> backend = BackendRegistry.create("local", config)
"""

from smarthome.adapters.local.adapter import LocalBackend
from smarthome.adapters.local.fixtures import SEED_AREAS, build_seed_data
from smarthome.adapters.local.store import LocalStore
from smarthome.core.registry import BackendRegistry


def register() -> None:
    """Register the local backend with the registry."""
    BackendRegistry.register("local", LocalBackend)


__all__ = [
    "LocalBackend",
    "LocalStore",
    "SEED_AREAS",
    "build_seed_data",
    "register",
]
