"""Central registry for smart home backends.

Maps backend names to adapter classes. Exactly one backend is created
per process, at startup (see ``smarthome.services.backend_service``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smarthome.core.interfaces.backend import BackendUnavailableError, SmartHomeBackend

if TYPE_CHECKING:
    from smarthome.models import Config

logger = logging.getLogger(__name__)


class BackendRegistry:
    """Registry of backend adapter classes.

    Example:
        >>> BackendRegistry.register("local", LocalBackend)
        >>> backend = BackendRegistry.create("local", config)
        >>> await backend.connect()
    """

    _backends: dict[str, type[SmartHomeBackend]] = {}

    @classmethod
    def register(cls, name: str, backend_class: type[SmartHomeBackend]) -> None:
        """Register a backend adapter class.

        Args:
            name: Unique identifier for this backend
            backend_class: Adapter class taking a Config

        Raises:
            TypeError: If backend_class is not a class
        """
        if not isinstance(backend_class, type):
            raise TypeError(f"backend_class must be a class, got {type(backend_class)}")

        if name in cls._backends and cls._backends[name] is not backend_class:
            logger.warning(f"Backend '{name}' already registered, overwriting")

        cls._backends[name] = backend_class
        logger.debug(f"Registered backend adapter: {name}")

    @classmethod
    def list_backends(cls) -> list[str]:
        """List all registered backend names."""
        return list(cls._backends.keys())

    @classmethod
    def create(cls, name: str, config: Config) -> SmartHomeBackend:
        """Instantiate a registered backend.

        Args:
            name: Registered backend name
            config: Application configuration

        Returns:
            New, not yet connected backend instance

        Raises:
            BackendUnavailableError: If backend name is not registered
        """
        if name not in cls._backends:
            available = ", ".join(cls.list_backends()) or "none"
            raise BackendUnavailableError(
                f"Unknown backend: '{name}'. Available backends: {available}"
            )

        logger.info(f"Creating backend: {name}")
        return cls._backends[name](config)

    @classmethod
    def reset(cls) -> None:
        """Clear all registered backends (for testing)."""
        cls._backends.clear()
