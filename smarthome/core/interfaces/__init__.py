"""Protocol definitions for smart home backends."""

from smarthome.core.interfaces.backend import (
    BackendAuthenticationError,
    BackendConnectionError,
    BackendError,
    BackendTimeoutError,
    BackendUnavailableError,
    EntityNotFoundError,
    SmartHomeBackend,
)

__all__ = [
    "SmartHomeBackend",
    "BackendError",
    "BackendAuthenticationError",
    "BackendConnectionError",
    "BackendTimeoutError",
    "BackendUnavailableError",
    "EntityNotFoundError",
]
