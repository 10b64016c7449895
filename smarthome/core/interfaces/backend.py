"""Smart home backend protocol definition.

Defines the interface both backends implement (the local JSON store
and Home Assistant). The facade depends only on this protocol, so all
clamping and default rules live in one place and tests can substitute
a fake backend.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from smarthome.core.models import Device, DeviceCommand, Sensor


@runtime_checkable
class SmartHomeBackend(Protocol):
    """Protocol for device/sensor backends.

    Lifecycle:
        1. Create instance with the application Config
        2. Call connect() once at startup
        3. Read with list_*/get_*, write with apply_command()
        4. Call disconnect() on shutdown

    Reads return unified ``Device``/``Sensor`` objects. ``get_device``
    and ``get_sensor`` return None for unknown ids. Backend I/O
    failures raise ``BackendError``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (e.g. 'local', 'homeassistant')."""
        ...

    @abstractmethod
    async def connect(self) -> bool:
        """Prepare the backend for use.

        Returns:
            True if the backend is ready, False if it started degraded
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release resources."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is reachable and functioning."""
        ...

    @abstractmethod
    async def list_devices(self) -> list[Device]:
        ...

    @abstractmethod
    async def get_device(self, device_id: str) -> Device | None:
        ...

    @abstractmethod
    async def list_devices_by_area(self, area: str) -> list[Device]:
        """List devices whose area matches ``area`` case-insensitively."""
        ...

    @abstractmethod
    async def list_sensors(self) -> list[Sensor]:
        ...

    @abstractmethod
    async def get_sensor(self, sensor_id: str) -> Sensor | None:
        ...

    @abstractmethod
    async def list_sensors_by_area(self, area: str) -> list[Sensor]:
        """List sensors whose area matches ``area`` case-insensitively."""
        ...

    @abstractmethod
    async def list_areas(self) -> list[str]:
        ...

    @abstractmethod
    async def apply_command(self, device: Device, command: DeviceCommand) -> Device | None:
        """Carry out a validated command.

        Args:
            device: Current device, already type-checked by the facade
            command: Command with the clamped target state

        Returns:
            The device after the change, or None if it disappeared

        Raises:
            BackendError: If the backend failed to apply or re-read the change
        """
        ...


def area_matches(area: str, wanted: str) -> bool:
    """Case-insensitive exact area comparison shared by all backends."""
    return area.lower() == wanted.lower()


class BackendError(Exception):
    """Base exception for backend errors."""

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize backend error.

        Args:
            message: Error description
            backend: Backend name (optional)
            status_code: HTTP status code for remote failures (optional)
        """
        self.backend = backend
        self.status_code = status_code
        super().__init__(f"[{backend}] {message}" if backend else message)


class BackendConnectionError(BackendError):
    """Raised when the backend cannot be reached."""

    pass


class BackendTimeoutError(BackendError):
    """Raised when a backend request exceeds its timeout."""

    pass


class BackendAuthenticationError(BackendError):
    """Raised when backend authentication fails."""

    pass


class BackendUnavailableError(BackendError):
    """Raised when a backend is not configured or not registered."""

    pass


class EntityNotFoundError(BackendError):
    """Raised when an entity is not found."""

    def __init__(self, entity_id: str, backend: str | None = None) -> None:
        """Initialize entity not found error.

        Args:
            entity_id: Entity that was not found
            backend: Backend name (optional)
        """
        self.entity_id = entity_id
        super().__init__(f"Entity not found: {entity_id}", backend, status_code=404)
