"""Local backend adapter.

Serves devices and sensors from the JSON-file-backed ``LocalStore``.
"""

from __future__ import annotations

import logging

from smarthome.core.models import Device, DeviceCommand, Sensor
from smarthome.models import Config

from .store import LocalStore

logger = logging.getLogger(__name__)


class LocalBackend:
    """Backend backed by a local JSON snapshot.

    Configuration:
        data_path: Snapshot location (seeded on first boot)

    Example:
        >>> backend = LocalBackend(Config(data_path=Path("/tmp/home.json")))
        >>> await backend.connect()
        >>> devices = await backend.list_devices()
    """

    def __init__(self, config: Config) -> None:
        """Initialize local backend.

        Args:
            config: Application configuration
        """
        self.config = config
        self.store = LocalStore(config.data_path)

    @property
    def name(self) -> str:
        """Backend identifier."""
        return "local"

    async def connect(self) -> bool:
        """Load (or seed) the snapshot.

        Returns:
            True
        """
        await self.store.load()
        logger.info(f"LocalBackend ready ({self.store.path})")
        return True

    async def disconnect(self) -> None:
        logger.info("LocalBackend closed")

    async def health_check(self) -> bool:
        return self.store.loaded

    async def list_devices(self) -> list[Device]:
        return await self.store.list_devices()

    async def get_device(self, device_id: str) -> Device | None:
        return await self.store.get_device(device_id)

    async def list_devices_by_area(self, area: str) -> list[Device]:
        return await self.store.list_devices_by_area(area)

    async def list_sensors(self) -> list[Sensor]:
        return await self.store.list_sensors()

    async def get_sensor(self, sensor_id: str) -> Sensor | None:
        return await self.store.get_sensor(sensor_id)

    async def list_sensors_by_area(self, area: str) -> list[Sensor]:
        return await self.store.list_sensors_by_area(area)

    async def list_areas(self) -> list[str]:
        return await self.store.list_areas()

    async def apply_command(self, device: Device, command: DeviceCommand) -> Device | None:
        """Merge the command's target state into the stored device.

        Args:
            device: Current device
            command: Validated command

        Returns:
            Updated device, or None if it no longer exists
        """
        return await self.store.update_device_state(device.id, command.state)
