"""JSON-file-backed device/sensor store.

The whole dataset lives in memory and is written back to a single JSON
document after every successful update. Snapshot rewrites are
serialized with an asyncio lock, so at most one rewrite is in flight.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from smarthome.core.interfaces.backend import area_matches
from smarthome.core.models import Device, DeviceState, Sensor, SmartHomeData

from .fixtures import build_seed_data

logger = logging.getLogger(__name__)


class LocalStore:
    """Durable repository of devices, sensors and areas.

    Attributes:
        path: Location of the JSON snapshot

    Example:
        >>> store = LocalStore(Path("data/smarthome.json"))
        >>> await store.load()
        >>> await store.update_device_state("light-1", DeviceState(power="on"))
    """

    def __init__(self, path: Path) -> None:
        """Initialize store.

        Args:
            path: Snapshot file path (created on first save)
        """
        self.path = Path(path)
        self._data = SmartHomeData()
        self._write_lock = asyncio.Lock()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        """Load the persisted snapshot, seeding it if absent or unreadable.

        Raises:
            OSError: If the seed dataset cannot be written
        """
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            self._data = SmartHomeData.model_validate_json(text)
            logger.info(
                f"Local store loaded from {self.path}: "
                f"{len(self._data.devices)} devices, {len(self._data.sensors)} sensors"
            )
        except (OSError, ValueError) as e:
            logger.warning(f"No usable snapshot at {self.path} ({e}), seeding sample data")
            await self.reseed()
        self._loaded = True

    async def reseed(self) -> None:
        """Replace the dataset with the seed data and persist it."""
        async with self._write_lock:
            self._data = build_seed_data()
            await self._save()

    async def _save(self) -> None:
        """Rewrite the whole snapshot. Caller must hold the write lock."""
        payload = self._data.to_json()
        await asyncio.to_thread(self._write_atomic, payload)
        logger.debug(f"Snapshot written to {self.path}")

    def _write_atomic(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self.path)

    # Devices

    async def list_devices(self) -> list[Device]:
        return [d.model_copy(deep=True) for d in self._data.devices]

    async def get_device(self, device_id: str) -> Device | None:
        device = self._find_device(device_id)
        return device.model_copy(deep=True) if device else None

    async def list_devices_by_area(self, area: str) -> list[Device]:
        return [
            d.model_copy(deep=True)
            for d in self._data.devices
            if area_matches(d.area, area)
        ]

    async def update_device_state(self, device_id: str, state: DeviceState) -> Device | None:
        """Merge ``state`` into a device and persist the snapshot.

        Args:
            device_id: Device identifier
            state: Fields to merge; unset fields are left untouched

        Returns:
            Updated device, or None if the id is unknown

        Raises:
            OSError: If the snapshot cannot be written (in-memory change is rolled back)
        """
        async with self._write_lock:
            device = self._find_device(device_id)
            if device is None:
                logger.warning(f"Device not found for update: {device_id}")
                return None

            previous = device.state
            device.state = previous.merged(state)
            try:
                await self._save()
            except OSError:
                device.state = previous
                logger.error(f"Failed to persist update for {device_id}", exc_info=True)
                raise

            logger.info(
                f"Device {device_id} updated: "
                f"{state.model_dump(exclude_none=True)}"
            )
            return device.model_copy(deep=True)

    def _find_device(self, device_id: str) -> Device | None:
        return next((d for d in self._data.devices if d.id == device_id), None)

    # Sensors

    async def list_sensors(self) -> list[Sensor]:
        return [s.model_copy(deep=True) for s in self._data.sensors]

    async def get_sensor(self, sensor_id: str) -> Sensor | None:
        sensor = next((s for s in self._data.sensors if s.id == sensor_id), None)
        return sensor.model_copy(deep=True) if sensor else None

    async def list_sensors_by_area(self, area: str) -> list[Sensor]:
        return [
            s.model_copy(deep=True)
            for s in self._data.sensors
            if area_matches(s.area, area)
        ]

    # Areas

    async def list_areas(self) -> list[str]:
        return list(self._data.areas)

    async def get_all_data(self) -> SmartHomeData:
        return self._data.model_copy(deep=True)
