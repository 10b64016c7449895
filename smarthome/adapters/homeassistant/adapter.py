"""Home Assistant backend adapter.

Reads are recomputed on every call from the current Home Assistant
snapshot. A command is issued as a service call, after which the
entity is re-fetched and re-mapped, so the returned device reflects
Home Assistant's own post-change state.
"""

from __future__ import annotations

import logging

from smarthome.core.interfaces.backend import BackendError, EntityNotFoundError, area_matches
from smarthome.core.models import Device, DeviceCommand, DeviceType, Sensor
from smarthome.models import Config
from smarthome.services import entity_mapper
from smarthome.services.ha_client import HomeAssistantClient, entity_domain

logger = logging.getLogger(__name__)


class HomeAssistantBackend:
    """Backend that sources devices and sensors from Home Assistant.

    Configuration:
        ha_base_url: Home Assistant base URL
        ha_token: Long-lived access token
        ha_timeout: Per-request timeout in seconds

    Example:
        >>> backend = HomeAssistantBackend(config)
        >>> await backend.connect()
        >>> lights = await backend.list_devices_by_area("Kitchen")
    """

    def __init__(self, config: Config, client: HomeAssistantClient | None = None) -> None:
        """Initialize Home Assistant backend.

        Args:
            config: Application configuration
            client: Optional pre-built client (used by tests)
        """
        self.config = config
        self.client = client or HomeAssistantClient(config)

    @property
    def name(self) -> str:
        """Backend identifier."""
        return "homeassistant"

    async def connect(self) -> bool:
        """Test the connection.

        A failed test is logged and reported as False; the backend stays
        selected and later calls surface their own errors.
        """
        try:
            connected = await self.client.test_connection()
        except BackendError as e:
            logger.error(f"Failed to connect to Home Assistant: {e}")
            return False
        return connected

    async def disconnect(self) -> None:
        logger.info("HomeAssistantBackend closed")

    async def health_check(self) -> bool:
        try:
            return await self.client.test_connection()
        except BackendError as e:
            logger.warning(f"Home Assistant health check failed: {e}")
            return False

    async def list_devices(self) -> list[Device]:
        states = await self.client.get_states()
        return entity_mapper.map_entities_to_devices(states)

    async def get_device(self, device_id: str) -> Device | None:
        try:
            entity = await self.client.get_state(device_id)
        except EntityNotFoundError:
            return None
        return entity_mapper.map_entity_to_device(entity)

    async def list_devices_by_area(self, area: str) -> list[Device]:
        return [d for d in await self.list_devices() if area_matches(d.area, area)]

    async def list_sensors(self) -> list[Sensor]:
        states = await self.client.get_states()
        return entity_mapper.map_entities_to_sensors(states)

    async def get_sensor(self, sensor_id: str) -> Sensor | None:
        try:
            entity = await self.client.get_state(sensor_id)
        except EntityNotFoundError:
            return None
        return entity_mapper.map_entity_to_sensor(entity)

    async def list_sensors_by_area(self, area: str) -> list[Sensor]:
        return [s for s in await self.list_sensors() if area_matches(s.area, area)]

    async def list_areas(self) -> list[str]:
        states = await self.client.get_states()
        return entity_mapper.extract_areas(states)

    async def apply_command(self, device: Device, command: DeviceCommand) -> Device | None:
        """Issue the remote command, then re-fetch and re-map the entity.

        Raises:
            BackendError: If either the command or the re-fetch fails
        """
        await self._dispatch(device, command)
        entity = await self.client.get_state(device.id)
        return entity_mapper.map_entity_to_device(entity)

    async def _dispatch(self, device: Device, command: DeviceCommand) -> None:
        entity_id = device.id
        target = command.state
        action = command.action_type

        if action == "turn_on":
            if device.type is DeviceType.LIGHT and target.brightness is not None:
                await self.client.turn_on(entity_id, brightness=target.brightness)
            elif device.type is DeviceType.FAN and target.speed is not None:
                await self.client.turn_on(entity_id, percentage=target.speed)
            else:
                await self.client.turn_on(entity_id)

        elif action == "turn_off":
            await self.client.turn_off(entity_id)

        elif action == "set_brightness":
            if entity_domain(entity_id) != "light":
                # Switches have no brightness, only on/off
                if target.power == "on":
                    await self.client.turn_on(entity_id)
                else:
                    await self.client.turn_off(entity_id)
            else:
                await self.client.set_brightness(entity_id, target.brightness or 0)

        elif action == "set_temperature":
            await self.client.set_temperature(entity_id, target.temperature)

        elif action == "lock":
            await self.client.lock(entity_id)

        elif action == "unlock":
            await self.client.unlock(entity_id)

        elif action == "set_fan_speed":
            await self.client.set_fan_speed(entity_id, target.speed or 0)
