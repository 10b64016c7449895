"""Unified smart home facade.

The single entry point used by the rest of the system (HTTP routes,
agent tools). It validates targets, clamps inputs, applies derived
defaults and then hands a ``DeviceCommand`` to whichever backend was
selected at startup. The rules below hold for both backends:

- brightness and speed are clamped to [0, 100]
- thermostat temperature is clamped to [10, 35] °C
- turning on a light at brightness 0 sets brightness 100
- turning on a fan at speed 0 sets speed 50
- a positive brightness/speed sets power on, 0 sets power off
"""

from __future__ import annotations

import logging

from smarthome.core.interfaces.backend import BackendError, SmartHomeBackend
from smarthome.core.models import (
    Device,
    DeviceCommand,
    DeviceState,
    DeviceStatus,
    DeviceType,
    MutationResult,
    Sensor,
    SensorStatus,
)
from smarthome.core.models.command import ActionType

logger = logging.getLogger(__name__)

MIN_LEVEL = 0
MAX_LEVEL = 100
MIN_TEMPERATURE = 10
MAX_TEMPERATURE = 35
DEFAULT_ON_BRIGHTNESS = 100
DEFAULT_ON_SPEED = 50

POWER_TYPES = frozenset(
    {DeviceType.LIGHT, DeviceType.FAN, DeviceType.THERMOSTAT, DeviceType.CAMERA}
)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]."""
    return max(low, min(high, value))


def format_value(value: object) -> str:
    """Render a state value for a status sentence (22.0 -> '22', False -> 'false')."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def describe_device(device: Device) -> str:
    """Compose the natural-language status of a device."""
    state = device.state
    prefix = f"{device.name} in {device.area} is "

    if device.type is DeviceType.LIGHT:
        if state.power != "on":
            return prefix + "off"
        if state.brightness is None:
            return prefix + "on"
        return prefix + f"on at {format_value(state.brightness)}% brightness"
    if device.type is DeviceType.THERMOSTAT:
        if state.temperature is None:
            return prefix + (state.power or "unknown")
        return prefix + f"set to {format_value(state.temperature)}°C"
    if device.type is DeviceType.DOOR_LOCK:
        return prefix + ("locked" if state.locked else "unlocked")
    if device.type is DeviceType.FAN:
        if state.power != "on":
            return prefix + "off"
        if state.speed is None:
            return prefix + "on"
        return prefix + f"on at {format_value(state.speed)}% speed"
    return prefix + (state.power or "unknown")


def describe_sensor(sensor: Sensor) -> str:
    """Compose the natural-language reading of a sensor."""
    unit = sensor.state.unit or ""
    return f"{sensor.name} in {sensor.area}: {format_value(sensor.state.value)}{unit}"


class SmartHomeService:
    """Facade over the active smart home backend.

    Mutators never raise for a missing device, a wrong device type, or
    a backend failure; they return a ``MutationResult`` tagged with the
    cause. Reads propagate ``BackendError``.

    Example:
        >>> service = SmartHomeService(backend)
        >>> result = await service.set_fan_speed("fan-1", 150)
        >>> result.device.state.speed
        100
    """

    def __init__(self, backend: SmartHomeBackend) -> None:
        """Initialize facade.

        Args:
            backend: Backend chosen at startup
        """
        self.backend = backend

    @property
    def backend_name(self) -> str:
        return self.backend.name

    # Reads

    async def list_devices(self) -> list[Device]:
        return await self.backend.list_devices()

    async def list_devices_by_area(self, area: str) -> list[Device]:
        return await self.backend.list_devices_by_area(area)

    async def list_sensors(self) -> list[Sensor]:
        return await self.backend.list_sensors()

    async def list_sensors_by_area(self, area: str) -> list[Sensor]:
        return await self.backend.list_sensors_by_area(area)

    async def list_areas(self) -> list[str]:
        return await self.backend.list_areas()

    async def get_device(self, device_id: str) -> Device | None:
        return await self.backend.get_device(device_id)

    async def get_sensor(self, sensor_id: str) -> Sensor | None:
        return await self.backend.get_sensor(sensor_id)

    async def get_device_status(self, device_id: str) -> DeviceStatus | None:
        """Get a device with a natural-language status sentence.

        Returns:
            DeviceStatus, or None if the device does not exist
        """
        device = await self.backend.get_device(device_id)
        if device is None:
            return None
        return DeviceStatus(device=device, status=describe_device(device))

    async def get_sensor_status(self, sensor_id: str) -> SensorStatus | None:
        """Get a sensor with its reading as '<name> in <area>: <value><unit>'.

        Returns:
            SensorStatus, or None if the sensor does not exist
        """
        sensor = await self.backend.get_sensor(sensor_id)
        if sensor is None:
            return None
        return SensorStatus(sensor=sensor, status=describe_sensor(sensor))

    # Mutators

    async def turn_on(self, device_id: str) -> MutationResult:
        """Turn a device on, filling in default brightness/speed."""

        def build(device: Device) -> DeviceState:
            target = DeviceState(power="on")
            if device.type is DeviceType.LIGHT and device.state.brightness == 0:
                target.brightness = DEFAULT_ON_BRIGHTNESS
            if device.type is DeviceType.FAN and device.state.speed == 0:
                target.speed = DEFAULT_ON_SPEED
            return target

        return await self._mutate(device_id, "turn_on", POWER_TYPES, build)

    async def turn_off(self, device_id: str) -> MutationResult:
        return await self._mutate(
            device_id, "turn_off", POWER_TYPES, lambda _: DeviceState(power="off")
        )

    async def set_brightness(self, device_id: str, brightness: float) -> MutationResult:
        """Set light brightness (clamped to 0-100); 0 also powers it off."""
        level = clamp(brightness, MIN_LEVEL, MAX_LEVEL)
        return await self._mutate(
            device_id,
            "set_brightness",
            {DeviceType.LIGHT},
            lambda _: DeviceState(brightness=level, power="on" if level > 0 else "off"),
        )

    async def set_temperature(self, device_id: str, temperature: float) -> MutationResult:
        """Set a thermostat's target temperature (clamped to 10-35 °C)."""
        target = clamp(temperature, MIN_TEMPERATURE, MAX_TEMPERATURE)
        return await self._mutate(
            device_id,
            "set_temperature",
            {DeviceType.THERMOSTAT},
            lambda _: DeviceState(temperature=target),
        )

    async def lock(self, device_id: str) -> MutationResult:
        return await self._mutate(
            device_id, "lock", {DeviceType.DOOR_LOCK}, lambda _: DeviceState(locked=True)
        )

    async def unlock(self, device_id: str) -> MutationResult:
        return await self._mutate(
            device_id, "unlock", {DeviceType.DOOR_LOCK}, lambda _: DeviceState(locked=False)
        )

    async def set_fan_speed(self, device_id: str, speed: float) -> MutationResult:
        """Set fan speed (clamped to 0-100); 0 also powers it off."""
        level = clamp(speed, MIN_LEVEL, MAX_LEVEL)
        return await self._mutate(
            device_id,
            "set_fan_speed",
            {DeviceType.FAN},
            lambda _: DeviceState(speed=level, power="on" if level > 0 else "off"),
        )

    async def _mutate(
        self,
        device_id: str,
        action: ActionType,
        allowed_types: set[DeviceType] | frozenset[DeviceType],
        build_state,
    ) -> MutationResult:
        """Validate the target, build the command and apply it.

        Args:
            device_id: Target device
            action: Requested operation
            allowed_types: Device types the operation applies to
            build_state: Callable(device) -> DeviceState with the target fields
        """
        try:
            device = await self.backend.get_device(device_id)
            if device is None:
                logger.info(f"{action}: device not found: {device_id}")
                return MutationResult.not_found(device_id)

            if device.type not in allowed_types:
                logger.info(f"{action}: {device_id} is a {device.type.value}, ignoring")
                return MutationResult.type_mismatch(device, action)

            command = DeviceCommand(
                action_type=action,
                device_id=device_id,
                state=build_state(device),
            )
            updated = await self.backend.apply_command(device, command)

        except BackendError as e:
            logger.error(f"{action} on {device_id} failed on backend '{self.backend_name}': {e}")
            return MutationResult.backend_error(device_id, e)

        if updated is None:
            logger.warning(f"{action}: {device_id} disappeared during update")
            return MutationResult.not_found(device_id)

        return MutationResult.success(updated)
