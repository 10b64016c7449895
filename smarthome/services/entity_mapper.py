"""Home Assistant entity <-> unified model mapping.

Pure functions, no I/O and no state. Entities that do not map to a
supported device or sensor type are dropped silently; a snapshot made
only of unsupported entities maps to an empty list.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from smarthome.core.models import (
    Device,
    DeviceState,
    DeviceType,
    EntityState,
    Sensor,
    SensorState,
    SensorType,
)
from smarthome.services.ha_client import brightness_from_remote

UNKNOWN_AREA = "Unknown"

SENSOR_DOMAINS = ("sensor", "binary_sensor")

# Switches are treated as simple lights
DOMAIN_DEVICE_TYPES: dict[str, DeviceType] = {
    "light": DeviceType.LIGHT,
    "switch": DeviceType.LIGHT,
    "climate": DeviceType.THERMOSTAT,
    "lock": DeviceType.DOOR_LOCK,
    "fan": DeviceType.FAN,
}

DEVICE_CLASS_SENSOR_TYPES: dict[str, SensorType] = {
    "temperature": SensorType.TEMPERATURE,
    "humidity": SensorType.HUMIDITY,
    "motion": SensorType.MOTION,
    "occupancy": SensorType.MOTION,
}


def domain_to_device_type(domain: str) -> DeviceType | None:
    """Map a Home Assistant domain to a device type, None if not a device."""
    if domain in SENSOR_DOMAINS:
        return None
    return DOMAIN_DEVICE_TYPES.get(domain)


def device_class_to_sensor_type(device_class: str | None, domain: str) -> SensorType | None:
    """Map a device class to a sensor type.

    Only the 'sensor' and 'binary_sensor' domains can produce sensors.
    """
    if domain not in SENSOR_DOMAINS or device_class is None:
        return None
    return DEVICE_CLASS_SENSOR_TYPES.get(device_class)


def parse_sensor_value(raw: str, sensor_type: SensorType) -> bool | float | str:
    """Parse a raw state string for a sensor type.

    Motion sensors become booleans ('on' is True), temperature and
    humidity become floats (0 when unparseable), everything else stays
    the raw string.
    """
    if sensor_type is SensorType.MOTION:
        return raw == "on"
    if sensor_type in (SensorType.TEMPERATURE, SensorType.HUMIDITY):
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return 0.0
        return value if math.isfinite(value) else 0.0
    return raw


def format_area_name(area_id: str) -> str:
    """Title-case an area id per underscore-separated word.

    >>> format_area_name("living_room")
    'Living Room'
    """
    return " ".join(word[:1].upper() + word[1:] for word in area_id.split("_"))


def extract_area(entity: EntityState) -> str:
    """Resolve an entity's area.

    Precedence:
        1. The ``area_id`` attribute, formatted ('living_room' -> 'Living Room')
        2. The first two words of the friendly name. This is a best-effort
           guess ('Kitchen Ceiling Light' -> 'Kitchen Ceiling'), not a
           reliable area lookup.
        3. 'Unknown'
    """
    if entity.area_id:
        return format_area_name(entity.area_id)

    words = (entity.friendly_name or "").split()
    if len(words) >= 2:
        return f"{words[0]} {words[1]}"

    return UNKNOWN_AREA


def extract_areas(entities: list[EntityState]) -> list[str]:
    """Sorted, de-duplicated area names from entities' ``area_id`` attributes."""
    return sorted({format_area_name(e.area_id) for e in entities if e.area_id})


def _base_metadata(entity: EntityState) -> dict[str, Any]:
    return {
        "source": "homeassistant",
        "domain": entity.domain,
        "raw_state": entity.state,
    }


def map_entity_to_device(entity: EntityState) -> Device | None:
    """Convert a Home Assistant entity to a Device.

    Returns:
        Device, or None if the entity's domain is not a device domain
    """
    device_type = domain_to_device_type(entity.domain)
    if device_type is None:
        return None

    attrs = entity.attributes
    state = DeviceState()

    if device_type is DeviceType.LIGHT:
        state.power = "on" if entity.is_on else "off"
        if attrs.get("brightness") is not None:
            state.brightness = brightness_from_remote(attrs["brightness"])

    elif device_type is DeviceType.THERMOSTAT:
        # Climate states are HVAC modes (heat, cool, auto, off)
        state.power = "off" if entity.state == "off" else "on"
        target = attrs.get("temperature")
        state.temperature = target if target is not None else attrs.get("current_temperature")

    elif device_type is DeviceType.DOOR_LOCK:
        state.locked = entity.state == "locked"

    elif device_type is DeviceType.FAN:
        state.power = "on" if entity.is_on else "off"
        if attrs.get("percentage") is not None:
            state.speed = attrs["percentage"]

    return Device(
        id=entity.entity_id,
        name=entity.friendly_name or entity.entity_id,
        type=device_type,
        area=extract_area(entity),
        state=state,
        metadata=_base_metadata(entity),
    )


def map_entity_to_sensor(entity: EntityState) -> Sensor | None:
    """Convert a Home Assistant entity to a Sensor.

    Returns:
        Sensor, or None for non-sensor domains and unsupported device classes
    """
    sensor_type = device_class_to_sensor_type(entity.device_class, entity.domain)
    if sensor_type is None:
        return None

    metadata = _base_metadata(entity)
    metadata["device_class"] = entity.device_class

    return Sensor(
        id=entity.entity_id,
        name=entity.friendly_name or entity.entity_id,
        type=sensor_type,
        area=extract_area(entity),
        state=SensorState(
            value=parse_sensor_value(entity.state, sensor_type),
            unit=entity.unit_of_measurement,
            last_updated=entity.last_updated or datetime.now(timezone.utc),
        ),
        metadata=metadata,
    )


def map_entities_to_devices(entities: list[EntityState]) -> list[Device]:
    """Map entities to devices, dropping everything that is not a device."""
    return [d for d in (map_entity_to_device(e) for e in entities) if d is not None]


def map_entities_to_sensors(entities: list[EntityState]) -> list[Sensor]:
    """Map entities to sensors, dropping everything that is not a sensor."""
    return [s for s in (map_entity_to_sensor(e) for e in entities) if s is not None]
