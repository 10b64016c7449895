"""Seed dataset for the local store.

Written to disk on first boot, or whenever the snapshot is missing or
unreadable: 2 lights, 1 thermostat, 1 lock, 1 fan, 3 sensors and
5 named areas. Lights and the fan start off; the door starts locked.
"""

from __future__ import annotations

from datetime import datetime, timezone

from smarthome.core.models import (
    Device,
    DeviceState,
    DeviceType,
    Sensor,
    SensorState,
    SensorType,
    SmartHomeData,
)

SEED_AREAS: list[str] = ["Living Room", "Bedroom", "Kitchen", "Bathroom", "Garage"]


def build_seed_data() -> SmartHomeData:
    """Build a fresh copy of the seed dataset.

    Sensor timestamps are taken at call time.
    """
    now = datetime.now(timezone.utc)

    devices = [
        Device(
            id="light-1",
            name="Living Room Ceiling Light",
            type=DeviceType.LIGHT,
            area="Living Room",
            state=DeviceState(power="off", brightness=0),
        ),
        Device(
            id="light-2",
            name="Bedroom Table Lamp",
            type=DeviceType.LIGHT,
            area="Bedroom",
            state=DeviceState(power="off", brightness=0),
        ),
        Device(
            id="thermostat-1",
            name="Main Thermostat",
            type=DeviceType.THERMOSTAT,
            area="Living Room",
            state=DeviceState(power="on", temperature=22),
        ),
        Device(
            id="lock-1",
            name="Front Door Lock",
            type=DeviceType.DOOR_LOCK,
            area="Living Room",
            state=DeviceState(locked=True),
        ),
        Device(
            id="fan-1",
            name="Bedroom Ceiling Fan",
            type=DeviceType.FAN,
            area="Bedroom",
            state=DeviceState(power="off", speed=0),
        ),
    ]

    sensors = [
        Sensor(
            id="temp-1",
            name="Living Room Temperature Sensor",
            type=SensorType.TEMPERATURE,
            area="Living Room",
            state=SensorState(value=22.5, unit="°C", last_updated=now),
        ),
        Sensor(
            id="humid-1",
            name="Bathroom Humidity Sensor",
            type=SensorType.HUMIDITY,
            area="Bathroom",
            state=SensorState(value=65, unit="%", last_updated=now),
        ),
        Sensor(
            id="motion-1",
            name="Garage Motion Sensor",
            type=SensorType.MOTION,
            area="Garage",
            state=SensorState(value=False, last_updated=now),
        ),
    ]

    return SmartHomeData(devices=devices, sensors=sensors, areas=list(SEED_AREAS))
