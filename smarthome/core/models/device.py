"""Unified device and sensor models.

These models are the shared vocabulary of the gateway. Both backends
(local JSON store and Home Assistant) produce and consume them, so
callers never see backend-specific shapes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class DeviceType(str, Enum):
    """Controllable device categories."""

    LIGHT = "light"
    THERMOSTAT = "thermostat"
    DOOR_LOCK = "door_lock"
    WINDOW = "window"
    FAN = "fan"
    CAMERA = "camera"
    SENSOR = "sensor"


class SensorType(str, Enum):
    """Observable sensor categories."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    MOTION = "motion"
    DOOR = "door"
    SMOKE = "smoke"


class DeviceState(BaseModel):
    """Sparse device state.

    Only the fields relevant to a device's type are set. Unset fields
    stay ``None`` and are dropped on serialization.

    Attributes:
        power: 'on' or 'off'
        brightness: Light brightness percentage (0-100)
        temperature: Thermostat set point in Celsius
        locked: Door lock state
        open: Window state
        speed: Fan speed percentage (0-100)
        recording: Camera recording state
    """

    power: Literal["on", "off"] | None = None
    brightness: int | float | None = None
    temperature: int | float | None = None
    locked: bool | None = None
    open: bool | None = None
    speed: int | float | None = None
    recording: bool | None = None

    def merged(self, patch: DeviceState) -> DeviceState:
        """Return a copy with every field set in ``patch`` applied on top."""
        return self.model_copy(update=patch.model_dump(exclude_none=True))


class SensorState(BaseModel):
    """Latest sensor reading."""

    model_config = ConfigDict(populate_by_name=True)

    value: bool | int | float | str
    unit: str | None = None
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="lastUpdated",
    )


class Device(BaseModel):
    """A controllable device.

    Examples:
        >>> Device(
        ...     id="light-1",
        ...     name="Living Room Ceiling Light",
        ...     type=DeviceType.LIGHT,
        ...     area="Living Room",
        ...     state=DeviceState(power="off", brightness=0),
        ... )
    """

    id: str = Field(..., description="Unique device identifier")
    name: str = Field(..., description="Human-readable display name")
    type: DeviceType = Field(..., description="Device category, fixed at creation")
    area: str = Field(..., description="Area name the device belongs to")
    state: DeviceState = Field(default_factory=DeviceState)
    metadata: dict[str, Any] | None = None


class Sensor(BaseModel):
    """A read-only sensor."""

    id: str = Field(..., description="Unique sensor identifier")
    name: str = Field(..., description="Human-readable display name")
    type: SensorType = Field(..., description="Sensor category")
    area: str = Field(..., description="Area name the sensor belongs to")
    state: SensorState
    metadata: dict[str, Any] | None = None


class SmartHomeData(BaseModel):
    """Complete persisted dataset of the local store."""

    devices: list[Device] = Field(default_factory=list)
    sensors: list[Sensor] = Field(default_factory=list)
    areas: list[str] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize as the on-disk snapshot document."""
        return self.model_dump_json(indent=2, by_alias=True, exclude_none=True)
