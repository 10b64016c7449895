"""Backend-agnostic models for the smart home gateway.

This module defines the unified device/sensor vocabulary, the command
passed to backends, the facade's result types, and the Home Assistant
wire model used by the mapper.
"""

from smarthome.core.models.command import DeviceCommand
from smarthome.core.models.device import (
    Device,
    DeviceState,
    DeviceType,
    Sensor,
    SensorState,
    SensorType,
    SmartHomeData,
)
from smarthome.core.models.entity import EntityState
from smarthome.core.models.result import (
    DeviceStatus,
    MutationResult,
    MutationStatus,
    SensorStatus,
)

__all__ = [
    "Device",
    "DeviceCommand",
    "DeviceState",
    "DeviceStatus",
    "DeviceType",
    "EntityState",
    "MutationResult",
    "MutationStatus",
    "Sensor",
    "SensorState",
    "SensorStatus",
    "SensorType",
    "SmartHomeData",
]
