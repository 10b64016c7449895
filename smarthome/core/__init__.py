"""Core abstractions for the smart home gateway.

This package contains the backend protocol, the unified models and the
backend registry. Both the local store and Home Assistant are plugged in
through these abstractions.

Modules:
    interfaces: Backend protocol and error hierarchy
    models: Device/Sensor model, commands, results, wire entity
    registry: Backend registration
"""

from smarthome.core.interfaces import SmartHomeBackend
from smarthome.core.models import (
    Device,
    DeviceCommand,
    DeviceState,
    DeviceType,
    MutationResult,
    Sensor,
    SensorType,
)

__all__ = [
    "SmartHomeBackend",
    "Device",
    "DeviceCommand",
    "DeviceState",
    "DeviceType",
    "MutationResult",
    "Sensor",
    "SensorType",
]
