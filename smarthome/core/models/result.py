"""Facade result models.

``MutationResult`` tags the outcome of a mutator so callers can tell
"no such device" from "wrong device type" from "backend failed"
without reading logs. Every non-ok outcome carries ``device=None``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from smarthome.core.models.device import Device, Sensor


class MutationStatus(str, Enum):
    """Outcome of a device mutation."""

    OK = "ok"
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"
    BACKEND_ERROR = "backend_error"


class MutationResult(BaseModel):
    """Result of a facade mutator.

    Attributes:
        status: Outcome tag
        device_id: The device that was targeted
        device: Authoritative post-mutation device (only when status is ok)
        error: Human-readable cause for non-ok outcomes

    Examples:
        >>> result = await service.set_brightness("light-1", 40)
        >>> if result.ok:
        ...     print(result.device.state.brightness)
    """

    status: MutationStatus
    device_id: str
    device: Device | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the mutation was applied."""
        return self.status is MutationStatus.OK

    @classmethod
    def success(cls, device: Device) -> MutationResult:
        return cls(status=MutationStatus.OK, device_id=device.id, device=device)

    @classmethod
    def not_found(cls, device_id: str) -> MutationResult:
        return cls(
            status=MutationStatus.NOT_FOUND,
            device_id=device_id,
            error=f"Device not found: {device_id}",
        )

    @classmethod
    def type_mismatch(cls, device: Device, action: str) -> MutationResult:
        return cls(
            status=MutationStatus.TYPE_MISMATCH,
            device_id=device.id,
            error=f"{action} is not supported for {device.type.value} devices",
        )

    @classmethod
    def backend_error(cls, device_id: str, cause: Exception) -> MutationResult:
        return cls(
            status=MutationStatus.BACKEND_ERROR,
            device_id=device_id,
            error=str(cause),
        )


class DeviceStatus(BaseModel):
    """Device together with its natural-language status sentence."""

    device: Device
    status: str = Field(..., description="e.g. 'Desk Lamp in Office is off'")


class SensorStatus(BaseModel):
    """Sensor together with its natural-language reading."""

    sensor: Sensor
    status: str = Field(..., description="e.g. 'Humidity in Bathroom: 65%'")
