"""Backend-agnostic device command model.

A ``DeviceCommand`` is produced by the facade after validation,
clamping and derived defaults have been applied. Backends only have to
carry it out: the local adapter merges ``state`` into the stored
device, the Home Assistant adapter translates it into a service call.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from smarthome.core.models.device import DeviceState

ActionType = Literal[
    "turn_on",
    "turn_off",
    "set_brightness",
    "set_temperature",
    "lock",
    "unlock",
    "set_fan_speed",
]


class DeviceCommand(BaseModel):
    """Validated state change for a single device.

    Attributes:
        action_type: The operation requested by the caller
        device_id: Target device identifier
        state: Target state fields, already clamped

    Examples:
        >>> DeviceCommand(
        ...     action_type="set_brightness",
        ...     device_id="light-1",
        ...     state=DeviceState(brightness=40, power="on"),
        ... )
    """

    action_type: ActionType = Field(..., description="Type of action to perform")

    device_id: str = Field(..., description="Target device identifier")

    state: DeviceState = Field(
        default_factory=DeviceState,
        description="State fields to merge into the device",
    )
