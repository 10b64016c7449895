"""Home Assistant backend."""

from smarthome.adapters.homeassistant.adapter import HomeAssistantBackend
from smarthome.core.registry import BackendRegistry


def register() -> None:
    """Register the Home Assistant backend with the registry."""
    BackendRegistry.register("homeassistant", HomeAssistantBackend)


__all__ = ["HomeAssistantBackend", "register"]
