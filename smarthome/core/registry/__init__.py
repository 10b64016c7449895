"""Backend registration."""

from smarthome.core.registry.backend_registry import BackendRegistry

__all__ = ["BackendRegistry"]
