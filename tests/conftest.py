"""Pytest configuration and shared fixtures for Smart Home Gateway tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

import smarthome.security.secrets_manager as secrets_module
from smarthome.adapters.local import LocalBackend
from smarthome.core.registry import BackendRegistry
from smarthome.models import Config
from smarthome.services.smarthome_service import SmartHomeService


@pytest.fixture(autouse=True)
def reset_globals() -> Iterator[None]:
    """Reset process-wide singletons between tests."""
    secrets_module._secrets_manager = None
    BackendRegistry.reset()
    yield
    secrets_module._secrets_manager = None
    BackendRegistry.reset()


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    """Snapshot location inside a per-test temp directory."""
    return tmp_path / "data" / "smarthome.json"


@pytest.fixture
def local_config(data_path: Path) -> Config:
    """Configuration selecting the local backend.

    Returns:
        Config with Home Assistant disabled
    """
    return Config(data_path=data_path, log_level="DEBUG")


@pytest.fixture
def ha_config(data_path: Path) -> Config:
    """Configuration with Home Assistant requested and configured.

    Returns:
        Config pointing at a test Home Assistant instance
    """
    return Config(
        ha_base_url="http://test-ha:8123",
        ha_token="test_token_123",
        use_home_assistant=True,
        ha_timeout=5.0,
        data_path=data_path,
        log_level="DEBUG",
    )


@pytest.fixture
async def local_backend(local_config: Config) -> LocalBackend:
    """Connected local backend seeded with the sample home."""
    backend = LocalBackend(local_config)
    await backend.connect()
    return backend


@pytest.fixture
async def service(local_backend: LocalBackend) -> SmartHomeService:
    """Facade over a freshly seeded local backend."""
    return SmartHomeService(local_backend)


@pytest.fixture
def ha_states() -> list[dict[str, Any]]:
    """Raw ``GET /api/states`` payload covering every mapped domain.

    Returns:
        List of entity dicts as returned by Home Assistant
    """
    return [
        {
            "entity_id": "light.kitchen_ceiling",
            "state": "on",
            "attributes": {
                "friendly_name": "Kitchen Ceiling Light",
                "brightness": 128,
                "area_id": "kitchen",
            },
            "last_changed": "2026-01-01T10:00:00+00:00",
            "last_updated": "2026-01-01T10:00:00+00:00",
        },
        {
            "entity_id": "switch.living_room_lamp",
            "state": "off",
            "attributes": {
                "friendly_name": "Living Room Lamp",
                "area_id": "living_room",
            },
        },
        {
            "entity_id": "climate.hallway",
            "state": "heat",
            "attributes": {
                "friendly_name": "Hallway Thermostat",
                "temperature": 21.5,
                "current_temperature": 20.0,
                "area_id": "living_room",
            },
        },
        {
            "entity_id": "lock.front_door",
            "state": "locked",
            "attributes": {"friendly_name": "Front Door"},
        },
        {
            "entity_id": "fan.bedroom",
            "state": "on",
            "attributes": {
                "friendly_name": "Bedroom Fan",
                "percentage": 66,
                "area_id": "bedroom",
            },
        },
        {
            "entity_id": "sensor.kitchen_temperature",
            "state": "23.4",
            "attributes": {
                "friendly_name": "Kitchen Temperature",
                "device_class": "temperature",
                "unit_of_measurement": "°C",
                "area_id": "kitchen",
            },
            "last_updated": "2026-01-01T10:05:00+00:00",
        },
        {
            "entity_id": "binary_sensor.hall_motion",
            "state": "on",
            "attributes": {
                "friendly_name": "Hall Motion",
                "device_class": "motion",
            },
        },
        {
            "entity_id": "sensor.power_usage",
            "state": "431",
            "attributes": {"device_class": "power", "unit_of_measurement": "W"},
        },
        {
            "entity_id": "media_player.tv",
            "state": "playing",
            "attributes": {"friendly_name": "TV"},
        },
    ]
