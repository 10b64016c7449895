"""Tests for unified models and configuration."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from smarthome.core.models import (
    Device,
    DeviceState,
    DeviceType,
    EntityState,
    MutationResult,
    MutationStatus,
    Sensor,
    SensorState,
    SensorType,
    SmartHomeData,
)
from smarthome.models import Config


class TestDeviceState:
    """Tests for the sparse DeviceState."""

    def test_merged_only_applies_set_fields(self) -> None:
        """Test that merge keeps fields the patch leaves unset."""
        current = DeviceState(power="off", brightness=0)

        merged = current.merged(DeviceState(power="on"))

        assert merged.power == "on"
        assert merged.brightness == 0

    def test_merged_does_not_mutate_original(self) -> None:
        """Test that merge returns a new object."""
        current = DeviceState(power="off")

        current.merged(DeviceState(power="on"))

        assert current.power == "off"

    def test_invalid_power_rejected(self) -> None:
        """Test that power only accepts on/off."""
        with pytest.raises(ValidationError):
            DeviceState(power="dim")


class TestSmartHomeData:
    """Tests for snapshot serialization."""

    def test_to_json_omits_unset_fields(self) -> None:
        """Test that absent state fields are not written as null."""
        data = SmartHomeData(
            devices=[
                Device(
                    id="lock-1",
                    name="Front Door Lock",
                    type=DeviceType.DOOR_LOCK,
                    area="Living Room",
                    state=DeviceState(locked=True),
                )
            ]
        )

        document = json.loads(data.to_json())

        assert document["devices"][0]["state"] == {"locked": True}
        assert "metadata" not in document["devices"][0]

    def test_sensor_timestamp_uses_camel_case_key(self) -> None:
        """Test that the persisted sensor timestamp key is lastUpdated."""
        stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
        data = SmartHomeData(
            sensors=[
                Sensor(
                    id="temp-1",
                    name="Temp",
                    type=SensorType.TEMPERATURE,
                    area="Kitchen",
                    state=SensorState(value=21.5, unit="°C", last_updated=stamp),
                )
            ]
        )

        document = json.loads(data.to_json())
        restored = SmartHomeData.model_validate_json(data.to_json())

        assert "lastUpdated" in document["sensors"][0]["state"]
        assert restored.sensors[0].state.last_updated == stamp


class TestEntityState:
    """Tests for the Home Assistant wire model."""

    def test_domain_extracted_from_entity_id(self) -> None:
        """Test domain is derived from the prefix before the first dot."""
        entity = EntityState(entity_id="binary_sensor.hall.motion", state="on")

        assert entity.domain == "binary_sensor"

    def test_attribute_accessors(self) -> None:
        """Test convenience accessors read attributes."""
        entity = EntityState(
            entity_id="sensor.kitchen_temperature",
            state="21",
            attributes={
                "friendly_name": "Kitchen Temperature",
                "area_id": "kitchen",
                "device_class": "temperature",
                "unit_of_measurement": "°C",
            },
        )

        assert entity.friendly_name == "Kitchen Temperature"
        assert entity.area_id == "kitchen"
        assert entity.device_class == "temperature"
        assert entity.unit_of_measurement == "°C"
        assert entity.is_on is False


class TestMutationResult:
    """Tests for tagged mutation results."""

    def test_not_found_carries_no_device(self) -> None:
        """Test not_found result."""
        result = MutationResult.not_found("ghost-1")

        assert result.status is MutationStatus.NOT_FOUND
        assert result.device is None
        assert result.ok is False
        assert "ghost-1" in result.error

    def test_type_mismatch_names_action_and_type(self) -> None:
        """Test type_mismatch result message."""
        device = Device(id="lock-1", name="Lock", type=DeviceType.DOOR_LOCK, area="Hall")

        result = MutationResult.type_mismatch(device, "set_brightness")

        assert result.device is None
        assert result.error == "set_brightness is not supported for door_lock devices"


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self) -> None:
        """Test default values select the local backend."""
        config = Config()

        assert config.use_home_assistant is False
        assert config.home_assistant_enabled is False
        assert config.ha_timeout == 10.0
        assert config.data_path == Path("data") / "smarthome.json"

    def test_base_url_trailing_slash_stripped(self) -> None:
        """Test base URL normalization."""
        config = Config(ha_base_url="http://ha:8123/")

        assert config.ha_base_url == "http://ha:8123"

    def test_enabled_requires_url_and_token(self) -> None:
        """Test Home Assistant counts as configured only with both values."""
        assert Config(ha_base_url="http://ha:8123").home_assistant_enabled is False
        assert Config(ha_token="abc").home_assistant_enabled is False
        assert Config(ha_base_url="http://ha:8123", ha_token="abc").home_assistant_enabled

    def test_timeout_must_be_positive(self) -> None:
        """Test timeout validation."""
        with pytest.raises(ValidationError):
            Config(ha_timeout=0)

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test configuration is read from environment variables."""
        monkeypatch.setenv("HOME_ASSISTANT_URL", "http://ha.local:8123/")
        monkeypatch.setenv("HOME_ASSISTANT_TOKEN", "env_token")
        monkeypatch.setenv("USE_HOME_ASSISTANT", "TRUE")
        monkeypatch.setenv("HA_TIMEOUT", "3.5")
        monkeypatch.setenv("SMARTHOME_DATA_PATH", str(tmp_path / "home.json"))
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = Config.from_env()

        assert config.ha_base_url == "http://ha.local:8123"
        assert config.ha_token == "env_token"
        assert config.use_home_assistant is True
        assert config.ha_timeout == 3.5
        assert config.data_path == tmp_path / "home.json"
        assert config.log_level == "DEBUG"

    def test_from_env_without_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing token is not an error."""
        monkeypatch.delenv("HOME_ASSISTANT_TOKEN", raising=False)
        monkeypatch.delenv("USE_HOME_ASSISTANT", raising=False)

        config = Config.from_env()

        assert config.ha_token == ""
        assert config.use_home_assistant is False
