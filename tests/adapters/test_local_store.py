"""Tests for the JSON-file-backed local store."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from smarthome.adapters.local import SEED_AREAS, LocalStore, build_seed_data
from smarthome.core.models import DeviceState, SmartHomeData


class TestSeeding:
    """Tests for first boot and recovery."""

    @pytest.mark.asyncio
    async def test_missing_file_is_seeded(self, data_path: Path) -> None:
        """Test a missing snapshot is created from the seed data."""
        store = LocalStore(data_path)

        await store.load()

        assert store.loaded is True
        assert data_path.exists()
        assert [d.id for d in await store.list_devices()] == [
            "light-1",
            "light-2",
            "thermostat-1",
            "lock-1",
            "fan-1",
        ]
        assert [s.id for s in await store.list_sensors()] == ["temp-1", "humid-1", "motion-1"]
        assert await store.list_areas() == SEED_AREAS

    @pytest.mark.asyncio
    async def test_corrupt_file_is_reseeded(self, data_path: Path) -> None:
        """Test an unreadable snapshot is replaced with the seed data."""
        data_path.parent.mkdir(parents=True)
        data_path.write_text("{not json", encoding="utf-8")
        store = LocalStore(data_path)

        await store.load()

        assert len(await store.list_devices()) == 5
        SmartHomeData.model_validate_json(data_path.read_text(encoding="utf-8"))

    @pytest.mark.asyncio
    async def test_existing_snapshot_is_loaded(self, data_path: Path) -> None:
        """Test an existing snapshot is used as-is."""
        data = build_seed_data()
        data.devices = data.devices[:1]
        data_path.parent.mkdir(parents=True)
        data_path.write_text(data.to_json(), encoding="utf-8")
        store = LocalStore(data_path)

        await store.load()

        assert [d.id for d in await store.list_devices()] == ["light-1"]

    @pytest.mark.asyncio
    async def test_seed_file_uses_camel_case_timestamp(self, data_path: Path) -> None:
        """Test the persisted document layout."""
        store = LocalStore(data_path)
        await store.load()

        document = json.loads(data_path.read_text(encoding="utf-8"))

        assert set(document) == {"devices", "sensors", "areas"}
        assert "lastUpdated" in document["sensors"][0]["state"]
        assert document["devices"][3]["state"] == {"locked": True}


class TestReads:
    """Tests for lookups and area filtering."""

    @pytest.fixture
    async def store(self, data_path: Path) -> LocalStore:
        store = LocalStore(data_path)
        await store.load()
        return store

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, store: LocalStore) -> None:
        """Test unknown ids return None."""
        assert await store.get_device("nope") is None
        assert await store.get_sensor("nope") is None

    @pytest.mark.asyncio
    async def test_area_match_is_case_insensitive(self, store: LocalStore) -> None:
        """Test area filtering ignores case."""
        lower = await store.list_devices_by_area("living room")
        exact = await store.list_devices_by_area("Living Room")

        assert [d.id for d in lower] == [d.id for d in exact]
        assert [d.id for d in exact] == ["light-1", "thermostat-1", "lock-1"]
        assert [s.id for s in await store.list_sensors_by_area("GARAGE")] == ["motion-1"]

    @pytest.mark.asyncio
    async def test_unknown_area_is_empty(self, store: LocalStore) -> None:
        """Test an unknown area yields no devices."""
        assert await store.list_devices_by_area("Attic") == []

    @pytest.mark.asyncio
    async def test_returned_devices_are_copies(self, store: LocalStore) -> None:
        """Test callers cannot mutate the stored state."""
        device = await store.get_device("light-1")
        device.state.power = "on"

        assert (await store.get_device("light-1")).state.power == "off"


class TestUpdates:
    """Tests for update_device_state."""

    @pytest.fixture
    async def store(self, data_path: Path) -> LocalStore:
        store = LocalStore(data_path)
        await store.load()
        return store

    @pytest.mark.asyncio
    async def test_update_merges_and_persists(self, store: LocalStore, data_path: Path) -> None:
        """Test updates merge into the state and survive a reload."""
        updated = await store.update_device_state("light-1", DeviceState(power="on"))

        assert updated.state.power == "on"
        assert updated.state.brightness == 0

        reloaded = LocalStore(data_path)
        await reloaded.load()
        assert (await reloaded.get_device("light-1")).state.power == "on"

    @pytest.mark.asyncio
    async def test_update_unknown_device(self, store: LocalStore, data_path: Path) -> None:
        """Test updating an unknown id changes nothing."""
        before = data_path.read_text(encoding="utf-8")

        assert await store.update_device_state("ghost", DeviceState(power="on")) is None
        assert data_path.read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_write_failure_rolls_back(self, store: LocalStore) -> None:
        """Test a failed write propagates and leaves memory unchanged."""
        with patch.object(store, "_write_atomic", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                await store.update_device_state("light-1", DeviceState(power="on"))

        assert (await store.get_device("light-1")).state.power == "off"

    @pytest.mark.asyncio
    async def test_concurrent_updates_all_persist(self, store: LocalStore, data_path: Path) -> None:
        """Test concurrent updates to different devices are all written."""
        await asyncio.gather(
            store.update_device_state("light-1", DeviceState(power="on", brightness=10)),
            store.update_device_state("light-2", DeviceState(power="on", brightness=20)),
            store.update_device_state("fan-1", DeviceState(power="on", speed=30)),
        )

        persisted = SmartHomeData.model_validate_json(data_path.read_text(encoding="utf-8"))
        states = {d.id: d.state for d in persisted.devices}
        assert states["light-1"].brightness == 10
        assert states["light-2"].brightness == 20
        assert states["fan-1"].speed == 30

    @pytest.mark.asyncio
    async def test_no_temp_file_left_behind(self, store: LocalStore, data_path: Path) -> None:
        """Test the atomic write cleans up its temp file."""
        await store.update_device_state("lock-1", DeviceState(locked=False))

        assert list(data_path.parent.iterdir()) == [data_path]

    @pytest.mark.asyncio
    async def test_get_all_data_is_a_copy(self, store: LocalStore) -> None:
        """Test the full dataset export is detached from the store."""
        data = await store.get_all_data()
        data.devices.clear()

        assert len(data.sensors) == 3
        assert len(await store.list_devices()) == 5
