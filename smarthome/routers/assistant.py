"""Read-only device and sensor endpoints.

All responses use a ``{"success": true, ...}`` envelope. A failing
backend on a read becomes HTTP 502.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from smarthome.core.interfaces.backend import BackendError
from smarthome.routers.dependencies import get_smarthome_service
from smarthome.services.smarthome_service import SmartHomeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/assistant", tags=["assistant"])


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _bad_gateway(e: BackendError) -> HTTPException:
    logger.error(f"Backend read failed: {e}")
    return HTTPException(status_code=502, detail=str(e))


@router.get("/devices")
async def get_devices(
    area: str | None = None,
    service: SmartHomeService = Depends(get_smarthome_service),
) -> dict[str, Any]:
    """List devices, optionally restricted to one area.

    Example:
        GET /assistant/devices
        GET /assistant/devices?area=living%20room
    """
    try:
        if area:
            devices = await service.list_devices_by_area(area)
        else:
            devices = await service.list_devices()
    except BackendError as e:
        raise _bad_gateway(e) from e

    return {"success": True, "devices": [_dump(d) for d in devices]}


@router.get("/sensors")
async def get_sensors(
    area: str | None = None,
    service: SmartHomeService = Depends(get_smarthome_service),
) -> dict[str, Any]:
    """List sensors, optionally restricted to one area."""
    try:
        if area:
            sensors = await service.list_sensors_by_area(area)
        else:
            sensors = await service.list_sensors()
    except BackendError as e:
        raise _bad_gateway(e) from e

    return {"success": True, "sensors": [_dump(s) for s in sensors]}


@router.get("/areas")
async def get_areas(
    service: SmartHomeService = Depends(get_smarthome_service),
) -> dict[str, Any]:
    try:
        areas = await service.list_areas()
    except BackendError as e:
        raise _bad_gateway(e) from e

    return {"success": True, "areas": areas}


@router.get("/devices/{device_id}/status")
async def get_device_status(
    device_id: str,
    service: SmartHomeService = Depends(get_smarthome_service),
) -> dict[str, Any]:
    """Get a device and its status sentence.

    Raises:
        HTTPException: 404 if the device does not exist
    """
    try:
        result = await service.get_device_status(device_id)
    except BackendError as e:
        raise _bad_gateway(e) from e

    if result is None:
        raise HTTPException(status_code=404, detail=f"Device not found: {device_id}")

    return {"success": True, **_dump(result)}


@router.get("/sensors/{sensor_id}/status")
async def get_sensor_status(
    sensor_id: str,
    service: SmartHomeService = Depends(get_smarthome_service),
) -> dict[str, Any]:
    """Get a sensor and its reading sentence.

    Raises:
        HTTPException: 404 if the sensor does not exist
    """
    try:
        result = await service.get_sensor_status(sensor_id)
    except BackendError as e:
        raise _bad_gateway(e) from e

    if result is None:
        raise HTTPException(status_code=404, detail=f"Sensor not found: {sensor_id}")

    return {"success": True, **_dump(result)}


@router.get("/health")
async def health_check(
    service: SmartHomeService = Depends(get_smarthome_service),
) -> dict[str, Any]:
    """Service liveness plus the active backend and its health."""
    return {
        "success": True,
        "status": "Smart Home Gateway is running",
        "backend": service.backend_name,
        "backend_healthy": await service.backend.health_check(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
