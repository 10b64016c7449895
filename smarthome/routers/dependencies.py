"""Shared dependencies for API routers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from smarthome.services.smarthome_service import SmartHomeService


def get_smarthome_service(request: Request) -> SmartHomeService:
    """Dependency to get the facade created at startup.

    Args:
        request: FastAPI request object

    Returns:
        SmartHomeService stored in app state by the lifespan

    Raises:
        HTTPException: 503 if the application has not finished starting
    """
    service = getattr(request.app.state, "smarthome_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Smart home service not initialized")
    return service
