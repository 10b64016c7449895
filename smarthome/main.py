"""Smart Home Gateway FastAPI application.

Main entry point. Selects the device backend at startup and exposes the
unified device/sensor API.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pythonjsonlogger import jsonlogger

from smarthome import __version__
from smarthome.models import Config
from smarthome.routers import assistant
from smarthome.security.secrets_manager import mask_secret
from smarthome.services.backend_service import initialize_service, shutdown_service

_LOG_HANDLER_NAME = "smarthome-json"


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structured JSON logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    formatter = jsonlogger.JsonFormatter(  # type: ignore[attr-defined]
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.set_name(_LOG_HANDLER_NAME)

    # Replace the handler from a previous startup instead of stacking them
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == _LOG_HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    # Startup
    config = Config.from_env()
    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    logger.info("Smart Home Gateway starting up")
    logger.info(f"Home Assistant requested: {config.use_home_assistant}")
    if config.home_assistant_enabled:
        logger.info(f"Home Assistant URL: {config.ha_base_url}")
        logger.info(f"Home Assistant token: {mask_secret(config.ha_token)}")
    logger.info(f"Local data path: {config.data_path}")

    service = await initialize_service(config)
    app.state.smarthome_service = service
    logger.info(f"Active backend: {service.backend_name}")

    yield

    # Shutdown
    logger.info("Smart Home Gateway shutting down")
    await shutdown_service(service)


app = FastAPI(
    title="Smart Home Gateway",
    description="Unified device and sensor API over a local store or Home Assistant",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(assistant.router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message with API info
    """
    return {
        "message": "Smart Home Gateway",
        "version": __version__,
        "docs": "/docs",
    }
