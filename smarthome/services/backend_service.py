"""Backend selection and lifecycle.

The backend is chosen exactly once, at startup, from configuration.
Home Assistant is used only when it is both requested and fully
configured (URL and token); otherwise the local store is used.
"""

from __future__ import annotations

import logging

from smarthome.adapters import homeassistant, local
from smarthome.core.registry import BackendRegistry
from smarthome.models import Config
from smarthome.services.smarthome_service import SmartHomeService

logger = logging.getLogger(__name__)

LOCAL_BACKEND = "local"
HOME_ASSISTANT_BACKEND = "homeassistant"


def select_backend_name(config: Config) -> str:
    """Decide which backend to run.

    Args:
        config: Application configuration

    Returns:
        'homeassistant' or 'local'
    """
    if config.use_home_assistant and config.home_assistant_enabled:
        return HOME_ASSISTANT_BACKEND

    if config.use_home_assistant:
        logger.warning(
            "USE_HOME_ASSISTANT is set but HOME_ASSISTANT_URL or token is missing, "
            "falling back to local backend"
        )
    return LOCAL_BACKEND


async def initialize_service(config: Config) -> SmartHomeService:
    """Create, connect and wrap the configured backend.

    This function should be called during application startup.

    Args:
        config: Application configuration

    Returns:
        Facade over the connected backend

    Raises:
        OSError: If the local store cannot write its seed snapshot
    """
    local.register()
    homeassistant.register()

    name = select_backend_name(config)
    backend = BackendRegistry.create(name, config)

    if await backend.connect():
        logger.info(f"Backend '{name}' connected")
    else:
        # Keep the selection; calls will surface their own errors
        logger.warning(f"Backend '{name}' failed its connection test, continuing degraded")

    return SmartHomeService(backend)


async def shutdown_service(service: SmartHomeService) -> None:
    """Disconnect the active backend.

    Should be called during application shutdown.
    """
    await service.backend.disconnect()
    logger.info("Backend shutdown complete")
