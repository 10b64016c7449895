"""Home Assistant REST API client.

Stateless wrapper around the Home Assistant REST surface (state queries
and service calls). Brightness is 0-255 on the wire; this module owns
the 0-100 <-> 0-255 conversion so no other component sees the 255 scale.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx
from pydantic import ValidationError

from smarthome.core.interfaces.backend import (
    BackendAuthenticationError,
    BackendConnectionError,
    BackendError,
    BackendTimeoutError,
    EntityNotFoundError,
)
from smarthome.core.models import EntityState
from smarthome.models import Config

logger = logging.getLogger(__name__)

BACKEND_NAME = "homeassistant"
API_RUNNING_MESSAGE = "API running."


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def brightness_to_remote(pct: float) -> int:
    """Convert a 0-100 brightness percentage to Home Assistant's 0-255 scale."""
    return _round_half_up(pct / 100 * 255)


def brightness_from_remote(raw: float) -> int:
    """Convert a 0-255 Home Assistant brightness to a 0-100 percentage."""
    return _round_half_up(raw / 255 * 100)


def entity_domain(entity_id: str) -> str:
    """Domain prefix of an entity id ('light.kitchen' -> 'light')."""
    return entity_id.split(".", 1)[0]


class HomeAssistantClient:
    """Client for the Home Assistant REST API.

    Every call is a single request/response with a fixed timeout.
    Failures are logged and raised as ``BackendError`` subclasses.
    """

    def __init__(
        self,
        config: Config,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Home Assistant client.

        Args:
            config: Application configuration
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = config.ha_base_url
        self.token = config.ha_token
        self.timeout = config.ha_timeout
        self._transport = transport
        self._connected = False

        if not self.is_enabled():
            logger.warning("Home Assistant URL or token not configured")

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/api"

    def is_enabled(self) -> bool:
        """True only if both the URL and the token are configured."""
        return bool(self.base_url and self.token)

    def get_connection_status(self) -> bool:
        """Result of the most recent connection test."""
        return self._connected

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        entity_id: str | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path below /api (e.g. '/states')
            json: Optional JSON body
            entity_id: Entity being looked up, turns a 404 into EntityNotFoundError

        Raises:
            BackendError: On timeout, transport failure, non-2xx or bad JSON
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.api_url,
                headers=self._get_headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling Home Assistant {method} {path} (>{self.timeout}s)")
            raise BackendTimeoutError(
                f"Request timed out after {self.timeout}s: {method} {path}",
                backend=BACKEND_NAME,
            ) from e

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Home Assistant {method} {path} returned HTTP {status}")
            if status == 404 and entity_id is not None:
                raise EntityNotFoundError(entity_id, backend=BACKEND_NAME) from e
            if status in (401, 403):
                raise BackendAuthenticationError(
                    f"Authentication failed (HTTP {status})",
                    backend=BACKEND_NAME,
                    status_code=status,
                ) from e
            raise BackendError(
                f"HTTP {status} from {method} {path}",
                backend=BACKEND_NAME,
                status_code=status,
            ) from e

        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Home Assistant: {type(e).__name__}: {e}")
            raise BackendConnectionError(
                f"{type(e).__name__}: {e}",
                backend=BACKEND_NAME,
            ) from e

        except ValueError as e:
            logger.error(f"Invalid JSON from Home Assistant {method} {path}: {e}")
            raise BackendError(f"Invalid JSON response: {e}", backend=BACKEND_NAME) from e

    async def test_connection(self) -> bool:
        """Check the API liveness endpoint.

        Returns:
            True if Home Assistant answered 'API running.'

        Raises:
            BackendError: If the request itself failed
        """
        try:
            data = await self._request("GET", "/")
        except BackendError:
            self._connected = False
            raise

        self._connected = isinstance(data, dict) and data.get("message") == API_RUNNING_MESSAGE
        if self._connected:
            logger.info("Successfully connected to Home Assistant")
        else:
            logger.warning(f"Unexpected liveness response from Home Assistant: {data}")
        return self._connected

    async def get_config(self) -> dict[str, Any]:
        """Get Home Assistant configuration (location, version, components)."""
        return await self._request("GET", "/config")

    async def get_services(self) -> list[dict[str, Any]]:
        """Get all available service domains and their services."""
        return await self._request("GET", "/services")

    async def get_states(self) -> list[EntityState]:
        """Get all entity states."""
        data = await self._request("GET", "/states")
        try:
            return [EntityState.model_validate(item) for item in data]
        except (TypeError, ValidationError) as e:
            logger.error(f"Malformed states payload from Home Assistant: {e}")
            raise BackendError(f"Malformed states payload: {e}", backend=BACKEND_NAME) from e

    async def get_state(self, entity_id: str) -> EntityState:
        """Get the state of one entity.

        Raises:
            EntityNotFoundError: If Home Assistant does not know the entity
        """
        data = await self._request("GET", f"/states/{entity_id}", entity_id=entity_id)
        try:
            return EntityState.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed state payload for {entity_id}: {e}")
            raise BackendError(f"Malformed state payload: {e}", backend=BACKEND_NAME) from e

    async def get_entities_by_domain(self, domain: str) -> list[EntityState]:
        """Get all entities of one domain (e.g. 'light', 'sensor')."""
        states = await self.get_states()
        return [s for s in states if s.entity_id.startswith(f"{domain}.")]

    async def call_service(
        self,
        domain: str,
        service: str,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Call a Home Assistant service.

        Args:
            domain: Service domain (light, climate, lock, fan, ...)
            service: Service name (turn_on, set_temperature, ...)
            data: Service payload, normally including entity_id

        Returns:
            Decoded response body (usually the list of changed states)
        """
        payload = data or {}
        result = await self._request("POST", f"/services/{domain}/{service}", json=payload)
        logger.info(
            f"Called service {domain}.{service} for "
            f"{payload.get('entity_id', 'multiple entities')}"
        )
        return result

    async def turn_on(
        self,
        entity_id: str,
        brightness: float | None = None,
        rgb_color: tuple[int, int, int] | None = None,
        percentage: float | None = None,
    ) -> Any:
        """Turn on an entity.

        Args:
            entity_id: Target entity
            brightness: Optional light brightness (0-100)
            rgb_color: Optional light color
            percentage: Optional fan speed (0-100)
        """
        domain = entity_domain(entity_id)
        data: dict[str, Any] = {"entity_id": entity_id}

        if brightness is not None and domain == "light":
            data["brightness"] = brightness_to_remote(brightness)
        if rgb_color is not None:
            data["rgb_color"] = list(rgb_color)
        if percentage is not None and domain == "fan":
            data["percentage"] = percentage

        return await self.call_service(domain, "turn_on", data)

    async def turn_off(self, entity_id: str) -> Any:
        return await self.call_service(entity_domain(entity_id), "turn_off", {"entity_id": entity_id})

    async def set_brightness(self, entity_id: str, brightness: float) -> Any:
        """Set light brightness (0-100)."""
        return await self.call_service(
            "light",
            "turn_on",
            {"entity_id": entity_id, "brightness": brightness_to_remote(brightness)},
        )

    async def set_temperature(self, entity_id: str, temperature: float) -> Any:
        """Set a climate entity's target temperature."""
        return await self.call_service(
            "climate",
            "set_temperature",
            {"entity_id": entity_id, "temperature": temperature},
        )

    async def lock(self, entity_id: str) -> Any:
        return await self.call_service("lock", "lock", {"entity_id": entity_id})

    async def unlock(self, entity_id: str) -> Any:
        return await self.call_service("lock", "unlock", {"entity_id": entity_id})

    async def set_fan_speed(self, entity_id: str, speed: float) -> Any:
        """Set fan speed as a percentage (0-100)."""
        return await self.call_service(
            "fan",
            "set_percentage",
            {"entity_id": entity_id, "percentage": speed},
        )
