"""Application configuration.

Read once at startup. The backend-selection flag is never re-evaluated
per call; see ``smarthome.services.backend_service``.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from smarthome.security.secrets_manager import HOME_ASSISTANT_TOKEN, get_secrets_manager


class Config(BaseModel):
    """Gateway configuration.

    Attributes:
        ha_base_url: Home Assistant base URL (without the /api suffix)
        ha_token: Long-lived Home Assistant access token
        use_home_assistant: Prefer Home Assistant over the local store
        ha_timeout: Request timeout for Home Assistant calls, in seconds
        data_path: Location of the local JSON snapshot
        log_level: Root log level

    Examples:
        >>> Config(ha_base_url="http://homeassistant:8123", ha_token="xxx",
        ...        use_home_assistant=True)
    """

    ha_base_url: str = Field(default="", description="Home Assistant base URL")

    ha_token: str = Field(default="", description="Home Assistant bearer token")

    use_home_assistant: bool = Field(
        default=False,
        description="Use Home Assistant as the device backend when configured",
    )

    ha_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Home Assistant request timeout in seconds",
    )

    data_path: Path = Field(
        default=Path("data") / "smarthome.json",
        description="Local store snapshot path",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("ha_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.strip().rstrip("/")

    @property
    def home_assistant_enabled(self) -> bool:
        """True only when both URL and token are configured."""
        return bool(self.ha_base_url and self.ha_token)

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables.

        Reads configuration from these environment variables:
        - HOME_ASSISTANT_URL: Home Assistant base URL
        - HOME_ASSISTANT_TOKEN: Token (or Docker secret 'home_assistant_token')
        - USE_HOME_ASSISTANT: 'true' to select the Home Assistant backend
        - HA_TIMEOUT: Request timeout in seconds (default: 10)
        - SMARTHOME_DATA_PATH: Local snapshot path (default: data/smarthome.json)
        - LOG_LEVEL: Logging level (default: INFO)

        Returns:
            Config populated from environment
        """
        token = get_secrets_manager().get_secret(HOME_ASSISTANT_TOKEN, required=False)

        return cls(
            ha_base_url=os.getenv("HOME_ASSISTANT_URL", ""),
            ha_token=token or "",
            use_home_assistant=os.getenv("USE_HOME_ASSISTANT", "false").lower() == "true",
            ha_timeout=float(os.getenv("HA_TIMEOUT", "10")),
            data_path=Path(os.getenv("SMARTHOME_DATA_PATH", str(Path("data") / "smarthome.json"))),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
