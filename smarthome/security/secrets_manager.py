"""Gateway secrets: Docker Secrets first, environment variables second.

The only secret the gateway needs is the Home Assistant access token.
It is looked up as the file ``<secrets dir>/home_assistant_token`` and
then as the ``HOME_ASSISTANT_TOKEN`` environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_DIR = Path("/run/secrets")

HOME_ASSISTANT_TOKEN = "home_assistant_token"

# Secret name -> required at startup
KNOWN_SECRETS: dict[str, bool] = {
    HOME_ASSISTANT_TOKEN: False,
}


def mask_secret(value: str | None) -> str:
    """Render a secret for log output ('abcd...wxyz', or '<unset>')."""
    if not value:
        return "<unset>"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


class SecretsManager:
    """Resolve and cache gateway secrets.

    Example:
        >>> manager = SecretsManager(secrets_path=Path("/run/secrets"))
        >>> token = manager.get_secret("home_assistant_token", required=False)
    """

    def __init__(self, secrets_path: Path | None = None) -> None:
        """Initialize secrets manager.

        Args:
            secrets_path: Directory of secret files. Defaults to SECRETS_DIR
                from the environment, then /run/secrets.
        """
        if secrets_path is None:
            secrets_path = Path(os.getenv("SECRETS_DIR", str(DEFAULT_SECRETS_DIR)))
        self.secrets_path = secrets_path
        self._cache: dict[str, str] = {}

    def _read_file(self, key: str) -> str | None:
        secret_file = self.secrets_path / key
        if not secret_file.is_file():
            return None
        try:
            return secret_file.read_text(encoding="utf-8").strip() or None
        except OSError as e:
            logger.error(f"Failed to read secret file {secret_file}: {e}")
            return None

    def get_secret(self, key: str, required: bool = True) -> str | None:
        """Look up a secret, file first, then the upper-cased env var.

        Args:
            key: Secret name (e.g. 'home_assistant_token')
            required: Raise when the secret is missing

        Returns:
            Secret value, or None when optional and missing

        Raises:
            ValueError: If required and neither source has a value
        """
        if key in self._cache:
            return self._cache[key]

        value = self._read_file(key)
        source = "secret file"
        if value is None:
            value = os.getenv(key.upper()) or None
            source = "environment"

        if value is not None:
            self._cache[key] = value
            logger.debug(f"Secret '{key}' loaded from {source}: {mask_secret(value)}")
            return value

        if required:
            raise ValueError(
                f"Secret '{key}' not found. Create {self.secrets_path / key} "
                f"or set {key.upper()}."
            )
        return None

    def check_secrets(self) -> dict[str, bool]:
        """Report which known gateway secrets are available.

        Returns:
            Secret name -> present. Missing required secrets are logged as errors.
        """
        status: dict[str, bool] = {}
        for key, required in KNOWN_SECRETS.items():
            present = self.get_secret(key, required=False) is not None
            status[key] = present
            if required and not present:
                logger.error(f"Required secret '{key}' is missing")
        return status

    def clear_cache(self) -> None:
        """Forget cached values so rotated secrets are re-read."""
        self._cache.clear()
        logger.info("Secrets cache cleared")


_secrets_manager: SecretsManager | None = None


def get_secrets_manager() -> SecretsManager:
    """Get the process-wide SecretsManager."""
    global _secrets_manager
    if _secrets_manager is None:
        _secrets_manager = SecretsManager()
    return _secrets_manager
