"""Credential and proxy discovery for the code-generation backends."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from pydantic import BaseModel, Field, SecretStr

from ..ports.codegen_error import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENAI_API_KEY"
PROXY_ENV = "HTTP_PROXY"


class EnvironmentProvider:
    """Read-only view over process environment variables.

    Tests pass a plain dict instead of mutating ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def get(self, name: str) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        value = environ.get(name)
        if value and value.strip():
            return value.strip()
        return None


class Credentials(BaseModel):
    """Secrets and connection settings resolved from the environment."""

    api_key: SecretStr | None = Field(default=None)
    proxy_url: str | None = Field(default=None)

    def get_api_key(self) -> str | None:
        """Get the API key as plain string."""
        return self.api_key.get_secret_value() if self.api_key else None

    def has_api_key(self) -> bool:
        return self.get_api_key() is not None


class CredentialManager:
    """Resolves the API credential and optional proxy endpoint.

    Nothing is cached: every lookup reflects the environment at call time.
    """

    ENV_MAPPINGS = {
        "api_key": [API_KEY_ENV],
        "proxy_url": [PROXY_ENV],
    }

    def __init__(self, env: EnvironmentProvider | None = None) -> None:
        self.env = env or EnvironmentProvider()

    def load_credentials(self) -> Credentials:
        """Load credentials from the environment provider."""
        data: dict[str, str] = {}
        for field_name, env_vars in self.ENV_MAPPINGS.items():
            for env_var in env_vars:
                value = self.env.get(env_var)
                if value:
                    data[field_name] = value
                    break
        return Credentials(**data)

    def require_api_key(self) -> str:
        """Return the API key or fail before any network activity.

        Raises:
            ConfigurationError: If the credential variable is unset or blank.
        """
        credentials = self.load_credentials()
        if not credentials.has_api_key():
            logger.error(f"{API_KEY_ENV} is not set")
            raise ConfigurationError(
                f"API credential not found. Set {API_KEY_ENV} environment variable."
            )
        return credentials.get_api_key()

    def proxy_url(self) -> str | None:
        """Return the configured HTTP proxy URL, if any."""
        return self.load_credentials().proxy_url
