"""
Configuration models and loader.
"""

import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, model_validator

from gsapi.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.grooveshark.com/ws3.php"

CLIENT_KEY_ENV = "GSAPI_CLIENT_KEY"
CLIENT_SECRET_ENV = "GSAPI_CLIENT_SECRET"


def _env_value(name: str) -> Optional[str]:
    """Read an environment variable, treating blank values as unset."""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


class ClientSettings(BaseModel):
    """API client settings."""

    client_key: str = ""
    client_secret: str = ""
    api_url: str = DEFAULT_API_URL
    connect_timeout: float = 2.0  # seconds
    read_timeout: float = 6.0  # seconds, per socket wait
    total_timeout: float = 6.0  # seconds, whole call
    verify_ssl: bool = True
    user_agent_prefix: str = "gsapi-python"
    log_level: str = "INFO"

    @model_validator(mode="before")
    @classmethod
    def resolve_credentials(cls, data: Any) -> Any:
        """
        Resolve credentials, environment variables first.

        GSAPI_CLIENT_KEY and GSAPI_CLIENT_SECRET take priority over values
        given in the configuration file.

        Raises:
            ConfigError: If either credential is missing from both sources
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return data
        data = dict(data)

        env_key = _env_value(CLIENT_KEY_ENV)
        env_secret = _env_value(CLIENT_SECRET_ENV)
        if env_key:
            data["client_key"] = env_key
        if env_secret:
            data["client_secret"] = env_secret

        missing = [
            name
            for name in ("client_key", "client_secret")
            if not str(data.get(name) or "").strip()
        ]
        if missing:
            raise ConfigError(
                f"Missing API credentials: {', '.join(missing)}. "
                f"Set {CLIENT_KEY_ENV}/{CLIENT_SECRET_ENV} or add them to the config file."
            )
        return data

    @model_validator(mode="after")
    def check_timeouts(self) -> "ClientSettings":
        if min(self.connect_timeout, self.read_timeout, self.total_timeout) <= 0:
            raise ConfigError("Timeouts must be positive")
        return self


class GSAPIConfig(BaseModel):
    """Main configuration model."""

    version: Literal["1.0"]
    client: ClientSettings

    @classmethod
    def from_yaml(cls, path: str) -> "GSAPIConfig":
        """
        Load and validate configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            GSAPIConfig instance

        Raises:
            ConfigError: If file not found or invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration: expected a mapping in {path}")

        # YAML reads 1.0 as a float
        version = data.get("version")
        if str(version) != "1.0":
            raise ConfigError(f"Invalid version: {version}. Expected 1.0")
        data["version"] = "1.0"

        if data.get("client") is None:
            data["client"] = {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GSAPIConfig":
        """Validate an already-parsed configuration mapping."""
        try:
            return cls(**data)
        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(config_path: str) -> GSAPIConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        GSAPIConfig instance
    """
    return GSAPIConfig.from_yaml(config_path)


def settings_from_env() -> ClientSettings:
    """Build client settings from environment variables alone."""
    logger.debug("Loading client settings from environment")
    return ClientSettings()
