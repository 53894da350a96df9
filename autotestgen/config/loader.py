"""Configuration loader for autotestgen."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from ..ports.codegen_error import ConfigurationError
from .models import AutoTestGenConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Configuration loader that merges TOML/YAML files, environment variables, and CLI arguments."""

    DEFAULT_CONFIG_FILES = [
        ".autotestgen.toml",  # TOML files (preferred)
        ".autotestgen.yml",
        ".autotestgen.yaml",
        "autotestgen.toml",
        "autotestgen.yml",
        "autotestgen.yaml",
    ]

    ENV_PREFIX = "AUTOTESTGEN_"

    def __init__(
        self,
        config_file: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize the configuration loader.

        Args:
            config_file: Path to configuration file. If None, will search for default files.
            environ: Environment mapping to read overrides from (defaults to os.environ).
        """
        self.config_file = Path(config_file) if config_file else None
        self.environ = environ

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ) -> AutoTestGenConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Environment variable overrides
            cli_overrides: CLI argument overrides

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            config_dict: dict[str, Any] = {}

            # 1. Configuration file (TOML or YAML)
            file_config = self._load_config_file()
            if file_config:
                config_dict = self._deep_merge(config_dict, file_config)
                logger.debug(f"Loaded configuration from {self._get_config_file_path()}")

            # 2. Environment variables
            env_config = env_overrides or self._load_env_config()
            if env_config:
                config_dict = self._deep_merge(config_dict, env_config)
                logger.debug("Applied environment variable overrides")

            # 3. CLI overrides (highest priority)
            if cli_overrides:
                config_dict = self._deep_merge(config_dict, cli_overrides)
                logger.debug("Applied CLI argument overrides")

            config = AutoTestGenConfig(**config_dict)
            logger.debug("Configuration loaded and validated successfully")
            return config

        except ConfigurationError:
            raise
        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_config_file(self) -> dict[str, Any] | None:
        """Load configuration from TOML or YAML file."""
        config_file = self._get_config_file_path()

        if not config_file or not config_file.exists():
            if self.config_file:
                raise ConfigurationError(f"Configuration file not found: {config_file}")
            logger.debug("No configuration file found, using defaults")
            return None

        try:
            if config_file.suffix.lower() == ".toml":
                return self._load_toml_file(config_file)
            elif config_file.suffix.lower() in (".yml", ".yaml"):
                return self._load_yaml_file(config_file)
            else:
                logger.warning(f"Unknown configuration file type: {config_file}")
                return None

        except OSError as e:
            error_msg = f"Failed to read {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _load_toml_file(self, config_file: Path) -> dict[str, Any] | None:
        try:
            with open(config_file, "rb") as f:
                content = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            error_msg = f"Invalid TOML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        if not content:
            logger.warning(f"Configuration file {config_file} is empty")
            return None
        return content

    def _load_yaml_file(self, config_file: Path) -> dict[str, Any] | None:
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {config_file}: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        if not content:
            logger.warning(f"Configuration file {config_file} is empty")
            return None
        if not isinstance(content, dict):
            raise ConfigurationError(f"Configuration file {config_file} must contain a mapping")
        return content

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from prefixed environment variables.

        e.g. AUTOTESTGEN_TRANSPORT__TIMEOUT -> transport.timeout
        """
        env_config: dict[str, Any] = {}
        environ = os.environ if self.environ is None else self.environ

        for key, value in environ.items():
            if key.startswith(self.ENV_PREFIX):
                config_key = key[len(self.ENV_PREFIX) :].lower()
                nested_keys = config_key.split("__")
                self._set_nested_value(env_config, nested_keys, self._parse_env_value(value))

        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate Python type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            if "." not in value:
                return int(value)
            else:
                return float(value)
        except ValueError:
            pass

        return value

    def _set_nested_value(self, config: dict[str, Any], keys: list[str], value: Any) -> None:
        current = config
        for key in keys[:-1]:
            current = current.setdefault(key, {})
        current[keys[-1]] = value

    def _get_config_file_path(self) -> Path | None:
        if self.config_file:
            return self.config_file

        for filename in self.DEFAULT_CONFIG_FILES:
            path = Path(filename)
            if path.exists():
                return path

        return None

    def _deep_merge(self, base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
        """Deeply merge updates into base dictionary."""
        result = base.copy()

        for key, value in updates.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_file: str | Path | None = None,
    env_overrides: dict[str, Any] | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AutoTestGenConfig:
    """Load autotestgen configuration from all sources."""
    loader = ConfigLoader(config_file)
    return loader.load_config(env_overrides, cli_overrides)
