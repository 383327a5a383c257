"""
Configuration loading system for shtuff.

This module handles loading, merging, and validating configuration from
YAML files, a ``.env`` file and ``SHTUFF_*`` environment variables.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, Union

import yaml
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import ShtuffConfig
from ..utils.error_handling import ConfigurationError

ENV_PREFIX = "SHTUFF_"


class ConfigLoader:
    """
    Configuration loader that supports multiple sources and validation.

    Loading priority (highest to lowest):
    1. Environment variables (SHTUFF_<SECTION>_<FIELD>)
    2. Explicitly specified config file
    3. Environment-specific config (e.g. configs/ci.yaml with SHTUFF_ENV=ci)
    4. Default configuration file
    5. Built-in defaults (from Pydantic models)
    """

    def __init__(self):
        self._config: Optional[ShtuffConfig] = None
        self._config_path: Optional[Path] = None

        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file)

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ShtuffConfig:
        """
        Load configuration from all sources and validate it.

        Args:
            config_path: Optional path to a specific config file

        Returns:
            Validated ShtuffConfig instance

        Raises:
            ConfigurationError: If configuration loading or validation fails
        """
        config_data: Dict[str, Any] = {}

        default_config_path = self._find_default_config()
        if default_config_path:
            config_data = self._deep_merge(config_data, self._load_yaml_file(default_config_path))

        env_config_path = self._find_environment_config()
        if env_config_path and env_config_path != default_config_path:
            config_data = self._deep_merge(config_data, self._load_yaml_file(env_config_path))

        if config_path:
            cli_config_path = Path(config_path)
            if not cli_config_path.exists():
                raise ConfigurationError(f"Specified config file not found: {config_path}")

            config_data = self._deep_merge(config_data, self._load_yaml_file(cli_config_path))
            self._config_path = cli_config_path

        config_data = self._apply_env_overrides(config_data)

        try:
            self._config = ShtuffConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {self._format_validation_error(e)}"
            ) from e

        return self._config

    def get_config(self) -> ShtuffConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def reload_config(self, config_path: Optional[Union[str, Path]] = None) -> ShtuffConfig:
        self._config = None
        return self.load_config(config_path)

    def _find_default_config(self) -> Optional[Path]:
        possible_paths = [
            Path("configs/default.yaml"),
            Path("configs/default.yml"),
            Path("shtuff.yaml"),
            Path("shtuff.yml"),
        ]

        for path in possible_paths:
            if path.exists():
                return path

        return None

    def _find_environment_config(self) -> Optional[Path]:
        env = os.getenv("SHTUFF_ENV")
        if not env:
            return None

        for path in (Path(f"configs/{env}.yaml"), Path(f"configs/{env}.yml")):
            if path.exists():
                return path

        return None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML configuration file.

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {str(e)}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {str(e)}") from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {file_path} must contain a YAML object (dictionary)"
            )

        return data

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        The first segment after the prefix names the section, the rest is the
        field: SHTUFF_MONITOR_DEFAULT_STYLE=dots overrides monitor.default_style.
        Values are passed on as strings and converted to the type of the target
        field during validation, so SHTUFF_PROGRESS_LABEL=yes stays a label.
        """
        result = {
            key: value.copy() if isinstance(value, dict) else value
            for key, value in config_data.items()
        }
        sections = ShtuffConfig.model_fields

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            parts = env_key[len(ENV_PREFIX):].lower().split('_', 1)
            if len(parts) != 2 or parts[0] not in sections:
                continue

            section, field = parts
            result.setdefault(section, {})
            if isinstance(result[section], dict):
                result[section][field] = env_value

        return result

    def _format_validation_error(self, error: ValidationError) -> str:
        messages = []
        for err in error.errors():
            location = " -> ".join(str(loc) for loc in err['loc'])
            value = err.get('input', 'N/A')
            messages.append(f"  {location}: {err['msg']} (got: {value})")

        return "Validation errors:\n" + "\n".join(messages)


# Global configuration loader instance
_config_loader = ConfigLoader()


def load_config(config_path: Optional[Union[str, Path]] = None) -> ShtuffConfig:
    """
    Load configuration from all sources.

    Raises:
        ConfigurationError: If configuration loading fails
    """
    return _config_loader.load_config(config_path)


def get_config() -> ShtuffConfig:
    """Get the current configuration, loading it if necessary."""
    return _config_loader.get_config()


def reload_config(config_path: Optional[Union[str, Path]] = None) -> ShtuffConfig:
    return _config_loader.reload_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> tuple:
    """
    Validate a configuration file without loading it globally.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        ConfigLoader().load_config(config_path)
        return True, None
    except ConfigurationError as e:
        return False, str(e)
