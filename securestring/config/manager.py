"""Configuration management for SecureString."""

import os
from typing import Any, Dict, Optional

import yaml

from .settings import DEFAULT_CONFIG, SecretConfig
from .validator import ConfigValidationError, ConfigValidator

CONFIG_FILENAME = "securestring.yml"
CONFIG_ENV_VAR = "SECURESTRING_CONFIG"


class ConfigManager:
    """Locates, loads and caches SecureString configuration files."""

    def __init__(self, path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            path: Optional directory to search (defaults to current directory)
        """
        self.path = path or os.getcwd()
        self.validator = ConfigValidator()
        self._config_cache: Dict[str, SecretConfig] = {}

    def get_config_path(self) -> Optional[str]:
        """
        Get path to the configuration file in effect.

        ``$SECURESTRING_CONFIG`` wins over ``securestring.yml`` in the
        search directory. Returns None when neither exists.
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return env_path

        candidate = os.path.join(self.path, CONFIG_FILENAME)
        if os.path.exists(candidate):
            return candidate

        return None

    def load_config(self, validate: bool = True) -> SecretConfig:
        """
        Load the configuration in effect, falling back to defaults.

        Args:
            validate: Whether to validate the configuration

        Returns:
            SecretConfig: Loaded configuration

        Raises:
            ConfigValidationError: If the file is invalid
            FileNotFoundError: If $SECURESTRING_CONFIG names a missing file
        """
        config_path = self.get_config_path()
        if not config_path:
            return DEFAULT_CONFIG

        if config_path in self._config_cache:
            return self._config_cache[config_path]

        config = self.load_config_file(config_path, validate=validate)
        self._config_cache[config_path] = config
        return config

    def load_config_file(self, config_path: str, validate: bool = True) -> SecretConfig:
        """
        Load configuration from a specific file.

        Args:
            config_path: Path to configuration file
            validate: Whether to validate the configuration

        Returns:
            SecretConfig: Loaded configuration

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError([f"Invalid YAML in {config_path}: {e}"]) from e

        if validate:
            errors = self.validator.validate_config(raw)
            if errors:
                raise ConfigValidationError(errors)

        return SecretConfig.from_dict(self._section(raw))

    def clear_cache(self) -> None:
        """Drop cached configurations."""
        self._config_cache.clear()

    def _section(self, raw: Any) -> Dict[str, Any]:
        if isinstance(raw, dict) and isinstance(raw.get("securestring"), dict):
            return raw["securestring"]
        return {}


def load_config(path: Optional[str] = None) -> SecretConfig:
    """
    Load a SecretConfig from ``path``, or from the file ConfigManager finds.

    Args:
        path: Optional explicit configuration file

    Returns:
        SecretConfig: The configuration, or defaults when no file exists
    """
    manager = ConfigManager()
    if path:
        return manager.load_config_file(path)
    return manager.load_config()
