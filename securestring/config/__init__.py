"""Configuration management for SecureString."""

from .manager import ConfigManager, load_config
from .schemas import SECRET_CONFIG_SCHEMA
from .settings import DEFAULT_CONFIG, SecretConfig
from .validator import ConfigValidationError, ConfigValidator

__all__ = [
    "ConfigManager",
    "ConfigValidationError",
    "ConfigValidator",
    "DEFAULT_CONFIG",
    "SECRET_CONFIG_SCHEMA",
    "SecretConfig",
    "load_config",
]
