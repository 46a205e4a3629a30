"""Configuration validation for SecureString."""

from typing import Any, Dict, List

import jsonschema
import yaml

from ..digest import resolve_encoding
from ..utils.errors import ConfigurationError, create_error_suggestions
from .schemas import SECRET_CONFIG_SCHEMA


class ConfigValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(
            f"Configuration validation failed: {'; '.join(errors)}",
            suggestions=create_error_suggestions("configuration_invalid"),
        )


class ConfigValidator:
    """Validates SecureString configuration files."""

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate a SecureString configuration.

        Args:
            config: Configuration dictionary to validate

        Returns:
            List[str]: List of validation errors (empty if valid)
        """
        errors = []

        try:
            jsonschema.validate(config, SECRET_CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            errors.append(f"Schema validation failed: {e.message}")
        except jsonschema.SchemaError as e:
            errors.append(f"Schema error: {e.message}")

        # Schema only checks the type of the encoding name
        section = config.get("securestring") if isinstance(config, dict) else None
        if isinstance(section, dict) and isinstance(section.get("encoding"), str):
            errors.extend(self._validate_encoding(section["encoding"]))

        return errors

    def validate_config_file(self, file_path: str) -> List[str]:
        """
        Validate configuration file.

        Args:
            file_path: Path to configuration file

        Returns:
            List[str]: List of validation errors (empty if valid)
        """
        try:
            with open(file_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except FileNotFoundError:
            return [f"Configuration file not found: {file_path}"]
        except yaml.YAMLError as e:
            return [f"Invalid YAML syntax: {e}"]

        if config is None:
            return ["Configuration file is empty"]

        return self.validate_config(config)

    def _validate_encoding(self, encoding: str) -> List[str]:
        try:
            resolve_encoding(encoding)
        except ConfigurationError as e:
            return [e.message]
        return []
