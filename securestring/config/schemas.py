"""Configuration file schemas for SecureString."""

from ..digest import SUPPORTED_ALGORITHMS

SECRET_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "securestring": {
            "type": "object",
            "properties": {
                "encoding": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Character encoding used before digesting or storing text",
                },
                "sweep_interval_ms": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Poll period of expiry sweepers, in milliseconds",
                },
                "digest_algorithm": {
                    "type": "string",
                    "enum": sorted(SUPPORTED_ALGORITHMS),
                },
                "debug": {
                    "type": "boolean",
                    "description": "Trace sweeps and destruction at debug level",
                },
            },
            "additionalProperties": False,
        }
    },
    "required": ["securestring"],
    "additionalProperties": False,
}
