"""SecureString - in-memory secret values with hashing, expiry and zeroization."""

__version__ = "0.1.0"
__author__ = "SecureString Team"

from .config import SecretConfig, load_config
from .digest import digest, hex_digest
from .secret import LifetimePolicy, SecretState, SecretValue
from .sweeper import ExpirySweeper, SweepScheduler, default_scheduler
from .utils.errors import (
    ConfigurationError,
    DigestUnavailableError,
    SecureStringError,
    SecurityError,
)

__all__ = [
    "SecretValue",
    "SecretConfig",
    "LifetimePolicy",
    "SecretState",
    "ExpirySweeper",
    "SweepScheduler",
    "default_scheduler",
    "digest",
    "hex_digest",
    "load_config",
    "SecureStringError",
    "ConfigurationError",
    "DigestUnavailableError",
    "SecurityError",
]
