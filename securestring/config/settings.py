"""Immutable defaults handed to secret values at construction."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from ..digest import DEFAULT_ALGORITHM, DEFAULT_ENCODING, resolve_algorithm, resolve_encoding
from ..utils.errors import ConfigurationError

DEFAULT_SWEEP_INTERVAL_MS = 1000


@dataclass(frozen=True)
class SecretConfig:
    """Defaults for encoding, sweep interval, digest algorithm and debug tracing."""

    encoding: str = DEFAULT_ENCODING
    sweep_interval_ms: int = DEFAULT_SWEEP_INTERVAL_MS
    digest_algorithm: str = DEFAULT_ALGORITHM
    debug: bool = False

    def __post_init__(self):
        # Fail at construction, not on the first secret built from this config
        object.__setattr__(self, "encoding", resolve_encoding(self.encoding))
        resolve_algorithm(self.digest_algorithm)

        if isinstance(self.sweep_interval_ms, bool) or not isinstance(self.sweep_interval_ms, int):
            raise ConfigurationError(f"sweep_interval_ms must be an integer, got {self.sweep_interval_ms!r}")
        if self.sweep_interval_ms <= 0:
            raise ConfigurationError(f"sweep_interval_ms must be positive, got {self.sweep_interval_ms}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecretConfig":
        """Build a config from the ``securestring`` section of a config file."""
        known = {key: data[key] for key in ("encoding", "sweep_interval_ms", "digest_algorithm", "debug") if key in data}
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **changes: Any) -> "SecretConfig":
        """Return a copy with the given fields replaced; ``None`` values are ignored."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


DEFAULT_CONFIG = SecretConfig()
