"""Secret values with optional hashing, bounded lifetime and zeroization."""

import logging
import threading
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from .config.settings import DEFAULT_CONFIG, SecretConfig
from .digest import digest, encode_text, resolve_encoding
from .sweeper import ExpirySweeper, SweepScheduler
from .utils.errors import SecurityError

logger = logging.getLogger(__name__)


class LifetimePolicy(Enum):
    """How long a secret value lives."""

    FOREVER = "forever"
    EXPIRES_AT = "expires_at"


class SecretState(Enum):
    """Lifecycle state of a secret value."""

    ACTIVE = "active"
    DESTROYED = "destroyed"


class SecretValue:
    """
    In-memory container for a sensitive text value.

    The value holds either the encoded plaintext or its digest in a mutable
    buffer. Values with a lifetime are swept by a background task and wiped
    once expired; ``destroy()`` wipes them on demand. After destruction every
    read fails closed: ``render()`` returns "" and ``compare()`` returns False.

    Example:
        >>> secret = SecretValue("hello", hashed=False)
        >>> secret.compare("hello")
        True
        >>> secret.destroy()
        >>> secret.render()
        ''
    """

    def __init__(
        self,
        text: str,
        *,
        encoding: Optional[str] = None,
        lifetime_ms: Optional[int] = None,
        hashed: Optional[bool] = None,
        config: Optional[SecretConfig] = None,
        scheduler: Optional[SweepScheduler] = None,
    ):
        """
        Initialize a secret value.

        Args:
            text: The secret text
            encoding: Character encoding (defaults to the config's, UTF-8)
            lifetime_ms: Lifetime in milliseconds; None or negative lives forever
            hashed: Keep only the digest of the text (default True)
            config: Defaults for encoding, sweep interval and debug tracing
            scheduler: Shared scheduler to register with instead of
                starting a dedicated sweeper thread

        Raises:
            TypeError: If text is not a str
            ConfigurationError: If the encoding is unknown or cannot encode the text
            DigestUnavailableError: If the digest algorithm is unavailable
        """
        if not isinstance(text, str):
            raise TypeError(f"Secret text must be str, got {type(text).__name__}")
        if lifetime_ms is not None and (isinstance(lifetime_ms, bool) or not isinstance(lifetime_ms, int)):
            raise TypeError(f"lifetime_ms must be int or None, got {type(lifetime_ms).__name__}")

        self._config = config or DEFAULT_CONFIG
        self._lock = threading.RLock()
        self._encoding = resolve_encoding(encoding or self._config.encoding)
        self._hashed = True if hashed is None else bool(hashed)
        self._sweep_interval_ms = self._config.sweep_interval_ms
        self._debug = self._config.debug
        self._sweeper: Optional[ExpirySweeper] = None
        self._scheduler: Optional[SweepScheduler] = None

        if self._hashed:
            self._storage = bytearray(digest(text, self._encoding, self._config.digest_algorithm))
        else:
            self._storage = bytearray(encode_text(text, self._encoding))
        self._state = SecretState.ACTIVE

        self._created_at = datetime.now(timezone.utc)
        if lifetime_ms is not None and lifetime_ms >= 0:
            self._lifetime_ms = lifetime_ms
            self._policy = LifetimePolicy.EXPIRES_AT
            self._expires_at: Optional[datetime] = self._created_at + timedelta(milliseconds=lifetime_ms)
            self._attach_expiry(scheduler)
        else:
            self._lifetime_ms = -1
            self._policy = LifetimePolicy.FOREVER
            self._expires_at = None

    def _attach_expiry(self, scheduler: Optional[SweepScheduler]) -> None:
        if scheduler is not None:
            self._scheduler = scheduler
            scheduler.register(self)
        else:
            self._sweeper = ExpirySweeper(self)
            self._sweeper.start()

    # ========== Reads ==========

    def render(self) -> str:
        """
        Return the stored value as text.

        Returns:
            str: "" once destroyed; the lowercase hex digest for hashed
            values; the decoded plaintext otherwise
        """
        with self._lock:
            if self._state is SecretState.DESTROYED or not self._storage:
                return ""
            if self._hashed:
                return self._storage.hex()
            return self._storage.decode(self._encoding)

    def compare(self, candidate: Any) -> bool:
        """
        Fail-closed equality against ``candidate``.

        A hashed value matches its own hex digest, not the original text.
        Anything ambiguous (destroyed value, non-str candidate, length
        mismatch, storage shrinking mid-loop) yields False; this never raises.
        This is not a constant-time comparison.

        Args:
            candidate: Text to compare with

        Returns:
            bool: True only if candidate equals ``render()``
        """
        if not isinstance(candidate, str):
            return False

        with self._lock:
            if self._state is SecretState.DESTROYED:
                return False

            expected = self.render()
            length = len(candidate)
            if len(expected) != length:
                return False

            for i in range(length):
                try:
                    if expected[i] != candidate[i]:
                        return False
                except IndexError:
                    return False

            return True

    def hash(self, text: str) -> bytes:
        """Digest ``text`` the way this value digests its own text."""
        return digest(text, self._encoding, self._config.digest_algorithm)

    # ========== Lifecycle ==========

    def destroy(self) -> None:
        """
        Wipe the storage and stop background expiry.

        Every byte is overwritten with zero before the buffer is truncated.
        Calling this on a destroyed value is a no-op.
        """
        with self._lock:
            if self._debug:
                logger.debug("Destroying: %s expired=%s", datetime.now(timezone.utc).isoformat(), self.is_expired())

            if self._state is SecretState.DESTROYED:
                return

            for i in range(len(self._storage)):
                self._storage[i] = 0
            del self._storage[:]
            self._state = SecretState.DESTROYED

            sweeper, self._sweeper = self._sweeper, None
            scheduler, self._scheduler = self._scheduler, None

            if sweeper is not None:
                sweeper.stop()
            if scheduler is not None:
                scheduler.unregister(self)

    def expire_if_due(self) -> bool:
        """
        Destroy the value if it has expired, as one atomic step.

        Called by sweepers; returns True if this call destroyed the value.
        """
        with self._lock:
            expired = self.is_expired()
            if self._debug:
                logger.debug("Testing: %s expired=%s", datetime.now(timezone.utc).isoformat(), expired)

            if self._state is SecretState.ACTIVE and expired:
                self.destroy()
                return True
            return False

    def is_expired(self) -> bool:
        """True once the current time reaches the expiry time; always False for immortal values."""
        if self._policy is LifetimePolicy.FOREVER:
            return False
        return datetime.now(timezone.utc) >= self._expires_at

    def status(self) -> str:
        """Diagnostic summary. Reveals plaintext for non-hashed values; do not use for program logic."""
        with self._lock:
            expiry = self._expires_at.isoformat() if self._expires_at else "never"
            return (
                f"Value: {self.render()}"
                f", Creation Time: {self._created_at.isoformat()}"
                f", Expiry Time: {expiry}"
                f", Expired: {self.is_expired()}"
            )

    # ========== Accessors ==========

    @property
    def hashed(self) -> bool:
        return self._hashed

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, debug: bool) -> None:
        self._debug = bool(debug)

    @property
    def sweep_interval_ms(self) -> int:
        """Poll period of the attached sweeper, in milliseconds."""
        return self._sweep_interval_ms

    @sweep_interval_ms.setter
    def sweep_interval_ms(self, interval_ms: int) -> None:
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError(f"Sweep interval must be a positive integer, got {interval_ms!r}")
        self._sweep_interval_ms = interval_ms
        sweeper = self._sweeper
        if sweeper is not None:
            sweeper.nudge()

    @property
    def lifetime_ms(self) -> int:
        """Requested lifetime in milliseconds, -1 for immortal values."""
        return self._lifetime_ms

    @property
    def lifetime_policy(self) -> LifetimePolicy:
        return self._policy

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    @property
    def state(self) -> SecretState:
        return self._state

    @property
    def is_destroyed(self) -> bool:
        return self._state is SecretState.DESTROYED

    @property
    def sweeper(self) -> Optional[ExpirySweeper]:
        """The dedicated sweeper thread, if one is attached."""
        return self._sweeper

    # ========== Python protocol ==========

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"<SecretValue hashed={self._hashed} state={self._state.value}"
            f" policy={self._policy.value}>"
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SecretValue):
            if other is self:
                return not self.is_destroyed
            return self.compare(other.render())
        if isinstance(other, str):
            return self.compare(other)
        return NotImplemented

    __hash__ = None

    def __enter__(self) -> "SecretValue":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.destroy()

    def __reduce_ex__(self, protocol):
        raise SecurityError("Cannot serialize SecretValue - sensitive data protection")

    def __del__(self):
        # Half-built instances (failed __init__) have no lock yet
        if getattr(self, "_lock", None) is not None and getattr(self, "_storage", None) is not None:
            self.destroy()
