"""One-way digest primitive used by hashed secret values."""

import codecs
from typing import Callable, Dict

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from .utils.errors import ConfigurationError, DigestUnavailableError, create_error_suggestions

DEFAULT_ENCODING = "utf-8"
DEFAULT_ALGORITHM = "sha512"

# Names accepted for ``algorithm``; lookups are case-insensitive and treat "_" as "-"
SUPPORTED_ALGORITHMS: Dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha-512": hashes.SHA512,
    "sha3-256": hashes.SHA3_256,
    "sha3-512": hashes.SHA3_512,
    "blake2b": lambda: hashes.BLAKE2b(64),
}


def resolve_encoding(encoding: str) -> str:
    """
    Resolve an encoding name to Python's canonical codec name.

    Args:
        encoding: Encoding name, e.g. "UTF-8" or "latin1"

    Returns:
        str: Canonical codec name

    Raises:
        ConfigurationError: If the encoding is unknown or not a text encoding
    """
    try:
        info = codecs.lookup(encoding)
    except (LookupError, TypeError) as e:
        raise ConfigurationError(
            f"Unknown character encoding: {encoding!r}",
            details=str(e),
            suggestions=create_error_suggestions("encoding_unknown", encoding=encoding),
        ) from e

    # bytes-to-bytes and str-to-str codecs (base64, rot13, zlib) cannot encode text
    if not getattr(info, "_is_text_encoding", True):
        raise ConfigurationError(
            f"Unknown character encoding: {encoding!r}",
            details=f"{info.name!r} is not a text encoding",
            suggestions=create_error_suggestions("encoding_unknown", encoding=encoding),
        )
    return info.name


def encode_text(text: str, encoding: str) -> bytes:
    """Encode text strictly, turning codec failures into ConfigurationError."""
    codec = resolve_encoding(encoding)
    try:
        return text.encode(codec)
    except UnicodeEncodeError as e:
        raise ConfigurationError(
            f"Text cannot be represented in encoding {codec!r}",
            details=f"{e.reason} at position {e.start}",
            suggestions=create_error_suggestions("text_unencodable"),
        ) from e


def resolve_algorithm(algorithm: str) -> hashes.HashAlgorithm:
    """
    Build a hash algorithm instance from its name.

    Raises:
        DigestUnavailableError: If the name is not a supported algorithm
    """
    key = str(algorithm).lower().replace("_", "-")
    factory = SUPPORTED_ALGORITHMS.get(key)
    if factory is None:
        raise DigestUnavailableError(
            f"Digest algorithm not available: {algorithm!r}",
            suggestions=create_error_suggestions("digest_unavailable", algorithm=algorithm),
        )
    return factory()


def digest(text: str, encoding: str = DEFAULT_ENCODING, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """
    Compute the digest of a text value.

    The text is encoded with ``encoding`` and hashed; the result is the raw
    digest (64 bytes for SHA-512), never a decoded string. The function is
    pure, so collaborators can use it to build lookup keys that match a
    hashed ``SecretValue`` without holding one.

    Args:
        text: Text to digest
        encoding: Character encoding used to turn the text into bytes
        algorithm: Digest algorithm name (default "sha512")

    Returns:
        bytes: Raw digest bytes

    Raises:
        ConfigurationError: If the encoding is unknown or cannot encode the text
        DigestUnavailableError: If the algorithm is unavailable in this runtime
    """
    if not isinstance(text, str):
        raise TypeError(f"Secret text must be str, got {type(text).__name__}")

    data = encode_text(text, encoding)
    hash_algorithm = resolve_algorithm(algorithm)

    try:
        hasher = hashes.Hash(hash_algorithm)
    except UnsupportedAlgorithm as e:
        raise DigestUnavailableError(
            f"Digest algorithm not supported by the cryptography backend: {algorithm!r}",
            details=str(e),
            suggestions=create_error_suggestions("digest_unavailable", algorithm=algorithm),
        ) from e

    hasher.update(data)
    return hasher.finalize()


def hex_digest(text: str, encoding: str = DEFAULT_ENCODING, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Lowercase hex form of ``digest``; equals ``render()`` of a hashed SecretValue."""
    return digest(text, encoding, algorithm).hex()
