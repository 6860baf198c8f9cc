"""Content hashing for Gimlet objects."""

import hashlib
import re

SUPPORTED_ALGORITHMS = ("sha1", "sha256")
DEFAULT_ALGORITHM = "sha256"

_HEX_PATTERN = re.compile(r"^[0-9a-f]+$")


def _check_algorithm(algorithm: str) -> None:
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(
            f"Unsupported hash algorithm '{algorithm}' "
            f"(expected one of: {', '.join(SUPPORTED_ALGORITHMS)})"
        )


def digest_size(algorithm: str = DEFAULT_ALGORITHM) -> int:
    """Number of hex characters in an object id for *algorithm*."""
    _check_algorithm(algorithm)
    return hashlib.new(algorithm).digest_size * 2


def hash_bytes(content: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Compute the object id of raw content.

    The id is the lowercase hex digest of the bytes, with no header or
    type prefix, so equal content always maps to the same id.
    """
    _check_algorithm(algorithm)
    return hashlib.new(algorithm, content).hexdigest()


def is_object_id(value: str, algorithm: str | None = None) -> bool:
    """Check whether *value* has the shape of an object id.

    With no algorithm, any supported digest width is accepted.
    """
    if not isinstance(value, str) or not _HEX_PATTERN.match(value):
        return False

    if algorithm is None:
        return any(len(value) == digest_size(a) for a in SUPPORTED_ALGORITHMS)

    return len(value) == digest_size(algorithm)


def empty_tree_id(algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Id of a tree with no entries (it serializes to zero bytes)."""
    return hash_bytes(b"", algorithm)
