"""Digest token mapping and incremental hashing."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from typing import Protocol

from blake3 import blake3

FALLBACK_ALGORITHM = "SHA-256"

# Token -> canonical identifier. Lookup is case-exact.
ALGORITHMS: dict[str, str] = {
    "sha224": "SHA-224",
    "sha256": "SHA-256",
    "sha384": "SHA-384",
    "sha512": "SHA-512",
    "sha3-224": "SHA3-224",
    "sha3-256": "SHA3-256",
    "sha3-384": "SHA3-384",
    "sha3-512": "SHA3-512",
    "blake2": "BLAKE2B",
    "blake2b": "BLAKE2B",
    "blake2b-128": "BLAKE2B-128",
    "blake2b-160": "BLAKE2B-160",
    "blake2b-224": "BLAKE2B-224",
    "blake2b-256": "BLAKE2B-256",
    "blake2b-384": "BLAKE2B-384",
    "blake2s": "BLAKE2S",
    "blake3": "BLAKE3",
}


class Hasher(Protocol):
    """Incremental hash context."""

    def update(self, data: bytes, /) -> object: ...

    def hexdigest(self) -> str: ...


_HASHERS: dict[str, Callable[[], Hasher]] = {
    "SHA-224": hashlib.sha224,
    "SHA-256": hashlib.sha256,
    "SHA-384": hashlib.sha384,
    "SHA-512": hashlib.sha512,
    "SHA3-224": hashlib.sha3_224,
    "SHA3-256": hashlib.sha3_256,
    "SHA3-384": hashlib.sha3_384,
    "SHA3-512": hashlib.sha3_512,
    "BLAKE2B": hashlib.blake2b,
    "BLAKE2B-128": lambda: hashlib.blake2b(digest_size=16),
    "BLAKE2B-160": lambda: hashlib.blake2b(digest_size=20),
    "BLAKE2B-224": lambda: hashlib.blake2b(digest_size=28),
    "BLAKE2B-256": lambda: hashlib.blake2b(digest_size=32),
    "BLAKE2B-384": lambda: hashlib.blake2b(digest_size=48),
    "BLAKE2S": hashlib.blake2s,
    "BLAKE3": blake3,
}


def canonical_algorithm(token: str) -> str:
    """Map a digest token to its canonical algorithm identifier.

    Args:
        token: Algorithm prefix of an ``algorithm:hex`` digest.

    Returns:
        Canonical identifier, ``SHA-256`` for unknown tokens.
    """
    return ALGORITHMS.get(token, FALLBACK_ALGORITHM)


def parse_digest(digest: str) -> tuple[str, str]:
    """Split a digest string into token and lowercase hex.

    A bare hex string without a token is read as SHA-256.

    Args:
        digest: Digest in ``algorithm:hex`` form.

    Returns:
        ``(token, hex)`` pair.
    """
    token, sep, value = digest.partition(":")
    if not sep:
        return "sha256", token.strip().lower()
    return token, value.strip().lower()


def new_hasher(algorithm: str) -> Hasher:
    """Create an incremental hasher for a canonical identifier.

    Args:
        algorithm: Canonical identifier from ``canonical_algorithm``.

    Returns:
        Fresh hash context.

    Raises:
        ValueError: If the identifier is not canonical.
    """
    try:
        factory = _HASHERS[algorithm]
    except KeyError as exc:
        raise ValueError(f"Unsupported digest algorithm: {algorithm}") from exc
    return factory()


def verify_bytes(data: bytes, digest: str) -> bool:
    """Check an in-memory payload against an ``algorithm:hex`` digest."""
    token, expected = parse_digest(digest)
    hasher = new_hasher(canonical_algorithm(token))
    hasher.update(data)
    return hasher.hexdigest() == expected
