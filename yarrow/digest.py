"""
Digest functions used to diffuse the entropy pool.

Every digest here is a total function bytes -> bytes with a fixed output
width. The pool is exactly one digest width long after each mix, so the
width of the active digest is the steady-state pool size.

SHA3-512 (64 bytes) is the default.
"""

import hashlib
from typing import Callable, Dict

from .errors import UnknownDigestError

DigestFunction = Callable[[bytes], bytes]

DEFAULT_DIGEST = "sha3_512"


def sha3_512_bytes(data: bytes) -> bytes:
    """
    Compute SHA3-512 and return the raw digest.

    Args:
        data: Input bytes

    Returns:
        64-byte digest
    """
    return hashlib.sha3_512(data).digest()


def sha3_256_bytes(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def sha512_bytes(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def sha256_bytes(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def blake2b_bytes(data: bytes) -> bytes:
    return hashlib.blake2b(data).digest()


_REGISTRY: Dict[str, DigestFunction] = {
    "sha3_512": sha3_512_bytes,
    "sha3_256": sha3_256_bytes,
    "sha512": sha512_bytes,
    "sha256": sha256_bytes,
    "blake2b": blake2b_bytes,
}


def register_digest(name: str, fn: DigestFunction) -> None:
    """
    Register a digest under a name so configuration can select it.

    The function must be total and return the same number of bytes for
    every input.

    Raises:
        ValueError: If the name is empty or the function returns no bytes.
    """
    if not name:
        raise ValueError("digest name must be non-empty")
    if not fn(b""):
        raise ValueError(f"digest '{name}' produced an empty output")
    _REGISTRY[name] = fn


def get_digest(name: str) -> DigestFunction:
    """
    Look up a registered digest.

    Raises:
        UnknownDigestError: If no digest is registered under ``name``.
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY))
        raise UnknownDigestError(f"unknown digest '{name}' (known: {known})") from None


def available_digests() -> list:
    return sorted(_REGISTRY)


def digest_size(fn: DigestFunction) -> int:
    """Output width of a digest function in bytes."""
    return len(fn(b""))
