"""
Entropy pool state and the mixing primitives that act on it.

The pool holds three pieces of state:

- seed: 64-bit scalar seeding the rolling combine hash
- pool: ordered bytes, grown by add_entropy() and replaced by mix_entropy()
- last_reseed_time: seconds since epoch of the last seed rotation (0 = never)

The arithmetic here is fixed: big-endian 8-byte encodings, a
multiply-by-33-add-byte rolling hash wrapped to 64 bits, and a full pool
replace by one digest on every mix. Generated streams depend on it exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .digest import DigestFunction, sha3_512_bytes

U64_MASK = (1 << 64) - 1
ROLLING_MULTIPLIER = 33


def check_u64(value: int, name: str = "value") -> int:
    """
    Validate that ``value`` fits in an unsigned 64-bit integer.

    Raises:
        ValueError: If the value is negative or >= 2**64.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value > U64_MASK:
        raise ValueError(f"{name} must be in [0, 2**64), got {value}")
    return value


def be64(value: int) -> bytes:
    """8-byte big-endian encoding of an unsigned 64-bit integer."""
    return check_u64(value).to_bytes(8, "big")


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable copy of the pool state, used to build twin generators."""

    seed: int
    pool: bytes
    last_reseed_time: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary (pool as hex)."""
        return {
            "seed": self.seed,
            "pool": self.pool.hex(),
            "last_reseed_time": self.last_reseed_time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoolSnapshot":
        return cls(
            seed=check_u64(int(data["seed"]), "seed"),
            pool=bytes.fromhex(data["pool"]),
            last_reseed_time=check_u64(int(data["last_reseed_time"]), "last_reseed_time"),
        )


class EntropyPool:
    """
    Byte pool plus the seed and reseed-timestamp scalars.

    The pool is appended to by add_entropy() and normalised to exactly one
    digest width by mix_entropy(). Nothing else reads it at a fixed width.

    Args:
        seed: Initial 64-bit seed.
        digest: Digest function used for expansion and mixing.
    """

    def __init__(self, seed: int, digest: Optional[DigestFunction] = None):
        self.seed = check_u64(seed, "seed")
        self.pool = bytearray()
        self.last_reseed_time = 0
        self._digest = digest or sha3_512_bytes

    @property
    def digest(self) -> DigestFunction:
        return self._digest

    def __len__(self) -> int:
        return len(self.pool)

    def add_entropy(self, entropy: int) -> None:
        """
        Expand ``entropy`` through the digest and append it to the pool tail.

        Args:
            entropy: 64-bit unsigned value.
        """
        self.pool.extend(self._digest(be64(entropy)))

    def combine_entropy(self) -> int:
        """
        Fold the whole pool into one 64-bit scalar.

        Starts from the seed, applies ``combined = combined * 33 + byte`` over
        the pool in insertion order (wrapping at 2**64), then xors in
        last_reseed_time. Does not modify state.
        """
        combined = self.seed
        for byte in self.pool:
            combined = (combined * ROLLING_MULTIPLIER + byte) & U64_MASK
        return combined ^ self.last_reseed_time

    def mix_entropy(self, entropy: int) -> None:
        """
        Replace the pool with digest(pool || be64(entropy)).

        Args:
            entropy: 64-bit unsigned value.
        """
        self.pool = bytearray(self._digest(bytes(self.pool) + be64(entropy)))

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            seed=self.seed,
            pool=bytes(self.pool),
            last_reseed_time=self.last_reseed_time,
        )

    def restore(self, snapshot: PoolSnapshot) -> None:
        """Overwrite the current state with a snapshot."""
        self.seed = check_u64(snapshot.seed, "seed")
        self.pool = bytearray(snapshot.pool)
        self.last_reseed_time = check_u64(snapshot.last_reseed_time, "last_reseed_time")
