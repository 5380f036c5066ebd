"""
Yarrow Generator

Entropy-pool pseudorandom engine with a time-gated reseed policy.

Every extraction advances the pool once per output byte (combine, then mix)
and finishes with a single reseed. A reseed always diffuses new entropy into
the pool, but rotates the long-lived seed scalar at most once per
reseed_interval seconds.

This is a bespoke construction, not a certified CSPRNG: it makes no
forward or backward secrecy claims.

Usage:
    from yarrow import Yarrow

    rng = Yarrow(12345)
    rng.add_entropy(67890)
    token = rng.generate_random_bytes(16)
    roll = rng.generate_bounded_number(1, 6)
"""

from __future__ import annotations

import logging
from typing import Optional

from .clock import Clock, default_clock
from .config import DEFAULT_RESEED_INTERVAL, YarrowConfig
from .digest import DigestFunction, get_digest
from .errors import InvalidBoundsError
from .journal import ReseedJournal
from .pool import EntropyPool, PoolSnapshot, check_u64

logger = logging.getLogger(__name__)


class Yarrow:
    """
    Stateful pseudorandom generator over an entropy pool.

    Instances are not thread-safe; every method needs exclusive access for
    its duration. Wrap the instance in yarrow.handle.SharedYarrow to share it.

    Args:
        seed: Initial 64-bit seed.
        clock: Time source for the reseed gate (default: system clock).
        digest: Digest function for pool expansion and mixing (default: SHA3-512).
        reseed_interval: Seed rotation fires only when strictly more than this
            many seconds have passed since the previous rotation.
        journal: Optional ReseedJournal receiving one record per reseed.
    """

    def __init__(
        self,
        seed: int,
        *,
        clock: Optional[Clock] = None,
        digest: Optional[DigestFunction] = None,
        reseed_interval: int = DEFAULT_RESEED_INTERVAL,
        journal: Optional[ReseedJournal] = None,
    ):
        if reseed_interval < 0:
            raise ValueError(f"reseed_interval must be >=0, got {reseed_interval}")
        self._pool = EntropyPool(seed, digest=digest)
        self._clock = clock or default_clock()
        self._reseed_interval = reseed_interval
        self._journal = journal
        self._owns_journal = False

    @classmethod
    def from_config(
        cls,
        seed: int,
        config: Optional[YarrowConfig] = None,
        *,
        clock: Optional[Clock] = None,
    ) -> "Yarrow":
        """
        Build a generator from a YarrowConfig.

        A journal named by ``config.journal_path`` is opened once the
        generator is built, and closed by Yarrow.close() or on leaving a
        ``with`` block.

        Raises:
            ValueError: If the configuration or the seed is invalid.
        """
        config = config or YarrowConfig()
        config.validate()
        generator = cls(
            seed,
            clock=clock,
            digest=get_digest(config.digest),
            reseed_interval=config.reseed_interval,
        )
        if config.journal_path:
            generator._journal = ReseedJournal(config.journal_path)
            generator._owns_journal = True
        return generator

    @classmethod
    def from_snapshot(
        cls,
        snapshot: PoolSnapshot,
        *,
        clock: Optional[Clock] = None,
        digest: Optional[DigestFunction] = None,
        reseed_interval: int = DEFAULT_RESEED_INTERVAL,
    ) -> "Yarrow":
        """Build a generator whose state is a copy of ``snapshot``."""
        generator = cls(snapshot.seed, clock=clock, digest=digest, reseed_interval=reseed_interval)
        generator._pool.restore(snapshot)
        return generator

    # ------------------------------------------------------------------#
    # State accessors
    # ------------------------------------------------------------------#

    @property
    def seed(self) -> int:
        return self._pool.seed

    @property
    def pool(self) -> bytes:
        return bytes(self._pool.pool)

    @property
    def last_reseed_time(self) -> int:
        return self._pool.last_reseed_time

    @property
    def reseed_interval(self) -> int:
        return self._reseed_interval

    @property
    def clock(self) -> Clock:
        return self._clock

    def snapshot(self) -> PoolSnapshot:
        return self._pool.snapshot()

    def close(self) -> None:
        """Close the reseed journal if this generator opened it."""
        if self._journal is not None and self._owns_journal:
            self._journal.close()

    def __enter__(self) -> "Yarrow":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------#
    # Pool and mixer
    # ------------------------------------------------------------------#

    def add_entropy(self, entropy: int) -> None:
        """Append the digest of ``entropy`` to the pool. Never touches the seed."""
        self._pool.add_entropy(entropy)

    def combine_entropy(self) -> int:
        """Fold pool, seed and last reseed time into one 64-bit scalar."""
        return self._pool.combine_entropy()

    def mix_entropy(self, entropy: int) -> None:
        """Replace the pool with digest(pool || be64(entropy))."""
        self._pool.mix_entropy(entropy)

    # ------------------------------------------------------------------#
    # Reseed policy
    # ------------------------------------------------------------------#

    def reseed(self, new_seed: int) -> None:
        """
        Fold ``new_seed`` into the pool and, if due, rotate the seed.

        The pool is always updated: new_seed is appended via add_entropy and
        the result is mixed. The seed is xored with new_seed only when the
        clock has moved strictly more than reseed_interval seconds past
        last_reseed_time. A clock reading earlier than last_reseed_time is
        treated as "not due".

        Args:
            new_seed: 64-bit unsigned entropy value.

        Raises:
            ClockUnavailableError: If the clock cannot be read. The pool
                update has already happened at that point.
        """
        check_u64(new_seed, "new_seed")
        self._pool.add_entropy(new_seed)
        self._pool.mix_entropy(self._pool.combine_entropy())

        now = self._clock.now_seconds()
        elapsed = now - self._pool.last_reseed_time
        rotated = False
        if elapsed < 0:
            logger.warning(
                "Clock moved backwards by %ds since last seed rotation; rotation skipped",
                -elapsed,
            )
        elif elapsed > self._reseed_interval:
            self._pool.last_reseed_time = now
            self._pool.seed ^= new_seed
            rotated = True

        logger.debug("Reseed at t=%d: seed_rotated=%s pool_width=%d", now, rotated, len(self._pool))
        if self._journal is not None:
            self._journal.record_reseed(now, rotated, len(self._pool))

    # ------------------------------------------------------------------#
    # Extraction
    # ------------------------------------------------------------------#

    def generate_random_bytes(self, count: int) -> bytes:
        """
        Produce ``count`` bytes, advancing the pool once per byte.

        Each byte is the low 8 bits of combine_entropy() taken before the mix
        it feeds. The batch ends with reseed(last byte), or reseed(0) when
        count is 0.

        Args:
            count: Number of bytes to produce (>= 0).

        Returns:
            bytes of length ``count``

        Raises:
            ValueError: If count is negative.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"count must be a non-negative int, got {count!r}")

        output = bytearray()
        for _ in range(count):
            entropy = self._pool.combine_entropy()
            self._pool.mix_entropy(entropy)
            output.append(entropy & 0xFF)

        last_byte = output[-1] if output else 0
        self.reseed(last_byte)
        return bytes(output)

    def generate_random_number(self) -> int:
        """Unsigned 64-bit integer from 8 generated bytes, most significant first."""
        return int.from_bytes(self.generate_random_bytes(8), "big")

    def generate_bounded_number(self, min_value: int, max_value: int) -> int:
        """
        Integer in the inclusive range [min_value, max_value].

        Computed as ``min_value + n % (max_value - min_value + 1)``. The modulo
        reduction is slightly biased toward the low end whenever the range
        width does not divide 2**64.

        Raises:
            InvalidBoundsError: If max_value < min_value. Raised before any
                state change.
            ValueError: If either bound is outside [0, 2**64).
        """
        check_u64(min_value, "min_value")
        check_u64(max_value, "max_value")
        if max_value < min_value:
            raise InvalidBoundsError(
                f"max_value ({max_value}) must be >= min_value ({min_value})"
            )
        number = self.generate_random_number()
        return min_value + number % (max_value - min_value + 1)
