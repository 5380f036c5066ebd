"""
Entropy pool arithmetic tests.

Verifies the exact mixing primitives:
- add_entropy appends one digest of the big-endian input
- combine_entropy is the wrapped multiply-by-33 rolling hash xor timestamp
- mix_entropy replaces the pool with digest(pool || be64(entropy))
"""

import hashlib

import pytest

from yarrow.digest import sha256_bytes
from yarrow.pool import U64_MASK, EntropyPool, PoolSnapshot, be64, check_u64


def _sha3(data: bytes) -> bytes:
    return hashlib.sha3_512(data).digest()


class TestAddEntropy:

    def test_appends_digest_of_big_endian_input(self):
        pool = EntropyPool(12345)
        pool.add_entropy(67890)
        assert bytes(pool.pool) == _sha3((67890).to_bytes(8, "big"))

    def test_appends_rather_than_replaces(self):
        pool = EntropyPool(12345)
        pool.add_entropy(1)
        pool.add_entropy(2)
        assert len(pool) == 128
        assert bytes(pool.pool) == _sha3(be64(1)) + _sha3(be64(2))

    def test_seed_untouched(self):
        pool = EntropyPool(12345)
        pool.add_entropy(67890)
        assert pool.seed == 12345

    def test_pool_width_follows_digest(self):
        pool = EntropyPool(1, digest=sha256_bytes)
        pool.add_entropy(1)
        assert len(pool) == 32


class TestCombineEntropy:

    def test_empty_pool_returns_seed(self):
        assert EntropyPool(42).combine_entropy() == 42

    def test_rolling_hash(self):
        pool = EntropyPool(1)
        pool.pool = bytearray([2, 3])
        # (1 * 33 + 2) * 33 + 3
        assert pool.combine_entropy() == 1158

    def test_xors_last_reseed_time(self):
        pool = EntropyPool(1)
        pool.pool = bytearray([2, 3])
        pool.last_reseed_time = 5
        assert pool.combine_entropy() == 1158 ^ 5

    def test_wraps_at_64_bits(self):
        pool = EntropyPool(U64_MASK)
        pool.pool = bytearray([0])
        assert pool.combine_entropy() == U64_MASK - 32

    def test_is_pure(self):
        pool = EntropyPool(7)
        pool.add_entropy(99)
        before = bytes(pool.pool)
        first = pool.combine_entropy()
        assert pool.combine_entropy() == first
        assert bytes(pool.pool) == before


class TestMixEntropy:

    def test_replaces_pool_with_single_digest(self):
        pool = EntropyPool(12345)
        pool.add_entropy(1)
        pool.add_entropy(2)
        old = bytes(pool.pool)

        pool.mix_entropy(77)

        assert len(pool) == 64
        assert bytes(pool.pool) == _sha3(old + (77).to_bytes(8, "big"))

    def test_mix_on_empty_pool(self):
        pool = EntropyPool(0)
        pool.mix_entropy(0)
        assert bytes(pool.pool) == _sha3(b"\x00" * 8)


class TestU64Validation:

    @pytest.mark.parametrize("value", [-1, 1 << 64, True, 1.5, "7"])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(ValueError):
            check_u64(value)

    def test_accepts_bounds(self):
        assert check_u64(0) == 0
        assert check_u64(U64_MASK) == U64_MASK

    def test_constructor_rejects_negative_seed(self):
        with pytest.raises(ValueError):
            EntropyPool(-5)

    def test_add_entropy_rejects_oversized_value(self):
        pool = EntropyPool(1)
        with pytest.raises(ValueError):
            pool.add_entropy(1 << 64)
        assert len(pool) == 0


class TestSnapshot:

    def test_dict_round_trip_restores_state(self):
        pool = EntropyPool(314)
        pool.add_entropy(159)
        pool.last_reseed_time = 2653
        snapshot = pool.snapshot()

        data = snapshot.to_dict()
        assert data["pool"] == bytes(pool.pool).hex()

        other = EntropyPool(0)
        other.restore(PoolSnapshot.from_dict(data))
        assert other.seed == 314
        assert bytes(other.pool) == bytes(pool.pool)
        assert other.last_reseed_time == 2653
        assert other.combine_entropy() == pool.combine_entropy()

    def test_snapshot_is_detached(self):
        pool = EntropyPool(1)
        snapshot = pool.snapshot()
        pool.add_entropy(2)
        assert snapshot.pool == b""
