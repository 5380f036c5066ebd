"""
Lock-guarded handle for sharing one Yarrow generator.

A Yarrow instance needs exclusive access per call. SharedYarrow serialises
every operation behind a single threading.Lock, so one generator can be
handed to several threads without ambient global state.

Usage:
    shared = SharedYarrow(Yarrow(42))
    shared.generate_random_number()

    with shared.locked() as rng:
        rng.add_entropy(7)
        rng.reseed(8)
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from .generator import Yarrow


class SharedYarrow:
    """Thread-safe facade over a single Yarrow generator."""

    def __init__(self, generator: Yarrow):
        self._generator = generator
        self._lock = threading.Lock()

    @contextmanager
    def locked(self) -> Iterator[Yarrow]:
        """Hold the lock across several calls on the wrapped generator."""
        with self._lock:
            yield self._generator

    def add_entropy(self, entropy: int) -> None:
        with self._lock:
            self._generator.add_entropy(entropy)

    def reseed(self, new_seed: int) -> None:
        with self._lock:
            self._generator.reseed(new_seed)

    def generate_random_bytes(self, count: int) -> bytes:
        with self._lock:
            return self._generator.generate_random_bytes(count)

    def generate_random_number(self) -> int:
        with self._lock:
            return self._generator.generate_random_number()

    def generate_bounded_number(self, min_value: int, max_value: int) -> int:
        with self._lock:
            return self._generator.generate_bounded_number(min_value, max_value)
