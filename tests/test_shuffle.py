"""Clock-driven shuffle tests."""

import pytest

from yarrow import ClockUnavailableError, FixedClock, ManualClock, shuffle
from yarrow.clock import BrokenClock


class TestShuffle:

    def test_is_permutation(self):
        items = [1, 2, 3, 4, 5]
        shuffle(items)
        assert sorted(items) == [1, 2, 3, 4, 5]

    def test_usually_reorders(self):
        original = [1, 2, 3, 4, 5]
        runs = []
        for _ in range(20):
            items = list(original)
            shuffle(items)
            runs.append(items)
        assert any(run != original for run in runs)

    def test_returns_none(self):
        assert shuffle([3, 1, 2]) is None

    def test_index_comes_from_clock_nanoseconds(self):
        # Reads 0, 1, 2, 3 -> swaps (4,0), (3,1), (2,2), (1,1)
        clock = ManualClock(start_ns=0, step_ns=1)
        items = [1, 2, 3, 4, 5]
        shuffle(items, clock=clock)
        assert items == [5, 4, 3, 2, 1]
        assert clock.reads == 4

    def test_same_tick_collisions_rotate(self):
        # Every read lands on the same tick, so j is 0 at every step.
        items = [1, 2, 3, 4, 5]
        shuffle(items, clock=FixedClock(0))
        assert items == [2, 3, 4, 5, 1]

    @pytest.mark.parametrize("items", [[], ["only"]])
    def test_short_sequences_untouched(self, items):
        clock = ManualClock(start_ns=7, step_ns=3)
        expected = list(items)
        shuffle(items, clock=clock)
        assert items == expected
        assert clock.reads == 0

    def test_characters(self):
        chars = list("Hello, World!")
        shuffle(chars, clock=ManualClock(start_ns=123_456_789, step_ns=997))
        assert sorted(chars) == sorted("Hello, World!")

    def test_broken_clock_propagates(self):
        with pytest.raises(ClockUnavailableError):
            shuffle([1, 2, 3], clock=BrokenClock())
