"""
Clock-driven Fisher-Yates shuffle.

Independent of the Yarrow generator: each swap index is the current clock
reading in nanoseconds reduced modulo (i + 1). Consecutive reads that land in
the same clock tick yield related indices, so shuffle quality depends on
clock resolution. That behaviour is kept as is.
"""

from typing import Any, MutableSequence, Optional

from .clock import Clock, default_clock


def shuffle(items: MutableSequence[Any], clock: Optional[Clock] = None) -> None:
    """
    Permute ``items`` in place.

    Walks i from len(items) - 1 down to 1, swapping items[i] with
    items[now_ns % (i + 1)], one clock read per index.

    Args:
        items: Mutable sequence to permute.
        clock: Time source (default: system clock).

    Raises:
        ClockUnavailableError: If the clock cannot be read.
    """
    clock = clock or default_clock()
    for i in range(len(items) - 1, 0, -1):
        j = clock.now_ns() % (i + 1)
        items[i], items[j] = items[j], items[i]
