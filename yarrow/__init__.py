"""
Yarrow Entropy-Pool Generator

Entropy pool, time-gated reseed policy, byte/integer extraction and a
clock-driven shuffle utility.
"""

from yarrow.clock import (
    Clock,
    SystemClock,
    FixedClock,
    ManualClock,
)

from yarrow.config import YarrowConfig

from yarrow.errors import (
    YarrowError,
    ClockUnavailableError,
    InvalidBoundsError,
    UnknownDigestError,
)

from yarrow.generator import Yarrow
from yarrow.handle import SharedYarrow
from yarrow.journal import ReseedJournal
from yarrow.pool import EntropyPool, PoolSnapshot
from yarrow.shuffle import shuffle

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "ManualClock",
    "YarrowConfig",
    "YarrowError",
    "ClockUnavailableError",
    "InvalidBoundsError",
    "UnknownDigestError",
    "Yarrow",
    "SharedYarrow",
    "ReseedJournal",
    "EntropyPool",
    "PoolSnapshot",
    "shuffle",
]
