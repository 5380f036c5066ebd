from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, TextIO, Union

_SEPARATORS = (",", ":")


class ReseedJournal:
    """Append-only JSONL record of reseed decisions.

    **Invariants:**
      * one line per reseed, in the order the reseeds happened;
      * keys are ``event``, ``clock_seconds``, ``seed_rotated`` and
        ``pool_width``, in that order, rendered compactly;
      * the seed and pool bytes are never written;
      * each record is flushed before ``record_reseed`` returns.

    The journal belongs to whoever opened it. A generator only appends.
    """

    EVENT_RESEED = "reseed"

    def __init__(self, path: Union[str, Path]) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._stream: Optional[TextIO] = target.open("a", encoding="utf-8")

    @property
    def closed(self) -> bool:
        return self._stream is None

    def record_reseed(self, clock_seconds: int, seed_rotated: bool, pool_width: int) -> None:
        if self._stream is None:
            raise ValueError("Cannot record a reseed on a closed journal.")
        record = {
            "event": self.EVENT_RESEED,
            "clock_seconds": clock_seconds,
            "seed_rotated": seed_rotated,
            "pool_width": pool_width,
        }
        self._stream.write(json.dumps(record, separators=_SEPARATORS) + "\n")
        self._stream.flush()

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "ReseedJournal":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
