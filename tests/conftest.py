# tests/conftest.py
import pytest

from yarrow import ManualClock, Yarrow

# Comfortably past the default 60 second reseed gate.
START_SECONDS = 1_000


@pytest.fixture
def clock():
    return ManualClock.from_seconds(START_SECONDS)


@pytest.fixture
def rng(clock):
    return Yarrow(12345, clock=clock)


@pytest.fixture(autouse=True)
def _clear_yarrow_env(monkeypatch):
    for name in ("YARROW_RESEED_INTERVAL", "YARROW_DIGEST", "YARROW_JOURNAL_PATH"):
        monkeypatch.delenv(name, raising=False)
