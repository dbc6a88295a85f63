"""
Shared Test Fixtures - Fake Rate Sources, Clocks and Snapshots

Files that USE this module:
- pytest (auto-loaded for every test module)

Files that this module USES:
- assetwatch.adapters.providers.base (RateSource interface for fakes)
- assetwatch.domain.models (RateSnapshot, AssetType)
"""
import threading  # Call counting across worker threads
import time  # Slow fake source
from datetime import datetime, timedelta, timezone  # Controlled timestamps for TTL tests

import pytest  # Testing framework for fixtures

from assetwatch.adapters.providers.base import RateSource  # Interface implemented by fakes
from assetwatch.domain.models import AssetType, RateSnapshot  # Snapshot construction

T0 = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def make_snapshot(gold=2100.0, dollar=32.5, euro=35.2, fetched_at=T0):
    return RateSnapshot.from_rates(
        {AssetType.GOLD: gold, AssetType.DOLLAR: dollar, AssetType.EURO: euro},
        fetched_at=fetched_at,
        source="test",
    )


class SequenceSource(RateSource):
    """Returns (or raises) the queued results in order; the last one repeats."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def fetch_rates(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class SlowSource(RateSource):
    """Returns the same snapshot after a short delay, counting calls thread-safely."""

    def __init__(self, snapshot, delay=0.05):
        self.snapshot = snapshot
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def fetch_rates(self):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return self.snapshot


class FakeClock:
    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def snapshot():
    return make_snapshot()
