"""
Rate Refresher Tests - Unit Tests for the Periodic Refresh Task

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- assetwatch.application.refresher (RateRefresher for testing)
- pytest (testing framework)
"""
import asyncio  # Event loop for the refresher
from datetime import timedelta  # Intervals and tiny TTLs

import pytest  # Testing framework for writing and running tests

from conftest import SequenceSource, SlowSource, make_snapshot  # Fakes and fixtures

from assetwatch.application.rate_cache import RateCache  # Cache refreshed by the task
from assetwatch.application.refresher import RateRefresher  # Refresher to test
from assetwatch.domain.errors import RateSourceError  # Tick failures

TINY_TTL = timedelta(microseconds=1)


class TestRefresherConfig:
    @pytest.mark.parametrize("interval", [0, -1, timedelta(0)])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValueError):
            RateRefresher(RateCache(SequenceSource(make_snapshot())), interval=interval)

    def test_timedelta_interval(self):
        refresher = RateRefresher(RateCache(SequenceSource(make_snapshot())), interval=timedelta(seconds=30))
        assert refresher.interval == 30.0

    def test_default_interval_is_five_minutes(self):
        refresher = RateRefresher(RateCache(SequenceSource(make_snapshot())))
        assert refresher.interval == 300.0


class TestRefreshOnce:
    def test_returns_snapshot_and_notifies(self):
        snapshot = make_snapshot()
        updates = []
        refresher = RateRefresher(RateCache(SequenceSource(snapshot)), interval=60, on_update=updates.append)

        result = asyncio.run(refresher.refresh_once())

        assert result is snapshot
        assert updates == [snapshot]

    def test_failure_is_reported_not_raised(self):
        errors = []
        error = RateSourceError("Rates API returned HTTP 500", status_code=500)
        refresher = RateRefresher(RateCache(SequenceSource(error)), interval=60, on_error=errors.append)

        assert asyncio.run(refresher.refresh_once()) is None
        assert errors == [error]

    def test_overlapping_tick_is_skipped(self):
        snapshot = make_snapshot()
        refresher = RateRefresher(RateCache(SlowSource(snapshot)), interval=60)

        async def scenario():
            return await asyncio.gather(refresher.refresh_once(), refresher.refresh_once())

        first, second = asyncio.run(scenario())
        assert first is snapshot
        assert second is None


class TestRefreshLoop:
    def test_first_tick_runs_immediately(self):
        updates = []
        refresher = RateRefresher(RateCache(SequenceSource(make_snapshot())), interval=60, on_update=updates.append)

        async def scenario():
            refresher.start()
            await asyncio.sleep(0.05)
            await refresher.stop()

        asyncio.run(scenario())
        assert len(updates) == 1

    def test_no_fetches_after_stop(self):
        source = SequenceSource(make_snapshot())
        refresher = RateRefresher(RateCache(source, ttl=TINY_TTL), interval=0.01)

        async def scenario():
            refresher.start()
            await asyncio.sleep(0.1)
            await refresher.stop()
            calls_at_stop = source.calls
            await asyncio.sleep(0.1)
            return calls_at_stop

        calls_at_stop = asyncio.run(scenario())
        assert calls_at_stop >= 2
        assert source.calls == calls_at_stop
        assert not refresher.running

    def test_error_does_not_stop_loop(self):
        snapshot = make_snapshot()
        source = SequenceSource(RateSourceError("down"), snapshot)
        updates, errors = [], []
        refresher = RateRefresher(
            RateCache(source, ttl=TINY_TTL),
            interval=0.01,
            on_update=updates.append,
            on_error=errors.append,
        )

        async def scenario():
            refresher.start()
            await asyncio.sleep(0.1)
            await refresher.stop()

        asyncio.run(scenario())
        assert len(errors) == 1
        assert updates and updates[0] is snapshot

    def test_unexpected_error_does_not_stop_loop(self):
        snapshot = make_snapshot()
        source = SequenceSource(RuntimeError("int too large"), snapshot)
        updates, errors = [], []
        refresher = RateRefresher(
            RateCache(source, ttl=TINY_TTL),
            interval=0.01,
            on_update=updates.append,
            on_error=errors.append,
        )

        async def scenario():
            refresher.start()
            await asyncio.sleep(0.1)
            still_running = refresher.running
            await refresher.stop()
            return still_running

        assert asyncio.run(scenario()) is True
        assert errors == []
        assert updates and updates[0] is snapshot
        assert source.calls >= 2

    def test_unexpected_error_in_refresh_once_returns_none(self):
        refresher = RateRefresher(RateCache(SequenceSource(OverflowError("too large"))), interval=60)

        assert asyncio.run(refresher.refresh_once()) is None

    def test_callback_exception_does_not_stop_loop(self):
        source = SequenceSource(make_snapshot())

        def broken(_snapshot):
            raise RuntimeError("display failed")

        refresher = RateRefresher(RateCache(source, ttl=TINY_TTL), interval=0.01, on_update=broken)

        async def scenario():
            refresher.start()
            await asyncio.sleep(0.1)
            await refresher.stop()

        asyncio.run(scenario())
        assert source.calls >= 2

    def test_start_twice_runs_one_loop(self):
        source = SequenceSource(make_snapshot())
        refresher = RateRefresher(RateCache(source), interval=60)

        async def scenario():
            refresher.start()
            first_task = refresher._task
            refresher.start()
            assert refresher._task is first_task
            await asyncio.sleep(0.05)
            await refresher.stop()

        asyncio.run(scenario())
        assert source.calls == 1

    def test_context_manager(self):
        refresher = RateRefresher(RateCache(SequenceSource(make_snapshot())), interval=60)

        async def scenario():
            async with refresher:
                assert refresher.running
            return refresher.running

        assert asyncio.run(scenario()) is False

    def test_stop_without_start(self):
        refresher = RateRefresher(RateCache(SequenceSource(make_snapshot())), interval=60)
        asyncio.run(refresher.stop())
        assert not refresher.running
