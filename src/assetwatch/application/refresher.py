# src/assetwatch/application/refresher.py
"""
Rate Refresher - Cancelable Periodic Refresh Task

This module runs a periodic refresh of the shared RateCache on asyncio.
Each tick reads rates through the cache in a worker thread (so the event
loop never blocks on HTTP), then reports the snapshot or the error to
optional callbacks. Stopping cancels the task; nothing further is scheduled.

Files that USE this module:
- assetwatch.app (drives the console rate display)
- tests.test_refresher (unit tests)

Files that this module USES:
- assetwatch.application.rate_cache (RateCache)
- assetwatch.config (settings for default interval)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Callable, Optional, Union

from assetwatch.application.rate_cache import RateCache
from assetwatch.config import settings
from assetwatch.domain.errors import RateSourceError
from assetwatch.domain.models import RateSnapshot

log = logging.getLogger(__name__)

UpdateCallback = Callable[[RateSnapshot], None]
ErrorCallback = Callable[[RateSourceError], None]


class RateRefresher:
    """
    Periodically pulls rates through the cache.

    Usage:
        refresher = RateRefresher(cache, on_update=show)
        refresher.start()          # inside a running event loop
        ...
        await refresher.stop()

    or as `async with RateRefresher(cache) as refresher: ...`.
    """

    def __init__(
        self,
        cache: RateCache,
        interval: Optional[Union[float, timedelta]] = None,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        """
        Initialize refresher.

        Args:
            cache: Shared RateCache to refresh
            interval: Seconds (or timedelta) between ticks (defaults to settings.refresh_interval_minutes)
            on_update: Called with each snapshot obtained
            on_error: Called with each RateSourceError raised by a tick
        """
        if interval is None:
            interval = settings.refresh_interval_seconds
        if isinstance(interval, timedelta):
            interval = interval.total_seconds()
        if interval <= 0:
            raise ValueError("Refresh interval must be positive")

        self.cache = cache
        self.interval = float(interval)
        self.on_update = on_update
        self.on_error = on_error
        self._task: Optional[asyncio.Task] = None
        # Created lazily so it binds to the loop that runs the refresher
        self._lock: Optional[asyncio.Lock] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> Optional[RateSnapshot]:
        """
        Run one refresh tick.

        Returns:
            The snapshot, or None if the fetch failed or a tick was already running
        """
        if self._lock is None:
            self._lock = asyncio.Lock()
        if self._lock.locked():
            log.debug("Refresh already in progress, skipping tick")
            return None

        async with self._lock:
            try:
                snapshot = await asyncio.to_thread(self.cache.get_rates)
            except RateSourceError as e:
                log.warning("Rate refresh failed, will retry next tick: %s", e)
                self._notify(self.on_error, e)
                return None
            except Exception:
                log.exception("Unexpected error during rate refresh, will retry next tick")
                return None

        self._notify(self.on_update, snapshot)
        return snapshot

    @staticmethod
    def _notify(callback: Optional[Callable], arg) -> None:
        if callback is None:
            return
        try:
            callback(arg)
        except Exception:
            log.exception("Refresh callback %r failed", callback)

    async def _run(self) -> None:
        log.info("Rate refresher started (interval=%ss)", self.interval)
        while True:
            await self.refresh_once()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """
        Schedule the refresh loop on the running event loop.

        The first tick runs immediately. Calling start() while running is a no-op.
        """
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the refresh loop and wait until it has exited."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        log.info("Rate refresher stopped")

    async def __aenter__(self) -> "RateRefresher":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
