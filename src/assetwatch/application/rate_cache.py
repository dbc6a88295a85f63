# src/assetwatch/application/rate_cache.py
"""
Rate Cache - TTL Memoization of the Last Good Snapshot

This module keeps the last successful RateSnapshot for a fixed time-to-live
window so that many callers share one network read. One RateCache instance
is created at startup and injected into every component that needs rates.

Files that USE this module:
- assetwatch.application.portfolio_service (live rates for valuations)
- assetwatch.application.refresher (periodic refresh loop)
- assetwatch.app (creates the shared instance)
- tests.test_rate_cache (unit tests)

Files that this module USES:
- assetwatch.adapters.providers.base (RateSource interface)
- assetwatch.config (settings for default TTL)
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from assetwatch.adapters.providers.base import RateSource
from assetwatch.config import settings
from assetwatch.domain.models import RateSnapshot

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateCache:
    """
    Memoizes the last successful fetch for `ttl`.

    A failed refresh propagates the error and leaves the previous snapshot and
    its fetch time untouched: a still-valid entry stays valid, an expired one
    stays expired. Only this class writes the two cache fields.
    """

    def __init__(
        self,
        source: RateSource,
        ttl: Optional[timedelta] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize rate cache.

        Args:
            source: RateSource used on a miss or after expiry
            ttl: Time-to-live (defaults to settings.rate_cache_minutes)
            clock: Callable returning the current aware datetime (defaults to UTC now)
        """
        self.source = source
        self.ttl = ttl if ttl is not None else timedelta(minutes=settings.rate_cache_minutes)
        if self.ttl <= timedelta(0):
            raise ValueError("Cache TTL must be positive")
        self._clock = clock or _utc_now
        self._snapshot: Optional[RateSnapshot] = None
        self._fetched_at: Optional[datetime] = None
        self._refresh_lock = threading.Lock()

    @property
    def snapshot(self) -> Optional[RateSnapshot]:
        return self._snapshot

    @property
    def last_fetch_time(self) -> Optional[datetime]:
        return self._fetched_at

    def peek(self) -> Optional[RateSnapshot]:
        """Last good snapshot regardless of age, without any network call."""
        return self._snapshot

    def is_fresh(self, now: Optional[datetime] = None) -> bool:
        """
        Check if cached snapshot is still valid based on TTL.

        Returns:
            True if a snapshot exists and is within TTL, False otherwise
        """
        if self._snapshot is None or self._fetched_at is None:
            return False
        now = now or self._clock()
        return now - self._fetched_at < self.ttl

    def get_rates(self, now: Optional[datetime] = None) -> RateSnapshot:
        """
        Return cached rates, refreshing from the source on a miss or expiry.

        Concurrent callers that miss at the same time wait for one refresh
        instead of each hitting the network.

        Args:
            now: Current time (defaults to the cache clock)

        Returns:
            The cached or freshly fetched RateSnapshot

        Raises:
            RateSourceError: If a refresh was needed and failed
        """
        now = now or self._clock()
        if self.is_fresh(now):
            log.debug("Using cached rates from %s", self._fetched_at)
            return self._snapshot  # type: ignore[return-value]

        with self._refresh_lock:
            # Another caller may have refreshed while we waited
            if self.is_fresh(now):
                log.debug("Rates refreshed by concurrent caller")
                return self._snapshot  # type: ignore[return-value]

            snapshot = self.source.fetch_rates()
            self._snapshot = snapshot
            self._fetched_at = now

        log.info("Rate cache updated (ttl=%ss)", int(self.ttl.total_seconds()))
        return snapshot
