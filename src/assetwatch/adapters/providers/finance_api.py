# src/assetwatch/adapters/providers/finance_api.py
"""
Finance API Provider for Gold, Dollar and Euro Rates

This module implements the HTTP client for the finance rates endpoint
(gram gold, USD and EUR quoted in TRY). It performs a single read per call,
selects a response-shape parser and returns a validated RateSnapshot.
Caching is not done here; see assetwatch.application.rate_cache.

Files that USE this module:
- assetwatch.app (builds the provider behind the rate cache)
- tests.test_providers (unit tests)

Files that this module USES:
- assetwatch.adapters.providers.base (RateSource interface)
- assetwatch.adapters.providers.shapes (payload parsers)
- assetwatch.config (settings for URL, shape and timeout)
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from assetwatch.adapters.providers.base import RateSource
from assetwatch.adapters.providers.shapes import ResponseShape, get_shape, sniff_shape
from assetwatch.config import settings
from assetwatch.domain.errors import InvalidRateError, RateSourceError
from assetwatch.domain.models import AssetType, RateSnapshot
from assetwatch.shared.validators import validate_url

log = logging.getLogger(__name__)


class FinanceApiProvider(RateSource):
    """
    Rate source backed by the finance 'today' JSON endpoint.

    The payload shape is either forced by configuration ('nested' / 'flat')
    or sniffed from each response ('auto').
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        shape: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize finance API provider.

        Args:
            base_url: Optional custom API URL (defaults to settings.rates_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            shape: Optional shape selector 'auto', 'nested' or 'flat' (defaults to settings.rates_shape)
            session: Optional requests.Session to reuse connections

        Raises:
            ValueError: If the URL or shape selector is invalid
        """
        self.url = base_url or settings.rates_url
        if not validate_url(self.url):
            raise ValueError(f"Invalid rates URL: {self.url!r}")
        self.timeout = timeout or settings.http_timeout_seconds
        self.shape_name = (shape or settings.rates_shape).strip().lower()
        self._shape: Optional[ResponseShape] = get_shape(self.shape_name)
        self.session = session

    def get_latest_raw(self) -> Any:
        """
        Get the raw JSON body from the rates endpoint.

        Returns:
            Decoded JSON payload

        Raises:
            RateSourceError: On timeout, connection failure, non-2xx status or invalid JSON
        """
        get = self.session.get if self.session is not None else requests.get
        try:
            log.info("Fetching fresh rates from %s", self.url)
            resp = get(self.url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            log.error("Rates API timeout after %d seconds", self.timeout)
            raise RateSourceError(f"Rates API timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            log.error("Rates API request failed: %s", e)
            raise RateSourceError(f"Rates API request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            log.error("Rates API returned HTTP %d", resp.status_code)
            raise RateSourceError(
                f"Rates API returned HTTP {resp.status_code}", status_code=resp.status_code
            )

        try:
            return resp.json()
        except ValueError as e:
            log.error("Rates API returned invalid JSON: %s", e)
            raise RateSourceError(f"Rates API returned invalid JSON: {e}") from e

    def fetch_rates(self) -> RateSnapshot:
        """
        Fetch and normalize current rates.

        Returns:
            RateSnapshot with buying/selling/change per asset type

        Raises:
            RateSourceError: If the request fails or the payload is malformed
            InvalidRateError: If any rate is non-numeric, NaN, infinite or <= 0
        """
        data = self.get_latest_raw()
        fetched_at = datetime.now(timezone.utc)

        try:
            shape = self._shape or sniff_shape(data)
            snapshot = shape.parse(data, fetched_at=fetched_at, source=f"finance_api:{shape.name}")
        except InvalidRateError as e:
            log.error("Rates API returned invalid rate data: %s", e)
            raise
        except RateSourceError as e:
            log.error("Rates API unexpected response structure: %s", e)
            raise
        except (KeyError, TypeError, AttributeError, ValueError, OverflowError) as e:
            log.error("Rates API schema error: %s", e)
            raise RateSourceError(f"Rates API schema error: {e}") from e

        log.info(
            "Rates updated (%s): gold=%s dollar=%s euro=%s",
            shape.name,
            snapshot.rate(AssetType.GOLD),
            snapshot.rate(AssetType.DOLLAR),
            snapshot.rate(AssetType.EURO),
        )
        return snapshot
