# src/assetwatch/adapters/providers/base.py
"""
Base Provider Interface for Rate Sources

This module defines the abstract base class for all rate sources.
It establishes the contract that all provider implementations must follow.

Files that USE this module:
- assetwatch.adapters.providers.finance_api (FinanceApiProvider implements RateSource)
- assetwatch.application.rate_cache (RateCache reads through a RateSource)
- tests.* (fake sources in unit tests)

Files that this module USES:
- assetwatch.domain.models (RateSnapshot)
"""
from abc import ABC, abstractmethod

from assetwatch.domain.models import RateSnapshot


class RateSource(ABC):
    @abstractmethod
    def fetch_rates(self) -> RateSnapshot:
        """
        Perform one read against the source and return a validated snapshot.

        Raises:
            RateSourceError: On transport failure or an invalid payload
        """
        raise NotImplementedError
