# src/assetwatch/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for external rate APIs.
All providers implement the RateSource interface.
"""

from assetwatch.adapters.providers.base import RateSource
from assetwatch.adapters.providers.finance_api import FinanceApiProvider
from assetwatch.adapters.providers.shapes import (
    FlatRatesShape,
    NestedRatesShape,
    parse_locale_number,
    sniff_shape,
)

__all__ = [
    "RateSource",
    "FinanceApiProvider",
    "NestedRatesShape",
    "FlatRatesShape",
    "parse_locale_number",
    "sniff_shape",
]
