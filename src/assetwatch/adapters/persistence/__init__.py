# src/assetwatch/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting recorded investments.
"""

from assetwatch.adapters.persistence.investment_store import (
    InMemoryInvestmentStore,
    InvestmentStore,
    JsonInvestmentStore,
)

__all__ = [
    "InvestmentStore",
    "InMemoryInvestmentStore",
    "JsonInvestmentStore",
]
