# src/assetwatch/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
Adapters are reached through interfaces and injected at construction.
"""

from assetwatch.application.historical import estimate_rate, estimate_snapshot, is_today
from assetwatch.application.portfolio_service import PortfolioService
from assetwatch.application.rate_cache import RateCache
from assetwatch.application.refresher import RateRefresher
from assetwatch.application.valuation import (
    ProfitBasis,
    compute_profit,
    current_value,
    profit_percentage,
)

__all__ = [
    "RateCache",
    "RateRefresher",
    "PortfolioService",
    "ProfitBasis",
    "compute_profit",
    "current_value",
    "profit_percentage",
    "estimate_rate",
    "estimate_snapshot",
    "is_today",
]
