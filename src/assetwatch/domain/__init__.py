# src/assetwatch/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from assetwatch.domain.models import (
    AssetQuote,
    AssetType,
    Investment,
    PortfolioSummary,
    ProfitResult,
    RateSnapshot,
)
from assetwatch.domain.errors import (
    DomainError,
    InvalidInvestmentError,
    InvalidRateError,
    InvestmentNotFoundError,
    RateSourceError,
    StorageError,
    UnknownAssetTypeError,
)

__all__ = [
    "AssetType",
    "AssetQuote",
    "RateSnapshot",
    "Investment",
    "ProfitResult",
    "PortfolioSummary",
    "DomainError",
    "RateSourceError",
    "InvalidRateError",
    "UnknownAssetTypeError",
    "InvalidInvestmentError",
    "InvestmentNotFoundError",
    "StorageError",
]
