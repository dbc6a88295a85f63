# src/assetwatch/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class RateSourceError(DomainError):
    """
    Raised when rates cannot be obtained from the remote source.

    Covers transport failures, non-success HTTP statuses and payloads
    that fail structural validation.
    """

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class InvalidRateError(RateSourceError):
    """Raised when a rate value is invalid (e.g., negative, zero, NaN or infinite)."""
    pass


class UnknownAssetTypeError(DomainError, ValueError):
    """Raised when an asset type is outside the supported set."""
    pass


class InvalidInvestmentError(DomainError, ValueError):
    """Raised when an investment is created with an invalid amount or rate."""
    pass


class InvestmentNotFoundError(DomainError, KeyError):
    """Raised when an investment id is not present in the store."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class StorageError(DomainError):
    """Raised when investment records cannot be written."""
    pass
