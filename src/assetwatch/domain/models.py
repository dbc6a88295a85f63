# src/assetwatch/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Asset types (gold, dollar, euro)
- Rate snapshots with per-asset quotes
- Investments (recorded purchases)
- Profit results and portfolio summaries

Files that USE this module:
- assetwatch.application.* (all services use domain models)
- assetwatch.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- assetwatch.domain.errors (validation failures)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math  # Finite checks for rate values
import uuid  # Client-side investment identifiers
from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import date, datetime, timezone  # Date/time utilities for timestamps
from enum import Enum  # Closed set of asset types
from types import MappingProxyType  # Read-only view over snapshot quotes
from typing import Any, Dict, Mapping, Optional, Union  # Type hints

from assetwatch.domain.errors import (
    InvalidInvestmentError,
    InvalidRateError,
    UnknownAssetTypeError,
)


class AssetType(str, Enum):
    """Supported asset types. Closed set, used as a lookup key everywhere."""
    GOLD = "gold"
    DOLLAR = "dollar"
    EURO = "euro"

    @classmethod
    def parse(cls, value: Union["AssetType", str]) -> "AssetType":
        """
        Resolve a member from itself or its string value (case-insensitive).

        Raises:
            UnknownAssetTypeError: If value is not a supported asset type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownAssetTypeError(f"Unknown asset type: {value!r}")


def _is_valid_rate(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class AssetQuote:
    """
    Market quote for a single asset.

    Attributes:
        buying: Buy rate in the settlement currency (finite, > 0)
        selling: Optional sell rate (finite, > 0 when present)
        change: Optional percentage change reported by the source
    """
    buying: float
    selling: Optional[float] = None
    change: Optional[float] = None

    def __post_init__(self) -> None:
        if not _is_valid_rate(self.buying):
            raise InvalidRateError(f"Invalid buying rate: {self.buying!r}")
        if self.selling is not None and not _is_valid_rate(self.selling):
            raise InvalidRateError(f"Invalid selling rate: {self.selling!r}")
        if self.change is not None and not (
            isinstance(self.change, (int, float)) and math.isfinite(self.change)
        ):
            raise InvalidRateError(f"Invalid change value: {self.change!r}")


@dataclass(frozen=True)
class RateSnapshot:
    """
    Immutable set of quotes for all supported asset types captured at one instant.

    Attributes:
        quotes: Mapping of AssetType to AssetQuote (must cover every asset type)
        fetched_at: When the snapshot was captured (UTC)
        source: Optional label of where the data came from
    """
    quotes: Mapping[AssetType, AssetQuote] = field(hash=False)
    fetched_at: datetime
    source: Optional[str] = None

    def __post_init__(self) -> None:
        quotes: Dict[AssetType, AssetQuote] = {}
        for key, quote in self.quotes.items():
            if not isinstance(quote, AssetQuote):
                raise InvalidRateError(f"Quote for {key!r} is not an AssetQuote")
            quotes[AssetType.parse(key)] = quote
        missing = [a.value for a in AssetType if a not in quotes]
        if missing:
            raise InvalidRateError(f"Snapshot missing rates for: {', '.join(missing)}")
        object.__setattr__(self, "quotes", MappingProxyType(quotes))

    @classmethod
    def from_rates(
        cls,
        rates: Mapping[AssetType, float],
        fetched_at: Optional[datetime] = None,
        source: Optional[str] = None,
    ) -> "RateSnapshot":
        """Build a snapshot from plain buying rates."""
        return cls(
            quotes={asset: AssetQuote(buying=rate) for asset, rate in rates.items()},
            fetched_at=fetched_at or datetime.now(timezone.utc),
            source=source,
        )

    def quote(self, asset_type: Union[AssetType, str]) -> AssetQuote:
        return self.quotes[AssetType.parse(asset_type)]

    def rate(self, asset_type: Union[AssetType, str]) -> float:
        """Buying rate for the given asset type."""
        return self.quote(asset_type).buying


@dataclass(frozen=True)
class Investment:
    """
    A recorded purchase. Never mutated after creation.

    Attributes:
        id: Opaque unique identifier (uuid4, generated client-side)
        asset_type: What was bought
        amount: Quantity bought (grams for gold, units for currencies)
        exchange_rate: Rate at purchase
        value: amount * exchange_rate, fixed at creation
        purchase_date: Date of purchase
    """
    id: str
    asset_type: AssetType
    amount: float
    exchange_rate: float
    value: float
    purchase_date: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "asset_type", AssetType.parse(self.asset_type))
        if not _is_valid_rate(self.amount):
            raise InvalidInvestmentError(f"Amount must be a positive number, got {self.amount!r}")
        if not _is_valid_rate(self.exchange_rate):
            raise InvalidInvestmentError(
                f"Exchange rate must be a positive number, got {self.exchange_rate!r}"
            )

    @classmethod
    def create(
        cls,
        asset_type: Union[AssetType, str],
        amount: float,
        exchange_rate: float,
        purchase_date: date,
        investment_id: Optional[str] = None,
    ) -> "Investment":
        """Create a new investment, computing its value from amount and rate."""
        if not _is_valid_rate(amount):
            raise InvalidInvestmentError(f"Amount must be a positive number, got {amount!r}")
        return cls(
            id=investment_id or str(uuid.uuid4()),
            asset_type=AssetType.parse(asset_type),
            amount=float(amount),
            exchange_rate=float(exchange_rate),
            value=float(amount) * float(exchange_rate),
            purchase_date=purchase_date,
        )

    def to_json(self) -> dict:
        """
        Convert Investment to JSON-serializable dictionary.

        Returns:
            Dictionary with ISO-formatted purchase date
        """
        return {
            "id": self.id,
            "asset_type": self.asset_type.value,
            "amount": self.amount,
            "exchange_rate": self.exchange_rate,
            "value": self.value,
            "purchase_date": self.purchase_date.isoformat(),
        }

    @staticmethod
    def from_json(data: dict) -> "Investment":
        """
        Create Investment from JSON dictionary.

        The stored value is kept as-is; it is never recomputed from the rate.
        """
        raw_date = data["purchase_date"]
        # Accept full ISO timestamps as well as plain dates
        purchase_date = (
            datetime.fromisoformat(raw_date.replace("Z", "+00:00")).date()
            if "T" in raw_date
            else date.fromisoformat(raw_date)
        )
        return Investment(
            id=str(data["id"]),
            asset_type=AssetType.parse(data["asset_type"]),
            amount=float(data["amount"]),
            exchange_rate=float(data["exchange_rate"]),
            value=float(data["value"]),
            purchase_date=purchase_date,
        )


@dataclass(frozen=True)
class ProfitResult:
    """
    Derived, non-persisted valuation of a holding against a snapshot.

    Attributes:
        asset_type: Asset being valued
        amount: Quantity held
        rate: Rate used for the current value
        initial_value: Value at purchase
        current_value: amount * rate
        profit_amount: current_value - initial_value
        profit_percentage: Profit as a percentage (0 when the denominator is 0)
        as_of: Timestamp of the snapshot used
    """
    asset_type: AssetType
    amount: float
    rate: float
    initial_value: float
    current_value: float
    profit_amount: float
    profit_percentage: float
    as_of: Optional[datetime] = None

    @property
    def direction(self) -> str:
        if self.profit_amount > 0:
            return "up"
        if self.profit_amount < 0:
            return "down"
        return "none"


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Aggregate valuation over a set of investments.

    Attributes:
        count: Number of investments included
        total_initial: Sum of values at purchase
        total_current: Sum of current values
        profit_amount: total_current - total_initial
        profit_percentage: Profit as a percentage (same basis as single results)
        amounts: Total held amount per asset type
        as_of: Timestamp of the snapshot used
    """
    count: int
    total_initial: float
    total_current: float
    profit_amount: float
    profit_percentage: float
    amounts: Mapping[AssetType, float] = field(default_factory=dict, hash=False)
    as_of: Optional[datetime] = None
