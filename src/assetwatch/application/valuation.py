# src/assetwatch/application/valuation.py
"""
Valuation Engine - Asset Values and Profit/Loss

This module converts (asset type, amount, rate) into a monetary value and
computes profit/loss between an initial and a current valuation.

Profit percentage basis:
- CURRENT (default): profit / current_value * 100
- INITIAL: profit / initial_value * 100
Whichever denominator is used, a zero denominator yields 0%, never NaN or inf.

Files that USE this module:
- assetwatch.application.portfolio_service (valuations and summaries)
- tests.test_valuation (unit tests)

Files that this module USES:
- assetwatch.domain.models (AssetType, RateSnapshot, ProfitResult)
- assetwatch.config (settings for default profit basis)
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from assetwatch.config import settings
from assetwatch.domain.models import AssetType, ProfitResult, RateSnapshot


class ProfitBasis(str, Enum):
    CURRENT = "current"
    INITIAL = "initial"


def default_basis() -> ProfitBasis:
    return ProfitBasis(settings.profit_basis)


def current_value(asset_type: Union[AssetType, str], amount: float, snapshot: RateSnapshot) -> float:
    """
    Value of `amount` units of an asset at the snapshot's buying rate.

    Raises:
        UnknownAssetTypeError: If asset_type is not supported
    """
    return amount * snapshot.rate(asset_type)


def profit_percentage(
    profit: float,
    current: float,
    initial: float,
    basis: Optional[ProfitBasis] = None,
) -> float:
    """
    Profit as a percentage of the chosen denominator.

    Args:
        profit: current - initial
        current: Current value
        initial: Initial value
        basis: Which value to divide by (defaults to settings.profit_basis)

    Returns:
        Percentage, or 0.0 when the denominator is zero
    """
    basis = ProfitBasis(basis) if basis is not None else default_basis()
    denominator = current if basis is ProfitBasis.CURRENT else initial
    if denominator == 0:
        return 0.0
    return (profit / denominator) * 100


def compute_profit(
    amount: float,
    initial_value: float,
    asset_type: Union[AssetType, str],
    snapshot: RateSnapshot,
    basis: Optional[ProfitBasis] = None,
) -> ProfitResult:
    """
    Profit/loss of a holding against a snapshot.

    Args:
        amount: Quantity held
        initial_value: Value at purchase
        asset_type: Asset held
        snapshot: Current rates
        basis: Percentage denominator (defaults to settings.profit_basis)

    Returns:
        ProfitResult with current value, profit amount and percentage

    Raises:
        UnknownAssetTypeError: If asset_type is not supported
    """
    asset = AssetType.parse(asset_type)
    rate = snapshot.rate(asset)
    current = amount * rate
    profit = current - initial_value
    return ProfitResult(
        asset_type=asset,
        amount=amount,
        rate=rate,
        initial_value=initial_value,
        current_value=current,
        profit_amount=profit,
        profit_percentage=profit_percentage(profit, current, initial_value, basis),
        as_of=snapshot.fetched_at,
    )
