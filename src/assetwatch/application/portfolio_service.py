# src/assetwatch/application/portfolio_service.py
"""
Portfolio Service - Recording Purchases and Valuing Them

This module contains the use cases that a form or a display calls into:
recording a purchase with its rate fixed at that moment, valuing a purchase
against live rates, deleting, listing and summarizing purchases.

Files that USE this module:
- assetwatch.app (builds the service)
- tests.test_portfolio_service (unit tests)

Files that this module USES:
- assetwatch.application.rate_cache (live rates)
- assetwatch.application.historical (rates for past dates)
- assetwatch.application.valuation (profit computation)
- assetwatch.adapters.persistence.investment_store (storage)
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Union

from assetwatch.adapters.persistence.investment_store import (
    InMemoryInvestmentStore,
    InvestmentStore,
)
from assetwatch.application.historical import estimate_rate, is_today
from assetwatch.application.rate_cache import RateCache
from assetwatch.application.valuation import ProfitBasis, compute_profit, profit_percentage
from assetwatch.domain.errors import InvalidInvestmentError, InvestmentNotFoundError
from assetwatch.domain.models import AssetType, Investment, PortfolioSummary, ProfitResult
from assetwatch.shared.validators import validate_positive_amount

log = logging.getLogger(__name__)


class PortfolioService:
    """
    High-level service over a rate cache and an investment store.
    """

    def __init__(
        self,
        cache: RateCache,
        store: Optional[InvestmentStore] = None,
        basis: Optional[ProfitBasis] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize portfolio service.

        Args:
            cache: Shared RateCache for live rates
            store: Investment storage (defaults to an in-memory store)
            basis: Profit percentage basis (defaults to settings.profit_basis)
            today: Callable returning today's date (defaults to date.today)
        """
        self.cache = cache
        self.store = store if store is not None else InMemoryInvestmentStore()
        self.basis = basis
        self._today = today or date.today

    def rate_for(self, asset_type: Union[AssetType, str], on: Optional[Union[date, datetime]] = None) -> float:
        """
        Rate for an asset on a date: live rate for today, estimate otherwise.

        Raises:
            RateSourceError: If a live rate was needed and could not be fetched
        """
        asset = AssetType.parse(asset_type)
        if on is None or is_today(on, self._today()):
            return self.cache.get_rates().rate(asset)
        return estimate_rate(asset, on)

    def add_investment(
        self,
        asset_type: Union[AssetType, str],
        amount: float,
        on: Optional[Union[date, datetime]] = None,
    ) -> Investment:
        """
        Record a purchase with its rate and value fixed now.

        Args:
            asset_type: Asset bought
            amount: Quantity bought (> 0)
            on: Purchase date (defaults to today)

        Returns:
            The stored Investment

        Raises:
            InvalidInvestmentError: If amount is not a positive finite number
            UnknownAssetTypeError: If asset_type is not supported
            RateSourceError: If live rates are needed and unavailable (nothing is saved)
        """
        if not validate_positive_amount(amount):
            raise InvalidInvestmentError(f"Amount must be a positive number, got {amount!r}")
        asset = AssetType.parse(asset_type)
        purchase_date = on.date() if isinstance(on, datetime) else (on or self._today())

        rate = self.rate_for(asset, purchase_date)
        investment = Investment.create(asset, float(amount), rate, purchase_date)
        self.store.add(investment)
        log.info(
            "Investment %s added: %s %s @ %s = %s",
            investment.id, investment.amount, asset.value, rate, investment.value,
        )
        return investment

    def get_profit_snapshot(self, investment: Investment) -> ProfitResult:
        """
        Value an investment against current rates.

        The investment itself is never modified.

        Raises:
            RateSourceError: If live rates could not be fetched
        """
        snapshot = self.cache.get_rates()
        return compute_profit(
            investment.amount,
            investment.value,
            investment.asset_type,
            snapshot,
            basis=self.basis,
        )

    def delete_investment(self, investment_id: str) -> None:
        """
        Raises:
            InvestmentNotFoundError: If no investment has this id
        """
        if not self.store.remove(investment_id):
            raise InvestmentNotFoundError(f"Investment not found: {investment_id}")
        log.info("Investment %s deleted", investment_id)

    def list_investments(self, asset_type: Optional[Union[AssetType, str]] = None) -> List[Investment]:
        """Investments, newest purchase first, optionally filtered by asset type."""
        investments = self.store.all()
        if asset_type is not None:
            asset = AssetType.parse(asset_type)
            investments = [inv for inv in investments if inv.asset_type is asset]
        return sorted(investments, key=lambda inv: inv.purchase_date, reverse=True)

    def summarize(self, investments: Optional[List[Investment]] = None) -> PortfolioSummary:
        """
        Aggregate valuation of investments (all stored ones by default).

        Every line is valued against the same snapshot.

        Raises:
            RateSourceError: If live rates could not be fetched
        """
        if investments is None:
            investments = self.store.all()

        snapshot = self.cache.get_rates()
        total_initial = 0.0
        total_current = 0.0
        amounts: Dict[AssetType, float] = {asset: 0.0 for asset in AssetType}
        for inv in investments:
            result = compute_profit(inv.amount, inv.value, inv.asset_type, snapshot, basis=self.basis)
            total_initial += result.initial_value
            total_current += result.current_value
            amounts[inv.asset_type] += inv.amount

        profit = total_current - total_initial
        return PortfolioSummary(
            count=len(investments),
            total_initial=total_initial,
            total_current=total_current,
            profit_amount=profit,
            profit_percentage=profit_percentage(profit, total_current, total_initial, self.basis),
            amounts=amounts,
            as_of=snapshot.fetched_at,
        )
