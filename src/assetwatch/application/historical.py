# src/assetwatch/application/historical.py
"""
Historical Rate Estimator - Deterministic Synthetic Rates

No real historical-rate feed is integrated, so purchases dated before today
are valued with a synthetic rate derived from the date alone. Same date in,
same rate out, across runs and processes. These are fixed approximations,
not market data.

Files that USE this module:
- assetwatch.application.portfolio_service (rates for non-today purchases)
- tests.test_historical (unit tests)

Files that this module USES:
- assetwatch.domain.models (AssetType, RateSnapshot)
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Dict, Optional, Union

from assetwatch.domain.models import AssetType, RateSnapshot

# Base rate and per-day step, in TRY; the day term cycles every `period` days
BASE_RATES: Dict[AssetType, float] = {
    AssetType.GOLD: 2100.0,
    AssetType.DOLLAR: 32.5,
    AssetType.EURO: 35.2,
}
DAY_STEPS: Dict[AssetType, float] = {
    AssetType.GOLD: 20.0,
    AssetType.DOLLAR: 0.2,
    AssetType.EURO: 0.25,
}
DAY_PERIODS: Dict[AssetType, int] = {
    AssetType.GOLD: 10,
    AssetType.DOLLAR: 5,
    AssetType.EURO: 5,
}
# Monthly factor: 1 + (zero-based month % 3) * 2%
MONTH_PERIOD = 3
MONTH_STEP = 0.02


def _as_date(on: Union[date, datetime]) -> date:
    return on.date() if isinstance(on, datetime) else on


def estimate_rate(asset_type: Union[AssetType, str], on: Union[date, datetime]) -> float:
    """
    Synthetic rate for an asset on a given date.

    Args:
        asset_type: Asset to estimate
        on: Valuation date (datetimes are truncated to their date)

    Returns:
        Positive rate in TRY

    Raises:
        UnknownAssetTypeError: If asset_type is not supported
    """
    asset = AssetType.parse(asset_type)
    d = _as_date(on)
    day = d.day
    month = d.month - 1

    base = BASE_RATES[asset] + (day % DAY_PERIODS[asset]) * DAY_STEPS[asset]
    monthly_factor = 1 + (month % MONTH_PERIOD) * MONTH_STEP
    return base * monthly_factor


def estimate_snapshot(on: Union[date, datetime]) -> RateSnapshot:
    """Synthetic snapshot for every asset type, stamped at midnight UTC of `on`."""
    d = _as_date(on)
    return RateSnapshot.from_rates(
        {asset: estimate_rate(asset, d) for asset in AssetType},
        fetched_at=datetime.combine(d, time.min, tzinfo=timezone.utc),
        source="estimate",
    )


def is_today(on: Union[date, datetime], today: Optional[date] = None) -> bool:
    return _as_date(on) == (today or date.today())
