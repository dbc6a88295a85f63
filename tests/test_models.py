"""
Domain Model Tests - Unit Tests for Asset Types, Snapshots and Investments

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- assetwatch.domain.models (domain models for testing)
- pytest (testing framework)
"""
import dataclasses  # FrozenInstanceError
from datetime import date  # Purchase dates

import pytest  # Testing framework for writing and running tests

from conftest import T0, make_snapshot  # Snapshot fixtures

from assetwatch.domain.errors import (
    InvalidInvestmentError,  # Invalid amounts/rates
    InvalidRateError,  # Invalid snapshot data
    UnknownAssetTypeError,  # Unsupported asset types
)
from assetwatch.domain.models import AssetQuote, AssetType, Investment, RateSnapshot  # Models to test


class TestAssetType:
    def test_parse(self):
        assert AssetType.parse(AssetType.GOLD) is AssetType.GOLD
        assert AssetType.parse("dollar") is AssetType.DOLLAR
        assert AssetType.parse(" EURO ") is AssetType.EURO

    @pytest.mark.parametrize("value", ["silver", "", None, 1])
    def test_parse_unknown(self, value):
        with pytest.raises(UnknownAssetTypeError):
            AssetType.parse(value)


class TestRateSnapshot:
    def test_missing_asset(self):
        with pytest.raises(InvalidRateError, match="euro"):
            RateSnapshot.from_rates({AssetType.GOLD: 2100.0, AssetType.DOLLAR: 32.5}, fetched_at=T0)

    def test_non_positive_rate(self):
        with pytest.raises(InvalidRateError):
            make_snapshot(dollar=-1)

    def test_string_keys_are_normalized(self):
        snap = RateSnapshot(
            quotes={"gold": AssetQuote(2100.0), "dollar": AssetQuote(32.5), "euro": AssetQuote(35.2)},
            fetched_at=T0,
        )
        assert snap.rate(AssetType.GOLD) == 2100.0

    def test_immutable(self):
        snap = make_snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.fetched_at = None
        with pytest.raises(TypeError):
            snap.quotes[AssetType.GOLD] = AssetQuote(1.0)

    def test_rate_unknown_asset(self):
        with pytest.raises(UnknownAssetTypeError):
            make_snapshot().rate("silver")


class TestAssetQuote:
    def test_bool_is_not_a_rate(self):
        with pytest.raises(InvalidRateError):
            AssetQuote(True)

    def test_optional_fields(self):
        quote = AssetQuote(32.5)
        assert quote.selling is None
        assert quote.change is None


class TestInvestment:
    def test_create_computes_value(self):
        inv = Investment.create(AssetType.DOLLAR, 10, 32.5, date(2024, 3, 15))

        assert inv.value == pytest.approx(325.0)
        assert inv.asset_type is AssetType.DOLLAR
        assert len(inv.id) == 36

    def test_ids_are_unique(self):
        a = Investment.create("gold", 1, 2100.0, date(2024, 3, 15))
        b = Investment.create("gold", 1, 2100.0, date(2024, 3, 15))
        assert a.id != b.id

    @pytest.mark.parametrize("amount", [0, -1, float("nan"), float("inf")])
    def test_invalid_amount(self, amount):
        with pytest.raises(InvalidInvestmentError):
            Investment.create(AssetType.GOLD, amount, 2100.0, date(2024, 3, 15))

    def test_invalid_rate(self):
        with pytest.raises(InvalidInvestmentError):
            Investment.create(AssetType.GOLD, 1, 0, date(2024, 3, 15))

    def test_json_round_trip_keeps_value(self):
        inv = Investment.create(AssetType.EURO, 3, 35.2, date(2024, 3, 15))
        data = inv.to_json()

        assert data["asset_type"] == "euro"
        assert data["purchase_date"] == "2024-03-15"
        assert Investment.from_json(data) == inv

    def test_from_json_never_recomputes_value(self):
        data = {
            "id": "abc",
            "asset_type": "gold",
            "amount": 2,
            "exchange_rate": 2100.0,
            "value": 4000.0,
            "purchase_date": "2024-03-15T10:00:00.000Z",
        }
        inv = Investment.from_json(data)

        assert inv.value == 4000.0
        assert inv.purchase_date == date(2024, 3, 15)

    def test_frozen(self):
        inv = Investment.create(AssetType.GOLD, 1, 2100.0, date(2024, 3, 15))
        with pytest.raises(dataclasses.FrozenInstanceError):
            inv.amount = 2
