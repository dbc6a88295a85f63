"""
Investment Store Tests - Unit Tests for In-Memory and JSON Persistence

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- assetwatch.adapters.persistence.investment_store (stores for testing)
- pytest (testing framework)
"""
import json  # Inspect and corrupt files on disk
from datetime import date  # Purchase dates

import pytest  # Testing framework for writing and running tests

from assetwatch.adapters.persistence.investment_store import (
    InMemoryInvestmentStore,  # Dictionary-backed store
    JsonInvestmentStore,  # File-backed store
)
from assetwatch.domain.models import AssetType, Investment  # Records to store


def make_investment(asset=AssetType.GOLD, amount=1.0, rate=2100.0, on=date(2024, 3, 15)):
    return Investment.create(asset, amount, rate, on)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryInvestmentStore()
    return JsonInvestmentStore(tmp_path / "investments.json")


class TestStoreContract:
    def test_add_get_all(self, store):
        inv = make_investment()
        store.add(inv)

        assert store.get(inv.id) == inv
        assert store.all() == [inv]

    def test_remove(self, store):
        inv = make_investment()
        store.add(inv)

        assert store.remove(inv.id) is True
        assert store.remove(inv.id) is False
        assert store.get(inv.id) is None

    def test_get_unknown(self, store):
        assert store.get("nope") is None
        assert store.all() == []


class TestJsonInvestmentStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "data" / "investments.json"
        inv = make_investment(AssetType.EURO, 3, 35.2)
        JsonInvestmentStore(path).add(inv)

        assert JsonInvestmentStore(path).all() == [inv]
        assert json.loads(path.read_text(encoding="utf-8"))[0]["asset_type"] == "euro"

    def test_no_temp_files_left(self, tmp_path):
        store = JsonInvestmentStore(tmp_path / "investments.json")
        store.add(make_investment())
        store.add(make_investment())

        assert [p.name for p in tmp_path.iterdir()] == ["investments.json"]

    def test_corrupt_file_is_backed_up(self, tmp_path):
        path = tmp_path / "investments.json"
        path.write_text("{not json", encoding="utf-8")

        assert JsonInvestmentStore(path).all() == []
        assert (tmp_path / "investments.json.corrupt").read_text(encoding="utf-8") == "{not json"
        assert not path.exists()

    def test_non_list_is_backed_up_before_next_write(self, tmp_path):
        path = tmp_path / "investments.json"
        path.write_text('{"id": "x"}', encoding="utf-8")
        store = JsonInvestmentStore(path)

        assert store.all() == []
        inv = make_investment()
        store.add(inv)

        assert (tmp_path / "investments.json.corrupt").read_text(encoding="utf-8") == '{"id": "x"}'
        assert store.all() == [inv]

    def test_invalid_records_are_skipped(self, tmp_path):
        path = tmp_path / "investments.json"
        good = make_investment()
        path.write_text(json.dumps([
            good.to_json(),
            {"id": "bad", "asset_type": "silver", "amount": 1, "exchange_rate": 1,
             "value": 1, "purchase_date": "2024-03-15"},
            {"id": "neg", "asset_type": "gold", "amount": -1, "exchange_rate": 1,
             "value": -1, "purchase_date": "2024-03-15"},
            {"id": "partial"},
        ]), encoding="utf-8")

        assert JsonInvestmentStore(path).all() == [good]

    def test_unreadable_records_survive_rewrites(self, tmp_path):
        path = tmp_path / "investments.json"
        good = make_investment()
        unknown = {"id": "bad", "asset_type": "silver", "amount": 1, "exchange_rate": 1,
                   "value": 1, "purchase_date": "2024-03-15"}
        path.write_text(json.dumps([good.to_json(), unknown]), encoding="utf-8")
        store = JsonInvestmentStore(path)

        added = make_investment(AssetType.DOLLAR, 10, 32.5)
        store.add(added)
        assert store.remove(good.id) is True

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert unknown in raw
        assert store.all() == [added]

    def test_remove_unknown_id_leaves_file_untouched(self, tmp_path):
        path = tmp_path / "investments.json"
        path.write_text(json.dumps([{"id": "partial"}]), encoding="utf-8")

        assert JsonInvestmentStore(path).remove("nope") is False
        assert json.loads(path.read_text(encoding="utf-8")) == [{"id": "partial"}]
