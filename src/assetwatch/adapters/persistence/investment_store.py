# src/assetwatch/adapters/persistence/investment_store.py
"""
Investment Store - Persistence of Recorded Purchases

This module defines the storage interface for investments and two
implementations: an in-memory store and a JSON file store with atomic writes.
The production backend is an external service; anything implementing
InvestmentStore can be plugged in.

Files that USE this module:
- assetwatch.application.portfolio_service (PortfolioService saves and removes investments)
- tests.test_investment_store (unit tests)

Files that this module USES:
- assetwatch.config (settings for file paths)
- assetwatch.domain.models (Investment)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from assetwatch.config import settings
from assetwatch.domain.errors import StorageError
from assetwatch.domain.models import Investment

log = logging.getLogger(__name__)


class InvestmentStore(Protocol):
    """Protocol for investment storage backends."""

    def add(self, investment: Investment) -> None:
        ...

    def remove(self, investment_id: str) -> bool:
        ...

    def get(self, investment_id: str) -> Optional[Investment]:
        ...

    def all(self) -> List[Investment]:
        ...


class InMemoryInvestmentStore:
    """Dictionary-backed store; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._items: Dict[str, Investment] = {}

    def add(self, investment: Investment) -> None:
        self._items[investment.id] = investment

    def remove(self, investment_id: str) -> bool:
        return self._items.pop(investment_id, None) is not None

    def get(self, investment_id: str) -> Optional[Investment]:
        return self._items.get(investment_id)

    def all(self) -> List[Investment]:
        return list(self._items.values())


class JsonInvestmentStore:
    """
    JSON list file store.

    The whole file is rewritten on every change using a temporary file and
    an atomic rename, so readers never see a half-written file.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else settings.investments_file

    def _write(self, investments: List[Investment], unreadable: Sequence[Any] = ()) -> None:
        """
        Save investments using atomic write.

        Records that could not be parsed on load are written back unchanged.

        Raises:
            StorageError: If the file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )

        records = [inv.to_json() for inv in investments] + list(unreadable)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(self.path))
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to save investments file: {e}") from e

    def _set_aside(self, reason: str) -> None:
        # Move an unusable file to *.corrupt so the next write starts clean
        backup_path = self.path.with_suffix(".json.corrupt")
        shutil.copy2(self.path, backup_path)
        self.path.unlink()
        log.warning("Investments file %s, backed up to %s", reason, backup_path)

    def _load(self) -> Tuple[List[Investment], List[Any]]:
        """
        Load investments from disk.

        A file that is not valid JSON, or not a JSON list, is backed up to
        *.corrupt and treated as empty. Records that fail validation are
        returned separately so rewrites keep them.

        Returns:
            Tuple of (investments, unreadable raw records)
        """
        if not self.path.exists():
            return [], []

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self._set_aside(f"is not valid JSON ({e})")
            return [], []

        if not isinstance(data, list):
            self._set_aside(f"holds a JSON {type(data).__name__}, not a list")
            return [], []

        investments: List[Investment] = []
        unreadable: List[Any] = []
        for item in data:
            try:
                investments.append(Investment.from_json(item))
            except (KeyError, ValueError, TypeError) as e:
                log.warning("Keeping unreadable investment record %r as-is: %s", item, e)
                unreadable.append(item)
        return investments, unreadable

    def add(self, investment: Investment) -> None:
        investments, unreadable = self._load()
        investments = [inv for inv in investments if inv.id != investment.id]
        investments.append(investment)
        self._write(investments, unreadable)

    def remove(self, investment_id: str) -> bool:
        investments, unreadable = self._load()
        remaining = [inv for inv in investments if inv.id != investment_id]
        if len(remaining) == len(investments):
            return False
        self._write(remaining, unreadable)
        return True

    def get(self, investment_id: str) -> Optional[Investment]:
        for inv in self.all():
            if inv.id == investment_id:
                return inv
        return None

    def all(self) -> List[Investment]:
        return self._load()[0]
