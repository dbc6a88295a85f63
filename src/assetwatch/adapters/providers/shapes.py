# src/assetwatch/adapters/providers/shapes.py
"""
Response Shapes - Parsers for Rate Payload Variants

The finance API has emitted two payload shapes over time. Each shape has its
own parser that normalizes into a single RateSnapshot:

- nested: {"Rates": {"USD": {"Buying": 32.5, "Selling": 32.6, "Change": 0.12}, ...}}
- flat:   {"USD": {"Alış": "32,4567", "Satış": "32,5012", "Değişim": "%0,12"},
           "EUR": {...}, "gram-altin": {...}}

Files that USE this module:
- assetwatch.adapters.providers.finance_api (selects and applies a shape)
- tests.test_shapes (unit tests)

Files that this module USES:
- assetwatch.domain.models (AssetType, AssetQuote, RateSnapshot)
- assetwatch.domain.errors (RateSourceError, InvalidRateError)
"""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from assetwatch.domain.errors import InvalidRateError, RateSourceError
from assetwatch.domain.models import AssetQuote, AssetType, RateSnapshot

log = logging.getLogger(__name__)


LOCALE_TURKISH = "tr"
LOCALE_ENGLISH = "en"


def _is_grouping(s: str, pos: int) -> bool:
    # exactly three digits after a lone separator reads as a thousands group
    tail = s[pos + 1:]
    return len(tail) == 3 and tail.isdigit()


def parse_locale_number(value: Any, locale: Optional[str] = None) -> float:
    """
    Convert a locale-formatted number into a float.

    Handles both '1.234,56' (tr) and '1,234.56' (en) styles:
    - both separators present: the rightmost one is the decimal separator
    - repeated ',' or repeated '.' are thousands separators
    - a lone ',' is a decimal separator, a lone '.' is a decimal point
    Percent signs and whitespace are stripped.

    A lone separator followed by exactly three digits ('2.456', '2,456') is
    ambiguous. With locale='tr' a lone '.' there is a thousands separator;
    with locale='en' a lone ',' there is a thousands separator. Without a
    locale the lone-separator rule above applies.

    Args:
        value: Number or string to convert (e.g., 32.5, '2.456,78', '%0,12')
        locale: Optional source locale hint ('tr' or 'en')

    Returns:
        Parsed float (may be NaN/inf if the source says so; callers validate)

    Raises:
        InvalidRateError: If the value is not numeric or does not fit a float
    """
    if isinstance(value, bool):
        raise InvalidRateError(f"Non-numeric rate value: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError as e:
            raise InvalidRateError(f"Rate value out of range: {value!r}") from e
    if not isinstance(value, str):
        raise InvalidRateError(f"Non-numeric rate value: {value!r}")

    s = value.replace("%", "").replace("\u00a0", "").replace(" ", "").strip()
    if not s:
        raise InvalidRateError(f"Empty rate value: {value!r}")

    last_dot = s.rfind(".")
    last_comma = s.rfind(",")
    if last_dot != -1 and last_comma != -1:
        if last_comma > last_dot:
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    elif last_comma != -1:
        if s.count(",") > 1 or (locale == LOCALE_ENGLISH and _is_grouping(s, last_comma)):
            s = s.replace(",", "")
        else:
            s = s.replace(",", ".")
    elif last_dot != -1:
        if s.count(".") > 1 or (locale == LOCALE_TURKISH and _is_grouping(s, last_dot)):
            s = s.replace(".", "")

    try:
        return float(s)
    except (ValueError, OverflowError) as e:
        raise InvalidRateError(f"Non-numeric rate value: {value!r}") from e


def _parse_change(value: Any, locale: Optional[str] = None) -> Optional[float]:
    # Change is informational; an unreadable value is dropped, not fatal
    if value is None:
        return None
    try:
        change = parse_locale_number(value, locale)
    except InvalidRateError:
        log.warning("Ignoring unparseable change value: %r", value)
        return None
    return change if math.isfinite(change) else None


def _first_present(node: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in node and node[key] is not None:
            return node[key]
    return None


class ResponseShape:
    """Base class for payload parsers."""

    name = "base"
    locale: Optional[str] = None

    def matches(self, payload: Any) -> bool:
        raise NotImplementedError

    def parse(self, payload: Any, fetched_at: datetime, source: Optional[str] = None) -> RateSnapshot:
        raise NotImplementedError

    def _quote(self, buying: Any, selling: Any = None, change: Any = None) -> AssetQuote:
        return AssetQuote(
            buying=parse_locale_number(buying, self.locale),
            selling=parse_locale_number(selling, self.locale) if selling is not None else None,
            change=_parse_change(change, self.locale),
        )


class NestedRatesShape(ResponseShape):
    """Rates.{USD,EUR,GRA}.{Buying,Selling,Change} with numeric fields."""

    name = "nested"
    KEYS: Dict[AssetType, str] = {
        AssetType.DOLLAR: "USD",
        AssetType.EURO: "EUR",
        AssetType.GOLD: "GRA",
    }

    def matches(self, payload: Any) -> bool:
        return isinstance(payload, dict) and isinstance(payload.get("Rates"), dict)

    def parse(self, payload: Any, fetched_at: datetime, source: Optional[str] = None) -> RateSnapshot:
        if not self.matches(payload):
            raise RateSourceError("Response missing 'Rates' object")

        rates = payload["Rates"]
        quotes: Dict[AssetType, AssetQuote] = {}
        for asset, key in self.KEYS.items():
            node = rates.get(key)
            if not isinstance(node, dict):
                raise RateSourceError(f"Response missing 'Rates.{key}'")
            if node.get("Buying") is None:
                raise RateSourceError(f"Response missing 'Rates.{key}.Buying'")
            quotes[asset] = self._quote(node["Buying"], node.get("Selling"), node.get("Change"))

        return RateSnapshot(quotes=quotes, fetched_at=fetched_at, source=source)


class FlatRatesShape(ResponseShape):
    """Top-level asset keys holding Turkish-formatted strings ('2.456,78')."""

    name = "flat"
    locale = LOCALE_TURKISH
    KEYS: Dict[AssetType, Tuple[str, ...]] = {
        AssetType.DOLLAR: ("USD",),
        AssetType.EURO: ("EUR",),
        AssetType.GOLD: ("gram-altin", "GRA"),
    }
    BUYING_KEYS = ("Alış", "Buying")
    SELLING_KEYS = ("Satış", "Selling")
    CHANGE_KEYS = ("Değişim", "Change")

    def matches(self, payload: Any) -> bool:
        if not isinstance(payload, dict):
            return False
        return any(key in payload for keys in self.KEYS.values() for key in keys)

    def parse(self, payload: Any, fetched_at: datetime, source: Optional[str] = None) -> RateSnapshot:
        if not isinstance(payload, dict):
            raise RateSourceError("Response is not a JSON object")

        quotes: Dict[AssetType, AssetQuote] = {}
        for asset, keys in self.KEYS.items():
            node = _first_present(payload, keys)
            if node is None:
                raise RateSourceError(f"Response missing '{keys[0]}'")
            if isinstance(node, dict):
                buying = _first_present(node, self.BUYING_KEYS)
                if buying is None:
                    raise RateSourceError(f"Response missing buying rate for '{keys[0]}'")
                quotes[asset] = self._quote(
                    buying,
                    _first_present(node, self.SELLING_KEYS),
                    _first_present(node, self.CHANGE_KEYS),
                )
            else:
                quotes[asset] = self._quote(node)

        return RateSnapshot(quotes=quotes, fetched_at=fetched_at, source=source)


SHAPES: Dict[str, ResponseShape] = {
    NestedRatesShape.name: NestedRatesShape(),
    FlatRatesShape.name: FlatRatesShape(),
}


def sniff_shape(payload: Any) -> ResponseShape:
    """
    Pick the parser whose shape matches the payload.

    Nested is tried first; it is the current API revision.

    Raises:
        RateSourceError: If no known shape matches
    """
    for shape in SHAPES.values():
        if shape.matches(payload):
            return shape
    raise RateSourceError("Unrecognized rates response shape")


def get_shape(name: str) -> Optional[ResponseShape]:
    """Return the configured parser, or None for 'auto'."""
    key = name.strip().lower()
    if key == "auto":
        return None
    try:
        return SHAPES[key]
    except KeyError:
        raise ValueError(f"Unknown rates shape: {name!r}") from None
