# src/assetwatch/adapters/formatting/formatter.py
"""
Text Formatter - Numbers, Currency, Dates and Rate Lines

This module handles plain-text presentation of rates and valuations:
locale-aware number/currency/percentage/date formatting (tr-TR and en-US
conventions) and multi-line layouts for current rates and investments.

Files that USE this module:
- assetwatch.app (logs market lines on each refresh)
- tests.test_formatter (unit tests)

Files that this module USES:
- assetwatch.domain.models (RateSnapshot, Investment, ProfitResult, PortfolioSummary)
- assetwatch.shared.language (translate for labels)
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from assetwatch.domain.models import (
    AssetType,
    Investment,
    PortfolioSummary,
    ProfitResult,
    RateSnapshot,
)
from assetwatch.shared.language import LANG_TURKISH, resolve_language, translate

MONTHS = {
    "en": ["January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"],
    "tr": ["Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran", "Temmuz",
           "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık"],
}


def format_number(value: float, lang: Optional[str] = None, decimals: int = 2) -> str:
    """
    Format a number with locale separators.

    tr: 1.234,56   en: 1,234.56
    """
    text = f"{value:,.{decimals}f}"
    if resolve_language(lang) == LANG_TURKISH:
        # swap separators via a placeholder
        text = text.replace(",", "\0").replace(".", ",").replace("\0", ".")
    return text


def format_currency(value: float, lang: Optional[str] = None) -> str:
    """
    Format a TRY amount.

    tr: ₺1.234,56   en: TRY 1,234.56
    """
    sign = "-" if value < 0 else ""
    number = format_number(abs(value), lang)
    if resolve_language(lang) == LANG_TURKISH:
        return f"{sign}₺{number}"
    return f"{sign}TRY {number}"


def format_percentage(value: float, lang: Optional[str] = None) -> str:
    """
    Format a percentage value (7.14 means 7.14%).

    tr: %7,14   en: 7.14%
    """
    sign = "-" if value < 0 else ""
    number = format_number(abs(value), lang)
    if resolve_language(lang) == LANG_TURKISH:
        return f"{sign}%{number}"
    return f"{sign}{number}%"


def format_date(d: date, lang: Optional[str] = None) -> str:
    """
    Format a date with a long month name.

    tr: 15 Mart 2024   en: March 15, 2024
    """
    if isinstance(d, datetime):
        d = d.date()
    code = resolve_language(lang)
    month = MONTHS[code][d.month - 1]
    if code == LANG_TURKISH:
        return f"{d.day} {month} {d.year}"
    return f"{month} {d.day}, {d.year}"


def asset_label(asset_type: AssetType, lang: Optional[str] = None) -> str:
    return translate(AssetType.parse(asset_type).value, lang)


def _fmt_change(change: Optional[float], lang: Optional[str]) -> str:
    """
    Format a signed change with an arrow.

    Returns:
        '▲ %0,12', '▼ %0,50', '■ %0,00', or '—' if unknown
    """
    if change is None:
        return "—"
    arrow = "▲" if change > 0 else ("▼" if change < 0 else "■")
    return f"{arrow} {format_percentage(abs(change), lang)}"


def market_lines(snapshot: Optional[RateSnapshot], lang: Optional[str] = None) -> str:
    """
    Format current rates, one line per asset.

    Handles a missing snapshot by showing N/A for every asset.
    """
    lines = [translate("current_rates", lang)]
    for asset in (AssetType.DOLLAR, AssetType.EURO, AssetType.GOLD):
        label = asset_label(asset, lang)
        if snapshot is None:
            lines.append(translate("rate_line_na", lang, label=label))
            continue
        quote = snapshot.quote(asset)
        lines.append(translate(
            "rate_line",
            lang,
            label=label,
            buying=format_number(quote.buying, lang),
            selling=format_number(quote.selling, lang) if quote.selling is not None else "—",
            change=_fmt_change(quote.change, lang),
        ))
    if snapshot is not None:
        lines.append(translate("last_update", lang, time=snapshot.fetched_at.strftime("%H:%M:%S")))
    return "\n".join(lines)


def investment_line(investment: Investment, result: ProfitResult, lang: Optional[str] = None) -> str:
    """Single-line summary of an investment and its current valuation."""
    return translate(
        "investment_line",
        lang,
        label=asset_label(investment.asset_type, lang),
        amount=format_number(investment.amount, lang),
        rate=format_number(investment.exchange_rate, lang),
        date=format_date(investment.purchase_date, lang),
        initial=format_currency(result.initial_value, lang),
        current=format_currency(result.current_value, lang),
        profit=format_currency(result.profit_amount, lang),
        percentage=format_percentage(result.profit_percentage, lang),
    )


def summary_line(summary: PortfolioSummary, lang: Optional[str] = None) -> str:
    return translate(
        "summary_line",
        lang,
        count=summary.count,
        initial=format_currency(summary.total_initial, lang),
        current=format_currency(summary.total_current, lang),
        profit=format_currency(summary.profit_amount, lang),
        percentage=format_percentage(summary.profit_percentage, lang),
    )
