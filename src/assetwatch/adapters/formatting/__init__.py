# src/assetwatch/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Formatting

This package contains plain-text formatters for rates and valuations.
"""

from assetwatch.adapters.formatting.formatter import (
    format_currency,
    format_date,
    format_number,
    format_percentage,
    investment_line,
    market_lines,
    summary_line,
)

__all__ = [
    "format_number",
    "format_currency",
    "format_percentage",
    "format_date",
    "market_lines",
    "investment_line",
    "summary_line",
]
