# src/assetwatch/shared/validators.py
"""
Input Validation Utilities - Configuration and Data Validation

This module provides validation functions for configuration values and
user-supplied input: endpoint URLs, option choices and numeric amounts.

Files that USE this module:
- assetwatch.config.settings (uses validation functions in Settings field validators)
- assetwatch.application.portfolio_service (validates investment amounts)

Files that this module USES:
- None (pure utility functions)
"""
import math
import re
from typing import Any, Iterable, Optional
from urllib.parse import urlparse


def validate_url(url: str) -> bool:
    """
    Validate an HTTP(S) endpoint URL.

    Args:
        url: URL to validate

    Returns:
        True if valid, False otherwise
    """
    if not url or url.isspace():
        return False

    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_choice(value: str, choices: Iterable[str]) -> bool:
    """
    Validate that a (case-insensitive) string is one of the allowed choices.

    Args:
        value: Value to check
        choices: Allowed values (lowercase)

    Returns:
        True if valid, False otherwise
    """
    if not value:
        return False
    return value.strip().lower() in set(choices)


def validate_language(code: str) -> bool:
    """
    Validate a display language code ('tr' or 'en').

    Args:
        code: Language code to validate

    Returns:
        True if valid, False otherwise
    """
    return bool(code) and bool(re.match(r'^(tr|en)$', code.strip().lower()))


def validate_positive_amount(value: Any, max_val: Optional[float] = None) -> bool:
    """
    Validate a purchase amount: a finite number strictly greater than zero.

    Args:
        value: Number (or numeric string) to validate
        max_val: Optional upper bound

    Returns:
        True if valid, False otherwise
    """
    if isinstance(value, bool) or value is None:
        return False

    try:
        num_val = float(value)
    except (TypeError, ValueError):
        return False

    if not math.isfinite(num_val) or num_val <= 0:
        return False
    if max_val is not None and num_val > max_val:
        return False
    return True
