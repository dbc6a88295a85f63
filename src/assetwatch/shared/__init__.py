# src/assetwatch/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Display language
- Logging configuration
"""

from assetwatch.shared.validators import (
    validate_choice,
    validate_language,
    validate_positive_amount,
    validate_url,
)
from assetwatch.shared.language import (
    LANG_ENGLISH,
    LANG_TURKISH,
    resolve_language,
    translate,
)

__all__ = [
    "validate_url",
    "validate_choice",
    "validate_language",
    "validate_positive_amount",
    "resolve_language",
    "translate",
    "LANG_ENGLISH",
    "LANG_TURKISH",
]
