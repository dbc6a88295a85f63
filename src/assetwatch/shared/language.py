# src/assetwatch/shared/language.py
"""
Language Management - Display Language Support

This module holds the display strings used by the text formatter in Turkish
and English, plus the translate() lookup. The default language comes from
settings.default_language; callers may pass a language explicitly.

Files that USE this module:
- assetwatch.adapters.formatting.formatter (uses translate for labels and lines)

Files that this module USES:
- assetwatch.config (settings for default language)
"""
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Language constants
LANG_ENGLISH = "en"
LANG_TURKISH = "tr"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    LANG_ENGLISH: {
        "gold": "Gold",
        "dollar": "Dollar",
        "euro": "Euro",
        "current_rates": "Current Rates",
        "rate_line": "{label}: buying {buying} / selling {selling} ({change})",
        "rate_line_na": "{label}: N/A",
        "last_update": "Last update: {time}",
        "investment_line": "{label} {amount} @ {rate} on {date}: {initial} → {current} ({profit}, {percentage})",
        "summary_line": "{count} investments: {initial} → {current} ({profit}, {percentage})",
    },
    LANG_TURKISH: {
        "gold": "Altın",
        "dollar": "Dolar",
        "euro": "Euro",
        "current_rates": "Güncel Kurlar",
        "rate_line": "{label}: alış {buying} / satış {selling} ({change})",
        "rate_line_na": "{label}: Yok",
        "last_update": "Son güncelleme: {time}",
        "investment_line": "{label} {amount} @ {rate}, {date}: {initial} → {current} ({profit}, {percentage})",
        "summary_line": "{count} yatırım: {initial} → {current} ({profit}, {percentage})",
    },
}


def resolve_language(lang: Optional[str] = None) -> str:
    """Return a supported language code, falling back to the configured default."""
    from assetwatch.config import settings

    code = (lang or settings.default_language or LANG_TURKISH).lower()
    if code not in TRANSLATIONS:
        logger.warning("Language '%s' not in TRANSLATIONS, using English fallback", code)
        return LANG_ENGLISH
    return code


def translate(key: str, lang: Optional[str] = None, **kwargs: Any) -> str:
    """
    Translate a message key.

    Args:
        key: Message key
        lang: Language code (defaults to settings.default_language)
        **kwargs: Template parameters

    Returns:
        Formatted message, or the key itself if unknown
    """
    table = TRANSLATIONS[resolve_language(lang)]
    template = table.get(key) or TRANSLATIONS[LANG_ENGLISH].get(key)
    if template is None:
        logger.warning("Missing translation key '%s'", key)
        return key

    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter in translation '%s': %s", key, e)
        return template
