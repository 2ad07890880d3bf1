"""
Language detection
Script-range heuristic over the supported locales
"""

import re

from ...core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LOCALE = "en"

# Locale -> pattern matching any code point of its script block
_SCRIPT_PATTERNS: dict[str, re.Pattern] = {
    "th": re.compile(r"[\u0E00-\u0E7F]"),
}

SUPPORTED_LOCALES: tuple[str, ...] = (DEFAULT_LOCALE, *_SCRIPT_PATTERNS)


def detect_language(text: str) -> str:
    """
    Detect the locale of a text

    Never raises: any failure yields the default locale.

    Args:
        text: input text

    Returns:
        str: locale tag ("en" or "th")
    """
    try:
        for locale, pattern in _SCRIPT_PATTERNS.items():
            if pattern.search(text):
                return locale
        return DEFAULT_LOCALE
    except Exception as e:
        logger.warning(f"Language detection failed, using {DEFAULT_LOCALE}: {e}")
        return DEFAULT_LOCALE
