"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale format normalization and locale-list handling used by
the Formatter Bridge and plural rules.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from babel import Locale

__all__ = [
    "get_babel_locale",
    "iter_locales",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. This avoids repeated
    parsing overhead in hot paths like plural rule selection.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def iter_locales(locales: str | Sequence[str] | None) -> tuple[str, ...]:
    """Flatten a locale or locale preference list into a tuple.

    Empty strings are dropped; order is preserved.

    Example:
        >>> iter_locales("en-GB")
        ('en-GB',)
        >>> iter_locales(["de-AT", "", "de"])
        ('de-AT', 'de')
        >>> iter_locales(None)
        ()
    """
    if locales is None:
        return ()
    if isinstance(locales, str):
        return (locales,) if locales else ()
    return tuple(code for code in locales if code)
