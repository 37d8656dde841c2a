"""CLDR plural rules using Babel.

Provides cardinal and ordinal plural category selection for all locales
using Babel's CLDR data.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

import logging
from decimal import Decimal

from babel.core import UnknownLocaleError

from icucatalog.constants import DEFAULT_LOCALE
from icucatalog.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]

logger = logging.getLogger(__name__)


def select_plural_category(
    n: int | float | Decimal, locale: str, *, ordinal: bool = False
) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en-US")
        ordinal: Use ordinal rules (1st, 2nd) instead of cardinal rules

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en")
        'one'
        >>> select_plural_category(5, "ru")
        'many'
        >>> select_plural_category(2, "en", ordinal=True)
        'two'
        >>> select_plural_category(3, "en", ordinal=True)
        'few'

    Unknown or empty locales use the rules of DEFAULT_LOCALE.
    """
    try:
        locale_obj = get_babel_locale(locale) if locale else get_babel_locale(DEFAULT_LOCALE)
    except (UnknownLocaleError, ValueError):
        logger.debug("No plural rules for locale '%s', using '%s'", locale, DEFAULT_LOCALE)
        locale_obj = get_babel_locale(DEFAULT_LOCALE)

    plural_rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
    return plural_rule(n)
