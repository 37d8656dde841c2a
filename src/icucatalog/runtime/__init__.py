"""Message runtime package.

Provides the message interpreter, the Formatter Bridge, CLDR plural rules
and value coercion. Depends on syntax package for compiled message types.

Python 3.13+.
"""

from .formatters import format_date, format_number
from .interpreter import MessageInterpreter, decode_unicode_escapes, evaluate
from .locale_context import LocaleContext
from .plural_rules import select_plural_category
from .value_types import Formats, Locales, MessageValue, Values

__all__ = [
    "Formats",
    "LocaleContext",
    "Locales",
    "MessageInterpreter",
    "MessageValue",
    "Values",
    "decode_unicode_escapes",
    "evaluate",
    "format_date",
    "format_number",
    "select_plural_category",
]
