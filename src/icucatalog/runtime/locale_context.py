"""Locale context for thread-safe, locale-scoped formatting.

This module provides locale-aware formatting without global state mutation.
Uses Babel for CLDR-compliant number, percent, currency and date formatting.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)
    - LocaleContext.for_locales() resolves a locale preference list

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from icucatalog.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from icucatalog.diagnostics import ErrorTemplate, FormattingError
from icucatalog.locale_utils import iter_locales, normalize_locale
from icucatalog.runtime.value_types import is_date, is_string

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

type DateStyle = Literal["short", "medium", "long", "full"]


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() or LocaleContext.for_locales() to construct
    instances. Direct construction bypasses locale validation.

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.for_locales(['xx-UNKNOWN', 'de-DE'])
        >>> ctx.locale_code
        'de-DE'

        >>> # Unknown locales fall back to DEFAULT_LOCALE
        >>> LocaleContext.create('invalid-locale').is_fallback
        True

    Thread Safety:
        LocaleContext is immutable and thread-safe. Cache operations are
        protected by RLock.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for unknown locales.

        Unknown or invalid locales use DEFAULT_LOCALE rules while preserving
        the original locale_code for debugging.

        Args:
            locale_code: BCP 47 locale identifier (e.g., 'en-US', 'lv-LV')

        Returns:
            Cached LocaleContext instance
        """
        context = cls._lookup(locale_code)
        if context is not None:
            return context

        default = Locale.parse(DEFAULT_LOCALE)
        logger.debug("Unknown locale '%s', formatting with '%s'", locale_code, DEFAULT_LOCALE)
        return cls._store(cls(locale_code=locale_code, _babel_locale=default, is_fallback=True))

    @classmethod
    def for_locales(cls, locales: str | Sequence[str] | None) -> "LocaleContext":
        """Resolve a locale or locale preference list to a LocaleContext.

        Each candidate is tried in order; the first one Babel recognizes
        wins. When none is recognized (or none is given) the context for
        DEFAULT_LOCALE is returned.

        Args:
            locales: Locale code, ordered sequence of locale codes, or None

        Returns:
            LocaleContext for the first recognized locale
        """
        for candidate in iter_locales(locales):
            context = cls._lookup(candidate)
            if context is not None:
                return context

        if locales:
            logger.debug("No known locale in %r, formatting with '%s'", locales, DEFAULT_LOCALE)
        return cls.create(DEFAULT_LOCALE)

    @classmethod
    def _lookup(cls, locale_code: str) -> "LocaleContext | None":
        """Return the cached or freshly parsed context, or None if unknown."""
        cache_key = normalize_locale(locale_code)
        with cls._cache_lock:
            cached = cls._cache.get(cache_key)
            if cached is not None:
                cls._cache.move_to_end(cache_key)
                return None if cached.is_fallback else cached

        try:
            babel_locale = Locale.parse(cache_key)
        except (UnknownLocaleError, ValueError, TypeError):
            return None
        return cls._store(cls(locale_code=locale_code, _babel_locale=babel_locale))

    @classmethod
    def _store(cls, context: "LocaleContext") -> "LocaleContext":
        cache_key = normalize_locale(context.locale_code)
        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = context
            return context

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale object for this context."""
        return self._babel_locale

    def format_number(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
        pattern: str | None = None,
    ) -> str:
        """Format number with locale-specific separators.

        Defaults match Intl.NumberFormat: up to three fraction digits with
        grouping.

        Examples:
            >>> LocaleContext.create('de-DE').format_number(1234.5)
            '1.234,5'
            >>> LocaleContext.create('en').format_number(42, minimum_fraction_digits=2)
            '42.00'
        """
        try:
            if pattern is None:
                pattern = _decimal_pattern(
                    minimum_fraction_digits, maximum_fraction_digits, use_grouping
                )
            return str(babel_numbers.format_decimal(value, format=pattern, locale=self.babel_locale))
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise FormattingError(ErrorTemplate.formatting_failed("number", value, str(e))) from e

    def format_percent(
        self,
        value: int | float | Decimal,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 0,
        use_grouping: bool = True,
        pattern: str | None = None,
    ) -> str:
        """Format a ratio as a percentage (0.25 -> 25%).

        Example:
            >>> LocaleContext.create('en').format_percent(0.25)
            '25%'
        """
        try:
            if pattern is None:
                base = _decimal_pattern(
                    minimum_fraction_digits, maximum_fraction_digits, use_grouping
                )
                standard = self.babel_locale.percent_formats.get(None)
                template = getattr(standard, "pattern", "#,##0%")
                pattern = template.replace("#,##0", base) if "#,##0" in template else f"{base}%"
            return str(babel_numbers.format_percent(value, format=pattern, locale=self.babel_locale))
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise FormattingError(ErrorTemplate.formatting_failed("percent", value, str(e))) from e

    def format_currency(
        self,
        value: int | float | Decimal,
        *,
        currency: str,
        currency_display: Literal["symbol", "code", "name"] = "symbol",
        pattern: str | None = None,
    ) -> str:
        """Format currency with locale-specific rules.

        Applies currency-specific decimal places (JPY: 0, BHD: 3, most: 2).

        Examples:
            >>> LocaleContext.create('en-US').format_currency(123.45, currency='EUR')
            '€123.45'
        """
        try:
            if pattern is not None:
                return str(
                    babel_numbers.format_currency(
                        value, currency, format=pattern, locale=self.babel_locale,
                        currency_digits=True,
                    )
                )

            if currency_display == "name":
                return str(
                    babel_numbers.format_currency(
                        value, currency, locale=self.babel_locale, currency_digits=True,
                        format_type="name",
                    )
                )

            if currency_display == "code":
                # Double currency sign (U+00A4 U+00A4) displays the ISO code per CLDR
                standard_pattern = self.babel_locale.currency_formats.get("standard")
                raw_pattern = getattr(standard_pattern, "pattern", "")
                if "\xa4" in raw_pattern:
                    code_pattern = raw_pattern.replace("\xa4", "\xa4\xa4")
                    return str(
                        babel_numbers.format_currency(
                            value, currency, format=code_pattern, locale=self.babel_locale,
                            currency_digits=True,
                        )
                    )
                logger.debug("Currency pattern for locale %s lacks placeholder", self.locale_code)

            return str(
                babel_numbers.format_currency(
                    value, currency, locale=self.babel_locale, currency_digits=True,
                    format_type="standard",
                )
            )
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("currency", f"{currency} {value}", str(e))
            ) from e

    def format_datetime(
        self,
        value: date | datetime | str,
        *,
        date_style: DateStyle | None = "medium",
        time_style: DateStyle | None = None,
        pattern: str | None = None,
        skeleton: str | None = None,
    ) -> str:
        """Format date or datetime with locale-specific formatting.

        Args:
            value: date, datetime, or ISO 8601 string
            date_style: Date format style (None for time only)
            time_style: Time format style (default: None - date only)
            pattern: Custom CLDR datetime pattern (overrides styles)
            skeleton: CLDR skeleton such as 'yMMMd' (overrides styles)

        Raises:
            FormattingError: If string value is not ISO 8601 or Babel fails

        Examples:
            >>> from datetime import date
            >>> LocaleContext.create('en-US').format_datetime(date(2025, 10, 27), date_style='short')
            '10/27/25'
            >>> LocaleContext.create('de-DE').format_datetime(date(2025, 10, 27), date_style='short')
            '27.10.25'
        """
        dt_value = _coerce_datetime(value)

        try:
            if pattern is not None:
                return str(babel_dates.format_datetime(dt_value, format=pattern, locale=self.babel_locale))
            if skeleton is not None:
                return str(babel_dates.format_skeleton(skeleton, dt_value, locale=self.babel_locale))

            if time_style:
                if not isinstance(dt_value, datetime):
                    dt_value = datetime.combine(dt_value, time())
                time_str = babel_dates.format_time(dt_value, format=time_style, locale=self.babel_locale)
                if date_style is None:
                    return str(time_str)
                date_str = babel_dates.format_date(dt_value, format=date_style, locale=self.babel_locale)
                # Pattern uses {0} for time and {1} for date per CLDR spec
                datetime_pattern = (
                    self.babel_locale.datetime_formats.get(date_style)
                    or self.babel_locale.datetime_formats.get("medium")
                    or "{1} {0}"
                )
                return str(datetime_pattern).format(time_str, date_str)

            return str(
                babel_dates.format_date(dt_value, format=date_style or "medium", locale=self.babel_locale)
            )
        except (ValueError, OverflowError, AttributeError, KeyError, TypeError) as e:
            raise FormattingError(ErrorTemplate.formatting_failed("date", value, str(e))) from e


def _decimal_pattern(minimum: int, maximum: int, use_grouping: bool) -> str:
    """Build a CLDR decimal pattern: '#,##0.0##' for 1-3 grouped decimals."""
    if maximum < minimum:
        msg = f"maximum_fraction_digits ({maximum}) < minimum_fraction_digits ({minimum})"
        raise ValueError(msg)
    integer_part = "#,##0" if use_grouping else "0"
    if maximum == 0:
        return integer_part
    return f"{integer_part}.{'0' * minimum}{'#' * (maximum - minimum)}"


def _coerce_datetime(value: date | datetime | str) -> date | datetime:
    """Accept date/datetime values and ISO 8601 strings."""
    if is_date(value):
        return value
    if is_string(value):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("date", value, "not ISO 8601 format")
            ) from e
    raise FormattingError(
        ErrorTemplate.formatting_failed("date", value, f"unsupported type {type(value).__name__}")
    )
