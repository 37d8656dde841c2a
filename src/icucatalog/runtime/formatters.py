"""Formatter Bridge: locale-aware date and number formatting.

Two pure functions, format_date() and format_number(), accept a single
locale or an ordered locale preference list plus an Intl-style option
record, and delegate to LocaleContext (Babel/CLDR).

Option records may use Python snake_case keys or Intl camelCase keys:

    format_number("de-DE", 1234.5, {"minimumFractionDigits": 2})
    format_number("de-DE", 1234.5, {"minimum_fraction_digits": 2})

Both give '1.234,50'.

Python 3.13+. Uses Babel for i18n.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from icucatalog.diagnostics import ErrorTemplate, FormattingError
from icucatalog.runtime.locale_context import LocaleContext

__all__ = ["DATE_STYLES", "NUMBER_STYLES", "format_date", "format_number"]

logger = logging.getLogger(__name__)

NUMBER_STYLES: frozenset[str] = frozenset({"decimal", "percent", "currency", "integer"})
DATE_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

_NUMBER_OPTIONS: frozenset[str] = frozenset({
    "style",
    "currency",
    "currency_display",
    "minimum_fraction_digits",
    "maximum_fraction_digits",
    "use_grouping",
    "pattern",
})

_CURRENCY_DISPLAYS: frozenset[str] = frozenset({"symbol", "code", "name"})

# Intl component option -> value -> CLDR skeleton field
_SKELETON_FIELDS: dict[str, dict[str, str]] = {
    "weekday": {"narrow": "EEEEE", "short": "E", "long": "EEEE"},
    "year": {"numeric": "y", "2-digit": "yy"},
    "month": {"numeric": "M", "2-digit": "MM", "short": "MMM", "long": "MMMM", "narrow": "MMMMM"},
    "day": {"numeric": "d", "2-digit": "dd"},
    "hour": {"numeric": "{h}", "2-digit": "{h}{h}"},
    "minute": {"numeric": "m", "2-digit": "mm"},
    "second": {"numeric": "s", "2-digit": "ss"},
}

_DATE_OPTIONS: frozenset[str] = frozenset(
    {"style", "date_style", "time_style", "pattern", "hour12", *_SKELETON_FIELDS}
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _to_snake_case(name: str) -> str:
    """Convert Intl camelCase option names to snake_case.

    Examples:
        >>> _to_snake_case("minimumFractionDigits")
        'minimum_fraction_digits'
        >>> _to_snake_case("use_grouping")
        'use_grouping'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _normalize_options(
    kind: str, options: Mapping[str, Any] | None, allowed: frozenset[str]
) -> dict[str, Any]:
    """Snake-case option keys, drop None values, reject unknown keys."""
    normalized: dict[str, Any] = {}
    for key, value in (options or {}).items():
        name = _to_snake_case(str(key))
        if name not in allowed:
            raise FormattingError(ErrorTemplate.unknown_format_option(kind, str(key)))
        if value is not None:
            normalized[name] = value
    return normalized


def format_number(
    locales: str | Sequence[str] | None,
    value: int | float | Decimal,
    options: Mapping[str, Any] | None = None,
) -> str:
    """Format a number for the first recognized locale.

    Args:
        locales: Locale code, ordered locale preference list, or None
        value: Number to format
        options: Intl.NumberFormat-style options (see module docstring)

    Returns:
        Formatted number string

    Raises:
        FormattingError: On unknown options or styles, missing currency code,
            or a value Babel cannot format

    Examples:
        >>> format_number("en", 1234.5)
        '1,234.5'
        >>> format_number(["xx", "de-DE"], 1234.5)
        '1.234,5'
        >>> format_number("en", 0.25, {"style": "percent"})
        '25%'
        >>> format_number("en", 3.7, {"style": "integer"})
        '4'
    """
    opts = _normalize_options("number", options, _NUMBER_OPTIONS)
    style = opts.pop("style", "decimal")
    if style not in NUMBER_STYLES:
        raise FormattingError(ErrorTemplate.unknown_format_style("number", str(style)))

    ctx = LocaleContext.for_locales(locales)

    match style:
        case "currency":
            currency = opts.get("currency")
            if not currency:
                raise FormattingError(
                    ErrorTemplate.formatting_failed("currency", value, "no currency code given")
                )
            display = opts.get("currency_display", "symbol")
            if display not in _CURRENCY_DISPLAYS:
                raise FormattingError(ErrorTemplate.unknown_format_style("currency", str(display)))
            return ctx.format_currency(
                value, currency=str(currency), currency_display=display,
                pattern=opts.get("pattern"),
            )
        case "percent":
            minimum = opts.get("minimum_fraction_digits", 0)
            return ctx.format_percent(
                value,
                minimum_fraction_digits=minimum,
                maximum_fraction_digits=opts.get("maximum_fraction_digits", minimum),
                use_grouping=opts.get("use_grouping", True),
                pattern=opts.get("pattern"),
            )
        case "integer":
            return ctx.format_number(
                value,
                minimum_fraction_digits=0,
                maximum_fraction_digits=0,
                use_grouping=opts.get("use_grouping", True),
                pattern=opts.get("pattern"),
            )
        case _:
            minimum = opts.get("minimum_fraction_digits", 0)
            return ctx.format_number(
                value,
                minimum_fraction_digits=minimum,
                maximum_fraction_digits=opts.get("maximum_fraction_digits", max(minimum, 3)),
                use_grouping=opts.get("use_grouping", True),
                pattern=opts.get("pattern"),
            )


def format_date(
    locales: str | Sequence[str] | None,
    value: date | datetime | str,
    options: Mapping[str, Any] | None = None,
) -> str:
    """Format a date or datetime for the first recognized locale.

    Args:
        locales: Locale code, ordered locale preference list, or None
        value: date, datetime or ISO 8601 string
        options: ``style``/``date_style``, ``time_style``, ``pattern``, or
            Intl component options (year, month, day, weekday, hour, minute,
            second, hour12)

    Returns:
        Formatted date string (medium date when no options are given)

    Raises:
        FormattingError: On unknown options or styles, or unparseable values

    Examples:
        >>> from datetime import date
        >>> format_date("en-US", date(2024, 3, 5), {"style": "short"})
        '3/5/24'
        >>> format_date("en", date(2024, 3, 5), {"year": "numeric", "month": "long"})
        'March 2024'
    """
    opts = _normalize_options("date", options, _DATE_OPTIONS)
    ctx = LocaleContext.for_locales(locales)

    if "pattern" in opts:
        return ctx.format_datetime(value, pattern=str(opts["pattern"]))

    skeleton = _build_skeleton(ctx, opts)
    if skeleton:
        return ctx.format_datetime(value, skeleton=skeleton)

    date_style = opts.get("date_style", opts.get("style"))
    time_style = opts.get("time_style")
    for style in (date_style, time_style):
        if style is not None and style not in DATE_STYLES:
            raise FormattingError(ErrorTemplate.unknown_format_style("date", str(style)))

    if date_style is None and time_style is None:
        date_style = "medium"
    return ctx.format_datetime(value, date_style=date_style, time_style=time_style)


def _build_skeleton(ctx: LocaleContext, opts: Mapping[str, Any]) -> str:
    """Map Intl component options to a CLDR skeleton ('' when none are given)."""
    hour12 = opts.get("hour12")
    if hour12 is None:
        short_time = ctx.babel_locale.time_formats.get("short")
        hour12 = "h" in getattr(short_time, "pattern", "H")
    hour_char = "h" if hour12 else "H"

    fields: list[str] = []
    for option, mapping in _SKELETON_FIELDS.items():
        requested = opts.get(option)
        if requested is None:
            continue
        field = mapping.get(str(requested))
        if field is None:
            raise FormattingError(
                ErrorTemplate.unknown_format_style(f"date {option}", str(requested))
            )
        fields.append(field.format(h=hour_char))

    if fields:
        logger.debug("Date options %r mapped to skeleton %r", dict(opts), "".join(fields))
    return "".join(fields)
