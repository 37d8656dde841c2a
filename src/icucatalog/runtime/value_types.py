"""Value types and coercion predicates for message evaluation.

Defines the value set accepted by the interpreter and the small predicates
used to dispatch on values at resolution time:
    - MessageValue: Union of all values a caller may supply
    - Values / Formats / Locales: Mapping and hint aliases
    - is_string / is_number / is_date / is_compiled / is_function: predicates
    - to_number / to_display_string: coercions

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypeIs

from icucatalog.syntax.ast import CompiledMessage, Node

__all__ = [
    "Formats",
    "Locales",
    "MessageValue",
    "Values",
    "is_compiled",
    "is_date",
    "is_function",
    "is_number",
    "is_string",
    "to_display_string",
    "to_number",
]

type MessageValue = str | int | float | Decimal | date | datetime | CompiledMessage | None
"""Value a caller may bind to an argument name."""

type Values = Mapping[str, MessageValue]
"""Argument name -> value."""

type Formats = Mapping[str, Mapping[str, Any]]
"""Preset name -> date or number option record, supplied per call."""

type Locales = str | Sequence[str]
"""A locale or an ordered locale preference list."""

type Number = int | float | Decimal


def is_string(value: object) -> TypeIs[str]:
    """Check for a string value."""
    return isinstance(value, str)


def is_number(value: object) -> TypeIs[Number]:
    """Check for a numeric value.

    bool is excluded even though it subclasses int.

    Example:
        >>> is_number(3), is_number(Decimal("1.5")), is_number(True)
        (True, True, False)
    """
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


def is_date(value: object) -> TypeIs[date]:
    """Check for a date or datetime value."""
    return isinstance(value, date)


def is_compiled(value: object) -> TypeIs[Node]:
    """Check for a nested compiled message (recursive composition)."""
    return isinstance(value, Node)


def is_function(value: object) -> TypeIs[Callable[..., Any]]:
    """Check for a callable (used by the missing-message policy)."""
    return callable(value)


def to_number(value: object) -> Number | None:
    """Coerce a value to a number for plural selection.

    Finite numbers pass through; numeric strings become Decimal; NaN,
    infinities and anything else return None.

    Example:
        >>> to_number(5), to_number("2.50"), to_number("five"), to_number(float("nan"))
        (5, Decimal('2.50'), None, None)
    """
    if is_number(value):
        return value if _is_finite(value) else None
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def to_display_string(value: object) -> str:
    """Stringify a plain value for substitution.

    Handles:
        - str: returned as-is
        - bool: "true"/"false"
        - None: empty string
        - integral float: without the fractional part (1.0 -> "1")
        - everything else: str()

    Example:
        >>> to_display_string(1.0), to_display_string(1.5), to_display_string(False)
        ('1', '1.5', 'false')
    """
    if isinstance(value, str):
        return value
    # Check bool BEFORE int/float (bool is subclass of int in Python)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_finite(value: Number) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)
