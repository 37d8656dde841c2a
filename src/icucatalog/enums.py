"""Enumerations for icucatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they compare equal to the raw
strings found in compiled catalogs and in event names.

Python 3.13+.
"""

from enum import StrEnum


class ArgumentKind(StrEnum):
    """Kind of an argument reference inside a compiled message.

    StrEnum provides automatic string conversion: str(ArgumentKind.PLURAL) == "plural"
    """

    VALUE = "value"
    """Plain substitution: {name}"""

    PLURAL = "plural"
    """Cardinal plural branching: {count, plural, one {...} other {...}}"""

    SELECTORDINAL = "selectordinal"
    """Ordinal plural branching: {pos, selectordinal, one {#st} other {#th}}"""

    SELECT = "select"
    """String-keyed branching: {gender, select, female {...} other {...}}"""

    DATE = "date"
    """Delegated date formatting: {when, date, short}"""

    NUMBER = "number"
    """Delegated number formatting: {amount, number, percent}"""

    @property
    def is_plural(self) -> bool:
        """True for kinds that select a branch by CLDR plural category."""
        return self in (ArgumentKind.PLURAL, ArgumentKind.SELECTORDINAL)

    @property
    def has_cases(self) -> bool:
        """True for kinds whose options are a case mapping."""
        return self in (ArgumentKind.PLURAL, ArgumentKind.SELECTORDINAL, ArgumentKind.SELECT)


class CatalogEvent(StrEnum):
    """Event names emitted by the I18n engine.

    StrEnum provides automatic string conversion: str(CatalogEvent.CHANGE) == "change"
    """

    CHANGE = "change"
    """Fired after any catalog load or activation. No payload."""

    MISSING = "missing"
    """Fired when a requested message id is absent. Payload: MissingMessageEvent."""


__all__ = [
    "ArgumentKind",
    "CatalogEvent",
]
