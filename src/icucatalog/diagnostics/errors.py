"""Catalog exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic object for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CatalogError",
    "EscapeDecodeError",
    "FormattingError",
    "MalformedMessageError",
    "MessageSyntaxError",
]


class CatalogError(Exception):
    """Base exception for all icucatalog errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CatalogError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MalformedMessageError(CatalogError):
    """Structurally invalid compiled message.

    Raised by the interpreter for unknown argument kinds, missing required
    values, branches without a match and no 'other' case, and by the wire
    codec for data that does not describe a compiled message.

    Never swallowed: it indicates a broken catalog or a caller error.
    """


class MessageSyntaxError(CatalogError):
    """Raw message text could not be compiled.

    Only raised on the development path, where raw strings are compiled
    before evaluation.
    """


class EscapeDecodeError(CatalogError, ValueError):
    """Unicode escape sequence in a resolved string failed to decode.

    Chained from the underlying json.JSONDecodeError. Escaped text is never
    returned in place of the decoded text.
    """


class FormattingError(CatalogError):
    """Locale-aware number or date formatting failed.

    Raised by the Formatter Bridge for unknown options or styles, missing
    currency codes, unparseable date strings and Babel failures.
    """
