"""Diagnostic system for catalog errors.

Provides structured error diagnostics with codes, hints and source locations.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CatalogError,
    EscapeDecodeError,
    FormattingError,
    MalformedMessageError,
    MessageSyntaxError,
)
from .templates import ErrorTemplate

__all__ = [
    "CatalogError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "EscapeDecodeError",
    "FormattingError",
    "MalformedMessageError",
    "MessageSyntaxError",
]
