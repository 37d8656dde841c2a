"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Catalog errors (missing messages, unloaded locales)
        2000-2999: Evaluation errors (malformed compiled messages)
        3000-3999: Syntax errors (development-mode compiler failures)
        4000-4999: Formatting and decoding errors
    """

    # Catalog errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    LOCALE_NOT_LOADED = 1002
    FALLBACK_NOT_RENDERED = 1003

    # Evaluation errors (2000-2999)
    UNKNOWN_ARGUMENT_KIND = 2001
    VALUE_NOT_PROVIDED = 2002
    NO_MATCHING_CASE = 2003
    CASES_MISSING = 2004
    INVALID_EXACT_KEY = 2005
    MAX_DEPTH_EXCEEDED = 2006
    UNSUPPORTED_MESSAGE = 2007
    INVALID_WIRE_FORMAT = 2008

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    EXPECTED_ARGUMENT_NAME = 3003
    EXPECTED_CASE_KEY = 3004
    INVALID_OFFSET = 3005
    NESTING_DEPTH_EXCEEDED = 3006

    # Formatting and decoding errors (4000-4999)
    FORMATTING_FAILED = 4001
    UNKNOWN_FORMAT_OPTION = 4002
    UNKNOWN_FORMAT_STYLE = 4003
    ESCAPE_DECODE_FAILED = 4004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        severity: Error severity level
        line: Source line (1-indexed) for compiler errors
        column: Source column (1-indexed) for compiler errors
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[NO_MATCHING_CASE]: No case matches 'male' in select argument 'gender'
              --> line 1, column 9
              = help: Add an 'other' case as the fallback branch

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.line is not None and self.column is not None:
            lines.append(f"  --> line {self.line}, column {self.column}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
