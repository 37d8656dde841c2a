"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    """

    @staticmethod
    def message_not_found(message_id: str, locale: str) -> Diagnostic:
        """Message id absent from the active catalog."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"Message '{message_id}' not found for locale '{locale}'",
            hint="Load a catalog containing the id, or configure a missing-message policy",
            severity="warning",
        )

    @staticmethod
    def locale_not_loaded(locale: str) -> Diagnostic:
        """Activated locale has no loaded messages."""
        return Diagnostic(
            code=DiagnosticCode.LOCALE_NOT_LOADED,
            message=f"Messages for locale '{locale}' not loaded",
            hint="Call load() or load_and_activate() before activating the locale",
            severity="warning",
        )

    @staticmethod
    def fallback_not_rendered(text: str, reason: str) -> Diagnostic:
        """Fallback text for a missing id could not be evaluated; it is returned raw."""
        return Diagnostic(
            code=DiagnosticCode.FALLBACK_NOT_RENDERED,
            message=f"Fallback '{text}' returned unformatted: {reason}",
            hint="Add the message to the catalog, or escape braces with ICU quoting",
            severity="warning",
        )

    @staticmethod
    def unknown_argument_kind(name: str, kind: str) -> Diagnostic:
        """Argument reference with a kind the interpreter does not know.

        Args:
            name: Argument name
            kind: The unrecognized kind string
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ARGUMENT_KIND,
            message=f"Unknown argument kind '{kind}' for argument '{name}'",
            hint="Supported kinds: value, plural, selectordinal, select, date, number",
        )

    @staticmethod
    def value_not_provided(name: str, kind: str) -> Diagnostic:
        """Required value missing from the value set."""
        return Diagnostic(
            code=DiagnosticCode.VALUE_NOT_PROVIDED,
            message=f"Value '{name}' not provided for {kind} argument",
            hint=f"Pass '{name}' in the values mapping",
        )

    @staticmethod
    def no_matching_case(name: str, kind: str, selector: str) -> Diagnostic:
        """No branch matched and no 'other' fallback exists.

        Args:
            name: Argument name
            kind: plural, selectordinal or select
            selector: The value (or category) that failed to match
        """
        return Diagnostic(
            code=DiagnosticCode.NO_MATCHING_CASE,
            message=f"No case matches '{selector}' in {kind} argument '{name}'",
            hint="Add an 'other' case as the fallback branch",
        )

    @staticmethod
    def cases_missing(name: str, kind: str) -> Diagnostic:
        """Branching argument compiled without a case mapping."""
        return Diagnostic(
            code=DiagnosticCode.CASES_MISSING,
            message=f"{kind.capitalize()} argument '{name}' has no cases",
            hint="Branching arguments need at least an 'other' case",
        )

    @staticmethod
    def invalid_exact_key(name: str, key: str) -> Diagnostic:
        """Exact-match case key whose number does not parse."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_EXACT_KEY,
            message=f"Invalid exact-match key '{key}' in argument '{name}'",
            hint="Exact-match keys have the form '=<number>', e.g. '=0'",
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nested evaluation went deeper than the recursion limit."""
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum message nesting depth ({max_depth}) exceeded",
            hint="Check for compiled values that reference themselves",
        )

    @staticmethod
    def unsupported_message(type_name: str) -> Diagnostic:
        """Object that is neither a string nor a compiled Node."""
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_MESSAGE,
            message=f"Cannot evaluate object of type '{type_name}' as a message",
            hint="Compiled messages are str or Node instances",
        )

    @staticmethod
    def invalid_wire_format(detail: str) -> Diagnostic:
        """Wire data that does not describe a compiled message."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_WIRE_FORMAT,
            message=f"Invalid compiled message data: {detail}",
            hint="Messages are strings or lists of string and argument tokens",
        )

    @staticmethod
    def unexpected_eof(expected: str, line: int, column: int) -> Diagnostic:
        """Source ended inside an argument."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected end of message, expected {expected}",
            hint="Check that every '{' has a matching '}'",
            line=line,
            column=column,
        )

    @staticmethod
    def unexpected_character(found: str, expected: str, line: int, column: int) -> Diagnostic:
        """Character that does not fit the argument syntax."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=f"Unexpected character '{found}', expected {expected}",
            line=line,
            column=column,
        )

    @staticmethod
    def expected_argument_name(line: int, column: int) -> Diagnostic:
        """Opening brace not followed by an argument name."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_ARGUMENT_NAME,
            message="Expected argument name after '{'",
            hint="Quote literal braces with apostrophes: '{'",
            line=line,
            column=column,
        )

    @staticmethod
    def expected_case_key(kind: str, line: int, column: int) -> Diagnostic:
        """Branching argument without a case key where one is required."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_CASE_KEY,
            message=f"Expected case key in {kind} argument",
            hint="Case keys are identifiers like 'one' or exact matches like '=0'",
            line=line,
            column=column,
        )

    @staticmethod
    def invalid_offset(line: int, column: int) -> Diagnostic:
        """Plural offset that is not an integer."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message="Plural offset must be a non-negative integer",
            line=line,
            column=column,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, line: int, column: int) -> Diagnostic:
        """Compiler nesting limit reached."""
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Maximum nesting depth ({max_depth}) exceeded",
            line=line,
            column=column,
        )

    @staticmethod
    def formatting_failed(kind: str, value: object, reason: str) -> Diagnostic:
        """Babel could not format the value."""
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=f"{kind.capitalize()} formatting failed for '{value}': {reason}",
        )

    @staticmethod
    def unknown_format_option(kind: str, option: str) -> Diagnostic:
        """Option key the bridge does not support."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMAT_OPTION,
            message=f"Unknown {kind} format option '{option}'",
            hint="Use snake_case or Intl camelCase names of supported options",
        )

    @staticmethod
    def unknown_format_style(kind: str, style: str) -> Diagnostic:
        """Style that is neither a preset nor a built-in style."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMAT_STYLE,
            message=f"Unknown {kind} style '{style}'",
            hint="Define the style in the formats table or use a built-in style",
        )

    @staticmethod
    def escape_decode_failed(text: str, reason: str) -> Diagnostic:
        """Unicode escapes present but the string is not valid JSON string content."""
        preview = text if len(text) <= 50 else f"{text[:47]}..."
        return Diagnostic(
            code=DiagnosticCode.ESCAPE_DECODE_FAILED,
            message=f"Cannot decode escape sequences in '{preview}': {reason}",
            hint="Escapes must be valid JSON string escapes such as \\u00e9",
        )
