"""Message interpreter - evaluates compiled messages to formatted strings.

Walks a compiled message's segments left to right, substituting values,
choosing plural/selectordinal/select branches and delegating date and
number arguments to the Formatter Bridge.

Python 3.13+. Indirect dependency: Babel (via plural_rules and formatters).

Thread Safety:
    The interpreter holds only immutable configuration. Evaluation state
    (values, depth, the active '#' replacement) is passed explicitly down
    the recursion, so one interpreter may be shared freely.
"""

import json
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from icucatalog.constants import DEFAULT_LOCALE, MAX_DEPTH, OCTOTHORPE, OTHER_CASE
from icucatalog.diagnostics import (
    ErrorTemplate,
    EscapeDecodeError,
    FormattingError,
    MalformedMessageError,
)
from icucatalog.enums import ArgumentKind
from icucatalog.runtime.formatters import format_date, format_number
from icucatalog.runtime.plural_rules import select_plural_category
from icucatalog.runtime.value_types import (
    Formats,
    Number,
    Values,
    is_compiled,
    is_number,
    is_string,
    to_display_string,
    to_number,
)
from icucatalog.syntax import ArgumentRef, CompiledMessage, Node, compile_message

__all__ = [
    "UNICODE_ESCAPE_RE",
    "MessageInterpreter",
    "decode_unicode_escapes",
    "evaluate",
]

# JavaScript-style escapes left in literals by double-escaping serializers.
UNICODE_ESCAPE_RE = re.compile(r"\\u[a-fA-F0-9]{4}|\\x[a-fA-F0-9]{2}")

_EMPTY_VALUES: Mapping[str, Any] = {}


def decode_unicode_escapes(text: str) -> str:
    """Decode escape sequences in a literal through a strict JSON round-trip.

    Text without a recognizable escape is returned unchanged. Decoding
    fails closed: text that is not a valid JSON string body raises instead
    of being returned half-decoded.

    Raises:
        EscapeDecodeError: If the JSON decode fails

    Examples:
        >>> decode_unicode_escapes("Caf\\\\u00e9")
        'Café'
        >>> decode_unicode_escapes("plain")
        'plain'
    """
    if not UNICODE_ESCAPE_RE.search(text):
        return text
    try:
        decoded = json.loads(f'"{text}"')
    except json.JSONDecodeError as e:
        raise EscapeDecodeError(ErrorTemplate.escape_decode_failed(text, str(e))) from e
    return str(decoded)


class MessageInterpreter:
    """Evaluates compiled messages for one locale configuration.

    Args:
        locale: Active locale (drives plural rules)
        locales: Optional locale preference list forwarded to formatters
        formats: Named date/number presets
        max_depth: Maximum nesting of branches and compiled values
        development: Compile raw string messages before evaluating

    Example:
        >>> from icucatalog.syntax import ArgumentRef, Node
        >>> MessageInterpreter("en").evaluate(Node(("Hi ", ArgumentRef("name"))), {"name": "Ana"})
        'Hi Ana'
    """

    __slots__ = ("_development", "_formats", "_locale", "_locales", "_max_depth")

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        locales: str | Sequence[str] | None = None,
        *,
        formats: Formats | None = None,
        max_depth: int = MAX_DEPTH,
        development: bool = False,
    ) -> None:
        self._locale = locale
        self._locales = locales
        self._formats: Formats = formats or {}
        self._max_depth = max_depth
        self._development = development

    @property
    def formatting_locales(self) -> str | Sequence[str]:
        """Locale hint for the Formatter Bridge: the list if set, else the locale."""
        return self._locales or self._locale

    def evaluate(self, message: CompiledMessage, values: Values | None = None) -> str:
        """Evaluate a compiled (or, in development mode, raw) message.

        Args:
            message: Literal string or Node
            values: Argument name -> value

        Returns:
            The finished string

        Raises:
            MalformedMessageError: Unknown kind, missing value, or no branch
            MessageSyntaxError: Raw string fails to compile (development mode)
            EscapeDecodeError: Literal contains a malformed escape sequence
            FormattingError: A date/number argument cannot be formatted
        """
        if is_string(message):
            if self._development:
                message = compile_message(message)
            if is_string(message):
                return decode_unicode_escapes(message)

        return self._render(message, values or _EMPTY_VALUES, depth=0, octothorpe=None)

    def _render(
        self, message: CompiledMessage, values: Values, *, depth: int, octothorpe: str | None
    ) -> str:
        """Render one message; octothorpe is the active '#' replacement, if any."""
        if depth > self._max_depth:
            raise MalformedMessageError(ErrorTemplate.max_depth_exceeded(self._max_depth))

        if is_string(message):
            return _replace_octothorpe(message, octothorpe)
        if not isinstance(message, Node):
            raise MalformedMessageError(ErrorTemplate.unsupported_message(type(message).__name__))

        parts: list[str] = []
        for segment in message.segments:
            if ArgumentRef.guard(segment):
                parts.append(self._resolve_argument(segment, values, depth, octothorpe))
            else:
                parts.append(_replace_octothorpe(segment, octothorpe))
        return "".join(parts)

    def _resolve_argument(
        self, ref: ArgumentRef, values: Values, depth: int, octothorpe: str | None
    ) -> str:
        value = values.get(ref.name)

        match ref.kind:
            case ArgumentKind.VALUE:
                if value is None:
                    raise MalformedMessageError(ErrorTemplate.value_not_provided(ref.name, ref.kind))
                if is_compiled(value):
                    return self._render(value, values, depth=depth + 1, octothorpe=None)
                return to_display_string(value)

            case ArgumentKind.PLURAL | ArgumentKind.SELECTORDINAL:
                return self._resolve_plural(ref, value, values, depth)

            case ArgumentKind.SELECT:
                selector = OTHER_CASE if value is None else to_display_string(value)
                branch = self._pick_case(ref, selector)
                return self._render(branch, values, depth=depth + 1, octothorpe=octothorpe)

            case ArgumentKind.DATE:
                if value is None:
                    raise MalformedMessageError(ErrorTemplate.value_not_provided(ref.name, ref.kind))
                return format_date(self.formatting_locales, value, self._preset(ref.style))

            case ArgumentKind.NUMBER:
                if value is None:
                    raise MalformedMessageError(ErrorTemplate.value_not_provided(ref.name, ref.kind))
                number = value if is_number(value) else to_number(value)
                if number is None:
                    raise FormattingError(
                        ErrorTemplate.formatting_failed("number", value, "not a number")
                    )
                return format_number(self.formatting_locales, number, self._preset(ref.style))

            case _:
                raise MalformedMessageError(ErrorTemplate.unknown_argument_kind(ref.name, ref.kind))

    def _resolve_plural(
        self, ref: ArgumentRef, value: object, values: Values, depth: int
    ) -> str:
        """Exact '=n' match, then CLDR category of value - offset, then 'other'."""
        if not ref.options:
            raise MalformedMessageError(ErrorTemplate.cases_missing(ref.name, ref.kind))

        number = to_number(value)
        if number is None:
            branch = self._pick_case(ref, OTHER_CASE)
            return self._render(branch, values, depth=depth + 1, octothorpe=None)

        branch = _exact_case(ref, number)
        if branch is None:
            category = select_plural_category(
                number - ref.offset,
                self._locale,
                ordinal=ref.kind == ArgumentKind.SELECTORDINAL,
            )
            branch = self._pick_case(ref, category)

        replacement = format_number(
            self.formatting_locales, number - ref.offset, self._formats.get(ArgumentKind.NUMBER)
        )
        return self._render(branch, values, depth=depth + 1, octothorpe=replacement)

    def _pick_case(self, ref: ArgumentRef, key: str) -> CompiledMessage:
        cases = ref.options
        if not cases:
            raise MalformedMessageError(ErrorTemplate.cases_missing(ref.name, ref.kind))
        if key in cases:
            return cases[key]
        if OTHER_CASE in cases:
            return cases[OTHER_CASE]
        raise MalformedMessageError(ErrorTemplate.no_matching_case(ref.name, ref.kind, key))

    def _preset(self, style: str | None) -> Mapping[str, Any] | None:
        """Resolve a style to a preset from formats, else treat it as a style name."""
        if style is None:
            return None
        preset = self._formats.get(style)
        if preset is not None:
            return preset
        return {"style": style}


def _exact_case(ref: ArgumentRef, number: Number) -> CompiledMessage | None:
    """Return the '=n' branch equal to number, if any."""
    target = Decimal(str(number)) if isinstance(number, float) else Decimal(number)
    for key, branch in (ref.options or {}).items():
        if not key.startswith("="):
            continue
        try:
            exact = Decimal(key[1:])
        except ArithmeticError as e:
            raise MalformedMessageError(ErrorTemplate.invalid_exact_key(ref.name, key)) from e
        if exact == target:
            return branch
    return None


def _replace_octothorpe(text: str, octothorpe: str | None) -> str:
    if octothorpe is None or OCTOTHORPE not in text:
        return text
    return text.replace(OCTOTHORPE, octothorpe)


def evaluate(
    message: CompiledMessage,
    values: Values | None = None,
    locale: str = DEFAULT_LOCALE,
    locales: str | Sequence[str] | None = None,
    formats: Formats | None = None,
    *,
    development: bool = __debug__,
) -> str:
    """Evaluate a message against values, locale, locale hint and formats.

    Convenience wrapper around MessageInterpreter.

    Examples:
        >>> evaluate("Hello")
        'Hello'
        >>> from icucatalog.syntax import ArgumentRef, Node
        >>> count = ArgumentRef("n", "plural", {"one": "# file", "other": "# files"})
        >>> evaluate(Node((count,)), {"n": 5})
        '5 files'
    """
    interpreter = MessageInterpreter(
        locale, locales, formats=formats, development=development
    )
    return interpreter.evaluate(message, values)
