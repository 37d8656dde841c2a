"""ICU MessageFormat compiler for the development path.

Compiles raw message source into the compiled form consumed by the
interpreter. Catalogs shipped to production are normally compiled ahead of
time; this compiler lets development builds evaluate ad hoc strings without
a build step.

Supported syntax:
    Hello, {name}!
    {count, plural, offset:1 =0 {nobody} one {# guest} other {# guests}}
    {place, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    {gender, select, female {she} male {he} other {they}}
    {when, date, short}   {amount, number, percent}

Quoting follows ICU: '' is a literal apostrophe, and an apostrophe before a
syntax character starts a quoted literal that runs to the next apostrophe.

Python 3.13+. Zero external dependencies.
"""

import functools
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import NoReturn

from icucatalog.constants import COMPILE_CACHE_SIZE, MAX_DEPTH
from icucatalog.diagnostics import Diagnostic, ErrorTemplate, MessageSyntaxError
from icucatalog.enums import ArgumentKind
from icucatalog.syntax.ast import ArgumentRef, CompiledMessage, Node, Segment, coerce_kind
from icucatalog.syntax.cursor import _WHITESPACE, Cursor

__all__ = ["MessageCompiler", "compile_message"]

# Characters that terminate an argument name, kind or case key.
_NAME_TERMINATORS: frozenset[str] = _WHITESPACE | frozenset("{},'")

_OFFSET_PREFIX: str = "offset:"


class MessageCompiler:
    """Recursive-descent compiler from ICU message source to compiled messages.

    Stateless apart from configuration; safe to share.

    Example:
        >>> compiler = MessageCompiler()
        >>> compiler.compile("Hello")
        'Hello'
        >>> compiler.compile("Hi {name}").segments[1].name
        'name'
    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize compiler.

        Args:
            max_depth: Maximum nesting of arguments inside case branches
        """
        self._max_depth = max_depth

    def compile(self, source: str) -> CompiledMessage:
        """Compile message source.

        Args:
            source: ICU message source text

        Returns:
            The plain string when the source has no arguments, else a Node

        Raises:
            MessageSyntaxError: If the source is not valid message syntax
        """
        segments, _ = self._parse_message(Cursor(source, 0), depth=0, in_plural=False, nested=False)
        return _build(segments)

    def _parse_message(
        self, cursor: Cursor, *, depth: int, in_plural: bool, nested: bool
    ) -> tuple[list[Segment], Cursor]:
        """Parse text and arguments up to EOF, or up to '}' when nested.

        The closing brace of a nested message is left for the caller.
        """
        segments: list[Segment] = []
        text: list[str] = []

        while True:
            if cursor.is_eof:
                if nested:
                    self._raise(cursor, ErrorTemplate.unexpected_eof, "'}'")
                break

            char = cursor.current
            if char == "{":
                _flush(segments, text)
                ref, cursor = self._parse_argument(cursor, depth=depth + 1, in_plural=in_plural)
                segments.append(ref)
            elif char == "}":
                if nested:
                    break
                text.append(char)
                cursor = cursor.advance()
            elif char == "'":
                quoted, cursor = self._parse_quoted(cursor, in_plural=in_plural)
                text.append(quoted)
            else:
                text.append(char)
                cursor = cursor.advance()

        _flush(segments, text)
        return segments, cursor

    def _parse_quoted(self, cursor: Cursor, *, in_plural: bool) -> tuple[str, Cursor]:
        """Parse apostrophe quoting starting at an apostrophe."""
        following = cursor.peek(1)
        if following == "'":
            return "'", cursor.advance(2)
        if following is None or not (following in "{}" or (in_plural and following == "#")):
            return "'", cursor.advance()

        # Quoted literal: runs to the next lone apostrophe (or EOF)
        cursor = cursor.advance()
        chars: list[str] = []
        while not cursor.is_eof:
            if cursor.current == "'":
                if cursor.peek(1) == "'":
                    chars.append("'")
                    cursor = cursor.advance(2)
                    continue
                cursor = cursor.advance()
                break
            chars.append(cursor.current)
            cursor = cursor.advance()
        return "".join(chars), cursor

    def _parse_argument(
        self, cursor: Cursor, *, depth: int, in_plural: bool
    ) -> tuple[ArgumentRef, Cursor]:
        """Parse '{' name [, kind [, style | cases]] '}'."""
        if depth > self._max_depth:
            line, column = cursor.compute_line_col()
            raise MessageSyntaxError(
                ErrorTemplate.nesting_depth_exceeded(self._max_depth, line, column)
            )

        cursor = cursor.advance().skip_whitespace()
        name, cursor = _parse_name(cursor)
        if not name:
            if cursor.is_eof:
                self._raise(cursor, ErrorTemplate.unexpected_eof, "argument name")
            line, column = cursor.compute_line_col()
            raise MessageSyntaxError(ErrorTemplate.expected_argument_name(line, column))

        cursor = self._expect_one_of(cursor.skip_whitespace(), "},", "'}' or ','")
        if cursor.current == "}":
            return ArgumentRef(name), cursor.advance()

        cursor = cursor.advance().skip_whitespace()
        kind, cursor = _parse_name(cursor)
        if not kind:
            cursor = self._expect_one_of(cursor, "", "argument type")

        cursor = self._expect_one_of(cursor.skip_whitespace(), "},", "'}' or ','")
        if cursor.current == "}":
            return ArgumentRef(name, kind), cursor.advance()

        cursor = cursor.advance().skip_whitespace()
        known = coerce_kind(kind)
        if isinstance(known, ArgumentKind) and known.has_cases:
            branch_plural = in_plural or known.is_plural
            offset, cursor = self._parse_offset(cursor, kind)
            cases, cursor = self._parse_cases(
                cursor, kind, depth=depth, in_plural=branch_plural
            )
            cursor = self._expect_one_of(cursor, "}", "'}'")
            return ArgumentRef(name, kind, options=cases, offset=offset), cursor.advance()

        start = cursor
        while not cursor.is_eof and cursor.current not in "{}":
            cursor = cursor.advance()
        style = start.slice_to(cursor.pos).strip()
        cursor = self._expect_one_of(cursor, "}", "'}'")
        return ArgumentRef(name, kind, style=style or None), cursor.advance()

    def _parse_offset(self, cursor: Cursor, kind: str) -> tuple[int, Cursor]:
        """Parse an optional 'offset:<n>' prefix of plural cases."""
        if kind == ArgumentKind.SELECT or not cursor.source.startswith(_OFFSET_PREFIX, cursor.pos):
            return 0, cursor

        cursor = cursor.advance(len(_OFFSET_PREFIX)).skip_whitespace()
        start = cursor
        while not cursor.is_eof and cursor.current.isdigit():
            cursor = cursor.advance()
        digits = start.slice_to(cursor.pos)
        if not digits:
            line, column = cursor.compute_line_col()
            raise MessageSyntaxError(ErrorTemplate.invalid_offset(line, column))
        return int(digits), cursor.skip_whitespace()

    def _parse_cases(
        self, cursor: Cursor, kind: str, *, depth: int, in_plural: bool
    ) -> tuple[dict[str, CompiledMessage], Cursor]:
        """Parse 'key {message}' pairs up to the closing brace of the argument."""
        cases: dict[str, CompiledMessage] = {}

        while True:
            cursor = cursor.skip_whitespace()
            if cursor.is_eof:
                self._raise(cursor, ErrorTemplate.unexpected_eof, "case key or '}'")
            if cursor.current == "}":
                break

            key_cursor = cursor
            if cursor.current == "=":
                number, cursor = _parse_name(cursor.advance())
                key = f"={number}"
                if not _is_number(number):
                    line, column = key_cursor.compute_line_col()
                    raise MessageSyntaxError(ErrorTemplate.expected_case_key(kind, line, column))
            else:
                key, cursor = _parse_name(cursor)
                if not key:
                    line, column = cursor.compute_line_col()
                    raise MessageSyntaxError(ErrorTemplate.expected_case_key(kind, line, column))

            cursor = self._expect_one_of(cursor.skip_whitespace(), "{", "'{'")
            segments, cursor = self._parse_message(
                cursor.advance(), depth=depth, in_plural=in_plural, nested=True
            )
            cases[key] = _build(segments)
            cursor = cursor.advance()

        if not cases:
            line, column = cursor.compute_line_col()
            raise MessageSyntaxError(ErrorTemplate.expected_case_key(kind, line, column))
        return cases, cursor

    def _expect_one_of(self, cursor: Cursor, chars: str, expected: str) -> Cursor:
        """Return cursor unchanged if its current character is in chars, else raise."""
        if cursor.is_eof:
            self._raise(cursor, ErrorTemplate.unexpected_eof, expected)
        if cursor.current not in chars or not chars:
            line, column = cursor.compute_line_col()
            raise MessageSyntaxError(
                ErrorTemplate.unexpected_character(cursor.current, expected, line, column)
            )
        return cursor

    @staticmethod
    def _raise(
        cursor: Cursor, template: Callable[[str, int, int], Diagnostic], expected: str
    ) -> NoReturn:
        line, column = cursor.compute_line_col()
        raise MessageSyntaxError(template(expected, line, column))


def _parse_name(cursor: Cursor) -> tuple[str, Cursor]:
    """Read characters up to whitespace or a syntax character."""
    start = cursor
    while not cursor.is_eof and cursor.current not in _NAME_TERMINATORS:
        cursor = cursor.advance()
    return start.slice_to(cursor.pos), cursor


def _is_number(text: str) -> bool:
    try:
        Decimal(text)
    except InvalidOperation:
        return False
    return bool(text)


def _flush(segments: list[Segment], text: list[str]) -> None:
    """Move accumulated text into segments, merging with a preceding literal."""
    if not text:
        return
    chunk = "".join(text)
    text.clear()
    if segments and isinstance(segments[-1], str):
        segments[-1] += chunk
    else:
        segments.append(chunk)


def _build(segments: list[Segment]) -> CompiledMessage:
    """Collapse argument-free segment lists to a plain string."""
    if not segments:
        return ""
    if len(segments) == 1 and isinstance(segments[0], str):
        return segments[0]
    return Node(tuple(segments))


@functools.lru_cache(maxsize=COMPILE_CACHE_SIZE)
def compile_message(source: str) -> CompiledMessage:
    """Compile ICU message source, memoising the result.

    Args:
        source: ICU message source text

    Returns:
        Compiled message (plain string for argument-free source)

    Raises:
        MessageSyntaxError: If the source is not valid message syntax

    Examples:
        >>> compile_message("Plain text")
        'Plain text'
        >>> compile_message("It''s {n, number}").segments[0]
        "It's "
    """
    return MessageCompiler().compile(source)
