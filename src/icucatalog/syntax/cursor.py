"""Immutable cursor infrastructure for the message compiler.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (only for errors)
"""

from dataclasses import dataclass

__all__ = ["Cursor"]

# ICU pattern whitespace accepted between argument tokens.
_WHITESPACE: frozenset[str] = frozenset(" \t\n\r\u200e\u200f")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns None ONLY when peeking beyond EOF.
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def skip_whitespace(self) -> "Cursor":
        """Skip ICU pattern whitespace.

        Example:
            >>> Cursor("  \\n hello", 0).skip_whitespace().current
            'h'
        """
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def compute_line_col(self) -> tuple[int, int]:
        """Compute 1-indexed line and column of the current position.

        Example:
            >>> Cursor("ab\\ncd", 4).compute_line_col()
            (2, 2)
        """
        consumed = self.source[: self.pos]
        line = consumed.count("\n") + 1
        last_newline = consumed.rfind("\n")
        column = self.pos - last_newline
        return line, column
