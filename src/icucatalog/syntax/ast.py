"""Compiled message node definitions.

The compiled form is the storage contract between the build step that
compiles ICU message source and this runtime. Catalogs are usually compiled
ahead of time and shipped as static assets, so these shapes are stable.

    CompiledMessage = str | Node

A bare ``str`` is a literal: returned verbatim, never interpolated. A
``Node`` is an ordered sequence of segments, each either literal text or an
``ArgumentRef``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeIs

from icucatalog.enums import ArgumentKind

__all__ = [
    "ArgumentRef",
    "CompiledMessage",
    "Node",
    "Segment",
    "coerce_kind",
]


@dataclass(frozen=True, slots=True)
class ArgumentRef:
    """Reference to a named value inside a compiled message.

    Attributes:
        name: Key looked up in the caller's values mapping
        kind: ArgumentKind (plain strings are accepted so that catalogs with
            kinds this runtime does not know still load; they fail when
            evaluated)
        options: Case mapping for plural, selectordinal and select. Keys are
            '=<n>' exact matches, CLDR categories or select values, plus 'other'.
        style: Preset name for date and number (looked up in formats)
        offset: ICU plural offset subtracted before category selection

    Example:
        >>> ref = ArgumentRef("count", ArgumentKind.PLURAL, {"one": "# item", "other": "# items"})
        >>> ref.options["other"]
        '# items'
    """

    name: str
    kind: str = ArgumentKind.VALUE
    options: Mapping[str, CompiledMessage] | None = None
    style: str | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        """Normalize the kind and freeze the case mapping."""
        if not isinstance(self.kind, ArgumentKind):
            object.__setattr__(self, "kind", coerce_kind(self.kind))
        if self.options is not None and not isinstance(self.options, MappingProxyType):
            object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @staticmethod
    def guard(segment: object) -> TypeIs[ArgumentRef]:
        """Type guard for ArgumentRef (used in segment dispatch)."""
        return isinstance(segment, ArgumentRef)


@dataclass(frozen=True, slots=True)
class Node:
    """Composite compiled message: literal text interleaved with arguments.

    Example:
        >>> node = Node(("Hello, ", ArgumentRef("name"), "!"))
        >>> len(node.segments)
        3
    """

    segments: tuple[Segment, ...]

    def __post_init__(self) -> None:
        """Accept any iterable of segments; store a tuple."""
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))

    @staticmethod
    def guard(message: object) -> TypeIs[Node]:
        """Type guard for Node (used in message dispatch)."""
        return isinstance(message, Node)

    def argument_names(self) -> frozenset[str]:
        """Names of all arguments referenced, including nested branches.

        Example:
            >>> Node(("Hi ", ArgumentRef("name"))).argument_names()
            frozenset({'name'})
        """
        names: set[str] = set()
        for segment in self.segments:
            if isinstance(segment, ArgumentRef):
                names.add(segment.name)
                for branch in (segment.options or {}).values():
                    if isinstance(branch, Node):
                        names |= branch.argument_names()
        return frozenset(names)


type Segment = str | ArgumentRef
"""Element of a Node: literal text or an argument reference."""

type CompiledMessage = str | Node
"""A literal string or a composite Node."""


def coerce_kind(kind: str) -> str:
    """Map a known kind string to its ArgumentKind member; keep unknown kinds as given.

    Example:
        >>> coerce_kind("plural") is ArgumentKind.PLURAL
        True
        >>> coerce_kind("time")
        'time'
    """
    try:
        return ArgumentKind(kind)
    except ValueError:
        return kind
