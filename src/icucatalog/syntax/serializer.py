"""Wire codec for compiled messages.

Converts compiled messages to and from the JSON-compatible token form that
catalog build tooling writes to static assets:

    "Plain text"                                   -> literal
    ["Hello, ", ["name"], "!"]                     -> Node with a value argument
    [["count", "plural", {"0": "none", "one": ["#", " item"],
                          "other": ["#", " items"], "offset": 1}]]
    [["when", "date", "short"]]

Exact-match keys of plural and selectordinal cases are written without their
'=' prefix and read back with it; select keys are kept verbatim. The 'offset'
entry of a case mapping carries the plural offset.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from icucatalog.diagnostics import ErrorTemplate, MalformedMessageError
from icucatalog.enums import ArgumentKind
from icucatalog.syntax.ast import ArgumentRef, CompiledMessage, Node, Segment, coerce_kind

__all__ = [
    "catalog_from_wire",
    "catalog_to_wire",
    "from_wire",
    "to_wire",
]

type WireMessage = str | list[Any]
"""JSON-compatible representation of a compiled message."""

_OFFSET_KEY: str = "offset"


def to_wire(message: CompiledMessage) -> WireMessage:
    """Encode a compiled message into its JSON-compatible token form.

    Raises:
        MalformedMessageError: If message is not a str or Node

    Example:
        >>> to_wire(Node(("Hello, ", ArgumentRef("name"))))
        ['Hello, ', ['name']]
    """
    if isinstance(message, str):
        return message
    if not isinstance(message, Node):
        raise MalformedMessageError(
            ErrorTemplate.invalid_wire_format(f"cannot encode {type(message).__name__}")
        )
    return [_encode_segment(segment) for segment in message.segments]


def _encode_segment(segment: Segment) -> str | list[Any]:
    if isinstance(segment, str):
        return segment

    if segment.options is not None:
        exact = _is_plural_kind(segment.kind)
        cases: dict[str, Any] = {
            key.removeprefix("=") if exact else key: to_wire(branch)
            for key, branch in segment.options.items()
        }
        if segment.offset:
            cases[_OFFSET_KEY] = segment.offset
        return [segment.name, str(segment.kind), cases]
    if segment.style is not None:
        return [segment.name, str(segment.kind), segment.style]
    if segment.kind == ArgumentKind.VALUE:
        return [segment.name]
    return [segment.name, str(segment.kind)]


def from_wire(data: object) -> CompiledMessage:
    """Decode the JSON-compatible token form into a compiled message.

    Raises:
        MalformedMessageError: If data does not describe a compiled message

    Example:
        >>> from_wire(["Hi ", ["name", "number"]]).segments[1].kind
        <ArgumentKind.NUMBER: 'number'>
    """
    if isinstance(data, str):
        return data
    if not isinstance(data, list | tuple):
        raise MalformedMessageError(
            ErrorTemplate.invalid_wire_format(f"expected string or list, got {type(data).__name__}")
        )
    return Node(tuple(_decode_token(token) for token in data))


def _decode_token(token: object) -> Segment:
    if isinstance(token, str):
        return token
    if not isinstance(token, list | tuple) or not 1 <= len(token) <= 3:
        raise MalformedMessageError(ErrorTemplate.invalid_wire_format(f"bad token {token!r}"))

    name = token[0]
    if not isinstance(name, str):
        raise MalformedMessageError(
            ErrorTemplate.invalid_wire_format(f"argument name must be a string, got {name!r}")
        )
    if len(token) == 1 or token[1] is None:
        return ArgumentRef(name)

    kind = token[1]
    if not isinstance(kind, str):
        raise MalformedMessageError(
            ErrorTemplate.invalid_wire_format(f"argument kind must be a string, got {kind!r}")
        )
    extra = token[2] if len(token) == 3 else None

    match extra:
        case None:
            return ArgumentRef(name, kind)
        case str():
            return ArgumentRef(name, kind, style=extra)
        case Mapping():
            return _decode_cases(name, kind, extra)
        case _:
            raise MalformedMessageError(
                ErrorTemplate.invalid_wire_format(f"bad format for argument '{name}': {extra!r}")
            )


def _decode_cases(name: str, kind: str, raw: Mapping[Any, Any]) -> ArgumentRef:
    offset = 0
    exact = _is_plural_kind(kind)
    cases: dict[str, CompiledMessage] = {}
    for key, branch in raw.items():
        if key == _OFFSET_KEY:
            if not isinstance(branch, int) or isinstance(branch, bool):
                raise MalformedMessageError(
                    ErrorTemplate.invalid_wire_format(f"offset must be an integer, got {branch!r}")
                )
            offset = branch
            continue
        cases[_exact_key(str(key)) if exact else str(key)] = from_wire(branch)
    return ArgumentRef(name, kind, options=cases, offset=offset)


def _is_plural_kind(kind: str) -> bool:
    """Only plural and selectordinal cases carry exact-match keys."""
    known = coerce_kind(kind)
    return isinstance(known, ArgumentKind) and known.is_plural


def _exact_key(key: str) -> str:
    """Restore the '=' prefix of numeric case keys."""
    if key.startswith("="):
        return key
    try:
        Decimal(key)
    except InvalidOperation:
        return key
    return f"={key}"


def catalog_to_wire(messages: Mapping[str, CompiledMessage]) -> dict[str, WireMessage]:
    """Encode a message-id -> compiled message mapping."""
    return {message_id: to_wire(message) for message_id, message in messages.items()}


def catalog_from_wire(data: Mapping[str, object]) -> dict[str, CompiledMessage]:
    """Decode a message-id -> wire message mapping (e.g. a parsed JSON asset).

    Example:
        >>> catalog_from_wire({"hello": "Hello", "hi": ["Hi ", ["name"]]})["hello"]
        'Hello'
    """
    if not isinstance(data, Mapping):
        raise MalformedMessageError(
            ErrorTemplate.invalid_wire_format(f"catalog must be a mapping, got {type(data).__name__}")
        )
    return {str(message_id): from_wire(message) for message_id, message in data.items()}
