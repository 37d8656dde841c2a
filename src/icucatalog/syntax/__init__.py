"""Compiled message syntax: node types, development compiler and wire codec.

Python 3.13+. Zero external dependencies.
"""

from icucatalog.enums import ArgumentKind

from .ast import ArgumentRef, CompiledMessage, Node, Segment, coerce_kind
from .parser import MessageCompiler, compile_message
from .serializer import catalog_from_wire, catalog_to_wire, from_wire, to_wire

__all__ = [
    "ArgumentKind",
    "ArgumentRef",
    "CompiledMessage",
    "MessageCompiler",
    "Node",
    "Segment",
    "catalog_from_wire",
    "catalog_to_wire",
    "coerce_kind",
    "compile_message",
    "from_wire",
    "to_wire",
]
