"""icucatalog - runtime ICU message-catalog engine.

Stores precompiled, locale-keyed message templates and evaluates them
against named values to produce localized, formatted strings. Number and
date formatting and plural rules use Babel's CLDR data.

Public API:
    I18n - Catalog, activation and translation engine
    setup_i18n - Factory for I18n
    MessageDescriptor - Message request bundled as one object
    Node, ArgumentRef, ArgumentKind - Compiled message types
    evaluate - Evaluate one compiled message
    compile_message - Compile ICU MessageFormat source (development path)
    format_date, format_number - Formatter Bridge

Exceptions:
    CatalogError - Base exception class
    MalformedMessageError - Structurally broken compiled message
    MessageSyntaxError - ICU source that does not compile
    EscapeDecodeError - Malformed escape sequence in a literal
    FormattingError - Date/number formatting failure

Submodules:
    icucatalog.syntax - Compiled message types, compiler and wire codec
    icucatalog.runtime - Interpreter, Formatter Bridge, plural rules
    icucatalog.localization - I18n engine, catalog, events, missing policy
    icucatalog.diagnostics - Error types, codes and templates
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    CatalogError,
    EscapeDecodeError,
    FormattingError,
    MalformedMessageError,
    MessageSyntaxError,
)
from .enums import ArgumentKind, CatalogEvent
from .localization import I18n, MessageDescriptor, MissingMessageEvent, setup_i18n
from .runtime import evaluate, format_date, format_number
from .syntax import ArgumentRef, CompiledMessage, Node, compile_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("icucatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgumentKind",
    "ArgumentRef",
    "CatalogError",
    "CatalogEvent",
    "CompiledMessage",
    "EscapeDecodeError",
    "FormattingError",
    "I18n",
    "MalformedMessageError",
    "MessageDescriptor",
    "MessageSyntaxError",
    "MissingMessageEvent",
    "Node",
    "__version__",
    "compile_message",
    "evaluate",
    "format_date",
    "format_number",
    "setup_i18n",
]
