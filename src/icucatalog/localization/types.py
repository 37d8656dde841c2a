"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating I18n call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Mapping

from icucatalog.syntax import CompiledMessage

__all__ = [
    "AllMessages",
    "LocaleCode",
    "MessageId",
    "Messages",
    "MissingPolicy",
]

type MessageId = str
"""Identifier for a catalog message (e.g., 'greeting', 'inbox.count')."""

type LocaleCode = str
"""BCP-47 locale code (e.g., 'en', 'fr', 'zh-Hans-CN')."""

type Messages = Mapping[MessageId, CompiledMessage]
"""Message id -> compiled message, for one locale."""

type AllMessages = Mapping[LocaleCode, Messages]
"""Locale -> Messages, for several locales at once."""

type MissingPolicy = str | Callable[[LocaleCode, MessageId], str]
"""Fixed text, or a callable of (locale, id), used for absent messages."""
