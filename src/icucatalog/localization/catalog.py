"""Per-locale message storage and activation state.

MessageCatalog owns the AllMessages map and the active locale. It performs
no notification, logging policy or locking; I18n layers those on top.

Merge semantics:
    load_one()  overlays ids onto the locale's map (new ids added, existing
                ids overwritten, ids not re-supplied retained)
    replace()   installs a fresh map for the locale, dropping stale ids

Maps passed in are copied; later mutation by the caller does not leak into
the catalog.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from icucatalog.localization.types import LocaleCode, MessageId, Messages
from icucatalog.syntax import CompiledMessage

__all__ = ["MessageCatalog"]

logger = logging.getLogger(__name__)

_EMPTY: Mapping[MessageId, CompiledMessage] = MappingProxyType({})


class MessageCatalog:
    """Mutable catalog state: messages per locale plus the active locale.

    Example:
        >>> catalog = MessageCatalog()
        >>> catalog.load_one("en", {"a": "A"})
        >>> catalog.load_one("en", {"b": "B"})
        >>> sorted(catalog.messages_for("en"))
        ['a', 'b']
        >>> catalog.replace("en", {"a": "A2"})
        >>> dict(catalog.messages_for("en"))
        {'a': 'A2'}
    """

    __slots__ = ("_locale", "_locales", "_messages")

    def __init__(self) -> None:
        self._messages: dict[LocaleCode, dict[MessageId, CompiledMessage]] = {}
        self._locale: LocaleCode = ""
        self._locales: str | Sequence[str] | None = None

    @property
    def locale(self) -> LocaleCode:
        """Active locale ('' before the first activation)."""
        return self._locale

    @property
    def locales(self) -> str | Sequence[str] | None:
        """Locale-list hint supplied with the last activation."""
        return self._locales

    @property
    def loaded_locales(self) -> tuple[LocaleCode, ...]:
        """Locales with a message map, in first-load order."""
        return tuple(self._messages)

    def has_locale(self, locale: LocaleCode) -> bool:
        """Whether any load has created a map for locale (even an empty one)."""
        return locale in self._messages

    def messages_for(self, locale: LocaleCode) -> Mapping[MessageId, CompiledMessage]:
        """Read-only view of locale's messages (empty if none loaded)."""
        messages = self._messages.get(locale)
        return _EMPTY if messages is None else MappingProxyType(messages)

    def lookup(self, locale: LocaleCode, message_id: MessageId) -> CompiledMessage | None:
        """Return the compiled message, or None when the id is absent."""
        messages = self._messages.get(locale)
        if messages is None:
            return None
        return messages.get(message_id)

    def load_one(self, locale: LocaleCode, messages: Messages) -> None:
        """Overlay messages onto locale's map."""
        existing = self._messages.get(locale)
        if existing is None:
            self._messages[locale] = dict(messages)
        else:
            existing.update(messages)
        logger.debug("Loaded %d messages for locale '%s'", len(messages), locale)

    def replace(self, locale: LocaleCode, messages: Messages) -> None:
        """Install messages as the entire map for locale."""
        self._messages[locale] = dict(messages)
        logger.debug("Replaced catalog for locale '%s' (%d messages)", locale, len(messages))

    def activate(self, locale: LocaleCode, locales: str | Sequence[str] | None = None) -> None:
        """Set the active locale and the locale-list hint."""
        self._locale = locale
        self._locales = locales
