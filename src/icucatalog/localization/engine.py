"""I18n - catalog, activation and translation in one engine.

Each I18n instance owns an independent MessageCatalog: no process-wide
singleton, so hosts can keep isolated engines side by side (one per
request, one per test).

Control flow of translate():
    active locale's map -> missing-message policy -> interpreter -> string

Every catalog mutation (load, activate, load_and_activate) ends with one
synchronous ``change`` event.

Thread Safety:
    The default engine assumes a single writer. Pass thread_safe=True to
    guard catalog state with an internal RLock so that load/activate and
    the lookup half of translate() see consistent state. Events are always
    emitted after the lock is released.

Python 3.13+.
"""

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, overload

from icucatalog.constants import DEFAULT_LOCALE
from icucatalog.diagnostics import CatalogError, ErrorTemplate
from icucatalog.enums import CatalogEvent
from icucatalog.localization.catalog import MessageCatalog
from icucatalog.localization.events import EventEmitter
from icucatalog.localization.missing import MissingMessageEvent, MissingMessageResolver
from icucatalog.localization.types import (
    AllMessages,
    LocaleCode,
    MessageId,
    Messages,
    MissingPolicy,
)
from icucatalog.runtime import MessageInterpreter, format_date, format_number
from icucatalog.runtime.value_types import Formats, Values
from icucatalog.syntax import CompiledMessage

__all__ = ["I18n", "MessageDescriptor", "setup_i18n"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MessageDescriptor:
    """A message request bundled as one object.

    Attributes:
        id: Message id looked up in the active catalog
        message: Inline fallback source used when the id is missing
        values: Argument values (take precedence over translate()'s values)
        comment: Note for translators; never rendered
    """

    id: MessageId
    message: str | None = None
    values: Values | None = None
    comment: str | None = None


type DescriptorLike = MessageId | MessageDescriptor | Mapping[str, Any]


class I18n(EventEmitter):
    """Runtime message-catalog engine.

    Args:
        locale: Locale to activate at construction
        locales: Locale-list hint forwarded to date/number formatting
        messages: AllMessages mapping loaded at construction
        missing: Missing-message policy (fixed text or callable(locale, id))
        development: Compile raw string messages at translation time and
            warn on activation of locales without messages
        thread_safe: Guard catalog state with an internal RLock

    Example:
        >>> from icucatalog.syntax import ArgumentRef, Node
        >>> i18n = I18n(locale="en", messages={"en": {"hi": Node(("Hi ", ArgumentRef("name")))}})
        >>> i18n.translate("hi", {"name": "Ana"})
        'Hi Ana'
        >>> i18n.translate("absent")
        'absent'
    """

    __slots__ = ("_catalog", "_development", "_lock", "_missing", "_thread_safe")

    def __init__(
        self,
        locale: LocaleCode | None = None,
        locales: str | Sequence[str] | None = None,
        messages: AllMessages | None = None,
        missing: MissingPolicy | None = None,
        *,
        development: bool = __debug__,
        thread_safe: bool = False,
    ) -> None:
        super().__init__()
        self._catalog = MessageCatalog()
        self._missing = MissingMessageResolver(missing)
        self._development = development

        # Thread safety
        self._thread_safe = thread_safe
        self._lock: threading.RLock | None = threading.RLock() if thread_safe else None

        if messages is not None:
            self.load(messages)
        if locale is not None or locales:
            self.activate(DEFAULT_LOCALE if locale is None else locale, locales)

        logger.info(
            "I18n initialized (locale=%r, development=%s, thread_safe=%s)",
            self._catalog.locale,
            development,
            thread_safe,
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def locale(self) -> LocaleCode:
        """Active locale ('' until a locale is activated)."""
        return self._catalog.locale

    @property
    def locales(self) -> str | Sequence[str] | None:
        """Locale-list hint of the last activation."""
        return self._catalog.locales

    @property
    def messages(self) -> Mapping[MessageId, CompiledMessage]:
        """Read-only view of the active locale's messages (empty if none)."""
        return self._catalog.messages_for(self._catalog.locale)

    @property
    def loaded_locales(self) -> tuple[LocaleCode, ...]:
        """Locales that have a message map."""
        return self._catalog.loaded_locales

    @property
    def missing(self) -> MissingPolicy | None:
        """Configured missing-message policy."""
        return self._missing.policy

    @property
    def development(self) -> bool:
        """Whether raw string messages are compiled at translation time."""
        return self._development

    @property
    def thread_safe(self) -> bool:
        """Whether catalog state is guarded by an internal lock."""
        return self._thread_safe

    def messages_for(self, locale: LocaleCode) -> Mapping[MessageId, CompiledMessage]:
        """Read-only view of any locale's messages (empty if none)."""
        return self._catalog.messages_for(locale)

    # ------------------------------------------------------------------
    # Catalog mutation
    # ------------------------------------------------------------------

    @overload
    def load(self, locale_or_messages: LocaleCode, messages: Messages) -> None: ...

    @overload
    def load(self, locale_or_messages: AllMessages, messages: None = None) -> None: ...

    def load(
        self, locale_or_messages: LocaleCode | AllMessages, messages: Messages | None = None
    ) -> None:
        """Overlay-merge messages into the catalog and emit ``change``.

        Accepts ``load(locale, messages)`` or ``load(all_messages)``.

        Raises:
            TypeError: If the arguments match neither form
        """
        if isinstance(locale_or_messages, str):
            if not isinstance(messages, Mapping):
                msg = f"load({locale_or_messages!r}, ...) requires a messages mapping"
                raise TypeError(msg)
            self.load_one(locale_or_messages, messages)
        elif isinstance(locale_or_messages, Mapping) and messages is None:
            self.load_many(locale_or_messages)
        else:
            msg = "load() takes (locale, messages) or a single locale -> messages mapping"
            raise TypeError(msg)

    def load_one(self, locale: LocaleCode, messages: Messages) -> None:
        """Overlay messages onto locale's map and emit ``change``."""
        if self._lock is not None:
            with self._lock:
                self._catalog.load_one(locale, messages)
        else:
            self._catalog.load_one(locale, messages)
        self.emit(CatalogEvent.CHANGE)

    def load_many(self, all_messages: AllMessages) -> None:
        """Overlay every locale's messages and emit one ``change``."""
        if self._lock is not None:
            with self._lock:
                self._load_many_impl(all_messages)
        else:
            self._load_many_impl(all_messages)
        self.emit(CatalogEvent.CHANGE)

    def _load_many_impl(self, all_messages: AllMessages) -> None:
        for locale, messages in all_messages.items():
            self._catalog.load_one(locale, messages)

    def activate(self, locale: LocaleCode, locales: str | Sequence[str] | None = None) -> None:
        """Set the active locale and locale-list hint; emit ``change``.

        Activating a locale without messages is allowed. In development
        mode it logs a warning.
        """
        if self._lock is not None:
            with self._lock:
                loaded = self._activate_impl(locale, locales)
        else:
            loaded = self._activate_impl(locale, locales)

        if self._development and not loaded:
            logger.warning(ErrorTemplate.locale_not_loaded(locale).format_error())
        logger.debug("Activated locale '%s' (locales=%r)", locale, locales)
        self.emit(CatalogEvent.CHANGE)

    def _activate_impl(self, locale: LocaleCode, locales: str | Sequence[str] | None) -> bool:
        self._catalog.activate(locale, locales)
        return self._catalog.has_locale(locale)

    def load_and_activate(
        self,
        *,
        locale: LocaleCode,
        messages: Messages,
        locales: str | Sequence[str] | None = None,
    ) -> None:
        """Replace locale's messages wholesale, activate it, emit ``change``."""
        if self._lock is not None:
            with self._lock:
                self._load_and_activate_impl(locale, messages, locales)
        else:
            self._load_and_activate_impl(locale, messages, locales)
        logger.debug("Loaded and activated locale '%s'", locale)
        self.emit(CatalogEvent.CHANGE)

    def _load_and_activate_impl(
        self, locale: LocaleCode, messages: Messages, locales: str | Sequence[str] | None
    ) -> None:
        self._catalog.replace(locale, messages)
        self._catalog.activate(locale, locales)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(
        self,
        id_or_descriptor: DescriptorLike,
        values: Values | None = None,
        *,
        formats: Formats | None = None,
        message: str | None = None,
        comment: str | None = None,  # noqa: ARG002 - informational only
    ) -> str:
        """Translate a message id (or descriptor) with the active locale.

        Args:
            id_or_descriptor: Message id, MessageDescriptor, or mapping with
                keys id, message, values, comment
            values: Argument values
            formats: Named date/number presets for this call
            message: Inline fallback source for a missing id
            comment: Note for translators; ignored

        Returns:
            The translated string; never raises for a missing id

        Raises:
            MalformedMessageError: Catalog entry is structurally broken
            MessageSyntaxError: Raw string fails to compile (development mode)
            EscapeDecodeError: Literal contains a malformed escape sequence
            FormattingError: A date/number argument cannot be formatted

        Errors are raised for catalog entries only. A fallback (inline message
        or id) that fails to evaluate is logged and returned unformatted.
        """
        message_id, message, values = _unpack_descriptor(id_or_descriptor, values, message)

        if self._lock is not None:
            with self._lock:
                locale, locales, compiled = self._lookup_impl(message_id)
        else:
            locale, locales, compiled = self._lookup_impl(message_id)

        if compiled is None:
            replacement = self._missing.resolve(locale, message_id)
            if replacement is not None:
                return replacement
            logger.debug(ErrorTemplate.message_not_found(message_id, locale).format_error())
            self.emit(CatalogEvent.MISSING, MissingMessageEvent(locale=locale, id=message_id))

        interpreter = MessageInterpreter(
            locale, locales, formats=formats, development=self._development
        )
        if compiled:
            return interpreter.evaluate(compiled, values)

        # Missing ids never raise: an unrenderable fallback is returned raw
        fallback = message or message_id
        try:
            return interpreter.evaluate(fallback, values)
        except CatalogError as e:
            reason = e.diagnostic.message if e.diagnostic is not None else str(e)
            logger.warning(ErrorTemplate.fallback_not_rendered(fallback, reason).format_error())
            return fallback

    t = translate
    _ = translate

    def _lookup_impl(
        self, message_id: MessageId
    ) -> tuple[LocaleCode, str | Sequence[str] | None, CompiledMessage | None]:
        locale = self._catalog.locale
        return locale, self._catalog.locales, self._catalog.lookup(locale, message_id)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_date(
        self, value: date | datetime | str, options: Mapping[str, Any] | None = None
    ) -> str:
        """Format a date with the locale-list hint, else the active locale."""
        return format_date(self._catalog.locales or self._catalog.locale, value, options)

    def format_number(
        self, value: int | float | Decimal, options: Mapping[str, Any] | None = None
    ) -> str:
        """Format a number with the locale-list hint, else the active locale."""
        return format_number(self._catalog.locales or self._catalog.locale, value, options)

    def __repr__(self) -> str:
        return (
            f"I18n(locale={self._catalog.locale!r}, "
            f"loaded_locales={list(self._catalog.loaded_locales)!r})"
        )


def _unpack_descriptor(
    id_or_descriptor: DescriptorLike, values: Values | None, message: str | None
) -> tuple[MessageId, str | None, Values | None]:
    """Split a translate() request into (id, fallback message, values)."""
    match id_or_descriptor:
        case str() as message_id:
            return message_id, message, values
        case MessageDescriptor():
            descriptor = id_or_descriptor
            return (
                descriptor.id,
                descriptor.message if descriptor.message is not None else message,
                descriptor.values or values,
            )
        case Mapping():
            if "id" not in id_or_descriptor:
                msg = "message descriptor requires an 'id'"
                raise TypeError(msg)
            return (
                id_or_descriptor["id"],
                id_or_descriptor["message"] if "message" in id_or_descriptor else message,
                id_or_descriptor.get("values") or values,
            )
        case _:
            msg = f"expected a message id or descriptor, not {type(id_or_descriptor).__name__}"
            raise TypeError(msg)


def setup_i18n(
    locale: LocaleCode | None = None,
    locales: str | Sequence[str] | None = None,
    messages: AllMessages | None = None,
    missing: MissingPolicy | None = None,
    *,
    development: bool = __debug__,
    thread_safe: bool = False,
) -> I18n:
    """Create an I18n engine (same arguments as I18n)."""
    return I18n(
        locale,
        locales,
        messages,
        missing,
        development=development,
        thread_safe=thread_safe,
    )
