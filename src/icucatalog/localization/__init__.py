"""Catalog and activation package.

Provides the I18n engine together with its collaborators: per-locale
message storage, the missing-message policy and event notification.

Submodules:
    types   - PEP 695 type aliases (LocaleCode, MessageId, Messages, AllMessages)
    catalog - MessageCatalog (per-locale maps, overlay merge, activation state)
    missing - MissingMessageResolver, MissingMessageEvent
    events  - EventEmitter (synchronous publish/subscribe)
    engine  - I18n, MessageDescriptor, setup_i18n

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from icucatalog.enums import CatalogEvent
from icucatalog.localization.catalog import MessageCatalog
from icucatalog.localization.engine import I18n, MessageDescriptor, setup_i18n
from icucatalog.localization.events import EventEmitter
from icucatalog.localization.missing import MissingMessageEvent, MissingMessageResolver
from icucatalog.localization.types import (
    AllMessages,
    LocaleCode,
    MessageId,
    Messages,
    MissingPolicy,
)

__all__ = [
    # Engine
    "I18n",
    "MessageDescriptor",
    "setup_i18n",
    # Collaborators
    "MessageCatalog",
    "MissingMessageResolver",
    "EventEmitter",
    # Events
    "CatalogEvent",
    "MissingMessageEvent",
    # Type aliases for user code type annotations
    "AllMessages",
    "LocaleCode",
    "MessageId",
    "Messages",
    "MissingPolicy",
]
