"""Missing-message policy.

Consulted when a requested id has no entry in the active locale's map:

1. A string policy is returned unconditionally.
2. A callable policy is called with (locale, id) and its result is returned
   verbatim; the interpreter never runs.
3. With no policy, the caller emits a ``missing`` event and renders the
   inline fallback message, or the id itself.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from icucatalog.localization.types import LocaleCode, MessageId, MissingPolicy
from icucatalog.runtime.value_types import is_function, is_string

__all__ = ["MissingMessageEvent", "MissingMessageResolver"]


@dataclass(frozen=True, slots=True)
class MissingMessageEvent:
    """Payload of the ``missing`` event: which lookup failed.

    Attributes:
        locale: Active locale at lookup time
        id: Requested message id
    """

    locale: LocaleCode
    id: MessageId


class MissingMessageResolver:
    """Applies the configured missing-message policy.

    Example:
        >>> MissingMessageResolver("??").resolve("fr", "title")
        '??'
        >>> MissingMessageResolver(lambda locale, id: f"[{locale}:{id}]").resolve("fr", "title")
        '[fr:title]'
        >>> MissingMessageResolver().resolve("fr", "title") is None
        True
    """

    __slots__ = ("_policy",)

    def __init__(self, policy: MissingPolicy | None = None) -> None:
        if policy is not None and not is_string(policy) and not is_function(policy):
            msg = f"missing policy must be a string or a callable, not {type(policy).__name__}"
            raise TypeError(msg)
        self._policy = policy

    @property
    def policy(self) -> MissingPolicy | None:
        """Configured policy, or None."""
        return self._policy

    def resolve(self, locale: LocaleCode, message_id: MessageId) -> str | None:
        """Return the policy's replacement text, or None when no policy is set."""
        match self._policy:
            case None:
                return None
            case str() as text:
                return text
            case handler:
                return handler(locale, message_id)
