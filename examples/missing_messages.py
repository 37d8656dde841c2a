"""Missing-message handling and change notifications.

Shows the three ways an absent id is resolved (id fallback, inline fallback
message, missing policy) and how hosts observe catalog changes.

Python 3.13+.
"""

from __future__ import annotations

from icucatalog import CatalogEvent, I18n, MessageDescriptor, MissingMessageEvent


def example_1_events() -> None:
    """Example 1: Track untranslated ids through the missing event."""
    print("=" * 60)
    print("Example 1: Missing Events")
    print("=" * 60)

    i18n = I18n(locale="fr", messages={"fr": {"title": "Titre"}})
    untranslated: list[MissingMessageEvent] = []
    i18n.on(CatalogEvent.MISSING, untranslated.append)

    print(i18n.t("title"))
    print(i18n.t("subtitle"))
    print(i18n.t(MessageDescriptor(id="cta", message="Sign up, {name}!"), {"name": "Ana"}))
    print(f"Untranslated: {[event.id for event in untranslated]}")


def example_2_policies() -> None:
    """Example 2: Fixed-text and callable policies short-circuit rendering."""
    print("\n" + "=" * 60)
    print("Example 2: Missing Policies")
    print("=" * 60)

    flagged = I18n(locale="en", missing="🚨")
    print(flagged.t("anything", message="never shown"))

    bracketed = I18n(locale="en", missing=lambda locale, message_id: f"[{locale}] {message_id}")
    print(bracketed.t("nav.home"))


def example_3_change_listeners() -> None:
    """Example 3: Re-render on catalog changes, then unsubscribe."""
    print("\n" + "=" * 60)
    print("Example 3: Change Listeners")
    print("=" * 60)

    i18n = I18n(
        messages={"en": {"hello": "Hello"}, "es": {"hello": "Hola"}},
        development=False,
    )
    unsubscribe = i18n.on(CatalogEvent.CHANGE, lambda: print(f"[{i18n.locale}] {i18n.t('hello')}"))
    i18n.activate("en")
    i18n.activate("es")
    unsubscribe()
    i18n.activate("en")  # no output


if __name__ == "__main__":
    example_1_events()
    example_2_policies()
    example_3_change_listeners()
