"""Tests for I18n - catalog, activation, translation and notifications."""

from __future__ import annotations

import logging
import threading
from datetime import date

import pytest

from icucatalog import (
    ArgumentRef,
    CatalogEvent,
    I18n,
    MalformedMessageError,
    MessageDescriptor,
    MissingMessageEvent,
    Node,
    setup_i18n,
)

GREETING = Node(("Hello, ", ArgumentRef("name")))
FILES = Node((ArgumentRef("count", "plural", {"one": "1 file", "other": "# files"}),))


def _record(i18n: I18n) -> tuple[list[str], list[MissingMessageEvent]]:
    changes: list[str] = []
    missing: list[MissingMessageEvent] = []
    i18n.on(CatalogEvent.CHANGE, lambda: changes.append("change"))
    i18n.on(CatalogEvent.MISSING, missing.append)
    return changes, missing


# ============================================================================
# Construction
# ============================================================================


class TestConstruction:
    """I18n(...) and setup_i18n(...)."""

    def test_defaults(self) -> None:
        """A bare engine has no active locale and no messages."""
        i18n = I18n()
        assert i18n.locale == ""
        assert i18n.locales is None
        assert dict(i18n.messages) == {}
        assert i18n.loaded_locales == ()

    def test_locale_and_messages(self) -> None:
        """Constructor loads messages and activates the locale."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        assert i18n.locale == "en"
        assert i18n.translate("greeting", {"name": "Ana"}) == "Hello, Ana"

    def test_locales_alone_activates_default_locale(self) -> None:
        """A locale list without a locale activates the default locale."""
        i18n = I18n(locales=["en-GB", "en"])
        assert i18n.locale == "en"
        assert i18n.locales == ["en-GB", "en"]

    def test_explicit_empty_locale_kept(self) -> None:
        """An explicit empty locale is not replaced by the default."""
        i18n = I18n(locale="", locales=["de-DE"])
        assert i18n.locale == ""
        assert i18n.locales == ["de-DE"]

    def test_setup_i18n(self) -> None:
        """setup_i18n builds an equivalent engine."""
        i18n = setup_i18n(locale="fr", missing="?", development=False, thread_safe=True)
        assert i18n.locale == "fr"
        assert i18n.missing == "?"
        assert not i18n.development
        assert i18n.thread_safe

    def test_instances_are_isolated(self) -> None:
        """Engines do not share catalog state."""
        first = I18n(locale="en", messages={"en": {"a": "A"}})
        second = I18n(locale="en")
        assert "a" not in second.messages
        assert first.messages["a"] == "A"


# ============================================================================
# Loading
# ============================================================================


class TestLoad:
    """load(), load_one(), load_many()."""

    def test_overlay_semantics(self) -> None:
        """Loads accumulate; later loads overwrite only re-supplied ids."""
        i18n = I18n(locale="en")
        i18n.load("en", {"a": "X"})
        i18n.load("en", {"b": "Y"})
        assert dict(i18n.messages) == {"a": "X", "b": "Y"}
        i18n.load("en", {"a": "Z"})
        assert dict(i18n.messages) == {"a": "Z", "b": "Y"}

    def test_load_all_messages(self) -> None:
        """The single-argument form loads several locales."""
        i18n = I18n()
        i18n.load({"en": {"a": "A"}, "fr": {"a": "À"}})
        assert i18n.messages_for("fr")["a"] == "À"
        assert set(i18n.loaded_locales) == {"en", "fr"}

    def test_merge_idempotence(self) -> None:
        """Loading the same pair twice equals loading it once."""
        once, twice = I18n(locale="en"), I18n(locale="en")
        once.load("en", {"a": "A", "b": "B"})
        twice.load("en", {"a": "A", "b": "B"})
        twice.load("en", {"a": "A", "b": "B"})
        assert dict(once.messages) == dict(twice.messages)

    def test_each_load_emits_one_change(self) -> None:
        """load_one and load_many each emit exactly one change."""
        i18n = I18n()
        changes, _ = _record(i18n)
        i18n.load("en", {"a": "A"})
        i18n.load({"en": {"b": "B"}, "fr": {"b": "B"}})
        assert changes == ["change", "change"]

    def test_noop_load_still_emits_change(self) -> None:
        """Even an empty load notifies listeners."""
        i18n = I18n()
        changes, _ = _record(i18n)
        i18n.load("en", {})
        i18n.load({})
        assert changes == ["change", "change"]

    def test_load_type_errors(self) -> None:
        """Arguments matching neither form raise TypeError."""
        i18n = I18n()
        with pytest.raises(TypeError):
            i18n.load("en")  # type: ignore[call-overload]
        with pytest.raises(TypeError):
            i18n.load({"en": {}}, {"a": "A"})  # type: ignore[call-overload]
        with pytest.raises(TypeError):
            i18n.load(42)  # type: ignore[call-overload]

    def test_messages_view_read_only(self) -> None:
        """messages is a read-only view."""
        i18n = I18n(locale="en", messages={"en": {"a": "A"}})
        with pytest.raises(TypeError):
            i18n.messages["b"] = "B"  # type: ignore[index]


# ============================================================================
# Activation
# ============================================================================


class TestActivate:
    """activate() and load_and_activate()."""

    def test_activate_sets_state_and_emits(self) -> None:
        """activate() sets locale and locale list and emits change."""
        i18n = I18n(messages={"fr": {"a": "A"}})
        changes, _ = _record(i18n)
        i18n.activate("fr", ["fr-CA", "fr"])
        assert (i18n.locale, i18n.locales) == ("fr", ["fr-CA", "fr"])
        assert changes == ["change"]

    def test_activate_unloaded_locale_warns_in_development(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Activating a locale without messages logs a warning, never raises."""
        i18n = I18n(development=True)
        with caplog.at_level(logging.WARNING, logger="icucatalog.localization.engine"):
            i18n.activate("fr")
        assert i18n.locale == "fr"
        assert any("LOCALE_NOT_LOADED" in record.getMessage() for record in caplog.records)

    def test_activate_unloaded_locale_silent_in_production(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Production mode does not warn."""
        i18n = I18n(development=False)
        with caplog.at_level(logging.WARNING, logger="icucatalog.localization.engine"):
            i18n.activate("fr")
        assert not caplog.records

    def test_activate_does_not_touch_messages(self) -> None:
        """Activation never changes stored messages."""
        i18n = I18n(messages={"en": {"a": "A"}})
        i18n.activate("fr")
        assert dict(i18n.messages_for("en")) == {"a": "A"}
        assert dict(i18n.messages) == {}

    def test_load_and_activate_replaces(self) -> None:
        """load_and_activate drops ids not re-supplied."""
        i18n = I18n()
        i18n.load("en", {"a": "X", "b": "Y"})
        i18n.load_and_activate(locale="en", messages={"a": "X"})
        assert dict(i18n.messages) == {"a": "X"}
        assert i18n.locale == "en"

    def test_load_and_activate_sets_locales_and_emits_once(self) -> None:
        """load_and_activate emits a single change."""
        i18n = I18n()
        changes, _ = _record(i18n)
        i18n.load_and_activate(locale="de", locales=["de-AT"], messages={"a": "A"})
        assert i18n.locales == ["de-AT"]
        assert changes == ["change"]

    def test_load_and_activate_leaves_other_locales(self) -> None:
        """Only the activated locale's map is replaced."""
        i18n = I18n(messages={"en": {"a": "A"}, "fr": {"a": "À"}})
        i18n.load_and_activate(locale="fr", messages={"b": "B"})
        assert dict(i18n.messages_for("en")) == {"a": "A"}


# ============================================================================
# Translation
# ============================================================================


class TestTranslate:
    """translate() and its aliases."""

    def test_greeting_scenario(self) -> None:
        """Compiled greeting with a value."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        assert i18n.translate("greeting", {"name": "Ana"}) == "Hello, Ana"

    def test_plural_scenario(self) -> None:
        """Plural message under English rules."""
        i18n = I18n(locale="en", messages={"en": {"files": FILES}})
        assert i18n.translate("files", {"count": 1}) == "1 file"
        assert i18n.translate("files", {"count": 5}) == "5 files"

    def test_aliases(self) -> None:
        """t and _ are translate."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        assert i18n.t("greeting", {"name": "A"}) == i18n._("greeting", {"name": "A"}) == "Hello, A"

    def test_active_locale_selects_catalog(self) -> None:
        """Switching locale switches the catalog used."""
        i18n = I18n(locale="en", messages={"en": {"hi": "Hi"}, "fr": {"hi": "Salut"}})
        assert i18n.translate("hi") == "Hi"
        i18n.activate("fr")
        assert i18n.translate("hi") == "Salut"

    def test_formats_forwarded(self) -> None:
        """Per-call formats reach the interpreter."""
        message = Node((ArgumentRef("price", "number", style="money"),))
        i18n = I18n(locale="en", messages={"en": {"price": message}})
        formats = {"money": {"style": "currency", "currency": "EUR"}}
        assert i18n.translate("price", {"price": 3}, formats=formats) == "€3.00"

    def test_locales_hint_used_for_formatting(self) -> None:
        """Formatting inside messages prefers the locale list."""
        message = Node((ArgumentRef("n", "number"),))
        i18n = I18n(locale="en", locales=["de-DE"], messages={"en": {"n": message}})
        assert i18n.translate("n", {"n": 1234.5}) == "1.234,5"

    def test_malformed_message_raises(self) -> None:
        """Broken catalog entries are not swallowed."""
        message = Node((ArgumentRef("g", "select", {"a": "A"}),))
        i18n = I18n(locale="en", messages={"en": {"g": message}})
        with pytest.raises(MalformedMessageError):
            i18n.translate("g", {"g": "b"})

    def test_development_compiles_catalog_strings(self) -> None:
        """Raw catalog strings are compiled in development mode."""
        i18n = I18n(locale="en", messages={"en": {"hi": "Hi {name}"}}, development=True)
        assert i18n.translate("hi", {"name": "Ana"}) == "Hi Ana"

    def test_production_returns_catalog_strings_verbatim(self) -> None:
        """Production mode treats catalog strings as literals."""
        i18n = I18n(locale="en", messages={"en": {"hi": "Hi {name}"}}, development=False)
        assert i18n.translate("hi", {"name": "Ana"}) == "Hi {name}"

    def test_catalog_literal_escape_decoded(self) -> None:
        """Escaped literals from the catalog are decoded."""
        i18n = I18n(locale="fr", messages={"fr": {"cafe": "Caf\\u00e9"}})
        assert i18n.translate("cafe") == "Café"

    def test_empty_translation_uses_fallback(self) -> None:
        """An empty catalog entry renders the fallback without a missing event."""
        i18n = I18n(locale="en", messages={"en": {"a": ""}})
        _, missing = _record(i18n)
        assert i18n.translate("a", message="Fallback") == "Fallback"
        assert i18n.translate("a") == "a"
        assert missing == []


class TestDescriptors:
    """Descriptor forms of translate()."""

    def test_dataclass_descriptor(self) -> None:
        """MessageDescriptor carries id and values."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        descriptor = MessageDescriptor(id="greeting", values={"name": "Ana"}, comment="UI")
        assert i18n.translate(descriptor) == "Hello, Ana"

    def test_mapping_descriptor(self) -> None:
        """A mapping with an id works like a descriptor."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        assert i18n.translate({"id": "greeting", "values": {"name": "Bo"}}) == "Hello, Bo"

    def test_descriptor_values_take_precedence(self) -> None:
        """Descriptor values win over positional values."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        descriptor = MessageDescriptor(id="greeting", values={"name": "Ana"})
        assert i18n.translate(descriptor, {"name": "Bo"}) == "Hello, Ana"

    def test_descriptor_without_values_uses_positional(self) -> None:
        """Positional values apply when the descriptor has none."""
        i18n = I18n(locale="en", messages={"en": {"greeting": GREETING}})
        assert i18n.translate(MessageDescriptor(id="greeting"), {"name": "Bo"}) == "Hello, Bo"

    def test_descriptor_message_is_fallback(self) -> None:
        """The descriptor's message is the fallback for missing ids."""
        i18n = I18n(locale="en", development=True)
        descriptor = MessageDescriptor(id="welcome", message="Welcome, {name}")
        assert i18n.translate(descriptor, {"name": "Ana"}) == "Welcome, Ana"

    def test_mapping_without_id_rejected(self) -> None:
        """A mapping descriptor must contain an id."""
        with pytest.raises(TypeError):
            I18n().translate({"message": "x"})

    def test_unsupported_request_rejected(self) -> None:
        """Ids must be strings or descriptors."""
        with pytest.raises(TypeError):
            I18n().translate(42)  # type: ignore[arg-type]


# ============================================================================
# Missing messages
# ============================================================================


class TestMissingMessages:
    """Missing-message resolution chain."""

    def test_id_fallback_and_event(self) -> None:
        """activate('fr') without messages: id fallback plus a missing event."""
        i18n = I18n()
        _, missing = _record(i18n)
        i18n.activate("fr")
        assert i18n.translate("x") == "x"
        assert missing == [MissingMessageEvent(locale="fr", id="x")]

    def test_inline_message_fallback(self) -> None:
        """The inline fallback message renders when the id is missing."""
        i18n = I18n(locale="en")
        _, missing = _record(i18n)
        assert i18n.translate("x", message="Fallback") == "Fallback"
        assert len(missing) == 1

    def test_inline_message_is_compiled_in_development(self) -> None:
        """Inline fallback source is compiled in development mode."""
        i18n = I18n(locale="en", development=True)
        assert i18n.translate("x", {"n": 2}, message="{n, plural, one {# day} other {# days}}") == (
            "2 days"
        )

    def test_string_policy_wins(self) -> None:
        """A string policy beats the missing event and the inline message."""
        i18n = I18n(locale="en", missing="🚨")
        _, missing = _record(i18n)
        assert i18n.translate("x", message="Fallback") == "🚨"
        assert missing == []

    def test_callable_policy_used_verbatim(self) -> None:
        """A callable policy's result is not interpolated."""
        i18n = I18n(locale="fr", missing=lambda locale, message_id: f"{{{locale}:{message_id}}}")
        _, missing = _record(i18n)
        assert i18n.translate("x", {"fr": "no"}) == "{fr:x}"
        assert missing == []

    def test_policy_not_used_for_present_ids(self) -> None:
        """Policies only apply to absent ids."""
        i18n = I18n(locale="en", messages={"en": {"a": "A"}}, missing="?")
        assert i18n.translate("a") == "A"

    def test_missing_never_raises(self) -> None:
        """Missing ids always produce a string."""
        assert I18n().translate("nothing.here") == "nothing.here"

    @pytest.mark.parametrize(
        "message_id", ["Use { to open", "Close with }", "Hello {name}", "{n, plural,"]
    )
    def test_unrenderable_id_returned_raw(self, message_id: str) -> None:
        """Source-text ids that fail to compile or evaluate come back unformatted."""
        assert I18n(locale="en", development=True).translate(message_id) == message_id

    def test_unrenderable_id_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """The raw fallback is reported with its diagnostic code."""
        i18n = I18n(locale="en", development=True)
        with caplog.at_level(logging.WARNING, logger="icucatalog.localization.engine"):
            i18n.translate("Use { to open")
        assert any("FALLBACK_NOT_RENDERED" in record.getMessage() for record in caplog.records)

    def test_unrenderable_inline_message_returned_raw(self) -> None:
        """An inline fallback missing its values is returned unformatted."""
        i18n = I18n(locale="en", development=True)
        assert i18n.translate("welcome", message="Welcome, {name}") == "Welcome, {name}"

    def test_unrenderable_id_still_emits_missing(self) -> None:
        """The missing event fires before the fallback is rendered."""
        i18n = I18n(locale="en", development=True)
        _, missing = _record(i18n)
        i18n.translate("Use { to open")
        assert missing == [MissingMessageEvent(locale="en", id="Use { to open")]


# ============================================================================
# Formatting helpers
# ============================================================================


class TestFormatting:
    """format_date() and format_number() on the engine."""

    def test_format_number_active_locale(self) -> None:
        """The active locale is used without a locale list."""
        assert I18n(locale="de-DE").format_number(1234.5) == "1.234,5"

    def test_format_number_prefers_locales(self) -> None:
        """The locale list wins over the active locale."""
        assert I18n(locale="en", locales=["de-DE"]).format_number(1234.5) == "1.234,5"

    def test_format_number_options(self) -> None:
        """Options pass through."""
        assert I18n(locale="en").format_number(0.5, {"style": "percent"}) == "50%"

    def test_format_date(self) -> None:
        """Dates use the active locale."""
        assert I18n(locale="en-US").format_date(date(2024, 3, 5), {"style": "short"}) == "3/5/24"

    def test_format_without_locale_uses_default(self) -> None:
        """An engine without an active locale formats in English."""
        assert I18n().format_number(1234.5) == "1,234.5"


# ============================================================================
# Events and thread safety
# ============================================================================


class TestEvents:
    """Subscription through the engine."""

    def test_unsubscribe(self) -> None:
        """The handle returned by on() unsubscribes."""
        i18n = I18n()
        changes: list[str] = []
        unsubscribe = i18n.on(CatalogEvent.CHANGE, lambda: changes.append("x"))
        i18n.activate("en")
        unsubscribe()
        i18n.activate("fr")
        assert changes == ["x"]

    def test_remove_listener(self) -> None:
        """remove_listener() detaches a handler."""
        i18n = I18n()
        changes: list[str] = []

        def listener() -> None:
            changes.append("x")

        i18n.on("change", listener)
        i18n.remove_listener("change", listener)
        i18n.activate("en")
        assert changes == []

    def test_listener_may_read_state(self) -> None:
        """Change listeners observe the new state."""
        i18n = I18n()
        seen: list[str] = []
        i18n.on(CatalogEvent.CHANGE, lambda: seen.append(i18n.locale))
        i18n.activate("fr")
        assert seen == ["fr"]

    def test_listener_may_translate_under_lock(self) -> None:
        """Events fire outside the lock, so listeners can call back in."""
        i18n = I18n(messages={"en": {"a": "A"}}, thread_safe=True)
        seen: list[str] = []
        i18n.on(CatalogEvent.CHANGE, lambda: seen.append(i18n.translate("a")))
        i18n.activate("en")
        assert seen == ["A"]


class TestThreadSafety:
    """thread_safe engines tolerate concurrent use."""

    def test_concurrent_load_and_translate(self) -> None:
        """Concurrent loads and translations neither fail nor lose ids."""
        i18n = I18n(locale="en", messages={"en": {"files": FILES}}, thread_safe=True)
        errors: list[BaseException] = []

        def loader(offset: int) -> None:
            try:
                for i in range(50):
                    i18n.load("en", {f"id{offset}-{i}": "x"})
            except BaseException as e:  # pragma: no cover - reported below
                errors.append(e)

        def reader() -> None:
            try:
                for i in range(50):
                    assert i18n.translate("files", {"count": i}) in {"1 file", f"{i} files"}
            except BaseException as e:  # pragma: no cover - reported below
                errors.append(e)

        threads = [threading.Thread(target=loader, args=(n,)) for n in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(i18n.messages) == 1 + 4 * 50
