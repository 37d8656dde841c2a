"""Tests for EventEmitter - synchronous publish/subscribe."""

import pytest

from icucatalog.localization.events import EventEmitter


class TestSubscription:
    """on() and remove_listener()."""

    def test_listener_receives_payload(self) -> None:
        """Emit passes its arguments to every listener."""
        emitter = EventEmitter()
        received: list[object] = []
        emitter.on("missing", received.append)
        emitter.emit("missing", {"id": "x"})
        assert received == [{"id": "x"}]

    def test_registration_order(self) -> None:
        """Listeners run in registration order."""
        emitter = EventEmitter()
        calls: list[str] = []
        emitter.on("change", lambda: calls.append("first"))
        emitter.on("change", lambda: calls.append("second"))
        emitter.emit("change")
        assert calls == ["first", "second"]

    def test_events_are_independent(self) -> None:
        """Listeners only see their own event name."""
        emitter = EventEmitter()
        calls: list[str] = []
        emitter.on("change", lambda: calls.append("change"))
        emitter.emit("missing", object())
        assert calls == []

    def test_unsubscribe(self) -> None:
        """The returned callable removes the registration."""
        emitter = EventEmitter()
        calls: list[str] = []
        unsubscribe = emitter.on("change", lambda: calls.append("x"))
        unsubscribe()
        emitter.emit("change")
        assert calls == []
        assert emitter.listener_count("change") == 0

    def test_unsubscribe_is_idempotent(self) -> None:
        """Calling unsubscribe twice removes only one registration."""
        emitter = EventEmitter()
        calls: list[str] = []

        def listener() -> None:
            calls.append("x")

        unsubscribe = emitter.on("change", listener)
        emitter.on("change", listener)
        unsubscribe()
        unsubscribe()
        emitter.emit("change")
        assert calls == ["x"]

    def test_remove_unknown_listener_is_noop(self) -> None:
        """Removing a listener that was never added does nothing."""
        emitter = EventEmitter()
        emitter.remove_listener("change", lambda: None)
        assert emitter.listener_count("change") == 0

    def test_emit_without_listeners(self) -> None:
        """Emitting an event nobody listens to is fine."""
        EventEmitter().emit("change")


class TestEmissionSnapshot:
    """Registry changes during emission take effect next time."""

    def test_listener_removing_itself(self) -> None:
        """A listener may unsubscribe while being called."""
        emitter = EventEmitter()
        calls: list[str] = []
        unsubscribe = emitter.on("change", lambda: (calls.append("a"), unsubscribe()))
        emitter.on("change", lambda: calls.append("b"))
        emitter.emit("change")
        emitter.emit("change")
        assert calls == ["a", "b", "b"]

    def test_listener_added_during_emit(self) -> None:
        """A listener added during emission is not called in that emission."""
        emitter = EventEmitter()
        calls: list[str] = []
        emitter.on("change", lambda: emitter.on("change", lambda: calls.append("late")))
        emitter.emit("change")
        assert calls == []

    def test_listener_exception_propagates(self) -> None:
        """Listener errors reach the emitter's caller."""
        emitter = EventEmitter()

        def boom() -> None:
            raise RuntimeError("listener failed")

        emitter.on("change", boom)
        with pytest.raises(RuntimeError, match="listener failed"):
            emitter.emit("change")
