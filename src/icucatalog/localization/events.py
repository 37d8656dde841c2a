"""Minimal synchronous publish/subscribe.

Handlers are registered per event name and invoked synchronously in
registration order. There is no ordering guarantee across different event
names.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from typing import Any

__all__ = ["EventEmitter", "Listener", "Unsubscribe"]

type Listener = Callable[..., Any]
type Unsubscribe = Callable[[], None]


class EventEmitter:
    """Event registry keyed by event name.

    Example:
        >>> emitter = EventEmitter()
        >>> seen = []
        >>> unsubscribe = emitter.on("change", lambda: seen.append("changed"))
        >>> emitter.emit("change")
        >>> unsubscribe()
        >>> emitter.emit("change")
        >>> seen
        ['changed']
    """

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Unsubscribe:
        """Register listener for event.

        The same listener may be registered more than once; it is then
        called once per registration.

        Returns:
            Callable removing this registration (idempotent)
        """
        self._listeners.setdefault(event, []).append(listener)
        removed = False

        def unsubscribe() -> None:
            nonlocal removed
            if not removed:
                removed = True
                self.remove_listener(event, listener)

        return unsubscribe

    def remove_listener(self, event: str, listener: Listener) -> None:
        """Remove the first registration of listener for event, if any."""
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event]

    def emit(self, event: str, *args: Any) -> None:
        """Call every listener of event with args.

        Listeners see a snapshot of the registry: registrations added or
        removed during emission take effect from the next emit. Exceptions
        raised by listeners propagate to the caller.
        """
        listeners = self._listeners.get(event)
        if not listeners:
            return
        for listener in tuple(listeners):
            listener(*args)

    def listener_count(self, event: str) -> int:
        """Number of registrations for event."""
        return len(self._listeners.get(event, ()))
