"""
Event hooks - synchronous listener registration and dispatch
"""

import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")

Listener = Callable[[E], None]


class EventHook(Generic[E]):
    """
    Ordered set of listeners for one kind of notification.

    Listeners are called synchronously in registration order. Exceptions raised
    by a listener are not caught and propagate to whoever emitted the event.
    """

    def __init__(self, name: str):
        self.name = name
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Listener:
        """
        Register a listener.

        Registering the same listener twice has no effect. Returns the listener
        so the method can be used as a decorator.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)
            logger.debug(f"Subscribed {listener!r} to {self.name}")
        return listener

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove a listener. Returns False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def emit(self, event: E) -> None:
        """Deliver event to every registered listener."""
        for listener in list(self._listeners):
            listener(event)

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners
