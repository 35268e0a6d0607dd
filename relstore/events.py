"""Lifecycle notifications fired around inserts, updates and deletes."""

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger("relstore")

Listener = Callable[[str, Any], None]


class EventDispatcher:
    """Calls registered listeners with ``(event, subject)``.

    Event tags are ``insert.before``, ``insert.after``, ``update.before``,
    ``update.after``, ``delete.before`` and ``delete.after``. Return values of
    listeners are ignored; exceptions propagate to the query that fired them.
    """

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def register(self, event: str, listener: Listener) -> "EventDispatcher":
        self._listeners[event].append(listener)
        return self

    def fire(self, event: str, subject: Any = None) -> Any:
        for listener in self._listeners.get(event, ()):
            logger.debug("Firing %s on %r", event, listener)
            listener(event, subject)
        return subject


__all__ = ["EventDispatcher", "Listener"]
