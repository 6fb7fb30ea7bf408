"""
Event Emitter - Synchronous Named Pub/Sub

🚀 Reactive Notifications:
Every entity and collection owns one emitter. Observers subscribe to a named
event and are invoked synchronously, in registration order, each time the
event is triggered.

Key Features:
- Closed set of lifecycle events (change, error) plus free-form custom names
- Persistent subscriptions (``on`` is not ``once``)
- Error isolation between handlers
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class EntityEvent(str, Enum):
    """Lifecycle events emitted by entities and collections"""
    CHANGE = "change"
    ERROR = "error"


# Type definitions
EventName = Union[EntityEvent, str]
EventHandler = Callable[..., Any]


def event_key(event: EventName) -> str:
    """Normalize an event to the string its subscriptions are stored under"""
    if isinstance(event, EntityEvent):
        return event.value
    return event


class EventEmitter:
    """
    In-process event emitter.

    Handlers are stored per event name and called synchronously in the order
    they were registered. A handler that raises is logged and skipped; the
    remaining handlers still run.
    """

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def on(self, event: EventName, handler: EventHandler) -> None:
        """Subscribe ``handler`` to ``event``"""
        self._handlers[event_key(event)].append(handler)

    def off(self, event: EventName, handler: Optional[EventHandler] = None) -> bool:
        """
        Remove a subscription.

        Without ``handler`` every subscription for the event is dropped,
        otherwise only its first registration is removed.

        Returns:
            bool: True if anything was removed
        """
        key = event_key(event)
        handlers = self._handlers.get(key)
        if not handlers:
            return False

        if handler is None:
            del self._handlers[key]
            return True

        try:
            handlers.remove(handler)
        except ValueError:
            return False

        if not handlers:
            del self._handlers[key]
        return True

    def trigger(self, event: EventName, *args: Any) -> int:
        """
        Invoke every handler registered for ``event`` with ``args``.

        Returns:
            int: Number of handlers that completed without raising
        """
        key = event_key(event)
        handlers = list(self._handlers.get(key, ()))
        if not handlers:
            return 0

        delivered = 0
        for handler in handlers:
            try:
                handler(*args)
                delivered += 1
            except Exception:
                # One bad handler shouldn't break the others
                logger.exception(f"Handler {handler!r} failed for event '{key}'")

        return delivered

    def handlers(self, event: EventName) -> List[EventHandler]:
        """Get a copy of the handlers subscribed to ``event``"""
        return list(self._handlers.get(event_key(event), ()))

    def __repr__(self) -> str:
        counts = {name: len(handlers) for name, handlers in self._handlers.items()}
        return f"EventEmitter({counts})"


__all__ = ["EventEmitter", "EntityEvent", "EventName", "EventHandler", "event_key"]
