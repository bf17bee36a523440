# core/event_bus.py: InMemoryEventBus implementation
#
# Synchronous single-process pub/sub. The gate publishes its state
# transitions here and the workshop module publishes record changes.

import logging
from collections import defaultdict
from typing import Callable, Any

from core.interfaces.event_bus import EventBus, Event

log = logging.getLogger("event_bus")

WILDCARD = "*"


class InMemoryEventBus(EventBus):
    """
    Synchronous in-process event bus.

    Handlers run in registration order. A handler that raises is logged
    and skipped; the remaining handlers still run.
    """

    def __init__(self):
        self._handlers: dict[str, list[Callable[[Event], Any]]] = defaultdict(list)

    def publish(self, event: Event) -> None:
        """Dispatch to handlers for the event's type, then to wildcard handlers."""
        targets = list(self._handlers.get(event.event_type, []))
        targets += list(self._handlers.get(WILDCARD, []))
        for handler in targets:
            try:
                handler(event)
            except Exception as e:
                log.error(
                    f"Event handler {handler!r} raised for event "
                    f"'{event.event_type}': {e}",
                    exc_info=True,
                )

    def subscribe(self, event_type: str, handler: Callable[[Event], Any]) -> None:
        """Register a handler. event_type="*" receives every event."""
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: Callable) -> None:
        """Remove a previously registered handler; unknown handlers are ignored."""
        if handler in self._handlers.get(event_type, []):
            self._handlers[event_type].remove(handler)


_bus: InMemoryEventBus = InMemoryEventBus()


def get_event_bus() -> InMemoryEventBus:
    """Return the application-level event bus singleton."""
    return _bus
