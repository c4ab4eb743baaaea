"""
Message Bus

Routes domain events from committed transactions to their subscribers.
Subscribers are registered once at startup (see ``AppConfig.ready``).
"""

from typing import Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """In-process event dispatcher: any number of handlers per event type"""

    def __init__(self):
        self._subscribers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler`` to ``event_type``; repeated registration is ignored"""
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Registered {handler.__name__} for {event_type.__name__}")

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._subscribers.get(event_type, []))

    def publish_events(self, events: Iterable[DomainEvent]):
        """
        Deliver each event to its handlers in registration order

        A failing handler is logged and skipped; the remaining handlers
        and events are still delivered.
        """
        for event in events:
            name = type(event).__name__
            handlers = self.handlers_for(type(event))
            if not handlers:
                logger.debug(f"No handlers for {name}")
                continue

            logger.info(f"Publishing {name} (ID: {event.event_id}) to {len(handlers)} handlers")
            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Handler {handler.__name__} failed for {name}: {e}", exc_info=True)


# Process-wide instance
message_bus = MessageBus()
