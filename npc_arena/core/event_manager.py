"""
Event bus for decoupled arena communication.

Components publish events instead of calling each other directly. The combat
resolver delivers death events through this bus, which makes the set of
``CREATURE_DIED`` subscribers the death event sink: every subscriber sees every
event in publication order, and a subscriber that raises never stops delivery
to the others.
"""

import threading
from collections import defaultdict
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import ArenaEvent, EventType


EventSubscriber = Callable[["ArenaEvent"], None]


class EventManager:
    """Synchronous event bus for the arena."""

    def __init__(self, enable_debug_logging: bool = False):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to report bus activity to the debug callback
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)

        self._events_published = 0
        self._subscriber_errors = 0

        self._lock = threading.RLock()

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback invoked with each matching event
            subscriber_name: Optional name for debugging
        """
        with self._lock:
            self._subscribers[event_type].append(subscriber)
            display = subscriber_name or _subscriber_name(subscriber)
            self._debug_log(f"Subscribed {display} to {event_type.name} events")

    def publish_immediate(self, event: "ArenaEvent", source: Optional[str] = None) -> None:
        """Deliver an event to its subscribers before returning.

        Args:
            event: The event to deliver
            source: Optional source identifier for debugging
        """
        with self._lock:
            self._events_published += 1
            # Copy so a subscriber may subscribe while being notified
            subscribers = list(self._subscribers.get(event.event_type, []))

        self._debug_log(
            f"Delivering {event.__class__.__name__} from {source or 'unknown'} "
            f"(round: {event.round_number}) to {len(subscribers)} subscribers"
        )
        self._deliver(event, subscribers)

    def notify(self, event: "ArenaEvent") -> None:
        """Synchronously deliver an event; shorthand for ``publish_immediate``."""
        self.publish_immediate(event, source="notify")

    def _deliver(self, event: "ArenaEvent", subscribers: list[EventSubscriber]) -> None:
        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                with self._lock:
                    self._subscriber_errors += 1
                self._debug_log(f"Error in subscriber {_subscriber_name(subscriber)}: {e}")

    def get_statistics(self) -> dict[str, Any]:
        """Get event delivery statistics."""
        with self._lock:
            return {
                'events_published': self._events_published,
                'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
                'subscriber_errors': self._subscriber_errors,
            }


def _subscriber_name(subscriber: EventSubscriber) -> str:
    return getattr(subscriber, '__name__', None) or subscriber.__class__.__name__
