"""Event bus for decoupled communication between systems."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable


@dataclass
class Event:
    """Base class for all events."""
    pass


@dataclass
class SceneRebuiltEvent(Event):
    """Fired when the star and ship populations are (re)built."""
    width: int
    height: int
    star_count: int
    ship_count: int


@dataclass
class ShipStuckEvent(Event):
    """Fired when a ship's stuck flag turns on."""
    ship_index: int
    stuck_frames: int


@dataclass
class StuckEscapeEvent(Event):
    """Fired when a stuck ship receives an escape perturbation."""
    ship_index: int
    heading_delta: float


EventHandler = Callable[[Event], None]


class EventBus:
    """Central event bus for publishing and subscribing to events."""

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[EventHandler]] = {}
        self._queued_events: list[Event] = []
        self._processing: bool = False

    def subscribe(self, event_type: type[Event], handler: EventHandler) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers immediately.

        If called during event processing, the event is queued.
        """
        if self._processing:
            self._queued_events.append(event)
            return

        self._dispatch(event)

    def queue(self, event: Event) -> None:
        """Queue an event for the next ``process_queue`` call.

        Systems queue events mid-tick so handlers never observe a
        half-updated population.
        """
        self._queued_events.append(event)

    def _dispatch(self, event: Event) -> None:
        """Dispatch an event to handlers."""
        event_type = type(event)

        # Check for exact type match
        if event_type in self._handlers:
            for handler in self._handlers[event_type]:
                handler(event)

        # Check for base class matches
        for registered_type, handlers in self._handlers.items():
            if registered_type != event_type and isinstance(event, registered_type):
                for handler in handlers:
                    handler(event)

    def process_queue(self) -> None:
        """Process all queued events."""
        self._processing = True

        while self._queued_events:
            # Process current queue, new events go to a fresh queue
            current_queue = self._queued_events
            self._queued_events = []

            for event in current_queue:
                self._dispatch(event)

        self._processing = False

    @property
    def pending(self) -> int:
        """Number of events waiting in the queue."""
        return len(self._queued_events)
