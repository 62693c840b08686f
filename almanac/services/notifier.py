"""
CalendarNotifier - delivers calendar events to registered listeners.

Listeners are plain callables taking a single CalendarEvent. Delivery is
synchronous and follows registration order. A listener that raises is
logged and skipped; the remaining listeners still receive the event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from almanac.domain import CalendarEvent, EventKind

logger = logging.getLogger(__name__)

Listener = Callable[[CalendarEvent], None]


@dataclass(frozen=True)
class Subscription:
    """A registered listener and the event kinds it wants (None = all)."""
    callback: Listener
    kinds: frozenset[str] | None = None

    def wants(self, event: CalendarEvent) -> bool:
        return self.kinds is None or event.type in self.kinds


class CalendarNotifier:
    """Ordered list of listeners for calendar events."""

    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._history: dict[str, CalendarEvent] = {}  # last event per kind

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        callback: Listener,
        kinds: Iterable[EventKind] | None = None,
    ) -> Subscription:
        """
        Register a listener.

        Registering a callback that is already present keeps its place in
        the delivery order and replaces its kinds filter with the new one.

        Args:
            callback: Function(event) -> None
            kinds: Event kinds to receive, or None for every kind

        Returns:
            The subscription handle, usable with unsubscribe()
        """
        subscription = Subscription(
            callback=callback,
            kinds=frozenset(kinds) if kinds is not None else None,
        )
        for index, existing in enumerate(self._subscriptions):
            if existing.callback == callback:
                if existing.kinds == subscription.kinds:
                    return existing
                self._subscriptions[index] = subscription
                return subscription

        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, handle: Subscription | Listener) -> bool:
        """Remove a listener by handle or callback. Returns True if removed."""
        callback = handle.callback if isinstance(handle, Subscription) else handle
        for existing in self._subscriptions:
            if existing.callback == callback:
                self._subscriptions.remove(existing)
                return True
        return False

    def publish(self, event: CalendarEvent) -> None:
        """Deliver an event to every interested listener, in order."""
        self._history[event.type] = event

        # Copy so listeners may unsubscribe while being notified
        for subscription in list(self._subscriptions):
            if not subscription.wants(event):
                continue
            try:
                subscription.callback(event)
            except Exception as e:
                logger.error(f"Calendar listener error on {event.type}: {e}", exc_info=True)

    def last_event(self, kind: EventKind) -> CalendarEvent | None:
        """Most recent event of a kind, if any was published."""
        return self._history.get(kind)

    def clear_history(self) -> None:
        self._history.clear()
