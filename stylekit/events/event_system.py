"""
Named collection of event sources.

Targets own one EventSystem each and expose its signals as their events.
Publishing records a short event history for debugging.
"""
from typing import Any, Dict, Iterable, List, Optional
import threading

from stylekit.errors import InvalidArgumentError, UnknownEventError
from stylekit.events.event_types import Event
from stylekit.events.signal import EventSignal
from stylekit.logging.logger import get_logger

logger = get_logger(__name__)


def validate_event_name(event_name: Any) -> str:
    """Return ``event_name`` if it is non-empty text, else raise InvalidArgumentError."""
    if not isinstance(event_name, str) or not event_name.strip():
        raise InvalidArgumentError("event_name must be a non-empty string")
    return event_name


class EventSystem:
    """
    Registry of EventSignals keyed by event name.

    With ``strict=True`` only declared events can be looked up; asking for any
    other name raises UnknownEventError. Non-strict systems create signals on
    first use.
    """

    def __init__(self, events: Iterable[str] = (), strict: bool = True,
                 owner: Any = None, max_history: int = 100):
        """
        Initialize the event system.

        Args:
            events: Event names to declare up front
            strict: Reject lookups of undeclared events
            owner: Object reported as the source of published events
            max_history: Number of published events to remember
        """
        self._signals: Dict[str, EventSignal] = {}
        self._event_history: List[Event] = []
        self._max_history = max_history
        self._lock = threading.RLock()
        self.strict = strict
        self.owner = owner

        for name in events:
            self.declare(name)

    def declare(self, event_name: str) -> EventSignal:
        """Declare an event (idempotent) and return its signal."""
        validate_event_name(event_name)
        with self._lock:
            signal = self._signals.get(event_name)
            if signal is None:
                signal = EventSignal(event_name)
                self._signals[event_name] = signal
            return signal

    def has_event(self, event_name: str) -> bool:
        with self._lock:
            return event_name in self._signals

    def event_names(self) -> List[str]:
        with self._lock:
            return list(self._signals)

    def signal(self, event_name: str) -> EventSignal:
        """
        Look up the signal for ``event_name``.

        Raises:
            InvalidArgumentError: If event_name is not a non-empty string
            UnknownEventError: If strict and the event was never declared
        """
        validate_event_name(event_name)
        with self._lock:
            signal = self._signals.get(event_name)
            if signal is not None:
                return signal
            if self.strict:
                raise UnknownEventError(self.owner if self.owner is not None else self, event_name)
        return self.declare(event_name)

    def publish(self, event_name: str, *args: Any) -> Event:
        """
        Publish an event to all subscribers of ``event_name``.

        Returns:
            Event: The published event record
        """
        signal = self.signal(event_name)
        event = Event(event_name, args, self.owner)

        reached = signal.emit(*args)
        if not reached:
            logger.debug(f"No subscribers for event: {event_name}")

        self._add_to_history(event)
        return event

    def _add_to_history(self, event: Event) -> None:
        with self._lock:
            self._event_history.append(event)
            if len(self._event_history) > self._max_history:
                self._event_history = self._event_history[-self._max_history:]

    def get_event_history(self, limit: int = 100) -> List[Event]:
        """Get recent events, newest last."""
        with self._lock:
            return self._event_history[-limit:]

    def get_subscription_count(self, event_name: Optional[str] = None) -> int:
        """Number of live subscriptions, for one event or in total."""
        with self._lock:
            if event_name is not None:
                signal = self._signals.get(event_name)
                return signal.receiver_count() if signal is not None else 0
            return sum(s.receiver_count() for s in self._signals.values())

    def clear(self) -> None:
        """Disconnect every subscriber and drop the history. Declared events stay."""
        with self._lock:
            for signal in self._signals.values():
                signal.disconnect_all()
            self._event_history.clear()
        logger.debug("EventSystem cleared")
