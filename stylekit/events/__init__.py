"""Event sources and subscription handles."""

from .event_system import EventSystem, validate_event_name
from .event_types import Event, Subscription, SubscriptionHandle
from .signal import EventSignal

__all__ = [
    'EventSystem',
    'EventSignal',
    'Event',
    'Subscription',
    'SubscriptionHandle',
    'validate_event_name',
]
