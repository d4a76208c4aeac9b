"""
Single connectable event source.

An EventSignal keeps its subscribers in priority order (insertion order for
equal priorities) and hands back a SubscriptionHandle for each connect().
"""
from typing import Any, Callable, List, Optional
import threading

from stylekit.errors import InvalidArgumentError
from stylekit.events.event_types import Subscription, SubscriptionHandle
from stylekit.logging.logger import get_logger, is_verbose_logging

logger = get_logger(__name__)


class EventSignal:
    """
    One named event that handlers can connect to.

    Handlers receive whatever positional arguments ``emit`` is called with.
    A handler that raises is logged and does not stop later handlers.
    """

    def __init__(self, name: str):
        self.name = name
        self._subscriptions: List[Subscription] = []
        self._lock = threading.RLock()

    def connect(
        self,
        callback: Callable[..., Any],
        priority: int = 0,
        filter_fn: Optional[Callable[..., bool]] = None,
    ) -> SubscriptionHandle:
        """
        Subscribe a handler.

        Args:
            callback: Function called with the emitted arguments
            priority: Higher is called earlier; equal priorities keep
                subscription order
            filter_fn: Optional predicate over the emitted arguments

        Returns:
            SubscriptionHandle that disconnects the handler when disposed

        Raises:
            InvalidArgumentError: If callback is not callable
        """
        if not callable(callback):
            raise InvalidArgumentError("Callback must be callable")

        subscription = Subscription(callback, self.name, priority, filter_fn)

        with self._lock:
            self._subscriptions.append(subscription)
            # list.sort is stable, so equal priorities stay in insertion order
            self._subscriptions.sort()

        logger.debug(f"New subscription: {subscription.id} for {self.name} (priority={priority})")
        return SubscriptionHandle(
            lambda sid=subscription.id: self._disconnect(sid),
            description=f"{self.name}:{subscription.id}",
        )

    def _disconnect(self, subscription_id: str) -> None:
        with self._lock:
            for subscription in self._subscriptions:
                if subscription.id == subscription_id:
                    subscription.active = False
            self._subscriptions = [s for s in self._subscriptions if s.id != subscription_id]
        logger.debug(f"Unsubscribed: {subscription_id} from {self.name}")

    def emit(self, *args: Any) -> int:
        """
        Call every connected handler with ``args``.

        Handlers disconnected by an earlier handler in the same emission are
        skipped.

        Returns:
            Number of live subscriptions the emission reached (filtered
            subscriptions included)
        """
        with self._lock:
            snapshot = list(self._subscriptions)

        if is_verbose_logging():
            logger.debug("Emitting %s to %d subscribers", self.name, len(snapshot))

        called = 0
        for subscription in snapshot:
            if not subscription.active:
                continue
            try:
                subscription(*args)
                called += 1
            except Exception as e:
                logger.error(f"Error in event handler for {self.name}: {e}", exc_info=True)
        return called

    def receiver_count(self) -> int:
        """Number of connected handlers."""
        with self._lock:
            return len(self._subscriptions)

    def disconnect_all(self) -> None:
        """Drop every handler."""
        with self._lock:
            for subscription in self._subscriptions:
                subscription.active = False
            self._subscriptions.clear()

    def __repr__(self) -> str:
        return f"<EventSignal {self.name!r} receivers={self.receiver_count()}>"
