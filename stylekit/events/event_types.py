"""
Event and subscription types shared by event sources.
"""
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from stylekit.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Event:
    """Record of one emission, kept in event history."""
    event_type: str
    args: Tuple[Any, ...] = ()
    source: Any = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    timestamp: float = field(default_factory=time.time)


@dataclass
class Subscription:
    """Subscription of one callback to one event source."""
    callback: Callable[..., Any]
    event_type: str
    priority: int = 0
    filter_fn: Optional[Callable[..., bool]] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    active: bool = True

    def __call__(self, *args: Any) -> None:
        """Call the subscription callback if still active and the filter passes."""
        if not self.active:
            return
        if self.filter_fn is None or self.filter_fn(*args):
            self.callback(*args)

    def __lt__(self, other: 'Subscription') -> bool:
        """Sort by priority (higher first)."""
        return self.priority > other.priority


class SubscriptionHandle:
    """
    Disposable token for one live registration with an event source.

    ``dispose()`` releases the registration and then every cleanup the handle
    owns, in the order they were attached. Disposing twice is harmless: the
    second call does nothing and returns False.
    """

    def __init__(self, release: Callable[[], None], description: str = "", tag: str = ""):
        self.id = uuid.uuid4().hex[:8]
        self.description = description
        self.tag = tag
        self._release: Optional[Callable[[], None]] = release
        self._owned: List[Callable[[], None]] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def own(self, cleanup: Callable[[], None]) -> None:
        """Attach a cleanup that runs when this handle is disposed.

        Attaching to an already disposed handle runs the cleanup immediately.
        """
        if self._disposed:
            cleanup()
            return
        self._owned.append(cleanup)

    def dispose(self) -> bool:
        """Release the registration. Returns True only for the first call."""
        if self._disposed:
            logger.debug(f"Handle {self.id} already disposed ({self.description})")
            return False
        self._disposed = True

        release, self._release = self._release, None
        owned, self._owned = self._owned, []
        try:
            if release is not None:
                release()
        finally:
            for cleanup in owned:
                cleanup()
        return True

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "live"
        return f"<SubscriptionHandle {self.id} {self.description!r} {state}>"
