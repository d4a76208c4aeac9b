"""
Bookkeeping for applied styles.

ApplicationTracker owns every SubscriptionHandle a style definition creates,
grouped by target and event name. BindingPlayback is the per (target,
animation binding) state record that keeps at most one completion watcher
pending at a time.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from stylekit.animation.animator import Animation
from stylekit.animation.types import AnimationState
from stylekit.events.event_types import SubscriptionHandle
from stylekit.logging.logger import get_logger
from stylekit.styles.binding import AnimationBinding

logger = get_logger(__name__)

ANIMATION_TAG = "animation"
CALLBACK_TAG = "callback"


class PlaybackPhase(Enum):
    """Where a (target, binding) pair is in its play cycle."""
    IDLE = "idle"
    PLAYING = "playing"
    WAITING_COMPLETION = "waiting_completion"


def _is_complete(state: Any) -> bool:
    return state is AnimationState.COMPLETE


class BindingPlayback:
    """
    Replays one binding's animation on one target.

    Every replay cancels the pending completion watcher (if any) before
    starting the animation again, so a stale run can never report completion
    for a newer one.
    """

    def __init__(self, binding: AnimationBinding, animation: Animation):
        self.binding = binding
        self.animation = animation
        self.watcher: Optional[SubscriptionHandle] = None

    @property
    def phase(self) -> PlaybackPhase:
        if self.watcher is not None:
            return PlaybackPhase.WAITING_COMPLETION
        if self.animation.is_playing:
            return PlaybackPhase.PLAYING
        return PlaybackPhase.IDLE

    def replay(self, *event_args: Any) -> None:
        """
        Event handler: restart the animation and re-arm the completion watcher.

        The watcher is armed before ``on_start`` runs, so an ``on_start`` that
        raises does not suppress ``on_complete`` for the run.
        """
        self.cancel_watcher()
        self.animation.play()

        if self.binding.on_complete is not None:
            self.watcher = self.animation.completed.connect(
                self._on_completed, filter_fn=_is_complete
            )

        if self.binding.on_start is not None:
            self.binding.on_start(self.animation)

    def _on_completed(self, state: AnimationState) -> None:
        self.cancel_watcher()
        self.binding.on_complete(self.animation)

    def cancel_watcher(self) -> None:
        watcher, self.watcher = self.watcher, None
        if watcher is not None:
            watcher.dispose()

    def release(self) -> None:
        """Drop the pending watcher and stop the in-flight run."""
        self.cancel_watcher()
        self.animation.cancel()


class ApplicationTracker:
    """
    target -> event name -> live SubscriptionHandles.

    A target stays listed (possibly with no handles) from the moment it is
    applied until it is released, so ``is_applied`` reflects apply/unapply
    rather than the number of bindings.
    """

    def __init__(self):
        self._applied: Dict[Any, Dict[str, List[SubscriptionHandle]]] = {}

    def ensure(self, target: Any) -> Dict[str, List[SubscriptionHandle]]:
        """Return the grouping map for ``target``, creating it empty if needed."""
        return self._applied.setdefault(target, {})

    def record(self, target: Any, event_name: str, handle: SubscriptionHandle) -> None:
        self.ensure(target).setdefault(event_name, []).append(handle)

    def is_applied(self, target: Any) -> bool:
        return target in self._applied

    def targets(self) -> List[Any]:
        return list(self._applied)

    def handles(self, target: Any, event_name: Optional[str] = None) -> List[SubscriptionHandle]:
        """Live handles for ``target`` (optionally only for one event)."""
        groups = self._applied.get(target, {})
        if event_name is not None:
            return list(groups.get(event_name, []))
        return [handle for group in groups.values() for handle in group]

    def subscription_count(self, target: Any = None) -> int:
        if target is not None:
            return len(self.handles(target))
        return sum(len(self.handles(t)) for t in self._applied)

    def release_target(self, target: Any) -> int:
        """
        Dispose every handle of ``target`` and forget it. No-op if unknown.

        Returns:
            Number of handles disposed
        """
        groups = self._applied.pop(target, None)
        if groups is None:
            return 0
        return self._dispose(h for group in groups.values() for h in group)

    def release_event(self, event_name: str, tag: Optional[str] = None) -> int:
        """
        Dispose the handles recorded under ``event_name`` on every target.

        Args:
            event_name: Event whose subscriptions are torn down
            tag: Only dispose handles with this tag (None disposes all)

        Returns:
            Number of handles disposed
        """
        doomed: List[SubscriptionHandle] = []
        for groups in self._applied.values():
            group = groups.get(event_name)
            if not group:
                continue
            keep = [h for h in group if tag is not None and h.tag != tag]
            doomed.extend(h for h in group if tag is None or h.tag == tag)
            if keep:
                groups[event_name] = keep
            else:
                del groups[event_name]
        return self._dispose(doomed)

    def release_all(self) -> int:
        """Dispose everything and forget every target."""
        disposed = 0
        for target in list(self._applied):
            disposed += self.release_target(target)
        return disposed

    @staticmethod
    def _dispose(handles: Iterable[SubscriptionHandle]) -> int:
        disposed = 0
        for handle in list(handles):
            try:
                if handle.dispose():
                    disposed += 1
            except Exception as e:
                logger.error(f"Error disposing {handle!r}: {e}", exc_info=True)
        return disposed

    def __contains__(self, target: object) -> bool:
        return target in self._applied

    def __len__(self) -> int:
        return len(self._applied)
