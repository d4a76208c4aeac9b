"""
Property animation bound to one style target.

An Animation is created once per (target, binding) pair and replayed every
time the bound event fires. Ticking is driven from outside (normally by
AnimationEngine) through ``update(delta_time)``.
"""
import uuid
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional

from stylekit.animation.easing import ease
from stylekit.animation.types import AnimationConfig, AnimationState
from stylekit.events.signal import EventSignal
from stylekit.logging.logger import get_logger, is_verbose_logging

logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def interpolate(start: Any, end: Any, progress: float) -> Any:
    """
    Interpolate between two property values.

    Numbers are blended linearly (integers stay integers). Anything else snaps
    to ``end`` once progress reaches 1.0.
    """
    if _is_number(start) and _is_number(end):
        value = start + (end - start) * progress
        if isinstance(start, int) and isinstance(end, int):
            return int(round(value))
        return value
    return end if progress >= 1.0 else start


class Animation:
    """
    Animates a set of target properties towards end values.

    Signals:
        started: emitted with the animation on every play()
        progress_changed: emitted with eased progress on every tick
        completed: emitted with the terminal AnimationState (COMPLETE when the
            run finished, CANCELLED when it was cancelled or restarted)
    """

    def __init__(self, target: Any, config: AnimationConfig, properties: Mapping[str, Any],
                 scheduler: Optional[Callable[["Animation"], None]] = None,
                 animation_id: Optional[str] = None):
        """
        Initialize animation.

        Args:
            target: StyleTarget whose properties are animated
            config: Timing configuration
            properties: End values keyed by property name
            scheduler: Called on every play() so the driver starts ticking us
            animation_id: Unique ID (generated when omitted)
        """
        self.animation_id = animation_id or str(uuid.uuid4())
        self.target = target
        self.config = config
        self.properties: Dict[str, Any] = dict(properties)

        self.state = AnimationState.IDLE
        self.elapsed = 0.0
        self.delay_elapsed = 0.0
        self.play_count = 0
        self._start_values: Dict[str, Any] = {}
        self._scheduler = scheduler

        short_id = self.animation_id[:8]
        self.started = EventSignal(f"animation.{short_id}.started")
        self.progress_changed = EventSignal(f"animation.{short_id}.progress")
        self.completed = EventSignal(f"animation.{short_id}.completed")

    @property
    def is_playing(self) -> bool:
        return self.state in (AnimationState.RUNNING, AnimationState.PAUSED)

    def play(self) -> None:
        """Start the animation, restarting it from the current values if already playing."""
        if self.is_playing:
            # The interrupted run ends as cancelled before the new one starts
            self.state = AnimationState.CANCELLED
            logger.debug(f"Animation restarted: {self.animation_id}")
            self.completed.emit(AnimationState.CANCELLED)

        self._start_values = {key: self.target.get_property(key) for key in self.properties}
        self.state = AnimationState.RUNNING
        self.elapsed = 0.0
        self.delay_elapsed = 0.0
        self.play_count += 1

        self.started.emit(self)
        if self._scheduler is not None:
            self._scheduler(self)
        logger.debug(f"Animation started: {self.animation_id} (duration={self.config.duration}s)")

    def pause(self) -> None:
        if self.state == AnimationState.RUNNING:
            self.state = AnimationState.PAUSED
            logger.debug(f"Animation paused: {self.animation_id}")

    def resume(self) -> None:
        if self.state == AnimationState.PAUSED:
            self.state = AnimationState.RUNNING
            logger.debug(f"Animation resumed: {self.animation_id}")

    def cancel(self) -> None:
        """Stop a playing animation where it is and emit CANCELLED."""
        if self.is_playing:
            self.state = AnimationState.CANCELLED
            self.completed.emit(AnimationState.CANCELLED)
            logger.debug(f"Animation cancelled: {self.animation_id}")

    def update(self, delta_time: float) -> bool:
        """
        Advance the animation.

        Args:
            delta_time: Time since last update in seconds

        Returns:
            True while the animation still needs ticks (running or paused)
        """
        if self.state == AnimationState.PAUSED:
            return True
        if self.state != AnimationState.RUNNING:
            return False

        # Handle delay
        if self.delay_elapsed < self.config.delay:
            self.delay_elapsed += delta_time
            if self.delay_elapsed < self.config.delay:
                return True
            delta_time = self.delay_elapsed - self.config.delay

        self.elapsed += delta_time
        progress = self.get_progress()
        eased_progress = ease(progress, self.config.easing)

        if progress >= 1.0:
            self._apply(1.0, final=True)
            self.progress_changed.emit(1.0)
            self.state = AnimationState.COMPLETE
            logger.debug(f"Animation completed: {self.animation_id}")
            self.completed.emit(AnimationState.COMPLETE)
            return False

        self._apply(eased_progress)
        self.progress_changed.emit(eased_progress)
        return True

    def get_progress(self) -> float:
        """Get current linear progress (0.0 to 1.0)."""
        if self.config.duration <= 0:
            return 1.0
        return min(1.0, self.elapsed / self.config.duration)

    def _apply(self, progress: float, final: bool = False) -> None:
        for key, end_value in self.properties.items():
            start_value = self._start_values.get(key)
            if not final and not (_is_number(start_value) and _is_number(end_value)):
                continue
            value = end_value if final else interpolate(start_value, end_value, progress)
            try:
                self.target.set_property(key, value)
            except Exception as e:
                logger.error(f"Error updating property {key} on {self.target!r}: {e}")
        if is_verbose_logging():
            logger.debug("Animation %s progress=%.3f", self.animation_id[:8], progress)

    def __repr__(self) -> str:
        return f"<Animation {self.animation_id[:8]} {self.state.value} {sorted(self.properties)}>"
