"""
Qt-driven animation engine.

AnimationEngine creates Animation instances for style targets and ticks every
playing animation from a single QTimer on the Qt event loop. ``advance()``
performs one tick with an explicit delta so hosts and tests can step
animations deterministically.
"""
import time
from typing import Any, Dict, Mapping, Optional

from PySide6.QtCore import QObject, QTimer, Signal, Qt

from stylekit.animation.animator import Animation
from stylekit.animation.types import AnimationConfig, AnimationState
from stylekit.config import clamp_fps, get_settings
from stylekit.logging.logger import get_logger

logger = get_logger(__name__)

# Largest delta applied in one tick; longer stalls are clamped so animations
# do not jump to the end after e.g. system sleep.
MAX_TICK_SECONDS = 0.5


class AnimationEngine(QObject):
    """
    Creates and drives animations.

    Only playing animations are held; an animation leaves the engine when it
    completes or is cancelled and re-enters on its next play().
    """

    animation_started = Signal(str)    # animation_id
    animation_completed = Signal(str)  # animation_id
    animation_cancelled = Signal(str)  # animation_id

    def __init__(self, fps: Optional[int] = None, autostart: bool = True):
        """
        Initialize the animation engine.

        Args:
            fps: Target ticks per second (defaults to STYLEKIT_FPS / 60)
            autostart: Start the QTimer when an animation begins playing.
                With autostart off, the host calls advance() itself.
        """
        super().__init__()

        self.fps = clamp_fps(fps if fps is not None else get_settings().fps)
        self.frame_time = 1.0 / self.fps
        self.autostart = autostart

        self._animations: Dict[str, Animation] = {}
        self._last_update_time: Optional[float] = None

        self._timer = QTimer()
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(int(self.frame_time * 1000))
        self._timer.timeout.connect(self._update_all)

        logger.info(f"AnimationEngine initialized (fps={self.fps}, autostart={autostart})")

    def create(self, target: Any, config: AnimationConfig,
               properties: Mapping[str, Any]) -> Animation:
        """Create an idle animation of ``properties`` on ``target``."""
        return Animation(target, config, properties, scheduler=self._schedule)

    def set_target_fps(self, fps: int) -> None:
        """Update target FPS and reconfigure the timer interval."""
        new_fps = clamp_fps(fps)
        if new_fps == self.fps:
            return
        self.fps = new_fps
        self.frame_time = 1.0 / self.fps
        was_active = self._timer.isActive()
        if was_active:
            self._timer.stop()
        self._timer.setInterval(int(self.frame_time * 1000))
        if was_active:
            self._last_update_time = time.time()
            self._timer.start()
        logger.info(f"AnimationEngine target FPS set to {self.fps}")

    def start(self) -> None:
        """Start the engine's update loop."""
        if not self._timer.isActive():
            self._last_update_time = time.time()
            self._timer.start()
            logger.debug("AnimationEngine started")

    def stop(self) -> None:
        """Stop the engine's update loop."""
        if self._timer.isActive():
            self._timer.stop()
            logger.debug("AnimationEngine stopped")

    def is_active(self) -> bool:
        return self._timer.isActive()

    def advance(self, delta_time: float) -> None:
        """Tick every playing animation by ``delta_time`` seconds."""
        delta_time = min(max(0.0, delta_time), MAX_TICK_SECONDS)

        for animation_id, animation in list(self._animations.items()):
            if animation.update(delta_time):
                continue
            # Replayed from a completion handler: keep it scheduled
            if animation.is_playing:
                continue
            self._animations.pop(animation_id, None)
            if animation.state == AnimationState.COMPLETE:
                self.animation_completed.emit(animation_id)
            else:
                self.animation_cancelled.emit(animation_id)

        if not self._animations:
            self.stop()

    def get_active_count(self) -> int:
        """Get the number of playing animations."""
        return len(self._animations)

    def is_running(self, animation_id: str) -> bool:
        animation = self._animations.get(animation_id)
        return animation is not None and animation.state == AnimationState.RUNNING

    def cancel_all(self) -> None:
        """Cancel all playing animations."""
        for animation_id, animation in list(self._animations.items()):
            animation.cancel()
            self._animations.pop(animation_id, None)
            self.animation_cancelled.emit(animation_id)
        self.stop()
        logger.info("All animations cancelled")

    def cleanup(self) -> None:
        """Cancel everything and release the timer."""
        logger.debug("Cleaning up AnimationEngine")
        self.cancel_all()
        try:
            self._timer.deleteLater()
        except RuntimeError:
            pass
        logger.info("AnimationEngine cleanup complete")

    def _schedule(self, animation: Animation) -> None:
        if animation.animation_id not in self._animations:
            self._animations[animation.animation_id] = animation
            self.animation_started.emit(animation.animation_id)
        if self.autostart:
            self.start()

    def _update_all(self) -> None:
        """Timer slot: tick with the wall-clock time since the previous tick."""
        current_time = time.time()
        if self._last_update_time is None:
            self._last_update_time = current_time
            return
        delta_time = current_time - self._last_update_time
        self._last_update_time = current_time
        self.advance(delta_time)


_default_engine: Optional[AnimationEngine] = None


def get_animation_engine() -> AnimationEngine:
    """Return the shared engine, creating it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = AnimationEngine()
    return _default_engine
