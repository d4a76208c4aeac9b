"""
Animation types, enums, and dataclasses.

Defines the core types used by the animation engine and style bindings.
"""
import math
from enum import Enum
from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Mapping

from stylekit.errors import InvalidArgumentError


class AnimationState(Enum):
    """Playback state of an animation."""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (AnimationState.COMPLETE, AnimationState.CANCELLED)


class EasingCurve(Enum):
    """
    Easing curve types for animations.

    Easing functions control the rate of change of the animated value over time.
    """
    # Basic
    LINEAR = "linear"

    # Quadratic
    QUAD_IN = "quad_in"
    QUAD_OUT = "quad_out"
    QUAD_IN_OUT = "quad_in_out"

    # Cubic
    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"

    # Sine
    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"

    # Back
    BACK_IN = "back_in"
    BACK_OUT = "back_out"

    # Bounce
    BOUNCE_OUT = "bounce_out"


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class AnimationConfig:
    """Timing configuration for an animation, passed through to the engine."""
    duration: float                                    # Duration in seconds
    easing: EasingCurve = EasingCurve.LINEAR          # Easing curve
    delay: float = 0.0                                 # Delay before starting (seconds)

    def __post_init__(self):
        """Validate and normalise the configuration."""
        if not _is_number(self.duration) or not math.isfinite(self.duration) or self.duration < 0:
            raise InvalidArgumentError(
                f"duration must be a non-negative finite number, got {self.duration!r}"
            )
        if not _is_number(self.delay) or not math.isfinite(self.delay) or self.delay < 0:
            raise InvalidArgumentError(
                f"delay must be a non-negative finite number, got {self.delay!r}"
            )
        if not isinstance(self.easing, EasingCurve):
            try:
                easing = EasingCurve(str(self.easing).lower())
            except ValueError:
                raise InvalidArgumentError(f"Unknown easing curve: {self.easing!r}") from None
            object.__setattr__(self, "easing", easing)
        object.__setattr__(self, "duration", float(self.duration))
        object.__setattr__(self, "delay", float(self.delay))

    @classmethod
    def from_value(cls, value: Any) -> "AnimationConfig":
        """
        Build a config from an AnimationConfig, a mapping, or a bare duration.

        Raises:
            InvalidArgumentError: If the value cannot describe an animation
        """
        if isinstance(value, AnimationConfig):
            return value
        if _is_number(value):
            return cls(duration=value)
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = set(value) - known
            if unknown:
                raise InvalidArgumentError(
                    f"Unknown animation config keys: {sorted(map(str, unknown))}"
                )
            if "duration" not in value:
                raise InvalidArgumentError("Animation config requires a duration")
            return cls(**value)
        raise InvalidArgumentError(
            f"Animation config must be an AnimationConfig, mapping or number, got {type(value).__name__}"
        )
