"""
Binding records stored on a style definition.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from stylekit.animation.animator import Animation
from stylekit.animation.types import AnimationConfig
from stylekit.errors import InvalidArgumentError

AnimationCallback = Callable[[Animation], Any]


def validate_properties(properties: Any, what: str = "properties") -> dict:
    """Return a plain-dict copy of ``properties`` or raise InvalidArgumentError."""
    if not isinstance(properties, Mapping):
        raise InvalidArgumentError(
            f"{what} must be a mapping, got {type(properties).__name__}"
        )
    for key in properties:
        if not isinstance(key, str) or not key:
            raise InvalidArgumentError(f"{what} keys must be non-empty strings, got {key!r}")
    return dict(properties)


def validate_callback(callback: Any, what: str = "callback", optional: bool = False):
    if callback is None and optional:
        return None
    if not callable(callback):
        raise InvalidArgumentError(f"{what} must be callable, got {type(callback).__name__}")
    return callback


@dataclass(frozen=True, eq=False)
class AnimationBinding:
    """Event-triggered animation: end-state properties plus optional hooks."""
    config: AnimationConfig
    properties: Mapping[str, Any]
    on_start: Optional[AnimationCallback] = None
    on_complete: Optional[AnimationCallback] = None

    @classmethod
    def create(cls, config: Any, properties: Any,
               on_start: Optional[AnimationCallback] = None,
               on_complete: Optional[AnimationCallback] = None) -> "AnimationBinding":
        """
        Validate arguments and build an immutable binding.

        Raises:
            InvalidArgumentError: On a malformed config, property mapping or hook
        """
        return cls(
            config=AnimationConfig.from_value(config),
            properties=MappingProxyType(validate_properties(properties)),
            on_start=validate_callback(on_start, "on_start", optional=True),
            on_complete=validate_callback(on_complete, "on_complete", optional=True),
        )


@dataclass(frozen=True, eq=False)
class CallbackBinding:
    """Plain handler subscribed directly to an event."""
    callback: Callable[..., Any]
    label: str = ""

    @classmethod
    def create(cls, callback: Any) -> "CallbackBinding":
        callback = validate_callback(callback)
        return cls(callback, getattr(callback, "__name__", type(callback).__name__))
