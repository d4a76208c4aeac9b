"""Capability protocols consumed by style definitions.

Used for type-checking and runtime checks only; targets and engines do not
need to inherit from anything (structural subtyping via Protocol).
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from stylekit.animation.animator import Animation
from stylekit.animation.types import AnimationConfig
from stylekit.events.event_types import SubscriptionHandle


@runtime_checkable
class EventSource(Protocol):
    """Something handlers can connect to."""

    def connect(self, callback: Callable[..., Any]) -> SubscriptionHandle: ...


@runtime_checkable
class StyleTarget(Protocol):
    """Object a style can be applied to: a property bag with named events."""

    def set_property(self, key: str, value: Any) -> None: ...
    def get_property(self, key: str) -> Any: ...
    def event(self, event_name: str) -> EventSource: ...


@runtime_checkable
class AnimationFactory(Protocol):
    """Creates one Animation per (target, binding) pair."""

    def create(self, target: Any, config: AnimationConfig,
               properties: Mapping[str, Any]) -> Animation: ...
