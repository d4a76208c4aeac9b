"""stylekit: reusable, event-driven styles for UI targets."""

from .errors import (
    DuplicateNameError,
    InvalidArgumentError,
    StyleDestroyedError,
    StyleKitError,
    UnknownEventError,
    UnknownPropertyError,
)
from .animation import AnimationConfig, AnimationState, EasingCurve
from .events import SubscriptionHandle
from .styles import StyleDefinition, StyleRegistry, get_registry
from .targets import PropertyTarget

__version__ = "1.0.0"

__all__ = [
    'StyleDefinition',
    'StyleRegistry',
    'get_registry',
    'PropertyTarget',
    'SubscriptionHandle',
    'AnimationConfig',
    'AnimationState',
    'EasingCurve',
    'StyleKitError',
    'DuplicateNameError',
    'InvalidArgumentError',
    'UnknownPropertyError',
    'UnknownEventError',
    'StyleDestroyedError',
]
