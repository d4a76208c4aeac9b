"""Animation types, easing and the animation engine.

The Qt engine lives in ``stylekit.animation.engine`` and is imported on demand
so that code using only Animation does not load PySide6.
"""

from .types import AnimationState, EasingCurve, AnimationConfig
from .easing import ease, get_easing_function, EASING_FUNCTIONS
from .animator import Animation, interpolate

__all__ = [
    # Types
    'AnimationState',
    'EasingCurve',
    'AnimationConfig',

    # Easing
    'ease',
    'get_easing_function',
    'EASING_FUNCTIONS',

    # Animators
    'Animation',
    'interpolate',
]
