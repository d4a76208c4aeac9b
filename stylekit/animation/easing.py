"""
Easing functions for animations.

All functions take t (time) in range [0.0, 1.0] and return the eased progress.
Back curves overshoot slightly outside [0.0, 1.0] by design of the curve.

Based on Robert Penner's easing equations (https://easings.net/).
"""
import math
from typing import Callable, Dict

from stylekit.animation.types import EasingCurve


def linear(t: float) -> float:
    return t


def quad_in(t: float) -> float:
    return t * t


def quad_out(t: float) -> float:
    return t * (2 - t)


def quad_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def cubic_in(t: float) -> float:
    return t * t * t


def cubic_out(t: float) -> float:
    t -= 1
    return t * t * t + 1


def cubic_in_out(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    t -= 1
    return 1 + 4 * t * t * t


def sine_in(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def sine_out(t: float) -> float:
    return math.sin(t * math.pi / 2)


def sine_in_out(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


_BACK_C1 = 1.70158
_BACK_C3 = _BACK_C1 + 1


def back_in(t: float) -> float:
    return _BACK_C3 * t * t * t - _BACK_C1 * t * t


def back_out(t: float) -> float:
    t -= 1
    return 1 + _BACK_C3 * t * t * t + _BACK_C1 * t * t


def bounce_out(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


EASING_FUNCTIONS: Dict[EasingCurve, Callable[[float], float]] = {
    EasingCurve.LINEAR: linear,

    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
    EasingCurve.QUAD_IN_OUT: quad_in_out,

    EasingCurve.CUBIC_IN: cubic_in,
    EasingCurve.CUBIC_OUT: cubic_out,
    EasingCurve.CUBIC_IN_OUT: cubic_in_out,

    EasingCurve.SINE_IN: sine_in,
    EasingCurve.SINE_OUT: sine_out,
    EasingCurve.SINE_IN_OUT: sine_in_out,

    EasingCurve.BACK_IN: back_in,
    EasingCurve.BACK_OUT: back_out,

    EasingCurve.BOUNCE_OUT: bounce_out,
}


def get_easing_function(curve: EasingCurve) -> Callable[[float], float]:
    """
    Get the easing function for a given curve.

    Raises:
        ValueError: If curve is not found
    """
    if curve not in EASING_FUNCTIONS:
        raise ValueError(f"Unknown easing curve: {curve}")

    return EASING_FUNCTIONS[curve]


def ease(t: float, curve: EasingCurve) -> float:
    """
    Apply easing function to a time value.

    Args:
        t: Time value, clamped to [0.0, 1.0]
        curve: Easing curve to apply

    Returns:
        Eased progress
    """
    t = max(0.0, min(1.0, t))
    return get_easing_function(curve)(t)
