"""Style definitions, bindings and the style registry."""

from .binding import AnimationBinding, CallbackBinding
from .definition import StyleDefinition
from .registry import StyleRegistry, get_registry
from .tracker import ApplicationTracker, BindingPlayback, PlaybackPhase

__all__ = [
    'StyleDefinition',
    'StyleRegistry',
    'get_registry',
    'AnimationBinding',
    'CallbackBinding',
    'ApplicationTracker',
    'BindingPlayback',
    'PlaybackPhase',
]
