"""Style targets.

``QtTarget`` lives in ``stylekit.targets.qt_target`` and is imported on demand
so that headless hosts do not load PySide6.
"""

from .property_target import PropertyTarget
from .types import AnimationFactory, EventSource, StyleTarget

__all__ = ['PropertyTarget', 'StyleTarget', 'EventSource', 'AnimationFactory']
