"""
Style target adapter for Qt objects.

QtTarget exposes a QObject's Qt properties (falling back to ``setX``/``x()``
accessor pairs) and its signals as style events, so styles can be applied to
widgets directly.
"""
from typing import Any, Callable

from PySide6.QtCore import QObject, SignalInstance

from stylekit.errors import InvalidArgumentError, UnknownEventError, UnknownPropertyError
from stylekit.events.event_types import SubscriptionHandle
from stylekit.logging.logger import get_logger

logger = get_logger(__name__)


def _setter_name(key: str) -> str:
    return f"set{key[:1].upper()}{key[1:]}"


class QtSignalSource:
    """EventSource over one bound Qt signal."""

    def __init__(self, signal: SignalInstance, name: str):
        self._signal = signal
        self.name = name

    def connect(self, callback: Callable[..., Any]) -> SubscriptionHandle:
        if not callable(callback):
            raise InvalidArgumentError("Callback must be callable")
        self._signal.connect(callback)

        def _release() -> None:
            try:
                self._signal.disconnect(callback)
            except (RuntimeError, TypeError) as e:
                # Sender already destroyed or connection already gone
                logger.debug(f"Qt disconnect of {self.name} skipped: {e}")

        return SubscriptionHandle(_release, description=f"qt:{self.name}")


class QtTarget:
    """
    Wraps a QObject as a StyleTarget.

    Two wrappers around the same QObject compare equal, so a style applied
    through one wrapper can be unapplied through another.
    """

    def __init__(self, obj: QObject):
        if not isinstance(obj, QObject):
            raise InvalidArgumentError(f"QtTarget requires a QObject, got {type(obj).__name__}")
        self.obj = obj

    def _has_qt_property(self, key: str) -> bool:
        return self.obj.metaObject().indexOfProperty(key) >= 0

    def set_property(self, key: str, value: Any) -> None:
        """
        Write a Qt property, or call the matching ``setX`` method.

        Raises:
            UnknownPropertyError: If the object has neither
            InvalidArgumentError: If Qt rejects the value
        """
        if self._has_qt_property(key):
            if not self.obj.setProperty(key, value):
                raise InvalidArgumentError(
                    f"Qt rejected value {value!r} for property {key!r}"
                )
            return
        setter = getattr(self.obj, _setter_name(key), None)
        if callable(setter):
            setter(value)
            return
        raise UnknownPropertyError(self.obj, key)

    def get_property(self, key: str) -> Any:
        if self._has_qt_property(key):
            return self.obj.property(key)
        getter = getattr(self.obj, key, None)
        if callable(getter) and not isinstance(getter, SignalInstance):
            return getter()
        raise UnknownPropertyError(self.obj, key)

    def event(self, event_name: str) -> QtSignalSource:
        """
        Return the Qt signal named ``event_name`` as an event source.

        Raises:
            UnknownEventError: If the object has no such signal
        """
        signal = getattr(self.obj, event_name, None)
        if not isinstance(signal, SignalInstance):
            raise UnknownEventError(self.obj, event_name)
        return QtSignalSource(signal, event_name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, QtTarget) and other.obj is self.obj

    def __hash__(self) -> int:
        return hash(self.obj)

    def __repr__(self) -> str:
        return f"<QtTarget {type(self.obj).__name__} {self.obj.objectName()!r}>"
