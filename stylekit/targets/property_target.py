"""
Plain Python style target.

PropertyTarget is a property bag with declared events. It is the target used
for headless hosts, and the reference for what a StyleTarget must do.
"""
from typing import Any, Dict, Iterable, Mapping, Optional

from stylekit.config import get_settings
from stylekit.errors import InvalidArgumentError, UnknownPropertyError
from stylekit.events.event_system import EventSystem
from stylekit.events.event_types import Event
from stylekit.events.signal import EventSignal
from stylekit.logging.logger import get_logger

logger = get_logger(__name__)


class PropertyTarget:
    """
    Property bag with named events.

    Strict targets (the default, see STYLEKIT_STRICT_PROPERTIES and
    STYLEKIT_STRICT_EVENTS) only accept the property keys and event names
    they were created with. Every successful write is announced on
    ``property_changed`` with ``(key, value)``.
    """

    def __init__(self, properties: Optional[Mapping[str, Any]] = None,
                 events: Iterable[str] = (), name: str = "",
                 strict_properties: Optional[bool] = None,
                 strict_events: Optional[bool] = None):
        settings = get_settings()
        self.name = name
        self.strict_properties = (
            settings.strict_properties if strict_properties is None else strict_properties
        )
        self._properties: Dict[str, Any] = {}
        for key, value in (properties or {}).items():
            self._properties[self._check_key(key)] = value

        self.events = EventSystem(
            events,
            strict=settings.strict_events if strict_events is None else strict_events,
            owner=self,
        )
        self.property_changed = EventSignal(f"{name or 'target'}.property_changed")

    @staticmethod
    def _check_key(key: Any) -> str:
        if not isinstance(key, str) or not key:
            raise InvalidArgumentError(f"Property key must be a non-empty string, got {key!r}")
        return key

    def set_property(self, key: str, value: Any) -> None:
        """
        Set a property.

        Raises:
            UnknownPropertyError: If strict and the key was not declared
        """
        self._check_key(key)
        if self.strict_properties and key not in self._properties:
            raise UnknownPropertyError(self, key)
        self._properties[key] = value
        self.property_changed.emit(key, value)

    def get_property(self, key: str) -> Any:
        """
        Read a property. Non-strict targets return None for unknown keys.

        Raises:
            UnknownPropertyError: If strict and the key was not declared
        """
        if key in self._properties:
            return self._properties[key]
        if self.strict_properties:
            raise UnknownPropertyError(self, key)
        return None

    def has_property(self, key: str) -> bool:
        return key in self._properties

    @property
    def properties(self) -> Dict[str, Any]:
        """Snapshot of all current property values."""
        return dict(self._properties)

    def event(self, event_name: str) -> EventSignal:
        """Return the event source for ``event_name``."""
        return self.events.signal(event_name)

    def fire(self, event_name: str, *args: Any) -> Event:
        """Emit ``event_name`` with ``args`` to its handlers."""
        return self.events.publish(event_name, *args)

    def __getitem__(self, key: str) -> Any:
        return self.get_property(key)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<PropertyTarget{label} at {id(self):#x}>"
