"""
Style name registry.

Maps style names to definitions and enforces that a name is held by at most
one definition. A process-wide default registry is created on first use;
definitions can also be given their own registry explicitly.
"""
from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Dict, List, Optional

from stylekit.errors import DuplicateNameError
from stylekit.logging.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from stylekit.styles.definition import StyleDefinition

logger = get_logger(__name__)


class StyleRegistry:
    """
    Name -> StyleDefinition mapping.

    Entries live until unregistered (normally by StyleDefinition.destroy) or
    until the registry is cleared. Thread-safe.
    """

    def __init__(self):
        self._styles: Dict[str, "StyleDefinition"] = {}
        self._lock = threading.RLock()

    def register(self, name: str, definition: "StyleDefinition") -> None:
        """
        Register ``definition`` under ``name``.

        Raises:
            DuplicateNameError: If the name is already registered
        """
        with self._lock:
            if name in self._styles:
                raise DuplicateNameError(name)
            self._styles[name] = definition
        logger.debug(f"Registered style {name!r}")

    def rename(self, definition: "StyleDefinition", new_name: str,
               old_name: Optional[str] = None) -> None:
        """
        Move ``definition`` from ``old_name`` (if any) to ``new_name``.

        Renaming a definition to the name it already holds does nothing.

        Raises:
            DuplicateNameError: If another definition holds ``new_name``
        """
        with self._lock:
            holder = self._styles.get(new_name)
            if holder is definition:
                return
            if holder is not None:
                raise DuplicateNameError(new_name)
            if old_name is not None and self._styles.get(old_name) is definition:
                del self._styles[old_name]
            self._styles[new_name] = definition
        logger.debug(f"Renamed style {old_name!r} -> {new_name!r}")

    def unregister(self, name: str, definition: Optional["StyleDefinition"] = None) -> bool:
        """
        Remove ``name``. No-op if absent.

        When ``definition`` is given, the entry is only removed if it still
        belongs to that definition.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            holder = self._styles.get(name)
            if holder is None:
                return False
            if definition is not None and holder is not definition:
                return False
            del self._styles[name]
        logger.debug(f"Unregistered style {name!r}")
        return True

    def get(self, name: str) -> Optional["StyleDefinition"]:
        with self._lock:
            return self._styles.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._styles)

    def clear(self) -> None:
        """Forget every entry (the definitions themselves are left alone)."""
        with self._lock:
            self._styles.clear()
        logger.debug("Style registry cleared")

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._styles

    def __len__(self) -> int:
        with self._lock:
            return len(self._styles)


_default_registry: Optional[StyleRegistry] = None
_default_lock = threading.Lock()


def get_registry() -> StyleRegistry:
    """Return the process-wide registry, creating it empty on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = StyleRegistry()
        return _default_registry
