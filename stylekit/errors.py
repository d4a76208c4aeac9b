"""
Error types raised by stylekit.

Argument errors also derive from the matching builtin (ValueError,
AttributeError, KeyError, RuntimeError) so callers that catch builtins keep
working.
"""


class StyleKitError(Exception):
    """Base class for all stylekit errors."""


class DuplicateNameError(StyleKitError):
    """A style name is already held by another definition."""

    def __init__(self, name: str):
        super().__init__(f"Style name already registered: {name!r}")
        self.name = name


class InvalidArgumentError(StyleKitError, ValueError):
    """Malformed event name, property mapping, callback or animation config."""


class UnknownPropertyError(StyleKitError, AttributeError):
    """Target does not expose the requested property."""

    def __init__(self, target, key: str):
        super().__init__(f"{type(target).__name__} has no property {key!r}")
        self.target = target
        self.key = key


class UnknownEventError(StyleKitError, KeyError):
    """Target does not expose the requested event."""

    def __init__(self, target, event_name: str):
        super().__init__(f"{type(target).__name__} has no event {event_name!r}")
        self.target = target
        self.event_name = event_name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class StyleDestroyedError(StyleKitError, RuntimeError):
    """Operation attempted on a destroyed style definition."""
