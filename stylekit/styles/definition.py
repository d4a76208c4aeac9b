"""
Style definitions.

A StyleDefinition bundles initial property values with event-triggered
animations and plain callbacks, and applies that bundle to any number of
targets. Every subscription it creates is owned by its ApplicationTracker, so
unapply() and destroy() leave nothing connected behind.

Example:
    hover = StyleDefinition("Button")
    hover.set_initial_properties({"color": "gray"})
    hover.connect("MouseEnter", {"duration": 0.2}, {"color": "blue"},
                  on_complete=lambda anim: print("done"))
    hover.apply([button_a, button_b])
    ...
    hover.destroy()
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from stylekit.errors import InvalidArgumentError, StyleDestroyedError
from stylekit.events.event_system import validate_event_name
from stylekit.logging.logger import get_logger
from stylekit.styles.binding import (
    AnimationBinding,
    AnimationCallback,
    CallbackBinding,
    validate_properties,
)
from stylekit.styles.registry import StyleRegistry, get_registry
from stylekit.styles.tracker import (
    ANIMATION_TAG,
    CALLBACK_TAG,
    ApplicationTracker,
    BindingPlayback,
)
from stylekit.targets.types import AnimationFactory

logger = get_logger(__name__)


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError(f"Style name must be a non-empty string, got {name!r}")
    return name


class StyleDefinition:
    """
    Reusable style: initial properties + animation bindings + callbacks.

    Builder methods return the definition so calls can be chained. Bindings
    added after apply() only reach targets applied (or re-applied) later.
    """

    def __init__(self, name: Optional[str] = None, *,
                 registry: Optional[StyleRegistry] = None,
                 engine: Optional[AnimationFactory] = None):
        """
        Create a definition, registering it when a name is given.

        Args:
            name: Unique style name, or None for an anonymous style
            registry: Registry to use (defaults to the process-wide one)
            engine: Animation factory (defaults to the shared AnimationEngine)

        Raises:
            DuplicateNameError: If the name is already registered
            InvalidArgumentError: If the name is not a non-empty string
        """
        self._registry = registry if registry is not None else get_registry()
        self._engine = engine
        self.name: Optional[str] = None
        self.initial_properties: Dict[str, Any] = {}
        self.animation_bindings: Dict[str, List[AnimationBinding]] = {}
        self.callback_bindings: Dict[str, List[CallbackBinding]] = {}
        self._tracker = ApplicationTracker()
        self._destroyed = False

        if name is not None:
            self._registry.register(_validate_name(name), self)
            self.name = name

    @classmethod
    def get(cls, name: str, registry: Optional[StyleRegistry] = None) -> Optional["StyleDefinition"]:
        """Look up a registered definition by name."""
        return (registry if registry is not None else get_registry()).get(name)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def registry(self) -> StyleRegistry:
        return self._registry

    @property
    def engine(self) -> AnimationFactory:
        if self._engine is None:
            from stylekit.animation.engine import get_animation_engine
            self._engine = get_animation_engine()
        return self._engine

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def _check_alive(self, operation: str) -> None:
        if self._destroyed:
            raise StyleDestroyedError(f"Cannot {operation} on destroyed style {self!r}")

    # ------------------------------------------------------------------
    # Builder surface
    # ------------------------------------------------------------------

    def change_name(self, new_name: str) -> "StyleDefinition":
        """
        Register under ``new_name``, releasing the previous name.

        Raises:
            DuplicateNameError: If another definition holds ``new_name``
        """
        self._check_alive("change_name")
        self._registry.rename(self, _validate_name(new_name), old_name=self.name)
        self.name = new_name
        return self

    def set_initial_properties(self, properties: Mapping[str, Any]) -> "StyleDefinition":
        """Replace (not merge) the properties written on every apply()."""
        self._check_alive("set_initial_properties")
        self.initial_properties = validate_properties(properties, "initial properties")
        return self

    def connect(self, event_name: str, animation_config: Any, properties: Mapping[str, Any],
                on_start: Optional[AnimationCallback] = None,
                on_complete: Optional[AnimationCallback] = None) -> "StyleDefinition":
        """
        Animate ``properties`` whenever ``event_name`` fires on an applied target.

        Args:
            event_name: Target event that triggers the animation
            animation_config: AnimationConfig, mapping such as
                ``{"duration": 0.2, "easing": "quad_out"}``, or a duration
            properties: End values keyed by property name
            on_start: Called with the Animation each time it starts
            on_complete: Called with the Animation when a run completes
                (not when it is cancelled or restarted)

        Raises:
            InvalidArgumentError: On any malformed argument
        """
        self._check_alive("connect")
        validate_event_name(event_name)
        binding = AnimationBinding.create(animation_config, properties, on_start, on_complete)
        self.animation_bindings.setdefault(event_name, []).append(binding)
        return self

    def connect_fn(self, event_name: str, callback: Callable[..., Any]) -> "StyleDefinition":
        """Call ``callback`` with the event arguments whenever ``event_name`` fires."""
        self._check_alive("connect_fn")
        validate_event_name(event_name)
        self.callback_bindings.setdefault(event_name, []).append(CallbackBinding.create(callback))
        return self

    def disconnect_all(self, event_name: str) -> "StyleDefinition":
        """
        Tear down every animation subscription for ``event_name`` on every
        applied target and drop the event's animation bindings.
        """
        removed = self.animation_bindings.pop(event_name, None)
        disposed = self._tracker.release_event(event_name, tag=ANIMATION_TAG)
        if removed or disposed:
            logger.debug(f"Disconnected {disposed} animation subscriptions for {event_name!r} on {self!r}")
        return self

    def disconnect_all_fn(self, event_name: str) -> "StyleDefinition":
        """Same as disconnect_all(), for plain callbacks."""
        removed = self.callback_bindings.pop(event_name, None)
        disposed = self._tracker.release_event(event_name, tag=CALLBACK_TAG)
        if removed or disposed:
            logger.debug(f"Disconnected {disposed} callback subscriptions for {event_name!r} on {self!r}")
        return self

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply(self, targets: Any) -> "StyleDefinition":
        """
        Apply the style to one target or a list/tuple of targets.

        Re-applying a target replaces its previous subscriptions. If applying
        to a target fails part-way, that target's new subscriptions are
        disposed before the error propagates.
        """
        self._check_alive("apply")
        for target in self._normalize_targets(targets):
            self._apply_one(target)
        return self

    @staticmethod
    def _normalize_targets(targets: Any) -> List[Any]:
        if isinstance(targets, (list, tuple)):
            target_list = list(targets)
        else:
            target_list = [targets]
        for target in target_list:
            if target is None:
                raise InvalidArgumentError("Cannot apply a style to None")
        return target_list

    def _apply_one(self, target: Any) -> None:
        if self._tracker.is_applied(target):
            released = self._tracker.release_target(target)
            logger.debug(f"Re-applying {self!r} to {target!r} (released {released} subscriptions)")

        self._tracker.ensure(target)
        try:
            for key, value in self.initial_properties.items():
                target.set_property(key, value)

            for event_name, bindings in self.animation_bindings.items():
                source = target.event(event_name)
                for binding in bindings:
                    animation = self.engine.create(target, binding.config, binding.properties)
                    playback = BindingPlayback(binding, animation)
                    handle = source.connect(playback.replay)
                    handle.tag = ANIMATION_TAG
                    handle.own(playback.release)
                    self._tracker.record(target, event_name, handle)

            for event_name, callbacks in self.callback_bindings.items():
                source = target.event(event_name)
                for binding in callbacks:
                    handle = source.connect(binding.callback)
                    handle.tag = CALLBACK_TAG
                    self._tracker.record(target, event_name, handle)
        except Exception:
            self._tracker.release_target(target)
            raise

        logger.debug(f"Applied {self!r} to {target!r} ({self._tracker.subscription_count(target)} subscriptions)")

    def unapply(self, target: Any) -> "StyleDefinition":
        """Dispose every subscription this style holds on ``target``. No-op if not applied."""
        if self._tracker.is_applied(target):
            released = self._tracker.release_target(target)
            logger.debug(f"Unapplied {self!r} from {target!r} ({released} subscriptions)")
        return self

    def destroy(self) -> None:
        """
        Unapply from every target, release the name, and make the style inert.

        Builder and apply calls on a destroyed style raise StyleDestroyedError;
        unapply() and destroy() stay harmless.
        """
        if self._destroyed:
            return
        released = self._tracker.release_all()
        if self.name is not None:
            self._registry.unregister(self.name, self)
        self.animation_bindings.clear()
        self.callback_bindings.clear()
        self.initial_properties = {}
        self._destroyed = True
        logger.info(f"Destroyed style {self!r} ({released} subscriptions released)")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def applied_targets(self) -> List[Any]:
        return self._tracker.targets()

    def is_applied(self, target: Any) -> bool:
        return self._tracker.is_applied(target)

    def subscription_count(self, target: Any = None) -> int:
        """Live subscriptions held for ``target``, or across all targets."""
        return self._tracker.subscription_count(target)

    def bindings_for(self, event_name: str) -> List[AnimationBinding]:
        return list(self.animation_bindings.get(event_name, []))

    def callbacks_for(self, event_name: str) -> List[Callable[..., Any]]:
        return [binding.callback for binding in self.callback_bindings.get(event_name, [])]

    def __repr__(self) -> str:
        label = repr(self.name) if self.name is not None else "anonymous"
        state = " destroyed" if self._destroyed else ""
        return f"<StyleDefinition {label} targets={len(self._tracker)}{state}>"
