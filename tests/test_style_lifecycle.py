"""
Tests for unapply, disconnect and destroy, and the bookkeeping behind them.
"""
import pytest
from unittest.mock import MagicMock

from stylekit.animation import Animation, AnimationConfig, AnimationState
from stylekit.errors import StyleDestroyedError
from stylekit.events import EventSignal, SubscriptionHandle
from stylekit.styles.binding import AnimationBinding
from stylekit.styles.tracker import (
    ANIMATION_TAG,
    CALLBACK_TAG,
    ApplicationTracker,
    BindingPlayback,
    PlaybackPhase,
)
from stylekit.targets import PropertyTarget


@pytest.fixture
def hover_log():
    return []


@pytest.fixture
def hover_style(make_style, hover_log):
    style = make_style("Hover")
    style.connect(
        "MouseEnter", 0.2, {"opacity": 1.0},
        on_start=lambda anim: hover_log.append("start"),
        on_complete=lambda anim: hover_log.append("done"),
    )
    style.connect_fn("MouseEnter", lambda *args: hover_log.append("fn"))
    return style


class TestCompletion:
    """on_complete fires once per finished run."""

    def test_refire_before_completion_reports_once(self, hover_style, hover_log, engine, button):
        hover_style.apply(button)

        button.fire("MouseEnter")
        engine.advance(0.1)
        button.fire("MouseEnter")
        engine.finish_all()

        assert hover_log == ["start", "fn", "start", "fn", "done"]

    def test_each_completed_run_reports(self, hover_style, hover_log, engine, button):
        hover_style.apply(button)

        for _ in range(3):
            button.fire("MouseEnter")
            engine.finish_all()

        assert hover_log.count("done") == 3

    def test_restart_restarts_from_current_value(self, make_style, engine, button):
        style = make_style()
        style.connect("MouseEnter", 1.0, {"opacity": 1.0})
        style.apply(button)

        button.fire("MouseEnter")
        engine.advance(0.5)
        button.fire("MouseEnter")
        engine.advance(0.5)

        assert button["opacity"] == pytest.approx(0.75)

    def test_targets_complete_independently(self, hover_style, hover_log, engine, make_button):
        first, second = make_button("a"), make_button("b")
        hover_style.apply([first, second])

        first.fire("MouseEnter")
        engine.advance(0.1)
        second.fire("MouseEnter")
        engine.advance(0.1)

        assert hover_log.count("done") == 1
        assert first["opacity"] == 1.0
        assert second["opacity"] == pytest.approx(0.5)

        engine.advance(0.1)
        assert hover_log.count("done") == 2


class TestUnapply:
    """Removing a style from one target."""

    def test_unapply_stops_effects(self, hover_style, hover_log, button):
        hover_style.apply(button)
        hover_style.unapply(button)

        button.fire("MouseEnter")

        assert hover_log == []
        assert not hover_style.is_applied(button)
        assert button.events.get_subscription_count() == 0

    def test_unapply_cancels_pending_completion(self, hover_style, hover_log, engine, button):
        hover_style.apply(button)
        button.fire("MouseEnter")
        engine.advance(0.1)

        hover_style.unapply(button)
        engine.finish_all()

        assert hover_log == ["start", "fn"]
        assert engine.created[0].state == AnimationState.CANCELLED
        assert button["opacity"] == pytest.approx(0.5)

    def test_unapply_leaves_other_targets(self, hover_style, hover_log, make_button):
        first, second = make_button("a"), make_button("b")
        hover_style.apply([first, second])

        hover_style.unapply(first)
        second.fire("MouseEnter")

        assert hover_style.applied_targets() == [second]
        assert hover_log == ["start", "fn"]

    def test_unapply_unknown_target_is_noop(self, hover_style, button):
        assert hover_style.unapply(button) is hover_style
        assert hover_style.subscription_count() == 0

    def test_apply_after_unapply(self, hover_style, hover_log, button):
        hover_style.apply(button)
        hover_style.unapply(button)
        hover_style.apply(button)

        button.fire("MouseEnter")

        assert hover_log == ["start", "fn"]


class TestDisconnect:
    """Dropping every binding for one event."""

    def test_disconnect_all_keeps_callbacks(self, hover_style, hover_log, engine, button):
        hover_style.apply(button)

        hover_style.disconnect_all("MouseEnter")
        button.fire("MouseEnter")

        assert hover_log == ["fn"]
        assert engine.playing_count == 0
        assert hover_style.bindings_for("MouseEnter") == []
        assert hover_style.subscription_count(button) == 1

    def test_disconnect_all_fn_keeps_animations(self, hover_style, hover_log, button):
        hover_style.apply(button)

        hover_style.disconnect_all_fn("MouseEnter")
        button.fire("MouseEnter")

        assert hover_log == ["start"]
        assert hover_style.callbacks_for("MouseEnter") == []

    def test_disconnect_all_leaves_other_events(self, make_style, engine, button):
        style = make_style()
        style.connect("MouseEnter", 0.2, {"opacity": 1.0})
        style.connect("MouseLeave", 0.2, {"opacity": 0.0})
        style.apply(button)

        style.disconnect_all("MouseEnter")
        button.fire("MouseLeave")

        assert engine.playing_count == 1
        assert len(style.bindings_for("MouseLeave")) == 1

    def test_disconnect_all_cancels_in_flight_run(self, hover_style, hover_log, engine, button):
        hover_style.apply(button)
        button.fire("MouseEnter")

        hover_style.disconnect_all("MouseEnter")
        engine.finish_all()

        assert "done" not in hover_log
        assert engine.created[0].state == AnimationState.CANCELLED

    def test_disconnect_applies_to_later_targets(self, hover_style, hover_log, button):
        hover_style.disconnect_all("MouseEnter")
        hover_style.apply(button)

        button.fire("MouseEnter")

        assert hover_log == ["fn"]

    def test_disconnect_unknown_event_is_noop(self, hover_style, button):
        hover_style.apply(button)
        hover_style.disconnect_all("NeverBound").disconnect_all_fn("NeverBound")
        assert hover_style.subscription_count(button) == 2


class TestDestroy:
    """Destroying a definition."""

    def test_destroy_releases_everything(self, hover_style, hover_log, engine, registry, make_button):
        targets = [make_button("a"), make_button("b")]
        hover_style.apply(targets)
        targets[0].fire("MouseEnter")

        hover_style.destroy()
        engine.finish_all()
        for target in targets:
            target.fire("MouseEnter")

        assert hover_log == ["start", "fn"]
        assert hover_style.is_destroyed
        assert hover_style.applied_targets() == []
        assert "Hover" not in registry
        assert all(t.events.get_subscription_count() == 0 for t in targets)

    def test_destroy_is_idempotent(self, hover_style):
        hover_style.destroy()
        hover_style.destroy()
        assert hover_style.is_destroyed

    def test_destroyed_style_rejects_builders(self, hover_style, button):
        hover_style.destroy()

        with pytest.raises(StyleDestroyedError):
            hover_style.apply(button)
        with pytest.raises(StyleDestroyedError):
            hover_style.connect("MouseLeave", 0.2, {"opacity": 0.0})
        with pytest.raises(StyleDestroyedError):
            hover_style.connect_fn("MouseLeave", lambda *args: None)
        with pytest.raises(StyleDestroyedError):
            hover_style.set_initial_properties({"color": "red"})
        with pytest.raises(RuntimeError):
            hover_style.change_name("Other")

    def test_destroyed_style_allows_unapply(self, hover_style, button):
        hover_style.destroy()
        assert hover_style.unapply(button) is hover_style

    def test_destroy_leaves_properties(self, make_style, button):
        style = make_style()
        style.set_initial_properties({"color": "teal"})
        style.apply(button)

        style.destroy()

        assert button["color"] == "teal"

    def test_destroy_does_not_release_a_name_it_lost(self, registry, engine):
        from stylekit.styles import StyleDefinition
        style = StyleDefinition("Shared", registry=registry, engine=engine)
        registry.unregister("Shared")
        other = StyleDefinition("Shared", registry=registry, engine=engine)

        style.destroy()

        assert registry.get("Shared") is other
        other.destroy()

    def test_repr_reports_state(self, hover_style):
        assert "'Hover'" in repr(hover_style)
        hover_style.destroy()
        assert "destroyed" in repr(hover_style)


class TestBindingPlayback:
    """Per (target, binding) replay state."""

    @pytest.fixture
    def animation(self):
        target = PropertyTarget({"opacity": 0.0})
        return Animation(target, AnimationConfig(1.0), {"opacity": 1.0})

    def test_phases_with_completion_hook(self, animation):
        done = []
        binding = AnimationBinding.create(1.0, {"opacity": 1.0}, on_complete=done.append)
        playback = BindingPlayback(binding, animation)

        assert playback.phase == PlaybackPhase.IDLE
        playback.replay()
        assert playback.phase == PlaybackPhase.WAITING_COMPLETION

        animation.update(1.0)
        assert playback.phase == PlaybackPhase.IDLE
        assert done == [animation]

    def test_failing_on_start_still_reports_completion(self, make_style, engine, button):
        log = []

        def broken_start(anim):
            raise RuntimeError("on_start failed")

        style = make_style()
        style.connect("MouseEnter", 0.2, {"opacity": 1.0},
                      on_start=broken_start, on_complete=lambda anim: log.append("done"))
        style.apply(button)

        button.fire("MouseEnter")
        engine.finish_all()

        assert log == ["done"]
        assert button["opacity"] == 1.0

    def test_phase_without_completion_hook(self, animation):
        binding = AnimationBinding.create(1.0, {"opacity": 1.0})
        playback = BindingPlayback(binding, animation)

        playback.replay("ignored", 1)

        assert playback.watcher is None
        assert playback.phase == PlaybackPhase.PLAYING

    def test_replay_keeps_one_watcher(self, animation):
        binding = AnimationBinding.create(1.0, {"opacity": 1.0}, on_complete=lambda a: None)
        playback = BindingPlayback(binding, animation)

        playback.replay()
        first = playback.watcher
        playback.replay()

        assert first.disposed
        assert playback.watcher is not first
        assert animation.completed.receiver_count() == 1

    def test_release_cancels(self, animation):
        done = []
        binding = AnimationBinding.create(1.0, {"opacity": 1.0}, on_complete=done.append)
        playback = BindingPlayback(binding, animation)
        playback.replay()

        playback.release()

        assert animation.state == AnimationState.CANCELLED
        assert animation.completed.receiver_count() == 0
        assert done == []


class TestApplicationTracker:
    """Handle grouping and release."""

    @staticmethod
    def _handle(tag):
        return SubscriptionHandle(MagicMock(), tag=tag)

    def test_record_and_count(self):
        tracker = ApplicationTracker()
        target = object()
        tracker.record(target, "a", self._handle(ANIMATION_TAG))
        tracker.record(target, "a", self._handle(CALLBACK_TAG))
        tracker.record(target, "b", self._handle(CALLBACK_TAG))

        assert target in tracker
        assert len(tracker) == 1
        assert tracker.subscription_count(target) == 3
        assert len(tracker.handles(target, "a")) == 2

    def test_ensure_marks_applied_without_handles(self):
        tracker = ApplicationTracker()
        target = object()
        tracker.ensure(target)

        assert tracker.is_applied(target)
        assert tracker.subscription_count() == 0

    def test_release_event_by_tag(self):
        tracker = ApplicationTracker()
        target = object()
        animation_handle = self._handle(ANIMATION_TAG)
        callback_handle = self._handle(CALLBACK_TAG)
        tracker.record(target, "a", animation_handle)
        tracker.record(target, "a", callback_handle)

        assert tracker.release_event("a", tag=ANIMATION_TAG) == 1

        assert animation_handle.disposed
        assert not callback_handle.disposed
        assert tracker.handles(target, "a") == [callback_handle]

    def test_release_event_without_tag(self):
        tracker = ApplicationTracker()
        first, second = object(), object()
        tracker.record(first, "a", self._handle(ANIMATION_TAG))
        tracker.record(second, "a", self._handle(CALLBACK_TAG))
        tracker.record(second, "b", self._handle(CALLBACK_TAG))

        assert tracker.release_event("a") == 2
        assert tracker.subscription_count() == 1
        assert tracker.is_applied(first)

    def test_release_target(self):
        tracker = ApplicationTracker()
        target = object()
        handle = self._handle(CALLBACK_TAG)
        tracker.record(target, "a", handle)

        assert tracker.release_target(target) == 1
        assert handle.disposed
        assert not tracker.is_applied(target)
        assert tracker.release_target(target) == 0

    def test_failing_handle_does_not_block_others(self, caplog):
        tracker = ApplicationTracker()
        target = object()

        def broken():
            raise RuntimeError("gone")

        tracker.record(target, "a", SubscriptionHandle(broken))
        survivor = self._handle(CALLBACK_TAG)
        tracker.record(target, "a", survivor)

        tracker.release_all()

        assert survivor.disposed
        assert len(tracker) == 0
        assert "gone" in caplog.text

    def test_release_through_real_signal(self):
        tracker = ApplicationTracker()
        signal = EventSignal("demo")
        target = object()
        tracker.record(target, "demo", signal.connect(lambda: None))

        tracker.release_all()

        assert signal.receiver_count() == 0
