"""
Shared pytest fixtures for stylekit tests.
"""
import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from stylekit.animation.animator import Animation
from stylekit.config import StyleKitSettings, reset_settings
from stylekit.styles.registry import StyleRegistry
from stylekit.targets.property_target import PropertyTarget


class SteppedEngine:
    """Animation factory ticked by hand, for deterministic timing in tests."""

    def __init__(self):
        self.created = []
        self._playing = []

    def create(self, target, config, properties):
        animation = Animation(target, config, properties, scheduler=self._schedule)
        self.created.append(animation)
        return animation

    def _schedule(self, animation):
        if animation not in self._playing:
            self._playing.append(animation)

    def advance(self, delta_time):
        for animation in list(self._playing):
            if not animation.update(delta_time) and not animation.is_playing:
                self._playing.remove(animation)

    def finish_all(self):
        self.advance(3600.0)

    @property
    def playing_count(self):
        return len(self._playing)


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default settings regardless of STYLEKIT_* env vars."""
    reset_settings(StyleKitSettings())
    yield
    reset_settings(None)


@pytest.fixture
def clean_logging(tmp_path):
    """Point log files at tmp_path and undo setup_logging() afterwards."""
    import logging
    from stylekit.logging import logger as logger_module

    package_logger = logging.getLogger("stylekit")
    saved_level = package_logger.level
    saved_dir = logger_module._LOG_DIR
    yield tmp_path
    for handler in list(package_logger.handlers):
        if getattr(handler, logger_module._HANDLER_MARK, False):
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(saved_level)
    logger_module._LOG_DIR = saved_dir
    logger_module._VERBOSE = False


@pytest.fixture
def registry():
    """Fresh style registry, isolated from the process-wide one."""
    registry = StyleRegistry()
    yield registry
    registry.clear()


@pytest.fixture
def engine():
    return SteppedEngine()


@pytest.fixture
def make_style(registry, engine):
    """Factory for definitions bound to the test registry and stepped engine."""
    from stylekit.styles.definition import StyleDefinition
    created = []

    def _make(name=None):
        style = StyleDefinition(name, registry=registry, engine=engine)
        created.append(style)
        return style

    yield _make
    for style in created:
        style.destroy()


@pytest.fixture
def button():
    return PropertyTarget(
        {"color": "gray", "opacity": 0.0, "width": 100, "label": ""},
        events=("MouseEnter", "MouseLeave", "Activated"),
        name="buttonA",
    )


@pytest.fixture
def make_button():
    def _make(name="button"):
        return PropertyTarget(
            {"color": "gray", "opacity": 0.0, "width": 100, "label": ""},
            events=("MouseEnter", "MouseLeave", "Activated"),
            name=name,
        )
    return _make
