"""
Runtime settings for stylekit.

Values come from environment variables so hosts can tune the animation tick
rate and target strictness without code changes. Unparseable values fall back
to the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from stylekit.logging.logger import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_FPS = 60
MIN_FPS = 10
MAX_FPS = 240

_TRUE_VALUES = ("1", "true", "on", "yes")
_FALSE_VALUES = ("0", "false", "off", "no")


def parse_flag(raw: Optional[str], default: bool) -> bool:
    """Parse an on/off environment flag, returning ``default`` when unset or unknown."""
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning(f"Ignoring unrecognised flag value {raw!r}")
    return default


def clamp_fps(fps) -> int:
    """Clamp a requested tick rate into the supported range."""
    try:
        value = int(fps)
    except (TypeError, ValueError):
        return DEFAULT_FPS
    return max(MIN_FPS, min(MAX_FPS, value))


@dataclass
class StyleKitSettings:
    """Settings shared by the animation engine, targets and logging."""
    fps: int = DEFAULT_FPS
    strict_properties: bool = True    # unknown property keys raise
    strict_events: bool = True        # unknown event names raise
    debug: bool = False
    verbose: bool = False
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StyleKitSettings":
        env = os.environ if environ is None else environ

        raw_fps = env.get("STYLEKIT_FPS")
        fps = DEFAULT_FPS if raw_fps is None else clamp_fps(raw_fps)

        raw_dir = env.get("STYLEKIT_LOG_DIR")
        log_dir = Path(raw_dir) if raw_dir else None

        return cls(
            fps=fps,
            strict_properties=parse_flag(env.get("STYLEKIT_STRICT_PROPERTIES"), True),
            strict_events=parse_flag(env.get("STYLEKIT_STRICT_EVENTS"), True),
            debug=parse_flag(env.get("STYLEKIT_DEBUG"), False),
            verbose=parse_flag(env.get("STYLEKIT_VERBOSE"), False),
            log_dir=log_dir,
        )


_settings: Optional[StyleKitSettings] = None


def get_settings() -> StyleKitSettings:
    """Return the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = StyleKitSettings.from_env()
    return _settings


def reset_settings(settings: Optional[StyleKitSettings] = None) -> None:
    """Replace the cached settings (``None`` re-reads the environment lazily)."""
    global _settings
    _settings = settings


def configure_logging(settings: Optional[StyleKitSettings] = None) -> None:
    """Set up stylekit logging from ``settings`` (defaults to the environment)."""
    settings = settings if settings is not None else get_settings()
    setup_logging(debug=settings.debug, verbose=settings.verbose, log_dir=settings.log_dir)
