"""
Centralized logging configuration for stylekit.

Uses a rotating file handler with logs stored in a logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_VERBOSE: bool = False
# Default log location is a logs/ directory beside the working directory.
# setup_logging() may point it elsewhere; get_log_dir() always reflects the
# location used by the active file handler.
_LOG_DIR: Path = Path.cwd() / "logs"
_LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'
_HANDLER_MARK = "_stylekit_handler"


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    return _LOG_DIR


def setup_logging(debug: bool = False, verbose: bool = False,
                  log_dir: Optional[Path] = None) -> None:
    """
    Configure stylekit logging with file rotation.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: When True, enables per-emission and per-tick debug lines.
            Verbose mode also implies debug-level logging.
        log_dir: Directory for stylekit.log (defaults to ./logs).
    """
    global _VERBOSE, _LOG_DIR

    debug_enabled = debug or verbose
    if log_dir is not None:
        _LOG_DIR = Path(log_dir)

    log_dir_path = get_log_dir()
    log_dir_path.mkdir(parents=True, exist_ok=True)
    log_file = log_dir_path / "stylekit.log"

    level = logging.DEBUG if debug_enabled else logging.INFO

    formatter = logging.Formatter(_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    setattr(file_handler, _HANDLER_MARK, True)

    package_logger = logging.getLogger("stylekit")
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            package_logger.removeHandler(handler)
            handler.close()

    package_logger.setLevel(level)
    package_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        setattr(console_handler, _HANDLER_MARK, True)
        package_logger.addHandler(console_handler)

    _VERBOSE = bool(verbose)

    package_logger.info(
        f"stylekit logging initialized (debug={debug_enabled}, verbose={_VERBOSE}, dir={log_dir_path})"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""
    return _VERBOSE
