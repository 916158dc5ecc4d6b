"""
Logging configuration for the assistant.

All modules log through ``logging.getLogger(__name__)``. This module attaches
handlers once, to the top-level loggers of the project packages: a rotating
file under the state directory and a console handler.
"""

from __future__ import annotations

import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path

from upgrade_engine.paths import default_state_root

LOGGER_NAMES: tuple[str, ...] = ("upgrade_engine", "gui", "sysupgrade")

LOG_FILE_NAME = "app.log"

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_CONSOLE_FORMAT = "[%(levelname)s] %(message)s"


def log_file_path(state_root: Path | None = None) -> Path:
    """Return the log file location, defaulting to the XDG state directory."""
    root = default_state_root() if state_root is None else state_root
    return root / "logs" / LOG_FILE_NAME


def setup_logging(
    *,
    console_level: int = logging.INFO,
    state_root: Path | None = None,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Configure project loggers.

    Parameters
    ----------
    console_level:
        Level for the console handler. The file handler always logs DEBUG.
    state_root:
        Override for the state directory holding ``logs/app.log``.
    log_to_file:
        Disable to log to the console only.

    Returns
    -------
    logging.Logger
        The ``sysupgrade`` logger.

    Notes
    -----
    Calling this more than once does not add duplicate handlers; the console
    level is updated instead. A log directory that cannot be created disables
    file logging.
    """
    file_handler: RotatingFileHandler | None = None
    already_logging_to_file = any(
        isinstance(h, RotatingFileHandler) for h in logging.getLogger(LOGGER_NAMES[0]).handlers
    )
    if log_to_file and not already_logging_to_file:
        path = log_file_path(state_root)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(path, maxBytes=512_000, backupCount=3, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        except OSError as exc:
            print(f"WARNING: file logging disabled: {exc}", file=sys.stderr)
            file_handler = None

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        console = next((h for h in logger.handlers if getattr(h, "_sysupgrade_console", False)), None)
        if console is None:
            console = logging.StreamHandler()
            console._sysupgrade_console = True  # type: ignore[attr-defined]
            console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
            logger.addHandler(console)
        console.setLevel(console_level)

        if file_handler is not None:
            logger.addHandler(file_handler)

    root_logger = logging.getLogger("sysupgrade")
    if file_handler is not None:
        root_logger.debug("Logging initialized at %s", file_handler.baseFilename)
    return root_logger


def install_excepthook(logger: logging.Logger | None = None) -> None:
    """Install a ``sys.excepthook`` that logs uncaught exceptions with traceback."""
    lg = logger or logging.getLogger("sysupgrade")

    def _hook(exc_type, exc, tb) -> None:
        lg.error("Uncaught exception:")
        for line in traceback.format_exception(exc_type, exc, tb):
            lg.error(line.rstrip())
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _hook
