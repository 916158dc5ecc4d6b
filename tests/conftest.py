from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

from upgrade_engine.logging_setup import LOGGER_NAMES


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep user settings, logs and locale out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.delenv(var, raising=False)

    saved_handlers = {name: list(logging.getLogger(name).handlers) for name in LOGGER_NAMES}
    saved_propagate = {name: logging.getLogger(name).propagate for name in LOGGER_NAMES}
    saved_hook = sys.excepthook
    yield
    sys.excepthook = saved_hook
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in saved_handlers[name]:
                handler.close()
        logger.handlers = saved_handlers[name]
        logger.propagate = saved_propagate[name]


@pytest.fixture(scope="session")
def qapp():
    """Session-wide QApplication on the offscreen platform."""
    pytest.importorskip("PySide6")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app

