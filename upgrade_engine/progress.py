"""
Software check progress tracking.

A two-state machine: RUNNING until the worker reports exactly 100, then DONE.
There is no regression handling, timeout or cancellation.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

PROGRESS_MIN = 0
PROGRESS_DONE = 100


class CheckState(str, Enum):
    """State of the software check."""

    RUNNING = "running"
    DONE = "done"


class CheckProgress:
    """
    Tracks worker progress and fires completion callbacks once.

    Notes
    -----
    Callbacks run synchronously inside :meth:`update`, on the caller's thread.
    """

    def __init__(self, initial_value: int = 1) -> None:
        self._value = initial_value
        self._state = CheckState.RUNNING
        self._done_callbacks: list[Callable[[], None]] = []

    @property
    def value(self) -> int:
        return self._value

    @property
    def state(self) -> CheckState:
        return self._state

    @property
    def is_done(self) -> bool:
        return self._state is CheckState.DONE

    def connect_done(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked when the check reaches 100."""
        self._done_callbacks.append(callback)

    def update(self, value: int) -> CheckState:
        """
        Record a progress value from the worker.

        Parameters
        ----------
        value:
            Progress percentage. Values outside 0..100 are logged and ignored.

        Returns
        -------
        CheckState
            State after the update.
        """
        if not PROGRESS_MIN <= value <= PROGRESS_DONE:
            logger.warning("Ignoring out-of-range progress value %r", value)
            return self._state

        self._value = value
        if value == PROGRESS_DONE and self._state is CheckState.RUNNING:
            self._state = CheckState.DONE
            logger.info("Software check done")
            for callback in list(self._done_callbacks):
                callback()
        return self._state
