"""Qt adapter for the upgrade worker boundary.

Pages never talk to a worker directly. They are handed a WorkerAdapter and
connect to its signals.

Threading model
--------------
- Worker callbacks emit the adapter's signals on whatever thread the worker
  runs on. Receivers living on the UI thread get them queued by Qt.
- A replay worker runs on a dedicated QThread owned by the adapter.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QMetaObject, QObject, Qt, QThread, Signal, Slot

from upgrade_engine.worker import ReplayWorker, UpgradeWorker

logger = logging.getLogger(__name__)


class ReplayRunner(QObject):
    """Runs a ReplayWorker off the UI thread."""

    finished = Signal()
    failed = Signal(str)

    def __init__(self, worker: ReplayWorker) -> None:
        super().__init__()
        self._worker = worker

    @Slot()
    def run(self) -> None:
        try:
            self._worker.run()
        except Exception as exc:
            logger.exception("Worker replay failed")
            self.failed.emit(str(exc))
            return
        self.finished.emit()


class WorkerAdapter(QObject):
    """Qt adapter that re-emits worker callbacks as signals."""

    progress_updated = Signal(int)
    apps_available = Signal(object)  # Mapping[str, tuple[str, ...]]
    migrate_status = Signal(str, int)  # package, status
    finished = Signal()
    failed = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._thread: QThread | None = None
        self._runner: ReplayRunner | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.isRunning()

    def attach(self, worker: UpgradeWorker) -> None:
        """Forward a worker's event streams to this adapter's signals."""
        worker.connect_progress(self.progress_updated.emit)
        worker.connect_apps_available(self.apps_available.emit)
        worker.connect_migrate_status(self.migrate_status.emit)

    def start_replay(self, worker: ReplayWorker) -> None:
        """
        Attach a replay worker and run it on a background thread.

        Raises
        ------
        RuntimeError
            If a replay is already running.
        """
        if self._thread is not None:
            raise RuntimeError("A worker replay is already running.")

        self.attach(worker)

        self._thread = QThread()
        self._runner = ReplayRunner(worker)
        self._runner.moveToThread(self._thread)
        self._runner.finished.connect(self.finished)
        self._runner.failed.connect(self.failed)
        self._thread.start()

        QMetaObject.invokeMethod(self._runner, "run", Qt.ConnectionType.QueuedConnection)

    def shutdown(self) -> None:
        """
        Stop the replay thread.

        Notes
        -----
        This method is safe to call multiple times.
        """
        if self._thread is None:
            return
        self._thread.quit()
        self._thread.wait()
        self._thread = None
        self._runner = None
