"""
System upgrade assistant GUI.

Stacked window: the software check progress page, then the evaluation result
page once the worker reports completion.
"""

from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox, QStackedWidget, QVBoxLayout, QWidget

from gui.adapters.worker_adapter import WorkerAdapter
from gui.pages.software_check_progress import SoftwareCheckProgressWidget
from gui.pages.software_evaluation import SoftwareEvaluationWidget
from gui.settings_store import GuiSettings, load_gui_settings
from upgrade_engine.worker import ReplayWorker


class AppWindow(QWidget):
    """
    Main window for the upgrade assistant.

    Responsibilities
    ----------------
    - Host the progress and evaluation pages.
    - Switch to the evaluation page when the software check completes.
    - Coordinate clean shutdown of the worker adapter thread.
    """

    def __init__(self, worker: WorkerAdapter, settings: GuiSettings) -> None:
        """
        Initialize the main window and construct the page stack.

        Parameters
        ----------
        worker:
            Adapter delivering worker events to the pages.
        settings:
            Loaded GUI settings (system paths, locale).
        """
        super().__init__()
        self.setWindowTitle("System Upgrade Assistant")
        self.resize(820, 600)

        self._worker = worker
        self._worker.failed.connect(self._on_worker_failed)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.pages = QStackedWidget()

        self.progress_page = SoftwareCheckProgressWidget(worker)
        self.pages.addWidget(self.progress_page)

        self.evaluation_page = SoftwareEvaluationWidget(
            worker,
            paths=settings.system_paths(),
            locale=settings.locale,
        )
        self.evaluation_page.clear_app_infos()
        self.pages.addWidget(self.evaluation_page)

        self.progress_page.all_check_done.connect(self._on_all_check_done)

        root.addWidget(self.pages, 1)

    def _on_all_check_done(self) -> None:
        self.evaluation_page.fill_table()
        self.pages.setCurrentWidget(self.evaluation_page)

    def _on_worker_failed(self, message: str) -> None:
        QMessageBox.critical(self, "Software evaluation failed", message)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """
        Handle window close by shutting down the worker thread.

        Parameters
        ----------
        event:
            Qt close event.
        """
        try:
            self._worker.shutdown()
        finally:
            super().closeEvent(event)


def run_gui(*, settings: GuiSettings, worker: ReplayWorker | None) -> int:
    """
    Run the GUI application.

    Parameters
    ----------
    settings:
        Settings controlling system paths and locale.
    worker:
        Replay worker to drive the screens. None leaves the window waiting
        for events.

    Returns
    -------
    int
        Qt application exit code.
    """
    app = QApplication.instance() or QApplication(sys.argv)
    adapter = WorkerAdapter()
    w = AppWindow(adapter, settings)
    w.show()
    if worker is not None:
        adapter.start_replay(worker)
    try:
        return app.exec()
    finally:
        adapter.shutdown()


def main(events: Path | None = None) -> int:
    """Run the GUI with persisted settings and an optional event script."""
    settings = load_gui_settings(config_root=None)
    worker = ReplayWorker.from_script(events) if events is not None else None
    return run_gui(settings=settings, worker=worker)


if __name__ == "__main__":
    raise SystemExit(main())
