"""
Software check progress page.

Shows worker progress while installed apps are evaluated and announces
completion to the hosting window.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget

from gui.adapters.worker_adapter import WorkerAdapter
from upgrade_engine.progress import PROGRESS_DONE, PROGRESS_MIN, CheckProgress


def _title_font(point_size: int, weight: QFont.Weight) -> QFont:
    f = QFont()
    f.setPointSize(point_size)
    f.setWeight(weight)
    return f


class SoftwareCheckProgressWidget(QWidget):
    """
    Progress page for the software compatibility check.

    Responsibilities
    ----------------
    - Display progress values reported by the worker.
    - Emit ``all_check_done`` once, when the worker reports 100.
    """

    all_check_done = Signal()

    def __init__(self, worker: WorkerAdapter, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._progress = CheckProgress()
        self._progress.connect_done(self.all_check_done.emit)

        self.title_label = QLabel("Software Evaluation")
        self.title_label.setFont(_title_font(20, QFont.Weight.DemiBold))

        self.conditions_label = QLabel("Evaluate the compatibility of installed apps in the new system")
        self.conditions_label.setFont(_title_font(12, QFont.Weight.Normal))

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(PROGRESS_MIN, PROGRESS_DONE)
        self.progress_bar.setValue(self._progress.value)
        self.progress_bar.setFixedWidth(320)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 80, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.progress_bar, 1, Qt.AlignmentFlag.AlignCenter)
        layout.addSpacing(20)
        layout.addWidget(self.title_label, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addSpacing(6)
        layout.addWidget(self.conditions_label, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addSpacing(90)

        worker.progress_updated.connect(self.on_check_progress_update)

    @property
    def progress(self) -> CheckProgress:
        return self._progress

    @Slot(int)
    def on_check_progress_update(self, progress: int) -> None:
        self._progress.update(progress)
        self.progress_bar.setValue(self._progress.value)
