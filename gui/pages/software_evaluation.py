"""
Software evaluation result page.

Purpose
-------
- Collect per-package compatibility verdicts from the worker.
- Present compatible and incompatible apps side by side, with icons.

Notes
-----
Classification lives in the engine (SoftwareEvaluation). This page only wires
worker signals to it and renders its lists.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor, QFont, QGuiApplication, QIcon, QPalette
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

from gui.adapters.worker_adapter import WorkerAdapter
from upgrade_engine.data_models import AppInfo
from upgrade_engine.evaluation import SoftwareEvaluation
from upgrade_engine.icons import ICON_SIZE_PX, IconSourceKind, resolve_icon_source
from upgrade_engine.paths import SystemPaths
from upgrade_engine.render import COMPATIBLE_HEADER, INCOMPATIBLE_HEADER

logger = logging.getLogger(__name__)

DARK_BASE_COLOR = "#FF232323"
LIGHT_BASE_COLOR = "#FFFFFFFF"

HEADER_HEIGHT_PX = 36
ROW_HEIGHT_PX = 48

POWER_TIP = "The upgrade may take a long time. Please plug in to avoid interruption."


def is_dark_mode() -> bool:
    """Return True when the application uses a dark colour scheme."""
    scheme = QGuiApplication.styleHints().colorScheme()
    if scheme == Qt.ColorScheme.Dark:
        return True
    if scheme == Qt.ColorScheme.Light:
        return False
    return QGuiApplication.palette().color(QPalette.ColorRole.Window).lightness() < 128


def load_app_icon(icon_name: str) -> QIcon:
    """Load an app icon, falling back to the generic executable icon."""
    source = resolve_icon_source(icon_name)
    fallback = QIcon.fromTheme(source.fallback)
    if source.kind is IconSourceKind.FILE:
        icon = QIcon(source.value)
        return fallback if icon.isNull() else icon
    return QIcon.fromTheme(source.value, fallback)


def generate_cell_widget(info: AppInfo) -> QWidget:
    """Build a table cell showing an app icon followed by its name."""
    cell = QWidget()
    layout = QHBoxLayout(cell)
    layout.setContentsMargins(10, 0, 10, 0)

    icon_label = QLabel()
    icon_label.setFixedSize(ICON_SIZE_PX, ICON_SIZE_PX)
    icon_label.setPixmap(load_app_icon(info.icon_name).pixmap(ICON_SIZE_PX, ICON_SIZE_PX))

    name_label = QLabel(info.name)
    f = name_label.font()
    f.setWeight(QFont.Weight.Medium)
    name_label.setFont(f)
    name_label.setObjectName("appNameLabel")

    layout.addWidget(icon_label)
    layout.addSpacing(10)
    layout.addWidget(name_label)
    layout.addStretch(1)
    return cell


class SoftwareEvaluationWidget(QWidget):
    """
    Result page listing compatible and incompatible apps.

    Responsibilities
    ----------------
    - Keep the latest package -> desktop entries snapshot from the worker.
    - Classify apps as verdicts arrive.
    - Fill the two-column table on demand.
    """

    def __init__(
        self,
        worker: WorkerAdapter,
        paths: SystemPaths | None = None,
        locale: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._evaluation = SoftwareEvaluation(paths=paths, locale=locale)
        QIcon.setThemeSearchPaths([str(self._evaluation.paths.icons_dir)])

        self.title_label = QLabel("Evaluation Result")
        f = self.title_label.font()
        f.setPointSize(14)
        f.setBold(True)
        self.title_label.setFont(f)

        self.table = QTableWidget(0, 2)
        self.table.setHorizontalHeaderLabels([COMPATIBLE_HEADER, INCOMPATIBLE_HEADER])
        header = self.table.horizontalHeader()
        header.setVisible(True)
        header.setDefaultAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
        header.setFixedHeight(HEADER_HEIGHT_PX)
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.verticalHeader().setDefaultSectionSize(ROW_HEIGHT_PX)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.table.setShowGrid(False)

        self.power_tip_label = QLabel(POWER_TIP)
        self.power_tip_label.setStyleSheet("color: #888;")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(74, 0, 74, 0)
        layout.addSpacing(30)
        layout.addWidget(self.title_label, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addSpacing(20)
        layout.addWidget(self.table, 1)
        layout.addSpacing(20)
        layout.addWidget(self.power_tip_label, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addSpacing(8)

        # Same role as the table items, or widgets below show through the table.
        self.setBackgroundRole(QPalette.ColorRole.Base)
        self.setAutoFillBackground(True)
        self._apply_palette()

        QGuiApplication.styleHints().colorSchemeChanged.connect(self._on_color_scheme_changed)
        worker.apps_available.connect(self._on_apps_available)
        worker.migrate_status.connect(self.update_app_infos)

    @property
    def evaluation(self) -> SoftwareEvaluation:
        return self._evaluation

    def _apply_palette(self) -> None:
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Base, QColor(DARK_BASE_COLOR if is_dark_mode() else LIGHT_BASE_COLOR))
        self.setPalette(palette)

    def _on_color_scheme_changed(self, _scheme: object = None) -> None:
        self._apply_palette()

    def _on_apps_available(self, apps: object) -> None:
        self._evaluation.set_package_map(apps)  # type: ignore[arg-type]

    @Slot(str, int)
    def update_app_infos(self, package: str, status: int) -> None:
        self._evaluation.update_app_infos(package, status)

    def fill_table(self) -> None:
        """Render both classification lists into the table."""
        rows = self._evaluation.table_rows()
        self.table.clearContents()
        self.table.setRowCount(len(rows))
        for row, (compatible, incompatible) in enumerate(rows):
            if compatible is not None:
                self.table.setCellWidget(row, 0, generate_cell_widget(compatible))
                logger.debug("compat app: %s", compatible.name)
            if incompatible is not None:
                self.table.setCellWidget(row, 1, generate_cell_widget(incompatible))
                logger.debug("incompat app: %s", incompatible.name)

    def clear_app_infos(self) -> None:
        """Forget classified apps before a new evaluation run."""
        self._evaluation.clear_app_infos()
