"""
GUI page tests (offscreen Qt).

Worker events are emitted synchronously from the test thread, so signal
delivery is direct and no event loop is needed except for the threaded replay.
"""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QEventLoop, QTimer  # noqa: E402
from PySide6.QtWidgets import QLabel  # noqa: E402

from gui.adapters.worker_adapter import WorkerAdapter  # noqa: E402
from gui.app import AppWindow  # noqa: E402
from gui.pages.software_check_progress import SoftwareCheckProgressWidget  # noqa: E402
from gui.pages.software_evaluation import SoftwareEvaluationWidget, load_app_icon  # noqa: E402
from gui.settings_store import GuiSettings  # noqa: E402
from upgrade_engine.paths import SystemPaths  # noqa: E402
from upgrade_engine.worker import ReplayWorker, WorkerCallbacks, WorkerEvent  # noqa: E402


def _paths(tmp_path: Path) -> SystemPaths:
    apps = tmp_path / "applications"
    apps.mkdir()
    (apps / "foo.desktop").write_text("[Desktop Entry]\nName=Foo App\nIcon=foo-icon\n", encoding="utf-8")
    (apps / "bar.desktop").write_text("[Desktop Entry]\nName=Bar\n", encoding="utf-8")
    (apps / "baz.desktop").write_text("[Desktop Entry]\nName=Baz\n", encoding="utf-8")
    return SystemPaths(applications_dir=apps, icons_dir=tmp_path / "icons")


def _wired() -> tuple[WorkerCallbacks, WorkerAdapter]:
    callbacks = WorkerCallbacks()
    adapter = WorkerAdapter()
    adapter.attach(callbacks)
    return callbacks, adapter


def _cell_name(widget: SoftwareEvaluationWidget, row: int, column: int) -> str | None:
    cell = widget.table.cellWidget(row, column)
    if cell is None:
        return None
    label = cell.findChild(QLabel, "appNameLabel")
    assert label is not None
    return label.text()


def test_progress_page_tracks_values_and_fires_once(qapp) -> None:
    callbacks, adapter = _wired()
    page = SoftwareCheckProgressWidget(adapter)
    done: list[bool] = []
    page.all_check_done.connect(lambda: done.append(True))

    assert page.progress_bar.value() == 1

    callbacks.emit_progress(45)
    assert page.progress_bar.value() == 45
    assert done == []

    callbacks.emit_progress(100)
    callbacks.emit_progress(100)
    assert page.progress_bar.value() == 100
    assert done == [True]


def test_evaluation_page_fills_two_columns(qapp, tmp_path: Path) -> None:
    callbacks, adapter = _wired()
    page = SoftwareEvaluationWidget(adapter, paths=_paths(tmp_path), locale="en_US")

    callbacks.emit_apps_available({"foo": ("foo.desktop",), "legacy": ("bar.desktop", "baz.desktop")})
    callbacks.emit_migrate_status("foo", 1)
    callbacks.emit_migrate_status("legacy", 0)
    callbacks.emit_migrate_status("unknown", 1)
    page.fill_table()

    assert page.table.rowCount() == 2
    assert page.table.horizontalHeaderItem(0).text() == "Compatible Apps"
    assert page.table.horizontalHeaderItem(1).text() == "Incompatible Apps"
    assert _cell_name(page, 0, 0) == "Foo App"
    assert _cell_name(page, 1, 0) is None
    assert _cell_name(page, 0, 1) == "Bar"
    assert _cell_name(page, 1, 1) == "Baz"


def test_evaluation_page_clear_then_refill_is_empty(qapp, tmp_path: Path) -> None:
    callbacks, adapter = _wired()
    page = SoftwareEvaluationWidget(adapter, paths=_paths(tmp_path), locale="en_US")
    callbacks.emit_apps_available({"foo": ("foo.desktop",)})
    callbacks.emit_migrate_status("foo", 1)
    page.fill_table()
    assert page.table.rowCount() == 1

    page.clear_app_infos()
    page.fill_table()

    assert page.table.rowCount() == 0


def test_load_app_icon_never_raises_for_missing_icons(qapp, tmp_path: Path) -> None:
    load_app_icon("")
    load_app_icon("no-such-theme-icon")
    load_app_icon(str(tmp_path / "missing.png"))


def test_window_switches_to_results_when_check_done(qapp, tmp_path: Path) -> None:
    callbacks, adapter = _wired()
    paths = _paths(tmp_path)
    settings = GuiSettings(
        applications_dir=paths.applications_dir,
        icons_dir=paths.icons_dir,
        locale="en_US",
        log_level="INFO",
    )
    window = AppWindow(adapter, settings)
    assert window.pages.currentWidget() is window.progress_page

    callbacks.emit_apps_available({"foo": ("foo.desktop",)})
    callbacks.emit_migrate_status("foo", 1)
    callbacks.emit_progress(100)

    assert window.pages.currentWidget() is window.evaluation_page
    assert _cell_name(window.evaluation_page, 0, 0) == "Foo App"
    window.close()


def _run_until(signal, timeout_ms: int = 5000) -> None:
    loop = QEventLoop()
    signal.connect(loop.quit)
    QTimer.singleShot(timeout_ms, loop.quit)
    loop.exec()


def test_adapter_replays_worker_on_background_thread(qapp) -> None:
    adapter = WorkerAdapter()
    received: list[int] = []
    adapter.progress_updated.connect(received.append)
    worker = ReplayWorker([WorkerEvent.progress(10), WorkerEvent.progress(100)])

    try:
        adapter.start_replay(worker)
        _run_until(adapter.finished)
    finally:
        adapter.shutdown()

    assert received == [10, 100]


def test_adapter_reports_replay_failure(qapp) -> None:
    adapter = WorkerAdapter()
    messages: list[str] = []
    adapter.failed.connect(messages.append)
    worker = ReplayWorker([WorkerEvent.progress(10)])

    def _boom(_value: int) -> None:
        raise RuntimeError("service went away")

    worker.connect_progress(_boom)

    try:
        adapter.start_replay(worker)
        _run_until(adapter.failed)
    finally:
        adapter.shutdown()

    assert messages == ["service went away"]


def test_adapter_shutdown_waits_for_thread_to_stop(qapp) -> None:
    adapter = WorkerAdapter()
    adapter.start_replay(ReplayWorker([WorkerEvent.progress(50)]))
    thread = adapter._thread
    assert thread is not None

    adapter.shutdown()

    assert thread.isFinished()
    assert not adapter.is_running


def test_adapter_refuses_second_replay(qapp) -> None:
    adapter = WorkerAdapter()
    try:
        adapter.start_replay(ReplayWorker([]))
        with pytest.raises(RuntimeError):
            adapter.start_replay(ReplayWorker([]))
    finally:
        adapter.shutdown()
    adapter.shutdown()
