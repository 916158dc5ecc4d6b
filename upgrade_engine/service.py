"""
Software evaluation orchestration without a GUI.

This module coordinates:
- progress tracking (completion at 100)
- package map snapshots from the worker
- per-package classification into compatible / incompatible apps
- deterministic reporting

The GUI wires the same engine pieces through Qt signals instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from upgrade_engine.data_models import AppInfo
from upgrade_engine.evaluation import SoftwareEvaluation
from upgrade_engine.paths import SystemPaths
from upgrade_engine.progress import CheckProgress
from upgrade_engine.render import render_evaluation_text
from upgrade_engine.worker import ReplayWorker, UpgradeWorker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EvaluationRunResult:
    """
    Outcome of one evaluation run.

    Attributes
    ----------
    final_progress:
        Last accepted progress value.
    check_done:
        Whether the worker reached 100.
    compatible:
        Compatible apps in classification order.
    incompatible:
        Incompatible apps in classification order.
    report_text:
        Rendered text report.
    """

    final_progress: int
    check_done: bool
    compatible: tuple[AppInfo, ...]
    incompatible: tuple[AppInfo, ...]
    report_text: str


def attach_evaluation(
    worker: UpgradeWorker,
    *,
    evaluation: SoftwareEvaluation,
    progress: CheckProgress,
) -> None:
    """Register the evaluation and progress tracker on a worker's event streams."""
    worker.connect_progress(progress.update)
    worker.connect_apps_available(evaluation.set_package_map)
    worker.connect_migrate_status(evaluation.update_app_infos)


def run_software_evaluation(
    worker: ReplayWorker,
    *,
    paths: SystemPaths | None = None,
    locale: str | None = None,
) -> EvaluationRunResult:
    """
    Replay a worker's events through a fresh evaluation.

    Parameters
    ----------
    worker:
        Worker to run. Its events are emitted synchronously.
    paths:
        System locations for desktop entries. Defaults to ``/usr/share``.
    locale:
        Locale override for localized names.

    Returns
    -------
    EvaluationRunResult
        Classified apps and the rendered report.
    """
    evaluation = SoftwareEvaluation(paths=paths, locale=locale)
    evaluation.clear_app_infos()
    progress = CheckProgress()
    attach_evaluation(worker, evaluation=evaluation, progress=progress)

    worker.run()

    if not progress.is_done:
        logger.warning("Worker finished without reporting completion (last progress %d)", progress.value)

    compatible = evaluation.compatible_apps
    incompatible = evaluation.incompatible_apps
    return EvaluationRunResult(
        final_progress=progress.value,
        check_done=progress.is_done,
        compatible=compatible,
        incompatible=incompatible,
        report_text=render_evaluation_text(compatible, incompatible, check_done=progress.is_done),
    )
