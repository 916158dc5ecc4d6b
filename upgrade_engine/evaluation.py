"""
Software evaluation state.

Holds the latest package -> desktop entry snapshot from the worker and the two
classification lists built from per-package compatibility verdicts.

Notes
-----
- The snapshot is replaced by a single reference assignment on every update
  and read once per verdict, so a verdict never sees a half-applied map.
- Lists accumulate across an evaluation run until :meth:`clear_app_infos`.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from upgrade_engine.data_models import AppInfo, CompatibilityStatus, PackageDesktopMap
from upgrade_engine.desktop_entry import read_desktop_file
from upgrade_engine.paths import SystemPaths, default_system_paths

logger = logging.getLogger(__name__)


class SoftwareEvaluation:
    """
    Classifies applications of evaluated packages as compatible or incompatible.

    Parameters
    ----------
    paths:
        System locations; desktop entries are resolved under
        ``paths.applications_dir``.
    locale:
        Active UI locale for localized names. None means detect from the
        environment on each parse.
    """

    def __init__(self, paths: SystemPaths | None = None, locale: str | None = None) -> None:
        self._paths = paths or default_system_paths()
        self._locale = locale
        self._package_map = PackageDesktopMap.empty()
        self._compatible: list[AppInfo] = []
        self._incompatible: list[AppInfo] = []

    @property
    def paths(self) -> SystemPaths:
        return self._paths

    @property
    def package_map(self) -> PackageDesktopMap:
        return self._package_map

    @property
    def compatible_apps(self) -> tuple[AppInfo, ...]:
        return tuple(self._compatible)

    @property
    def incompatible_apps(self) -> tuple[AppInfo, ...]:
        return tuple(self._incompatible)

    def set_package_map(self, entries: Mapping[str, Iterable[str]]) -> None:
        """Replace the package -> desktop entries snapshot wholesale."""
        snapshot = PackageDesktopMap(entries)
        self._package_map = snapshot
        logger.debug("Package desktop map: %r", snapshot)
        logger.debug("Package desktop map size: %d", len(snapshot))

    def update_app_infos(self, package: str, status: int) -> None:
        """
        Classify the applications of one package.

        Parameters
        ----------
        package:
            Package identifier from the worker.
        status:
            Raw status code; 1 means compatible, anything else incompatible.

        Notes
        -----
        Packages missing from the current snapshot are ignored.
        """
        snapshot = self._package_map
        filenames = snapshot.get(package)
        if filenames is None:
            logger.debug("Ignoring status for unknown package %s", package)
            return

        verdict = CompatibilityStatus.from_code(status)
        target = self._compatible if verdict is CompatibilityStatus.COMPATIBLE else self._incompatible
        for filename in filenames:
            info = read_desktop_file(self._paths.resolve_desktop_entry(filename), self._locale)
            logger.debug("Adding desktop entry %s for %s", filename, package)
            target.append(info)

    def clear_app_infos(self) -> None:
        """Empty both classification lists before a new evaluation run."""
        self._compatible.clear()
        self._incompatible.clear()

    def table_rows(self) -> list[tuple[AppInfo | None, AppInfo | None]]:
        """
        Lay out both lists as rows of a two-column table.

        Returns
        -------
        list[tuple[AppInfo | None, AppInfo | None]]
            ``(compatible, incompatible)`` per row. The shorter column is padded
            with None.
        """
        row_count = max(len(self._compatible), len(self._incompatible))
        rows: list[tuple[AppInfo | None, AppInfo | None]] = []
        for i in range(row_count):
            left = self._compatible[i] if i < len(self._compatible) else None
            right = self._incompatible[i] if i < len(self._incompatible) else None
            rows.append((left, right))
        return rows
