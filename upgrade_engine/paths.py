"""
Filesystem path policy.

This module is the single place that decides where the assistant reads system
data (desktop entries, icon themes) and where it keeps its own files
(settings, logs). Nothing else should hard-code these locations.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

APP_DIR_NAME = "sysupgrade-assistant"

DEFAULT_SHARE_DIR = Path("/usr/share")


@dataclass(frozen=True, slots=True)
class SystemPaths:
    """
    Concrete system locations consumed read-only by the evaluation.

    Attributes
    ----------
    applications_dir:
        Directory holding ``.desktop`` files named by the worker.
    icons_dir:
        Icon theme search root used for theme icon names.
    """

    applications_dir: Path
    icons_dir: Path

    def resolve_desktop_entry(self, filename: str) -> Path:
        """
        Resolve a desktop entry filename to an absolute path.

        Parameters
        ----------
        filename:
            Filename as reported by the worker, relative to ``applications_dir``.

        Returns
        -------
        Path
            Absolute path. Absolute filenames are returned unchanged.
        """
        return (self.applications_dir / filename).absolute()


def default_system_paths() -> SystemPaths:
    """Return the fixed system locations under ``/usr/share``."""
    return SystemPaths(
        applications_dir=DEFAULT_SHARE_DIR / "applications",
        icons_dir=DEFAULT_SHARE_DIR / "icons",
    )


def build_system_paths(
    *,
    applications_dir: Path | None = None,
    icons_dir: Path | None = None,
) -> SystemPaths:
    """Return system paths with optional per-directory overrides."""
    defaults = default_system_paths()
    return SystemPaths(
        applications_dir=applications_dir if applications_dir is not None else defaults.applications_dir,
        icons_dir=icons_dir if icons_dir is not None else defaults.icons_dir,
    )


def _xdg_dir(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value and os.path.isabs(value):
        return Path(value)
    return fallback


def default_config_root() -> Path:
    """
    Resolve the assistant's configuration directory.

    Preference order:
    1) ``$XDG_CONFIG_HOME`` if set to an absolute path
    2) ``~/.config``
    """
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config") / APP_DIR_NAME


def default_state_root() -> Path:
    """
    Resolve the assistant's state directory (logs).

    Preference order:
    1) ``$XDG_STATE_HOME`` if set to an absolute path
    2) ``~/.local/state``
    """
    return _xdg_dir("XDG_STATE_HOME", Path.home() / ".local" / "state") / APP_DIR_NAME
