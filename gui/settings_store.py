from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from upgrade_engine.errors import SettingsError
from upgrade_engine.paths import SystemPaths, build_system_paths, default_config_root

LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


@dataclass(frozen=True, slots=True)
class GuiSettings:
    """
    Persisted GUI settings.

    Notes
    -----
    None for a directory means the system default under ``/usr/share``.
    None for ``locale`` means detect from the environment.
    """

    applications_dir: Path | None
    icons_dir: Path | None
    locale: str | None
    log_level: str  # "DEBUG" | "INFO" | "WARNING" | "ERROR"

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise SettingsError(f"Unknown log level: {self.log_level!r}")

    @staticmethod
    def defaults() -> "GuiSettings":
        return GuiSettings(
            applications_dir=None,
            icons_dir=None,
            locale=None,
            log_level="INFO",
        )

    def system_paths(self) -> SystemPaths:
        return build_system_paths(applications_dir=self.applications_dir, icons_dir=self.icons_dir)


def settings_path(config_root: Path | None) -> Path:
    root = default_config_root() if config_root is None else config_root
    return root / "gui_settings.json"


def load_gui_settings(*, config_root: Path | None) -> GuiSettings:
    """
    Load GUI settings from disk.

    Parameters
    ----------
    config_root:
        Configuration directory. If None, the XDG default is used.

    Returns
    -------
    GuiSettings
        Loaded settings, or defaults if missing/unreadable.
    """
    path = settings_path(config_root)
    try:
        raw = path.read_text(encoding="utf-8")
        payload = json.loads(raw)
    except (OSError, ValueError):
        return GuiSettings.defaults()

    if not isinstance(payload, dict):
        return GuiSettings.defaults()

    def _p(v: object) -> Path | None:
        if isinstance(v, str) and v.strip():
            return Path(v)
        return None

    locale = payload.get("locale")
    if not isinstance(locale, str) or not locale.strip():
        locale = None

    log_level = payload.get("log_level", "INFO")
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return GuiSettings(
        applications_dir=_p(payload.get("applications_dir")),
        icons_dir=_p(payload.get("icons_dir")),
        locale=locale.strip() if locale else None,
        log_level=str(log_level),
    )


def save_gui_settings(*, config_root: Path | None, settings: GuiSettings) -> None:
    """
    Save GUI settings to disk.

    Parameters
    ----------
    config_root:
        Configuration directory. If None, the XDG default is used.
    settings:
        Settings to persist.
    """
    path = settings_path(config_root)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "applications_dir": str(settings.applications_dir) if settings.applications_dir is not None else None,
        "icons_dir": str(settings.icons_dir) if settings.icons_dir is not None else None,
        "locale": settings.locale,
        "log_level": settings.log_level,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
