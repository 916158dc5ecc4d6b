from __future__ import annotations

import json
from pathlib import Path

import pytest

from gui.settings_store import GuiSettings, load_gui_settings, save_gui_settings, settings_path
from upgrade_engine.errors import SettingsError


def test_missing_settings_file_yields_defaults(tmp_path: Path) -> None:
    assert load_gui_settings(config_root=tmp_path) == GuiSettings.defaults()


def test_settings_roundtrip(tmp_path: Path) -> None:
    settings = GuiSettings(
        applications_dir=tmp_path / "apps",
        icons_dir=None,
        locale="zh_CN",
        log_level="DEBUG",
    )

    save_gui_settings(config_root=tmp_path, settings=settings)

    assert load_gui_settings(config_root=tmp_path) == settings
    payload = json.loads(settings_path(tmp_path).read_text(encoding="utf-8"))
    assert list(payload) == sorted(payload)


@pytest.mark.parametrize("text", ["not json", "[1, 2]", "null"])
def test_unreadable_settings_yield_defaults(tmp_path: Path, text: str) -> None:
    settings_path(tmp_path).write_text(text, encoding="utf-8")

    assert load_gui_settings(config_root=tmp_path) == GuiSettings.defaults()


def test_invalid_values_are_replaced_by_defaults(tmp_path: Path) -> None:
    settings_path(tmp_path).write_text(
        json.dumps({"applications_dir": "", "icons_dir": 5, "locale": "  ", "log_level": "LOUD"}),
        encoding="utf-8",
    )

    assert load_gui_settings(config_root=tmp_path) == GuiSettings.defaults()


def test_default_location_follows_xdg_config_home(tmp_path: Path) -> None:
    save_gui_settings(config_root=None, settings=GuiSettings.defaults())

    assert (tmp_path / "config" / "sysupgrade-assistant" / "gui_settings.json").is_file()


def test_system_paths_apply_overrides(tmp_path: Path) -> None:
    settings = GuiSettings(applications_dir=tmp_path, icons_dir=None, locale=None, log_level="INFO")

    paths = settings.system_paths()

    assert paths.applications_dir == tmp_path
    assert paths.icons_dir == Path("/usr/share/icons")


def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(SettingsError):
        GuiSettings(applications_dir=None, icons_dir=None, locale=None, log_level="LOUD")
