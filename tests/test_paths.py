from __future__ import annotations

from pathlib import Path

import pytest

from upgrade_engine.paths import (
    build_system_paths,
    default_config_root,
    default_state_root,
    default_system_paths,
)


def test_default_system_paths_live_under_usr_share() -> None:
    paths = default_system_paths()

    assert paths.applications_dir == Path("/usr/share/applications")
    assert paths.icons_dir == Path("/usr/share/icons")


def test_resolve_desktop_entry_is_absolute(tmp_path: Path) -> None:
    paths = build_system_paths(applications_dir=tmp_path)

    assert paths.resolve_desktop_entry("foo.desktop") == tmp_path / "foo.desktop"
    assert paths.resolve_desktop_entry("/opt/x.desktop") == Path("/opt/x.desktop")
    assert paths.icons_dir == Path("/usr/share/icons")


def test_config_root_prefers_xdg_config_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))

    assert default_config_root() == tmp_path / "cfg" / "sysupgrade-assistant"


def test_config_root_ignores_relative_xdg_value(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", "relative/cfg")
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_config_root() == tmp_path / ".config" / "sysupgrade-assistant"


def test_state_root_falls_back_to_local_state(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("XDG_STATE_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_state_root() == tmp_path / ".local" / "state" / "sysupgrade-assistant"
