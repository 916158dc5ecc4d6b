"""
Icon reference resolution.

Desktop entries name their icon either by absolute file path or by theme icon
name. This module decides which of the two the GUI should load, without
touching the toolkit, so the fallback rules can be tested on their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_ICON_NAME = "application-x-executable"

ICON_SIZE_PX = 24


class IconSourceKind(str, Enum):
    """Where an icon comes from."""

    FILE = "file"
    THEME = "theme"


@dataclass(frozen=True, slots=True)
class IconSource:
    """
    Resolved icon reference.

    Attributes
    ----------
    kind:
        FILE for an absolute path, THEME for a theme icon name.
    value:
        The path or theme name to load.
    fallback:
        Theme icon name to use when ``value`` cannot be loaded.
    """

    kind: IconSourceKind
    value: str
    fallback: str = DEFAULT_ICON_NAME


def resolve_icon_source(icon_name: str) -> IconSource:
    """
    Resolve a desktop entry ``Icon`` value.

    Rules
    -----
    - Absolute path that exists: load the file.
    - Absolute path that does not exist: the generic default theme icon.
    - Non-empty theme name: that theme icon, with the default as fallback.
    - Empty: the generic default theme icon.
    """
    reference = icon_name.strip()
    if reference.startswith("/"):
        if Path(reference).is_file():
            return IconSource(kind=IconSourceKind.FILE, value=reference)
        return IconSource(kind=IconSourceKind.THEME, value=DEFAULT_ICON_NAME)
    if reference:
        return IconSource(kind=IconSourceKind.THEME, value=reference)
    return IconSource(kind=IconSourceKind.THEME, value=DEFAULT_ICON_NAME)
