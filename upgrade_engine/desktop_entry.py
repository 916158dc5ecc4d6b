"""
Desktop entry parsing.

Only the keys the evaluation screen displays are recognized: ``Icon``,
``Name``, ``Name[<locale>]`` and ``NoDisplay``. Everything else, including
group headers and malformed lines, is skipped.

Notes
-----
Parsing fails open: an entry that cannot be read yields an AppInfo whose name
is the path itself, so the result table still shows something for it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from upgrade_engine.data_models import AppInfo

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

_LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG")


def normalize_locale(value: str) -> str:
    """
    Reduce a POSIX locale string to the ``ll_CC`` form used in desktop entries.

    ``zh_CN.UTF-8`` and ``zh_CN.UTF-8@pinyin`` both become ``zh_CN``.
    ``C`` and ``POSIX`` map to :data:`DEFAULT_LOCALE`.
    """
    name = value.strip().split(".", 1)[0].split("@", 1)[0]
    if not name or name in {"C", "POSIX"}:
        return DEFAULT_LOCALE
    return name


def current_locale() -> str:
    """Return the active UI locale from the process environment."""
    for var in _LOCALE_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return normalize_locale(value)
    return DEFAULT_LOCALE


def _value_of(line: str) -> str:
    return line.split("=", 1)[1].strip()


def read_desktop_file(path: Path | str, locale: str | None = None) -> AppInfo:
    """
    Parse a desktop entry into an :class:`AppInfo`.

    Parameters
    ----------
    path:
        Path to the ``.desktop`` file.
    locale:
        Active UI locale (``ll_CC``). Defaults to :func:`current_locale`.

    Returns
    -------
    AppInfo
        Parsed application info. Later lines override earlier ones for the
        same key. The localized name wins over ``Name=`` when non-empty.
    """
    active_locale = locale if locale is not None else current_locale()
    localized_prefix = f"Name[{active_locale}]="

    icon_name = ""
    name = ""
    fallback_name = ""
    visible = True

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if line.startswith("Icon="):
                    icon_name = _value_of(line)
                elif line.startswith(localized_prefix):
                    name = _value_of(line)
                elif line.startswith("Name="):
                    fallback_name = _value_of(line)
                elif line.startswith("NoDisplay="):
                    visible = _value_of(line) != "true"
    except (OSError, ValueError) as exc:
        logger.debug("Cannot read desktop entry %s: %s", path, exc)
        return AppInfo(name=str(path), icon_name="", visible=True)

    return AppInfo(
        name=name if name else fallback_name,
        icon_name=icon_name,
        visible=visible,
    )
