"""
Command-line interface for the system upgrade assistant.

Notes
-----
The CLI is intentionally thin. It parses arguments and delegates to engine
modules, or launches the GUI.

Commands
--------
- parse-desktop: show what the evaluation would display for one desktop entry.
- evaluate: replay a recorded worker event script and print the result table.
- gui: open the assistant window, optionally driven by an event script.
- configure: persist directory, locale and log level defaults to the settings file.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from gui.settings_store import LOG_LEVELS, GuiSettings, load_gui_settings, save_gui_settings, settings_path
from upgrade_engine.desktop_entry import current_locale, read_desktop_file
from upgrade_engine.errors import UpgradeAssistantError
from upgrade_engine.logging_setup import install_excepthook, setup_logging
from upgrade_engine.service import run_software_evaluation
from upgrade_engine.worker import ReplayWorker

logger = logging.getLogger(__name__)


def _add_environment_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--applications-dir",
        type=Path,
        default=None,
        help="Directory holding .desktop files (default: /usr/share/applications or settings).",
    )
    p.add_argument(
        "--icons-dir",
        type=Path,
        default=None,
        help="Icon theme search root (default: /usr/share/icons or settings).",
    )
    p.add_argument(
        "--locale",
        default=None,
        help="Locale used to pick localized names, e.g. zh_CN (default: detected).",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="sysupgrade",
        description="System upgrade assistant: software compatibility evaluation",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output to the console.")
    parser.add_argument("--no-log-file", action="store_true", help="Do not write the rotating log file.")
    parser.add_argument(
        "--config-root",
        type=Path,
        default=None,
        help="Override the settings directory (primarily for testing).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    parse_p = sub.add_parser("parse-desktop", help="Parse a desktop entry and print the app info")
    parse_p.add_argument("path", type=Path, help="Path to a .desktop file")
    parse_p.add_argument("--locale", default=None, help="Locale used to pick the localized name.")

    eval_p = sub.add_parser("evaluate", help="Replay a worker event script and print the evaluation result")
    eval_p.add_argument("--events", required=True, type=Path, help="JSON event script to replay")
    _add_environment_options(eval_p)

    gui_p = sub.add_parser("gui", help="Open the assistant window")
    gui_p.add_argument("--events", type=Path, default=None, help="JSON event script driving the window")
    _add_environment_options(gui_p)

    config_p = sub.add_parser("configure", help="Save default settings used by the other commands")
    _add_environment_options(config_p)
    config_p.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS),
        default=None,
        help="Console log level used when --verbose is not given.",
    )

    return parser


def _effective_settings(args: argparse.Namespace) -> GuiSettings:
    settings = load_gui_settings(config_root=args.config_root)
    overrides: dict[str, object] = {}
    if getattr(args, "applications_dir", None) is not None:
        overrides["applications_dir"] = args.applications_dir
    if getattr(args, "icons_dir", None) is not None:
        overrides["icons_dir"] = args.icons_dir
    if getattr(args, "locale", None):
        overrides["locale"] = args.locale
    if getattr(args, "log_level", None):
        overrides["log_level"] = args.log_level
    return dataclasses.replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = _effective_settings(args)
    console_level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level)
    setup_logging(console_level=console_level, log_to_file=not args.no_log_file)
    install_excepthook()

    if args.command == "parse-desktop":
        locale = settings.locale or current_locale()
        info = read_desktop_file(args.path, locale)
        print(f"name: {info.name}")
        print(f"icon: {info.icon_name}")
        print(f"visible: {str(info.visible).lower()}")
        return 0

    if args.command == "evaluate":
        try:
            worker = ReplayWorker.from_script(args.events)
            result = run_software_evaluation(
                worker,
                paths=settings.system_paths(),
                locale=settings.locale,
            )
        except (UpgradeAssistantError, ValueError) as exc:
            print(f"ERROR: {exc}")
            return 2
        print(result.report_text)
        return 0

    if args.command == "configure":
        try:
            save_gui_settings(config_root=args.config_root, settings=settings)
        except OSError as exc:
            print(f"ERROR: cannot save settings: {exc}")
            return 2
        print(f"Settings written: {settings_path(args.config_root)}")
        return 0

    if args.command == "gui":
        try:
            worker = ReplayWorker.from_script(args.events) if args.events is not None else None
        except UpgradeAssistantError as exc:
            print(f"ERROR: {exc}")
            return 2

        from gui.app import run_gui

        return run_gui(settings=settings, worker=worker)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
