"""
Module entrypoint for the sysupgrade CLI.

This file exists so that `python -m sysupgrade ...` works consistently in all
environments, including when the console-script wrapper is not installed.

Notes
-----
This module contains no business logic. It delegates to the CLI module.
"""

from __future__ import annotations

from sysupgrade.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
