"""
Domain exceptions for the upgrade assistant.

Notes
-----
Parsing desktop entries never raises; unreadable files degrade to placeholders.
Exceptions here cover inputs supplied by the operator (event scripts, settings).
"""

from __future__ import annotations


class UpgradeAssistantError(RuntimeError):
    """Base exception for all upgrade assistant domain failures."""


class EventScriptError(UpgradeAssistantError):
    """Raised when a worker event script cannot be read or is malformed."""


class SettingsError(UpgradeAssistantError):
    """Raised when a settings value is invalid."""
