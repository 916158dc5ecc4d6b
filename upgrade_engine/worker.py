"""
Upgrade worker boundary.

The real compatibility check runs in a separate system service. Components in
this project never reach for it globally; they receive an object implementing
:class:`UpgradeWorker` and register callbacks on it.

Event streams
-------------
- progress: integer percentage 0..100
- apps_available: full package -> desktop entry filenames mapping (replaces any
  previous mapping)
- migrate_status: ``(package, status)`` verdict, 1 meaning compatible

:class:`ReplayWorker` replays a recorded event script and stands in for the
service in the command line, GUI demo mode and tests.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Protocol, Self

from upgrade_engine.errors import EventScriptError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]
AppsAvailableCallback = Callable[[Mapping[str, tuple[str, ...]]], None]
MigrateStatusCallback = Callable[[str, int], None]


class UpgradeWorker(Protocol):
    """Source of software check events."""

    def connect_progress(self, callback: ProgressCallback) -> None:
        """Register a callback for progress updates."""
        ...

    def connect_apps_available(self, callback: AppsAvailableCallback) -> None:
        """Register a callback for package -> desktop entries mappings."""
        ...

    def connect_migrate_status(self, callback: MigrateStatusCallback) -> None:
        """Register a callback for per-package compatibility verdicts."""
        ...


class WorkerCallbacks:
    """Plain callback registry implementing :class:`UpgradeWorker`."""

    def __init__(self) -> None:
        self._progress: list[ProgressCallback] = []
        self._apps_available: list[AppsAvailableCallback] = []
        self._migrate_status: list[MigrateStatusCallback] = []

    def connect_progress(self, callback: ProgressCallback) -> None:
        self._progress.append(callback)

    def connect_apps_available(self, callback: AppsAvailableCallback) -> None:
        self._apps_available.append(callback)

    def connect_migrate_status(self, callback: MigrateStatusCallback) -> None:
        self._migrate_status.append(callback)

    def emit_progress(self, value: int) -> None:
        for callback in list(self._progress):
            callback(value)

    def emit_apps_available(self, apps: Mapping[str, tuple[str, ...]]) -> None:
        for callback in list(self._apps_available):
            callback(apps)

    def emit_migrate_status(self, package: str, status: int) -> None:
        for callback in list(self._migrate_status):
            callback(package, status)


class WorkerEventType(str, Enum):
    """Kinds of scripted worker events."""

    PROGRESS = "progress"
    APPS_AVAILABLE = "apps_available"
    MIGRATE_STATUS = "migrate_status"


@dataclass(frozen=True, slots=True)
class WorkerEvent:
    """One recorded worker event."""

    event_type: WorkerEventType
    value: int = 0
    apps: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    package: str = ""
    status: int = 0

    @classmethod
    def progress(cls, value: int) -> Self:
        return cls(event_type=WorkerEventType.PROGRESS, value=value)

    @classmethod
    def apps_available(cls, apps: Mapping[str, Iterable[str]]) -> Self:
        return cls(
            event_type=WorkerEventType.APPS_AVAILABLE,
            apps={str(k): tuple(v) for k, v in apps.items()},
        )

    @classmethod
    def migrate_status(cls, package: str, status: int) -> Self:
        return cls(event_type=WorkerEventType.MIGRATE_STATUS, package=package, status=status)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, index: int) -> Self:
        """
        Construct an event from its JSON form.

        Raises
        ------
        EventScriptError
            If the type is unknown or a field has the wrong shape.
        """
        raw_type = payload.get("type")
        try:
            event_type = WorkerEventType(raw_type)
        except ValueError:
            raise EventScriptError(f"Event {index}: unknown type {raw_type!r}") from None

        if event_type is WorkerEventType.PROGRESS:
            return cls.progress(_require_int(payload, "value", index=index))

        if event_type is WorkerEventType.APPS_AVAILABLE:
            apps = payload.get("apps")
            if not isinstance(apps, dict):
                raise EventScriptError(f"Event {index}: 'apps' must be an object")
            for package, filenames in apps.items():
                if not isinstance(filenames, list) or not all(isinstance(f, str) for f in filenames):
                    raise EventScriptError(
                        f"Event {index}: desktop entries for {package!r} must be a list of strings"
                    )
            return cls.apps_available(apps)

        package = payload.get("package")
        if not isinstance(package, str) or not package:
            raise EventScriptError(f"Event {index}: 'package' must be a non-empty string")
        return cls.migrate_status(package, _require_int(payload, "status", index=index))


def _require_int(payload: Mapping[str, Any], key: str, *, index: int) -> int:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventScriptError(f"Event {index}: {key!r} must be an integer")
    return value


def load_event_script(path: Path) -> list[WorkerEvent]:
    """
    Load a recorded worker event script.

    Parameters
    ----------
    path:
        JSON document of the form ``{"events": [{"type": ...}, ...]}``.

    Returns
    -------
    list[WorkerEvent]
        Events in script order.

    Raises
    ------
    EventScriptError
        If the file cannot be read or does not match the expected shape.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise EventScriptError(f"Cannot read event script {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise EventScriptError(f"Event script {path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("events"), list):
        raise EventScriptError(f"Event script {path} must contain an 'events' list")

    events: list[WorkerEvent] = []
    for index, raw in enumerate(payload["events"]):
        if not isinstance(raw, dict):
            raise EventScriptError(f"Event {index}: must be an object")
        events.append(WorkerEvent.from_dict(raw, index=index))
    return events


class ReplayWorker(WorkerCallbacks):
    """
    Worker that replays recorded events in order.

    Notes
    -----
    :meth:`run` emits synchronously on the calling thread. Exceptions raised by
    callbacks propagate to the caller.
    """

    def __init__(self, events: Iterable[WorkerEvent]) -> None:
        super().__init__()
        self._events = tuple(events)

    @classmethod
    def from_script(cls, path: Path) -> Self:
        return cls(load_event_script(path))

    @property
    def events(self) -> tuple[WorkerEvent, ...]:
        return self._events

    def run(self) -> None:
        """Emit every recorded event to the registered callbacks."""
        logger.info("Replaying %d worker events", len(self._events))
        for event in self._events:
            if event.event_type is WorkerEventType.PROGRESS:
                self.emit_progress(event.value)
            elif event.event_type is WorkerEventType.APPS_AVAILABLE:
                self.emit_apps_available(event.apps)
            else:
                self.emit_migrate_status(event.package, event.status)
