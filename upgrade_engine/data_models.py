"""Data models for the software evaluation.

The models in this module are standard-library-only (dataclasses) so the
engine can be used and tested without the GUI toolkit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Self


class CompatibilityStatus(int, Enum):
    """Verdict reported by the evaluation worker for a package."""

    INCOMPATIBLE = 0
    COMPATIBLE = 1

    @classmethod
    def from_code(cls, code: int) -> Self:
        """Map a raw worker status code; anything other than 1 is incompatible."""
        return cls.COMPATIBLE if code == cls.COMPATIBLE.value else cls.INCOMPATIBLE


@dataclass(frozen=True, slots=True)
class AppInfo:
    """
    One application discovered from a desktop entry.

    Attributes
    ----------
    name:
        Display name (localized when available).
    icon_name:
        Absolute icon file path or a theme icon name. Empty when unknown.
    visible:
        False only when the entry declares ``NoDisplay=true``.
    """

    name: str
    icon_name: str = ""
    visible: bool = True

    @property
    def no_display(self) -> bool:
        return not self.visible


class PackageDesktopMap(Mapping[str, tuple[str, ...]]):
    """
    Immutable snapshot of package identifier -> desktop entry filenames.

    Filenames are relative to the applications directory and keep the order
    the worker declared them in.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Iterable[str]] | None = None) -> None:
        frozen: dict[str, tuple[str, ...]] = {}
        for package, filenames in (entries or {}).items():
            if isinstance(filenames, str):
                raise TypeError(f"Desktop entries for {package!r} must be a sequence of filenames, not a string.")
            frozen[str(package)] = tuple(str(name) for name in filenames)
        self._entries = MappingProxyType(frozen)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    def __getitem__(self, package: str) -> tuple[str, ...]:
        return self._entries[package]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PackageDesktopMap({dict(self._entries)!r})"
