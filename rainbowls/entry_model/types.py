"""Domain datatypes for classified directory entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Kind(IntEnum):
    """Entry classification; the value order is the default grouping order."""

    DIRECTORY = 0
    FILE = 1
    EXECUTABLE = 2
    SYMLINK = 3
    UNKNOWN = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Kind | None":
        """Map config labels such as ``"directories"`` or ``"file"`` to a kind."""
        normalized = label.strip().lower()
        for kind in cls:
            if normalized in (kind.label, kind.label + "s"):
                return kind
        return None


@dataclass(frozen=True)
class EntryMetadata:
    """Metadata observed for one entry; every field but ``kind`` may be absent."""

    kind: Kind
    size: int | None = None
    created_ns: int | None = None
    modified_ns: int | None = None
    accessed_ns: int | None = None
    mode: int | None = None
    nlink: int | None = None
    uid: int | None = None
    gid: int | None = None


UNKNOWN_METADATA = EntryMetadata(kind=Kind.UNKNOWN)


__all__ = [
    "Kind",
    "EntryMetadata",
    "UNKNOWN_METADATA",
]
