"""Directory scanning and per-entry classification.

Metadata failures never abort a listing: the affected entry degrades to
``Kind.UNKNOWN`` with no metadata and scanning moves on.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Protocol

from .types import UNKNOWN_METADATA, EntryMetadata, Kind

LOGGER = logging.getLogger(__name__)

POSIX_PERMISSIONS = os.name == "posix"
EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class RawEntry(Protocol):
    """What the classifier needs from a directory entry; ``os.DirEntry`` fits."""

    name: str | bytes
    path: str | bytes

    def stat(self, *, follow_symlinks: bool = True) -> os.stat_result: ...


def kind_from_mode(mode: int) -> Kind:
    """Map an ``st_mode`` value to a ``Kind``.

    Regular files with any execute bit are executables on POSIX platforms only.
    Devices, FIFOs and sockets have no dedicated kind and report ``UNKNOWN``.
    """
    if stat.S_ISDIR(mode):
        return Kind.DIRECTORY
    if stat.S_ISREG(mode):
        if POSIX_PERMISSIONS and mode & EXECUTE_BITS:
            return Kind.EXECUTABLE
        return Kind.FILE
    if stat.S_ISLNK(mode):
        return Kind.SYMLINK
    return Kind.UNKNOWN


def _birth_time_ns(stat_result: os.stat_result) -> int | None:
    """Return creation time where the platform records one.

    ``os.stat`` on Linux exposes no birth time, so ``created_ns`` is always
    ``None`` there and a creation-date sort falls back to name order.
    """
    birth_ns = getattr(stat_result, "st_birthtime_ns", None)
    if birth_ns is not None:
        return int(birth_ns)
    birth = getattr(stat_result, "st_birthtime", None)
    if birth is None:
        return None
    return int(birth * 1_000_000_000)


def metadata_from_stat(stat_result: os.stat_result) -> EntryMetadata:
    mode = int(stat_result.st_mode)
    return EntryMetadata(
        kind=kind_from_mode(mode),
        size=int(stat_result.st_size),
        created_ns=_birth_time_ns(stat_result),
        modified_ns=int(stat_result.st_mtime_ns),
        accessed_ns=int(stat_result.st_atime_ns),
        mode=mode,
        nlink=int(stat_result.st_nlink),
        uid=int(stat_result.st_uid),
        gid=int(stat_result.st_gid),
    )


def classify(entry: RawEntry, follow_symlinks: bool = False) -> EntryMetadata:
    """Classify one entry, degrading to ``UNKNOWN_METADATA`` on stat failure.

    Without ``follow_symlinks`` a link reports ``Kind.SYMLINK``; with it the
    target's kind and metadata are read instead (a dangling link degrades).
    """
    try:
        stat_result = entry.stat(follow_symlinks=follow_symlinks)
    except OSError as exc:
        LOGGER.debug("metadata unavailable for %r: %s", entry.name, exc)
        return UNKNOWN_METADATA
    return metadata_from_stat(stat_result)


def read_directory(directory: Path) -> tuple[list[os.DirEntry], OSError | None]:
    """Materialize all entries of ``directory``.

    Returns ``(entries, scan_error)``. Entries read before a mid-scan failure
    are kept.
    """
    entries: list[os.DirEntry] = []
    try:
        with os.scandir(directory) as iterator:
            for entry in iterator:
                entries.append(entry)
    except OSError as exc:
        LOGGER.debug("cannot scan %s: %s", directory, exc)
        return entries, exc
    return entries, None


def directory_identity(path: Path) -> tuple[int, int] | None:
    """Return ``(st_dev, st_ino)`` for ``path`` after resolving links."""
    try:
        stat_result = os.stat(path)
    except OSError:
        return None
    return (int(stat_result.st_dev), int(stat_result.st_ino))


__all__ = [
    "RawEntry",
    "POSIX_PERMISSIONS",
    "kind_from_mode",
    "metadata_from_stat",
    "classify",
    "read_directory",
    "directory_identity",
]
