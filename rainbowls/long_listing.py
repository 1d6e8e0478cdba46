"""Long listing rows: permissions, links, owner, group, size, mtime, name."""

from __future__ import annotations

import stat
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

try:
    import grp
    import pwd
except ImportError:  # pragma: no cover - unavailable on Windows
    grp = None
    pwd = None

from .entry_model import DisplayEntry
from .options import SizeUnit

if TYPE_CHECKING:
    from .options import ListingConfig

MISSING = "?"


def format_mode(mode: int | None) -> str:
    """Render ``st_mode`` as the familiar ``drwxr-xr-x`` string."""
    if mode is None:
        return MISSING * 10
    return stat.filemode(mode)


def user_name(uid: int) -> str | None:
    """Look up the login name for ``uid``; ``None`` when unknown or unsupported."""
    if pwd is None:
        return None
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return None


def group_name(gid: int) -> str | None:
    """Look up the group name for ``gid``; ``None`` when unknown or unsupported."""
    if grp is None:
        return None
    try:
        return grp.getgrgid(gid).gr_name
    except (KeyError, OverflowError):
        return None


def _owner_label(uid: int | None) -> str:
    if uid is None:
        return MISSING
    return user_name(uid) or str(uid)


def _group_label(gid: int | None) -> str:
    if gid is None:
        return MISSING
    return group_name(gid) or str(gid)


def format_size(size: int | None, unit: SizeUnit) -> str:
    if size is None:
        return MISSING
    if unit is SizeUnit.BITS:
        return str(size * 8)
    return str(size)


def format_mtime(modified_ns: int | None, time_format: str) -> str:
    if modified_ns is None:
        return MISSING
    return time.strftime(time_format, time.localtime(modified_ns / 1_000_000_000))


def long_listing_fields(entry: DisplayEntry, config: ListingConfig) -> tuple[str, str, str, str, str, str]:
    """Return the text columns that precede the styled name."""
    metadata = entry.metadata
    return (
        format_mode(metadata.mode),
        MISSING if metadata.nlink is None else str(metadata.nlink),
        _owner_label(metadata.uid),
        _group_label(metadata.gid),
        format_size(metadata.size, config.size_unit),
        format_mtime(metadata.modified_ns, config.time_format),
    )


def render_long_listing(entries: Sequence[DisplayEntry], config: ListingConfig) -> list[str]:
    """Render one aligned row per entry.

    Link counts and sizes are right aligned; owner and group are left aligned.
    """
    rows = [long_listing_fields(entry, config) for entry in entries]
    if not rows:
        return []
    widths = [max(len(row[column]) for row in rows) for column in range(6)]
    right_aligned = {1, 4}

    lines: list[str] = []
    for entry, row in zip(entries, rows):
        cells = [
            value.rjust(widths[column]) if column in right_aligned else value.ljust(widths[column])
            for column, value in enumerate(row)
        ]
        cells.append(entry.formatted)
        lines.append(" ".join(cells))
    return lines


__all__ = [
    "format_mode",
    "user_name",
    "group_name",
    "format_size",
    "format_mtime",
    "long_listing_fields",
    "render_long_listing",
]
