"""Per-directory listing pipeline and recursive traversal.

Each directory is read fully, filtered, classified, styled and sorted before
anything is laid out. Directories are processed one at a time in argument
order; recursive mode descends depth first in display order.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from .ansi import RESET_SGR, style_prefix
from .entry_model import (
    DisplayEntry,
    Kind,
    RawEntry,
    directory_identity,
    display_entry_from_dir_entry,
    read_directory,
    to_display_text,
)
from .filters import is_allowed
from .layout import render_entries
from .options import ListingConfig
from .sorting import sort_entries

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryListing:
    """Sorted entries for one directory plus the scan error, if any."""

    path: Path
    entries: tuple[DisplayEntry, ...]
    scan_error: OSError | None = None
    depth: int = 0


def build_entries(raw_entries: Iterable[RawEntry], config: ListingConfig) -> list[DisplayEntry]:
    """Filter, classify and sort raw directory entries."""
    entries: list[DisplayEntry] = []
    for raw_entry in raw_entries:
        name = to_display_text(raw_entry.name)
        if not is_allowed(name, config):
            continue
        entries.append(display_entry_from_dir_entry(raw_entry, config, display_name=name))
    return sort_entries(entries, config)


def list_directory(directory: Path, config: ListingConfig, depth: int = 0) -> DirectoryListing:
    raw_entries, scan_error = read_directory(directory)
    return DirectoryListing(
        path=directory,
        entries=tuple(build_entries(raw_entries, config)),
        scan_error=scan_error,
        depth=depth,
    )


def _child_directories(
    listing: DirectoryListing,
    visited: set[tuple[int, int]],
) -> list[Path]:
    """Return unvisited subdirectories, marking each visited before it is queued."""
    children: list[Path] = []
    for entry in listing.entries:
        if entry.kind != Kind.DIRECTORY:
            continue
        child = Path(os.fsdecode(entry.path))
        identity = directory_identity(child)
        if identity is None:
            LOGGER.debug("skipping %s: cannot stat directory", child)
            continue
        if identity in visited:
            LOGGER.debug("skipping %s: already listed", child)
            continue
        visited.add(identity)
        children.append(child)
    return children


def iter_listings(paths: Sequence[Path], config: ListingConfig) -> Iterator[DirectoryListing]:
    """Yield listings for ``paths`` in order, descending when ``recursive`` is set.

    A set of ``(st_dev, st_ino)`` identities guards against symlink cycles;
    each argument path starts with its own set. Entries read before a scan
    error are listed and descended into like any others.
    """
    for root in paths:
        visited: set[tuple[int, int]] = set()
        root_identity = directory_identity(root)
        if root_identity is not None:
            visited.add(root_identity)

        stack: list[tuple[Path, int]] = [(root, 0)]
        while stack:
            directory, depth = stack.pop()
            listing = list_directory(directory, config, depth=depth)
            yield listing
            if not config.recursive:
                continue
            children = _child_directories(listing, visited)
            stack.extend((child, depth + 1) for child in reversed(children))


def title_for(path: Path, cwd: Path | None, always: bool = False) -> str | None:
    """Return the header shown above a listing.

    The current directory gets no header unless ``always`` is set, in which
    case it shows as ``.``. Paths under ``cwd`` are shown relative to it.
    """
    try:
        resolved = path.resolve()
    except (OSError, RuntimeError):
        resolved = path
    if cwd is not None:
        if resolved == cwd:
            return "." if always else None
        if resolved.is_relative_to(cwd):
            return to_display_text(resolved.relative_to(cwd).as_posix())
    return to_display_text(str(path))


def format_title(title: str, config: ListingConfig) -> str:
    if config.no_color or not config.title_codes:
        return f"{title}:"
    return f"{style_prefix(config.title_codes)}{title}:{RESET_SGR}"


def render_listing(
    listing: DirectoryListing,
    config: ListingConfig,
    term_width: int | None,
    cwd: Path | None = None,
    always_title: bool = False,
) -> list[str] | None:
    """Render one listing with its optional header.

    Returns ``None`` when the entries need a terminal width that is unknown.
    """
    body = render_entries(listing.entries, config, term_width)
    if body is None:
        return None
    title = title_for(listing.path, cwd, always=always_title)
    if title is None:
        return body
    return [format_title(title, config), *body]


__all__ = [
    "DirectoryListing",
    "build_entries",
    "list_directory",
    "iter_listings",
    "title_for",
    "format_title",
    "render_listing",
]
