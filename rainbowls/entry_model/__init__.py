"""Domain model for listed directory entries.

This package contains the non-rendering entry primitives:
- ``Kind`` and ``EntryMetadata`` datatypes
- filesystem scanning and per-entry classification
- styled, grapheme-measured ``DisplayEntry`` construction
"""

from __future__ import annotations

from .types import UNKNOWN_METADATA, EntryMetadata, Kind
from .fs import (
    POSIX_PERMISSIONS,
    RawEntry,
    classify,
    directory_identity,
    kind_from_mode,
    metadata_from_stat,
    read_directory,
)
from .display import (
    DisplayEntry,
    build_display_entry,
    display_entry_from_dir_entry,
    format_name,
    split_extension,
    to_display_text,
)

__all__ = [
    "Kind",
    "EntryMetadata",
    "UNKNOWN_METADATA",
    "RawEntry",
    "POSIX_PERMISSIONS",
    "kind_from_mode",
    "metadata_from_stat",
    "classify",
    "read_directory",
    "directory_identity",
    "DisplayEntry",
    "to_display_text",
    "split_extension",
    "format_name",
    "build_display_entry",
    "display_entry_from_dir_entry",
]
