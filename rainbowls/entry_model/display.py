"""Styled, width-measured display units for listed entries."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING

from ..ansi import RESET_SGR, grapheme_len, style_prefix, truecolor_fg
from ..color import RgbColor, entry_color
from .fs import RawEntry, classify
from .types import UNKNOWN_METADATA, EntryMetadata, Kind

if TYPE_CHECKING:
    from ..options import ListingConfig


def to_display_text(name: str | bytes) -> str:
    """Convert a platform-native filename to text, replacing undecodable bytes."""
    return os.fsencode(name).decode("utf-8", errors="replace")


def split_extension(name: str) -> str | None:
    """Return the text after the last dot, or ``None`` when there is none.

    A single leading dot marks a hidden file, not an extension, so ``.bashrc``
    has none while ``archive.tar.gz`` has ``gz`` and ``notes.`` has ``""``.
    """
    if name == ".." or "." not in name[1:]:
        return None
    return name.rpartition(".")[2]


@total_ordering
@dataclass(frozen=True, eq=False)
class DisplayEntry:
    """One listed entry, styled and measured.

    Equality and ordering only look at ``(kind, extension, name)``; color and
    formatted text never take part, so logically identical entries sort
    together across runs with different seeds.
    """

    raw_name: str | bytes
    name: str
    path: str | bytes
    kind: Kind
    extension: str | None
    color: RgbColor
    prefix: str | None
    suffix: str | None
    formatted: str
    length: int
    metadata: EntryMetadata = UNKNOWN_METADATA

    def __len__(self) -> int:
        return self.length

    def identity(self) -> tuple[int, bool, str, str]:
        return (int(self.kind), self.extension is not None, self.extension or "", self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DisplayEntry):
            return NotImplemented
        return self.identity() == other.identity()

    def __lt__(self, other: "DisplayEntry") -> bool:
        if not isinstance(other, DisplayEntry):
            return NotImplemented
        return self.identity() < other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())


def format_name(
    name: str,
    color: RgbColor,
    codes: tuple[int, ...],
    prefix: str | None,
    suffix: str | None,
    no_color: bool = False,
) -> tuple[str, int]:
    """Build the styled string and its grapheme display length.

    Output order is color, style codes, prefix, name, suffix, reset; escape
    sequences add no display width.
    """
    visible = f"{prefix or ''}{name}{suffix or ''}"
    length = grapheme_len(visible)
    if no_color:
        return visible, length
    head = truecolor_fg(*color.as_tuple()) + style_prefix(codes)
    return f"{head}{visible}{RESET_SGR}", length


def build_display_entry(
    raw_name: str | bytes,
    metadata: EntryMetadata,
    config: ListingConfig,
    path: str | bytes = "",
    display_name: str | None = None,
) -> DisplayEntry:
    """Combine a name, its classification and the active config into a ``DisplayEntry``.

    ``display_name`` lets callers that already decoded the name skip a second
    lossy conversion.
    """
    name = display_name if display_name is not None else to_display_text(raw_name)
    extension = split_extension(name)
    color = entry_color(config.color_seed, name, extension, config.minimal_rgb_sum)
    style = config.style_for(metadata.kind)
    formatted, length = format_name(
        name,
        color,
        style.codes,
        style.prefix,
        style.suffix,
        no_color=config.no_color,
    )
    return DisplayEntry(
        raw_name=raw_name,
        name=name,
        path=path or raw_name,
        kind=metadata.kind,
        extension=extension,
        color=color,
        prefix=style.prefix,
        suffix=style.suffix,
        formatted=formatted,
        length=length,
        metadata=metadata,
    )


def display_entry_from_dir_entry(
    entry: RawEntry,
    config: ListingConfig,
    display_name: str | None = None,
) -> DisplayEntry:
    """Classify ``entry`` and build its display unit."""
    metadata = classify(entry, follow_symlinks=config.follow_symlinks)
    return build_display_entry(entry.name, metadata, config, path=entry.path, display_name=display_name)


__all__ = [
    "DisplayEntry",
    "to_display_text",
    "split_extension",
    "format_name",
    "build_display_entry",
    "display_entry_from_dir_entry",
]
