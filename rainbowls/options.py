"""Listing options shared by every stage of the pipeline.

``ListingConfig`` is assembled once by the CLI (persisted defaults first, then
command-line flags) and is read-only afterwards. Core functions assume the
values have already been validated.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field, replace
from enum import Enum

from .color import MIN_COLOR_SEED
from .entry_model.types import Kind


class SortKey(Enum):
    """Closed set of sort keys accepted by ``--sort-by``."""

    DEFAULT = "default"
    NAME = "name"
    SIZE = "size"
    EXTENSION = "extension"
    CREATION_DATE = "creation_date"
    ACCESS_DATE = "access_date"
    MODIFICATION_DATE = "modification_date"
    COLOR = "color"

    @classmethod
    def parse(cls, value: str) -> "SortKey | None":
        normalized = value.strip().lower().replace("-", "_")
        aliases = {
            "colour": "color",
            "creationdate": "creation_date",
            "accessdate": "access_date",
            "modificationdate": "modification_date",
        }
        normalized = aliases.get(normalized, normalized)
        for key in cls:
            if key.value == normalized:
                return key
        return None


class SizeUnit(Enum):
    BYTES = "bytes"
    BITS = "bits"


@dataclass(frozen=True)
class KindStyle:
    """Style codes and optional affixes applied to one entry kind."""

    codes: tuple[int, ...] = ()
    prefix: str | None = None
    suffix: str | None = None


def default_styles() -> dict[Kind, KindStyle]:
    return {
        Kind.FILE: KindStyle(),
        Kind.DIRECTORY: KindStyle(suffix="/"),
        Kind.EXECUTABLE: KindStyle(codes=(1,)),
        Kind.SYMLINK: KindStyle(codes=(4,)),
        Kind.UNKNOWN: KindStyle(codes=(3,)),
    }


def time_color_seed() -> int:
    """Return a run-varying seed from the wall clock, floored at ``MIN_COLOR_SEED``."""
    return max(MIN_COLOR_SEED, time.time_ns() // 1_000_000)


DEFAULT_MINIMAL_RGB_SUM = 512
DEFAULT_SEPARATOR = "  "
DEFAULT_PADDING = " "
DEFAULT_TIME_FORMAT = "%b %d %H:%M"


@dataclass(frozen=True)
class ListingConfig:
    """Immutable listing configuration."""

    styles: dict[Kind, KindStyle] = field(default_factory=default_styles)
    title_codes: tuple[int, ...] = ()

    color_seed: int = MIN_COLOR_SEED
    minimal_rgb_sum: int = DEFAULT_MINIMAL_RGB_SUM
    no_color: bool = False

    sort_by: SortKey = SortKey.DEFAULT
    uppercase_first: bool = False
    group_directories_first: bool = False
    reverse: bool = False

    separator: str = DEFAULT_SEPARATOR
    padding: str = DEFAULT_PADDING
    term_width: int | None = None

    show_dotfiles: bool = False
    show_backups: bool = False
    include_pattern: re.Pattern[str] | None = None
    exclude_pattern: re.Pattern[str] | None = None

    recursive: bool = False
    follow_symlinks: bool = False

    one_per_line: bool = False
    long_listing: bool = False
    time_format: str = DEFAULT_TIME_FORMAT
    size_unit: SizeUnit = SizeUnit.BYTES

    def style_for(self, kind: Kind) -> KindStyle:
        return self.styles.get(kind, KindStyle())

    def with_style(self, kind: Kind, **changes: object) -> "ListingConfig":
        """Return a copy with one kind's style fields replaced."""
        styles = dict(self.styles)
        styles[kind] = replace(self.style_for(kind), **changes)
        return replace(self, styles=styles)


__all__ = [
    "SortKey",
    "SizeUnit",
    "KindStyle",
    "ListingConfig",
    "default_styles",
    "time_color_seed",
    "DEFAULT_MINIMAL_RGB_SUM",
    "DEFAULT_SEPARATOR",
    "DEFAULT_PADDING",
    "DEFAULT_TIME_FORMAT",
]
