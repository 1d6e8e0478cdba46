"""Ordering of display entries by the configured sort key.

Every key is a tuple so the optional directory-grouping flag can be prepended
uniformly. Optional metadata sorts absent-before-present and ties always fall
back to the raw name, which keeps the order total and deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .entry_model import DisplayEntry, Kind
from .options import ListingConfig, SortKey

SortTuple = tuple[object, ...]


def _optional(value: object | None) -> tuple[bool, object]:
    return (value is not None, value if value is not None else 0)


def _optional_text(value: str | None) -> tuple[bool, str]:
    return (value is not None, value or "")


def name_key(name: str, uppercase_first: bool = False) -> SortTuple:
    """Case-insensitive name order with uppercase-initial names first on ties.

    With ``uppercase_first`` every name starting with an uppercase letter
    precedes every name starting with a lowercase one.
    """
    starts_lower = name[:1].islower()
    if uppercase_first:
        return (starts_lower, name.casefold(), name)
    return (name.casefold(), starts_lower, name)


def _raw_name(entry: DisplayEntry) -> str:
    return entry.name


_FIELD_KEYS: dict[SortKey, Callable[[DisplayEntry], SortTuple]] = {
    SortKey.DEFAULT: lambda entry: entry.identity(),
    SortKey.SIZE: lambda entry: (_optional(entry.metadata.size), _raw_name(entry)),
    SortKey.EXTENSION: lambda entry: (_optional_text(entry.extension), _raw_name(entry)),
    SortKey.CREATION_DATE: lambda entry: (_optional(entry.metadata.created_ns), _raw_name(entry)),
    SortKey.ACCESS_DATE: lambda entry: (_optional(entry.metadata.accessed_ns), _raw_name(entry)),
    SortKey.MODIFICATION_DATE: lambda entry: (_optional(entry.metadata.modified_ns), _raw_name(entry)),
    SortKey.COLOR: lambda entry: (entry.color.as_tuple(), _raw_name(entry)),
}


def sort_key_for(config: ListingConfig) -> Callable[[DisplayEntry], SortTuple]:
    """Build the full key function for ``config``."""
    if config.sort_by is SortKey.NAME:
        uppercase_first = config.uppercase_first

        def field_key(entry: DisplayEntry) -> SortTuple:
            return name_key(entry.name, uppercase_first)

    else:
        field_key = _FIELD_KEYS[config.sort_by]

    if not config.group_directories_first:
        return field_key

    def grouped_key(entry: DisplayEntry) -> SortTuple:
        return (entry.kind != Kind.DIRECTORY, field_key(entry))

    return grouped_key


def sort_entries(entries: Iterable[DisplayEntry], config: ListingConfig) -> list[DisplayEntry]:
    """Return entries ordered by ``config``; ``reverse`` flips the whole sequence."""
    ordered = sorted(entries, key=sort_key_for(config))
    if config.reverse:
        ordered.reverse()
    return ordered


__all__ = [
    "name_key",
    "sort_key_for",
    "sort_entries",
]
