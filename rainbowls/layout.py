"""Line and column-grid layout for styled listing entries.

All measurement uses ``len(entry)``, the grapheme count of a display entry,
never the length of the escaped string. Output is returned as a list of lines
so the layout can be tested without capturing stdout.
"""

from __future__ import annotations

from collections.abc import Sequence

from .ansi import grapheme_len
from .entry_model import DisplayEntry
from .long_listing import render_long_listing
from .options import ListingConfig


def rows_for_columns(count: int, num_columns: int) -> int:
    """Rows per column for ``count`` entries filled down ``num_columns`` columns."""
    return count // num_columns + 1


def column_length(lengths: Sequence[int], num_columns: int, column: int) -> int:
    """Widest entry assigned to ``column``; an empty column has width 0."""
    rows = rows_for_columns(len(lengths), num_columns)
    members = lengths[rows * column : rows * column + rows]
    return max(members, default=0)


def line_length(lengths: Sequence[int], separator_len: int) -> int:
    """Width of all entries printed on one line."""
    if not lengths:
        return 0
    return sum(lengths) + separator_len * (len(lengths) - 1)


def compute_column_widths(lengths: Sequence[int], separator_len: int, term_width: int) -> list[int]:
    """Return column widths for the densest grid that fits ``term_width``.

    Every column count from 1 to ``len(lengths) - 1`` is tried and the largest
    fitting one wins, so this is quadratic in the number of entries. That is
    fine for directory listings but would need a smarter bound for very large
    inputs. An empty list means not even one column fits.
    """
    best: list[int] = []
    for num_columns in range(1, len(lengths)):
        widths = [column_length(lengths, num_columns, column) for column in range(num_columns)]
        total = sum(widths) + separator_len * (num_columns - 1)
        if total <= term_width and len(widths) > len(best):
            best = widths
    return best


def render_one_line(entries: Sequence[DisplayEntry], separator: str) -> list[str]:
    if not entries:
        return []
    return [separator.join(entry.formatted for entry in entries)]


def render_one_per_line(entries: Sequence[DisplayEntry]) -> list[str]:
    return [entry.formatted for entry in entries]


def render_grid(
    entries: Sequence[DisplayEntry],
    column_widths: Sequence[int],
    separator: str,
    padding: str,
) -> list[str]:
    """Emit rows for entries filled down each column, then across.

    Entries are left justified and padded to their column width; the last
    entry of a row gets neither padding nor a trailing separator. Rows with
    no entries are skipped.
    """
    if not entries or not column_widths:
        return []
    rows = rows_for_columns(len(entries), len(column_widths))
    lines: list[str] = []
    for row in range(rows):
        cells = list(zip(entries[row::rows], column_widths))
        if not cells:
            continue
        parts: list[str] = []
        last_index = len(cells) - 1
        for index, (entry, width) in enumerate(cells):
            parts.append(entry.formatted)
            if index != last_index:
                parts.append(padding * max(0, width - len(entry)))
                parts.append(separator)
        lines.append("".join(parts))
    return lines


def render_entries(
    entries: Sequence[DisplayEntry],
    config: ListingConfig,
    term_width: int | None = None,
) -> list[str] | None:
    """Lay out sorted ``entries`` as printable lines.

    Returns ``None`` when the layout needs a terminal width and none is known;
    the caller decides whether to abort or pick a fallback width.
    """
    if not entries:
        return []
    if config.one_per_line:
        return render_one_per_line(entries)
    if config.long_listing:
        return render_long_listing(entries, config)
    if term_width is None:
        return None

    separator_len = grapheme_len(config.separator)
    lengths = [len(entry) for entry in entries]
    if len(entries) == 1 or line_length(lengths, separator_len) <= term_width:
        return render_one_line(entries, config.separator)

    column_widths = compute_column_widths(lengths, separator_len, term_width)
    if not column_widths:
        column_widths = [max(lengths)]
    return render_grid(entries, column_widths, config.separator, config.padding)


__all__ = [
    "rows_for_columns",
    "column_length",
    "line_length",
    "compute_column_widths",
    "render_one_line",
    "render_one_per_line",
    "render_grid",
    "render_entries",
]
