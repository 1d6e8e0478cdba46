"""Command-line front door for rainbowls.

Parses CLI options on top of persisted defaults, resolves target paths and
terminal width, then prints each directory listing in order.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from .config import (
    OptionError,
    compile_pattern,
    load_listing_defaults,
    parse_min_sum,
    parse_padding,
    parse_sort_key,
    parse_style_codes,
)
from .entry_model import Kind
from .listing import iter_listings, render_listing
from .options import ListingConfig, SizeUnit, time_color_seed

LOGGER = logging.getLogger(__name__)

WIDTH_UNKNOWN_MESSAGE = "Failed to get terminal size and none was provided either."

_KIND_OPTIONS: tuple[tuple[str, Kind], ...] = (
    ("files", Kind.FILE),
    ("directories", Kind.DIRECTORY),
    ("executables", Kind.EXECUTABLE),
    ("symlinks", Kind.SYMLINK),
    ("unknowns", Kind.UNKNOWN),
)

_BOOL_FLAGS = (
    "reverse",
    "group_directories_first",
    "uppercase_first",
    "show_dotfiles",
    "show_backups",
    "recursive",
    "follow_symlinks",
    "one_per_line",
    "long_listing",
    "no_color",
)


def _argparse_type(parse):
    """Wrap an ``OptionError``-raising parser as an argparse type."""

    def convert(value: str):
        try:
            return parse(value)
        except OptionError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    convert.__name__ = parse.__name__
    return convert


def _int_at_least(minimum: int):
    """Build an argparse type accepting integers no smaller than ``minimum``."""

    def convert(value: str) -> int:
        try:
            parsed = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
        if parsed < minimum:
            raise argparse.ArgumentTypeError(f"{parsed} is below the minimum of {minimum}")
        return parsed

    convert.__name__ = f"int>={minimum}"
    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rainbowls",
        description="List directory contents with a distinct color per extension.",
        epilog=(
            "Style codes: 0 normal, 1 bold, 2 dim, 3 italic, 4 underline, 5 blink, "
            "7 reverse, 8 invisible. Combine digits, e.g. --files 14."
        ),
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Directories to list. Defaults to current directory.")

    styling = parser.add_argument_group("per entry type styling")
    for option, _kind in _KIND_OPTIONS:
        styling.add_argument(f"--{option}", type=_argparse_type(parse_style_codes), metavar="CODES")
        styling.add_argument(f"--{option}-prefix", metavar="TEXT")
        styling.add_argument(f"--{option}-suffix", metavar="TEXT")
    styling.add_argument("--titles", type=_argparse_type(parse_style_codes), metavar="CODES",
                         help="Style codes for directory headers.")

    color = parser.add_argument_group("color")
    color.add_argument("--sum", dest="minimal_rgb_sum", type=_argparse_type(parse_min_sum), metavar="N",
                       help="Minimal sum of the red, green and blue components (0-765).")
    color.add_argument("--seed", dest="color_seed", type=_int_at_least(0), metavar="N",
                       help="Color seed. Defaults to the current time, so colors change between runs.")
    color.add_argument("--no-color", action="store_true", default=None, help="Print names without escapes.")

    sorting = parser.add_argument_group("sorting")
    sorting.add_argument("--sort-by", type=_argparse_type(parse_sort_key), metavar="KEY",
                         help="name, size, extension, color, creation_date, access_date, modification_date. "
                              "Python exposes no creation dates on Linux, so creation_date sorts by name there.")
    sorting.add_argument("-r", "--reverse", action="store_true", default=None)
    sorting.add_argument("-gdf", "--group-directories-first", action="store_true", default=None)
    sorting.add_argument("--uppercase-first", action="store_true", default=None,
                         help="Sort names starting with an uppercase letter first.")

    spacing = parser.add_argument_group("spacing")
    spacing.add_argument("--separator", metavar="TEXT", help="Text between columns (default: two spaces).")
    spacing.add_argument("--padding", type=_argparse_type(parse_padding), metavar="CHAR",
                         help="Single character used to pad columns.")
    spacing.add_argument("--width", dest="term_width", type=_int_at_least(1), metavar="N",
                         help="Layout width (default: terminal width).")

    filtering = parser.add_argument_group("filtering")
    filtering.add_argument("-a", "--show-dotfiles", action="store_true", default=None)
    filtering.add_argument("-B", "--show-backups", action="store_true", default=None)
    filtering.add_argument("--include", dest="include_pattern", type=_argparse_type(compile_pattern),
                           metavar="REGEX", help="Only list names matching REGEX (takes precedence over --exclude).")
    filtering.add_argument("--exclude", dest="exclude_pattern", type=_argparse_type(compile_pattern),
                           metavar="REGEX", help="Skip names matching REGEX.")

    traversal = parser.add_argument_group("traversal")
    traversal.add_argument("-R", "--recursive", action="store_true", default=None)
    traversal.add_argument("-L", "--follow-symlinks", action="store_true", default=None)

    modes = parser.add_argument_group("output modes")
    modes.add_argument("-1", "--one-per-line", action="store_true", default=None)
    modes.add_argument("-l", "--long", dest="long_listing", action="store_true", default=None)
    modes.add_argument("--time-format", metavar="FORMAT", help="strftime format for --long.")
    modes.add_argument("--size-unit", choices=[unit.value for unit in SizeUnit], help="Unit for --long sizes.")

    parser.add_argument("--debug", action="store_true", help="Log debug details to stderr.")
    return parser


def build_config(args: argparse.Namespace, base: ListingConfig | None = None) -> ListingConfig:
    """Apply parsed CLI arguments on top of ``base`` (persisted defaults)."""
    config = base if base is not None else ListingConfig(color_seed=time_color_seed())

    changes: dict[str, object] = {}
    for flag in _BOOL_FLAGS:
        value = getattr(args, flag)
        if value is not None:
            changes[flag] = value
    for name in (
        "minimal_rgb_sum",
        "color_seed",
        "sort_by",
        "separator",
        "padding",
        "term_width",
        "include_pattern",
        "exclude_pattern",
        "time_format",
    ):
        value = getattr(args, name)
        if value is not None:
            changes[name] = value
    if args.size_unit is not None:
        changes["size_unit"] = SizeUnit(args.size_unit)
    if args.titles is not None:
        changes["title_codes"] = args.titles
    config = replace(config, **changes)

    for option, kind in _KIND_OPTIONS:
        attr = option.replace("-", "_")
        style_changes: dict[str, object] = {}
        codes = getattr(args, attr)
        if codes is not None:
            style_changes["codes"] = codes
        for affix in ("prefix", "suffix"):
            value = getattr(args, f"{attr}_{affix}")
            if value is not None:
                style_changes[affix] = value or None
        if style_changes:
            config = config.with_style(kind, **style_changes)
    return config


def _detect_terminal_width() -> int | None:
    """Probe the terminal width; ``None`` when it cannot be determined."""
    columns = shutil.get_terminal_size(fallback=(0, 0)).columns
    return columns if columns > 0 else None


def _resolve_targets(raw_paths: Sequence[str], default_path: Path) -> list[Path]:
    if not raw_paths:
        return [default_path]
    targets: list[Path] = []
    for raw_path in raw_paths:
        path = Path(raw_path)
        if not path.exists():
            raise SystemExit(f"Path not found: {path}")
        if not path.is_dir():
            raise SystemExit(f"Not a directory: {path}")
        targets.append(path)
    return targets


def main(argv: Sequence[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and print listings for each requested directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. When no width is known the output falls back to one
    entry per line if stdout is not a terminal, and exits otherwise.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    config = build_config(args, load_listing_defaults(ListingConfig(color_seed=time_color_seed())))
    LOGGER.debug("listing with seed=%s sort_by=%s", config.color_seed, config.sort_by.value)

    cwd = Path.cwd().resolve()
    targets = _resolve_targets(args.paths, default_path or cwd)
    term_width = config.term_width if config.term_width is not None else _detect_terminal_width()
    always_title = config.recursive or len(targets) > 1

    had_errors = False
    printed_any = False
    for listing in iter_listings(targets, config):
        error = listing.scan_error
        if error is not None and listing.depth == 0 and not listing.entries:
            raise SystemExit(f"Cannot read directory {listing.path}: {error.strerror or error}")

        lines = render_listing(listing, config, term_width, cwd=cwd, always_title=always_title)
        if lines is None:
            if sys.stdout.isatty():
                raise SystemExit(WIDTH_UNKNOWN_MESSAGE)
            LOGGER.debug("width unknown; printing one entry per line")
            lines = render_listing(listing, replace(config, one_per_line=True), None, cwd=cwd, always_title=always_title)
            lines = lines or []

        if lines and (error is None or listing.entries):
            if printed_any:
                sys.stdout.write("\n")
            sys.stdout.write("\n".join(lines) + "\n")
            printed_any = True

        if error is not None:
            sys.stdout.flush()
            sys.stderr.write(f"rainbowls: cannot open directory '{listing.path}': {error.strerror or error}\n")
            had_errors = True

    sys.stdout.flush()
    if had_errors:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
