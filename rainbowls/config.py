"""Persistent JSON defaults and option validation.

Users can keep preferred listing options in a JSON file under the platform
config directory; those values are applied before command-line flags. All
access is defensive: a missing or malformed file, or an invalid value, falls
back to the built-in defaults.
"""

from __future__ import annotations

import json
import re
from dataclasses import replace
from pathlib import Path

from platformdirs import user_config_dir

from .ansi import STYLE_CODES, grapheme_len
from .color import MAX_RGB_SUM
from .entry_model.types import Kind
from .options import KindStyle, ListingConfig, SortKey

APP_NAME = "rainbowls"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

_BOOL_KEYS = (
    "group_directories_first",
    "uppercase_first",
    "reverse",
    "show_dotfiles",
    "show_backups",
    "follow_symlinks",
    "no_color",
)


class OptionError(ValueError):
    """Raised when an option value fails validation."""


def parse_style_codes(value: str) -> tuple[int, ...]:
    """Parse a digit string such as ``"14"`` into style codes ``(1, 4)``."""
    codes: list[int] = []
    for char in value.strip():
        if not char.isdigit():
            raise OptionError(f'failed to convert "{char}" to a style code')
        code = int(char)
        if code not in STYLE_CODES:
            allowed = ", ".join(str(known) for known in STYLE_CODES)
            raise OptionError(f"unsupported style code {code} (expected one of {allowed})")
        codes.append(code)
    return tuple(codes)


def parse_min_sum(value: str | int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise OptionError(f"invalid minimal sum: {value!r}") from exc
    if isinstance(value, bool) or parsed < 0 or parsed > MAX_RGB_SUM:
        raise OptionError(f"minimal sum must be between 0 and {MAX_RGB_SUM}, got {value!r}")
    return parsed


def parse_padding(value: str) -> str:
    if grapheme_len(value) != 1:
        raise OptionError(f'padding must be a single character, got "{value}"')
    return value


def parse_sort_key(value: str) -> SortKey:
    key = SortKey.parse(value)
    if key is None:
        names = ", ".join(known.value for known in SortKey)
        raise OptionError(f'unrecognized sort key "{value}" (expected one of {names}, colour)')
    return key


def compile_pattern(value: str) -> re.Pattern[str]:
    try:
        return re.compile(value)
    except re.error as exc:
        raise OptionError(f'failed to compile "{value}" into a valid regex: {exc}') from exc


def load_config() -> dict[str, object]:
    """Read the saved defaults from ``CONFIG_PATH``.

    Any read or decode failure, and any top-level value other than a JSON
    object, yields ``{}`` so a broken file never blocks a listing.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _style_from_json(base: KindStyle, raw: object) -> KindStyle:
    """Merge one persisted ``{codes, prefix, suffix}`` object into ``base``."""
    if not isinstance(raw, dict):
        return base
    style = base
    codes = raw.get("codes")
    if isinstance(codes, str):
        try:
            style = replace(style, codes=parse_style_codes(codes))
        except OptionError:
            pass
    elif isinstance(codes, list) and all(
        isinstance(code, int) and not isinstance(code, bool) and code in STYLE_CODES for code in codes
    ):
        style = replace(style, codes=tuple(codes))
    for affix in ("prefix", "suffix"):
        value = raw.get(affix)
        if isinstance(value, str):
            style = replace(style, **{affix: value or None})
    return style


def apply_persisted_defaults(config: ListingConfig, data: dict[str, object]) -> ListingConfig:
    """Overlay recognised, valid keys from ``data`` on ``config``.

    Unknown keys and values of the wrong type are ignored.
    """
    changes: dict[str, object] = {}
    for key in _BOOL_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            changes[key] = value

    value = data.get("minimal_rgb_sum")
    if isinstance(value, int):
        try:
            changes["minimal_rgb_sum"] = parse_min_sum(value)
        except OptionError:
            pass

    value = data.get("separator")
    if isinstance(value, str):
        changes["separator"] = value

    value = data.get("padding")
    if isinstance(value, str):
        try:
            changes["padding"] = parse_padding(value)
        except OptionError:
            pass

    value = data.get("sort_by")
    if isinstance(value, str):
        sort_key = SortKey.parse(value)
        if sort_key is not None:
            changes["sort_by"] = sort_key

    value = data.get("time_format")
    if isinstance(value, str) and value:
        changes["time_format"] = value

    value = data.get("titles")
    if isinstance(value, str):
        try:
            changes["title_codes"] = parse_style_codes(value)
        except OptionError:
            pass

    raw_styles = data.get("styles")
    if isinstance(raw_styles, dict):
        styles = dict(config.styles)
        for label, raw_style in raw_styles.items():
            kind = Kind.from_label(label) if isinstance(label, str) else None
            if kind is None:
                continue
            styles[kind] = _style_from_json(config.style_for(kind), raw_style)
        changes["styles"] = styles

    return replace(config, **changes) if changes else config


def load_listing_defaults(config: ListingConfig | None = None) -> ListingConfig:
    """Return ``config`` (or built-in defaults) with persisted defaults applied."""
    return apply_persisted_defaults(config or ListingConfig(), load_config())


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "OptionError",
    "parse_style_codes",
    "parse_min_sum",
    "parse_padding",
    "parse_sort_key",
    "compile_pattern",
    "load_config",
    "apply_persisted_defaults",
    "load_listing_defaults",
]
