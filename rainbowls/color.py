"""Deterministic per-entry colors.

Colors are derived from an entry's extension (or its whole name when it has
none) and a numeric seed, then brightened until the channel sum reaches a
configured minimum so names stay readable on dark terminals.
"""

from __future__ import annotations

from dataclasses import dataclass

CHANNEL_MAX = 255
MAX_RGB_SUM = CHANNEL_MAX * 3
MIN_COLOR_SEED = 2
_WORD_MASK = (1 << 64) - 1


@dataclass(frozen=True, order=True)
class RgbColor:
    """One 24-bit color; channels are plain ints bounded to ``[0, 255]``."""

    red: int
    green: int
    blue: int

    def components_sum(self) -> int:
        return self.red + self.green + self.blue

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)


WHITE = RgbColor(CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX)


def normalize_seed(seed: int) -> int:
    """Floor seeds below ``MIN_COLOR_SEED``; a zero seed would make every color black."""
    return max(MIN_COLOR_SEED, int(seed) & _WORD_MASK)


def color_key(display_name: str, extension: str | None) -> bytes:
    """Return the bytes hashed into an entry color.

    Entries sharing an extension share a color, which groups them visually.
    """
    if extension is not None:
        return extension.encode("utf-8")
    return display_name.encode("utf-8")


def derive_color(seed: int, key: bytes) -> RgbColor:
    """Fold ``key`` into ``seed`` by 64-bit wrapping multiplication and split base 255."""
    acc = normalize_seed(seed)
    for byte in key:
        acc = (acc * byte) & _WORD_MASK

    blue = acc % 255
    acc //= 255
    green = acc % 255
    acc //= 255
    red = acc % 255
    return RgbColor(red, green, blue)


def pad_lowest(color: RgbColor, min_sum: int) -> RgbColor:
    """Brighten ``color`` until its channel sum reaches ``min_sum``.

    Colors already brighter than ``min_sum`` are returned unchanged. When the
    deficit fits under the brightest channel's headroom it is spread evenly so
    the hue barely moves; otherwise channels are raised from the dimmest up,
    saturating at 255. Requests beyond 765 end at white.
    """
    colors_sum = color.components_sum()
    if colors_sum > min_sum:
        return color

    channels = list(color.as_tuple())
    order = sorted(range(3), key=lambda slot: channels[slot])
    highest_addable = CHANNEL_MAX - channels[order[-1]]
    deficit = min_sum - colors_sum

    if highest_addable * 3 > deficit:
        to_add, remainder = divmod(deficit, 3)
        for rank, slot in enumerate(order):
            channels[slot] += to_add + (1 if rank < remainder else 0)
        return RgbColor(*channels)

    for slot in order:
        candidate = channels[slot] + (min_sum - colors_sum)
        if candidate < CHANNEL_MAX:
            channels[slot] = candidate
            break
        colors_sum += CHANNEL_MAX - channels[slot]
        channels[slot] = CHANNEL_MAX
    return RgbColor(*channels)


def entry_color(seed: int, display_name: str, extension: str | None, min_sum: int) -> RgbColor:
    """Derive and pad the color for one listed entry."""
    return pad_lowest(derive_color(seed, color_key(display_name, extension)), min_sum)


__all__ = [
    "CHANNEL_MAX",
    "MAX_RGB_SUM",
    "MIN_COLOR_SEED",
    "RgbColor",
    "WHITE",
    "normalize_seed",
    "color_key",
    "derive_color",
    "pad_lowest",
    "entry_color",
]
