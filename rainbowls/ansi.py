"""ANSI escape grammar and grapheme-aware text measurement.

Listing output is built from three SGR sequences: a 24-bit foreground color,
one sequence per style attribute, and a reset. Layout code measures names in
grapheme clusters so combining marks and multi-codepoint emoji count once.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import regex

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
GRAPHEME_RE = regex.compile(r"\X")

RESET_SGR = "\x1b[0;00m"

STYLE_CODES: dict[int, str] = {
    0: "normal",
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    7: "reverse",
    8: "invisible",
}


def truecolor_fg(red: int, green: int, blue: int) -> str:
    """Return the 24-bit foreground SGR sequence for one RGB triple."""
    return f"\x1b[38;2;{red};{green};{blue}m"


def style_sgr(code: int) -> str:
    """Return the SGR sequence for one terminal attribute code."""
    return f"\x1b[{code}m"


def style_prefix(codes: Iterable[int]) -> str:
    return "".join(style_sgr(code) for code in codes)


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def grapheme_len(text: str) -> int:
    """Count extended grapheme clusters in plain ``text``.

    A flag emoji built from two regional indicators, or a letter followed by
    combining accents, each count as a single cluster.
    """
    if not text:
        return 0
    return len(GRAPHEME_RE.findall(text))


def display_len(text: str) -> int:
    """Return grapheme length of ``text`` with escape sequences ignored."""
    return grapheme_len(strip_ansi(text))
