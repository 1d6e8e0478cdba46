"""Tests for display entry construction, styling and identity."""

from __future__ import annotations

import unittest

from rainbowls.color import RgbColor
from rainbowls.entry_model import (
    EntryMetadata,
    Kind,
    build_display_entry,
    format_name,
    split_extension,
    to_display_text,
)
from rainbowls.options import ListingConfig


def _entry(name: str | bytes, kind: Kind = Kind.FILE, **config_changes):
    config = ListingConfig(color_seed=12345, minimal_rgb_sum=0, **config_changes)
    return build_display_entry(name, EntryMetadata(kind=kind), config)


class SplitExtensionTests(unittest.TestCase):
    def test_last_dot_wins(self) -> None:
        self.assertEqual(split_extension("main.rs"), "rs")
        self.assertEqual(split_extension("archive.tar.gz"), "gz")

    def test_names_without_extension(self) -> None:
        self.assertIsNone(split_extension("Makefile"))
        self.assertIsNone(split_extension(".bashrc"))
        self.assertIsNone(split_extension("."))
        self.assertIsNone(split_extension(".."))

    def test_trailing_dot_gives_empty_extension(self) -> None:
        self.assertEqual(split_extension("notes."), "")
        self.assertEqual(split_extension(".config.json"), "json")


class FormatNameTests(unittest.TestCase):
    def test_executable_uses_color_then_bold_then_reset(self) -> None:
        entry = _entry("x.rs", kind=Kind.EXECUTABLE)

        self.assertEqual(entry.color, RgbColor(193, 238, 60))
        self.assertEqual(entry.formatted, "\x1b[38;2;193;238;60m\x1b[1mx.rs\x1b[0;00m")
        self.assertEqual(entry.length, 4)
        self.assertEqual(len(entry), 4)

    def test_directory_suffix_counts_toward_length(self) -> None:
        entry = _entry("src", kind=Kind.DIRECTORY)

        self.assertTrue(entry.formatted.endswith("src/\x1b[0;00m"))
        self.assertEqual(entry.length, 4)
        self.assertEqual(entry.suffix, "/")

    def test_prefix_and_suffix_wrap_name_inside_escapes(self) -> None:
        formatted, length = format_name("a", RgbColor(1, 2, 3), (1, 4), "[", "]")
        self.assertEqual(formatted, "\x1b[38;2;1;2;3m\x1b[1m\x1b[4m[a]\x1b[0;00m")
        self.assertEqual(length, 3)

    def test_no_color_emits_plain_text(self) -> None:
        entry = _entry("x.rs", kind=Kind.EXECUTABLE, no_color=True)
        self.assertEqual(entry.formatted, "x.rs")
        self.assertEqual(entry.length, 4)

    def test_length_counts_grapheme_clusters(self) -> None:
        entry = _entry("cafe\u0301.txt")
        self.assertEqual(entry.length, 8)


class DisplayTextTests(unittest.TestCase):
    def test_undecodable_bytes_are_replaced(self) -> None:
        self.assertEqual(to_display_text(b"bad\xff.txt"), "bad\ufffd.txt")

    def test_lossy_name_keeps_raw_bytes_for_filesystem_access(self) -> None:
        entry = _entry(b"bad\xff.txt")
        self.assertEqual(entry.name, "bad\ufffd.txt")
        self.assertEqual(entry.raw_name, b"bad\xff.txt")
        self.assertEqual(entry.path, b"bad\xff.txt")
        self.assertEqual(entry.extension, "txt")


class IdentityTests(unittest.TestCase):
    def test_equality_ignores_color_and_formatting(self) -> None:
        first = build_display_entry("a.txt", EntryMetadata(kind=Kind.FILE), ListingConfig(color_seed=3))
        second = build_display_entry("a.txt", EntryMetadata(kind=Kind.FILE), ListingConfig(color_seed=99991))

        self.assertNotEqual(first.color, second.color)
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))

    def test_kind_orders_before_extension_and_name(self) -> None:
        directory = _entry("zzz", kind=Kind.DIRECTORY)
        plain = _entry("Makefile")
        with_ext = _entry("a.txt")

        self.assertLess(directory, plain)
        self.assertLess(plain, with_ext)
        self.assertNotEqual(_entry("a.txt"), _entry("a.txt", kind=Kind.EXECUTABLE))


if __name__ == "__main__":
    unittest.main()
