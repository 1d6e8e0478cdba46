"""Tests for the per-directory pipeline and recursive traversal."""

from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from rainbowls import listing as listing_mod
from rainbowls.entry_model import Kind
from rainbowls.options import ListingConfig


class _FakeEntry:
    def __init__(self, name: str, mode: int | None, size: int = 0) -> None:
        self.name = name
        self.path = name
        self._mode = mode
        self._size = size

    def stat(self, *, follow_symlinks: bool = True) -> SimpleNamespace:
        if self._mode is None:
            raise PermissionError(13, "Permission denied", self.name)
        return SimpleNamespace(
            st_mode=self._mode,
            st_size=self._size,
            st_mtime_ns=0,
            st_atime_ns=0,
            st_nlink=1,
            st_uid=0,
            st_gid=0,
        )


def _names(listing) -> list[str]:
    return [entry.name for entry in listing.entries]


def _make_tree(root: Path) -> None:
    (root / "a" / "c").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "f.txt").write_text("x", encoding="utf-8")
    (root / "a" / "inner.md").write_text("y", encoding="utf-8")


class BuildEntriesTests(unittest.TestCase):
    def test_failed_metadata_keeps_entry_as_unknown(self) -> None:
        raw = [
            _FakeEntry("ok.txt", stat.S_IFREG | 0o644, size=3),
            _FakeEntry("locked", None),
            _FakeEntry("dir", stat.S_IFDIR | 0o755),
        ]

        entries = listing_mod.build_entries(raw, ListingConfig(color_seed=9))

        self.assertEqual([entry.name for entry in entries], ["dir", "ok.txt", "locked"])
        self.assertEqual(entries[2].kind, Kind.UNKNOWN)
        self.assertIsNone(entries[2].metadata.size)

    def test_filters_run_before_classification(self) -> None:
        hidden = mock.Mock(spec=["name", "path", "stat"])
        hidden.name = ".secret"
        hidden.path = ".secret"

        entries = listing_mod.build_entries([hidden, _FakeEntry("x", stat.S_IFREG | 0o644)], ListingConfig())

        self.assertEqual([entry.name for entry in entries], ["x"])
        hidden.stat.assert_not_called()


class TraversalTests(unittest.TestCase):
    def test_non_recursive_lists_each_path_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)

            listings = list(listing_mod.iter_listings([root], ListingConfig()))

            self.assertEqual(len(listings), 1)
            self.assertEqual(_names(listings[0]), ["a", "b", "f.txt"])

    def test_recursive_descends_depth_first_in_display_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)

            listings = list(listing_mod.iter_listings([root], ListingConfig(recursive=True)))

            self.assertEqual(
                [(listing.path, listing.depth) for listing in listings],
                [(root, 0), (root / "a", 1), (root / "a" / "c", 2), (root / "b", 1)],
            )
            self.assertEqual(_names(listings[1]), ["c", "inner.md"])

    def test_reverse_order_changes_descent_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)

            config = ListingConfig(recursive=True, reverse=True)
            paths = [listing.path for listing in listing_mod.iter_listings([root], config)]

            self.assertEqual(paths, [root, root / "b", root / "a", root / "a" / "c"])

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unsupported")
    def test_symlink_cycle_is_listed_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            try:
                os.symlink(root, root / "a" / "loop")
            except OSError as exc:
                self.skipTest(f"cannot create symlink: {exc}")

            config = ListingConfig(recursive=True, follow_symlinks=True)
            listings = list(listing_mod.iter_listings([root], config))

            self.assertEqual(len(listings), 4)
            loop = next(entry for entry in listings[1].entries if entry.name == "loop")
            self.assertEqual(loop.kind, Kind.DIRECTORY)

            unfollowed = list(listing_mod.iter_listings([root], ListingConfig(recursive=True)))
            self.assertEqual(len(unfollowed), 4)

    def test_subdirectory_scan_error_is_reported_and_traversal_continues(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            real_read = listing_mod.read_directory

            def flaky_read(directory: Path):
                if Path(directory).name == "a":
                    return [], PermissionError(13, "Permission denied", str(directory))
                return real_read(directory)

            with mock.patch.object(listing_mod, "read_directory", side_effect=flaky_read):
                listings = list(listing_mod.iter_listings([root], ListingConfig(recursive=True)))

            self.assertEqual([listing.path for listing in listings], [root, root / "a", root / "b"])
            self.assertIsInstance(listings[1].scan_error, PermissionError)
            self.assertEqual(listings[1].entries, ())

    def test_partial_scan_keeps_entries_and_descends_into_them(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            real_read = listing_mod.read_directory

            def partial_read(directory: Path):
                entries, _error = real_read(directory)
                if Path(directory).name == "a":
                    return entries, OSError(5, "Input/output error", str(directory))
                return entries, None

            with mock.patch.object(listing_mod, "read_directory", side_effect=partial_read):
                listings = list(listing_mod.iter_listings([root], ListingConfig(recursive=True)))

            self.assertEqual(
                [listing.path for listing in listings],
                [root, root / "a", root / "a" / "c", root / "b"],
            )
            self.assertIsInstance(listings[1].scan_error, OSError)
            self.assertEqual(_names(listings[1]), ["c", "inner.md"])


class TitleTests(unittest.TestCase):
    def test_titles_relative_to_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cwd = Path(tmp).resolve()
            (cwd / "src").mkdir()

            self.assertIsNone(listing_mod.title_for(cwd, cwd))
            self.assertEqual(listing_mod.title_for(cwd, cwd, always=True), ".")
            self.assertEqual(listing_mod.title_for(cwd / "src", cwd), "src")

    def test_paths_outside_cwd_keep_given_text(self) -> None:
        with tempfile.TemporaryDirectory() as first, tempfile.TemporaryDirectory() as second:
            other = Path(second)
            self.assertEqual(listing_mod.title_for(other, Path(first).resolve()), str(other))

    def test_render_listing_prefixes_styled_title(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cwd = Path(tmp).resolve()
            (cwd / "src").mkdir()
            (cwd / "src" / "one").write_text("1", encoding="utf-8")
            config = ListingConfig(no_color=False, title_codes=(1,), color_seed=5)

            listing = listing_mod.list_directory(cwd / "src", config)
            lines = listing_mod.render_listing(listing, config, 80, cwd=cwd)

            self.assertEqual(lines[0], "\x1b[1msrc:\x1b[0;00m")
            self.assertEqual(len(lines), 2)

    def test_render_listing_without_width_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root)
            listing = listing_mod.list_directory(root, ListingConfig())
            self.assertIsNone(listing_mod.render_listing(listing, ListingConfig(), None))


if __name__ == "__main__":
    unittest.main()
