"""Tests for name-based entry filtering."""

import re
import unittest

from rainbowls.filters import is_allowed, is_backup_name, is_hidden_name
from rainbowls.options import ListingConfig


class FilterTests(unittest.TestCase):
    def test_dotfiles_and_backups_hidden_by_default(self) -> None:
        config = ListingConfig()
        self.assertFalse(is_allowed(".bashrc", config))
        self.assertFalse(is_allowed("notes.txt~", config))
        self.assertTrue(is_allowed("notes.txt", config))

    def test_flags_reveal_hidden_entries(self) -> None:
        config = ListingConfig(show_dotfiles=True, show_backups=True)
        self.assertTrue(is_allowed(".bashrc", config))
        self.assertTrue(is_allowed("notes.txt~", config))

    def test_name_predicates(self) -> None:
        self.assertTrue(is_hidden_name(".git"))
        self.assertFalse(is_hidden_name("a.git"))
        self.assertTrue(is_backup_name("x~"))
        self.assertFalse(is_backup_name("~x"))

    def test_include_pattern_searches_anywhere_in_name(self) -> None:
        config = ListingConfig(include_pattern=re.compile(r"\.rs$"))
        self.assertTrue(is_allowed("main.rs", config))
        self.assertFalse(is_allowed("main.py", config))

    def test_exclude_pattern(self) -> None:
        config = ListingConfig(exclude_pattern=re.compile("cache"))
        self.assertFalse(is_allowed("__pycache__", config))
        self.assertTrue(is_allowed("src", config))

    def test_include_takes_precedence_over_exclude(self) -> None:
        config = ListingConfig(include_pattern=re.compile("a"), exclude_pattern=re.compile("a"))
        self.assertTrue(is_allowed("apple", config))
        self.assertFalse(is_allowed("berry", config))

    def test_hidden_rule_applies_before_include(self) -> None:
        config = ListingConfig(include_pattern=re.compile("rc"))
        self.assertFalse(is_allowed(".bashrc", config))


if __name__ == "__main__":
    unittest.main()
