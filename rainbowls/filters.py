"""Name-based entry filtering applied before display entries are built."""

from __future__ import annotations

from .options import ListingConfig


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


def is_backup_name(name: str) -> bool:
    return name.endswith("~")


def is_allowed(name: str, config: ListingConfig) -> bool:
    """Return whether an entry named ``name`` should be listed.

    Dotfiles and ``~`` backups are hidden unless enabled. When an include
    pattern is set it alone decides; the exclude pattern is only consulted
    when there is no include pattern.
    """
    if not config.show_dotfiles and is_hidden_name(name):
        return False
    if not config.show_backups and is_backup_name(name):
        return False
    if config.include_pattern is not None:
        return config.include_pattern.search(name) is not None
    if config.exclude_pattern is not None:
        return config.exclude_pattern.search(name) is None
    return True
