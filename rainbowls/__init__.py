"""rainbowls: directory listings with a stable color per extension.

The package root only exposes ``main``; the listing pipeline lives in
``rainbowls.listing`` and its building blocks in the sibling modules.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(*args, **kwargs):
    """Run the CLI, importing it on first use so ``import rainbowls`` stays cheap."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main", "__version__"]
