"""Public package surface for lazyexplorer.

Exports ``main`` for programmatic CLI invocation.
The explorer model lives in ``lazyexplorer.explorer`` and its subpackages.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
