"""Lazy project tree: directory cache, background loading, display projections."""

from __future__ import annotations

from .cache import DirectoryCache, LoadOutcome, PendingLoad, is_descendant
from .loader import BackgroundLoader, ListingResult, run_on_daemon_thread
from .rendering import format_status_badge, format_status_header, format_tree_row
from .view import TreeItem, TreeRow, compose_tree, visible_rows

__all__ = [
    "BackgroundLoader",
    "DirectoryCache",
    "ListingResult",
    "LoadOutcome",
    "PendingLoad",
    "TreeItem",
    "TreeRow",
    "compose_tree",
    "format_status_badge",
    "format_status_header",
    "format_tree_row",
    "is_descendant",
    "run_on_daemon_thread",
    "visible_rows",
]
