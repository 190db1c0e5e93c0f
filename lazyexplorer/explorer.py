"""Project explorer facade used by the UI layer.

Wires one directory cache, the latest status snapshot and a search session
together and exposes the operations a tree pane and quick-open dialog need.
Callers only read projections; all mutation goes through these methods.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .errors import StatusUnavailable
from .providers.types import ListingProvider, Node, StatusProvider
from .search.fuzzy import MAX_RESULTS, IndexEntry, SearchResult, build_index
from .search.session import Direction, SearchSession
from .status.overlay import FileStatus, classify
from .status.snapshot import StatusSnapshot
from .tree.cache import DirectoryCache, LoadCallback, LoadOutcome, PendingLoad
from .tree.loader import JobRunner
from .tree.rendering import format_status_header, format_tree_row
from .tree.view import TreeItem, TreeRow, compose_tree, visible_rows
from .ui_theme import UITheme

logger = logging.getLogger(__name__)


class ProjectExplorer:
    """One open project: lazy tree, status overlay and quick-open search.

    ``on_project_opened`` is called with the project root from ``open``
    (e.g. ``RecentProjects.add``). ``on_file_selected`` receives the result
    committed from the search session.
    """

    def __init__(
        self,
        root: str,
        listing: ListingProvider,
        status_provider: StatusProvider | None = None,
        *,
        on_project_opened: Callable[[str], None] | None = None,
        on_file_selected: Callable[[SearchResult], None] | None = None,
        run_in_background: JobRunner | None = None,
        search_limit: int = MAX_RESULTS,
    ) -> None:
        self.root = root
        self.cache = DirectoryCache(root, listing, run_in_background)
        self.status_provider = status_provider
        self.status = StatusSnapshot.unavailable()
        self.status_error: str | None = None
        self.on_project_opened = on_project_opened
        self.search = SearchSession(self.build_index, on_select=on_file_selected, limit=search_limit)

    # lifecycle
    def open(self, on_done: LoadCallback | None = None) -> PendingLoad | None:
        """Load the root listing, poll status and register the project."""
        logger.info("opening project %s", self.root)
        if self.on_project_opened is not None:
            self.on_project_opened(self.root)
        pending = self.cache.expand(self.root)
        if pending is not None and on_done is not None:
            pending.add_done_callback(on_done)
        self.poll_status()
        return pending

    def poll(self, timeout_seconds: float = 0.0) -> list[LoadOutcome]:
        """Commit finished background listings."""
        return self.cache.poll(timeout_seconds)

    # tree
    def toggle_expand(self, path: str) -> bool:
        return self.cache.toggle_expand(path)

    def expand(self, path: str) -> PendingLoad | None:
        return self.cache.expand(path)

    def refresh(self, path: str | None = None, on_done: LoadCallback | None = None) -> PendingLoad:
        """Reload ``path`` (the project root by default)."""
        return self.cache.refresh(self.root if path is None else path, on_done)

    def tree(self) -> tuple[TreeItem, ...]:
        return compose_tree(self.cache)

    def visible_rows(self) -> list[TreeRow]:
        return visible_rows(self.cache)

    def render_lines(self, theme: UITheme | None = None) -> list[str]:
        """Status header (inside a repository) followed by one line per visible row."""
        lines: list[str] = []
        header = format_status_header(self.status, theme)
        if header:
            lines.append(header)
        for row in self.visible_rows():
            lines.append(format_tree_row(row, self.classify(row.node), theme))
        return lines

    # status
    def classify(self, node: Node) -> FileStatus:
        return classify(node, self.status, self.root)

    def poll_status(self) -> StatusSnapshot:
        """Replace the status snapshot with a fresh one from the provider.

        Failures degrade to the unavailable snapshot and record the reason in
        ``status_error``; the tree keeps working either way.
        """
        if self.status_provider is None:
            self.status = StatusSnapshot.unavailable()
            return self.status
        try:
            snapshot = self.status_provider.get_status(self.root)
        except StatusUnavailable as exc:
            logger.warning("status unavailable for %s: %s", self.root, exc.reason)
            self.status = StatusSnapshot.unavailable()
            self.status_error = exc.reason
        else:
            self.status = snapshot
            self.status_error = None
        return self.status

    # search
    def build_index(self) -> list[IndexEntry]:
        return build_index(self.cache.roots(), self.cache.children)

    def open_search(self) -> SearchSession:
        self.search.open()
        return self.search

    def update_query(self, query: str) -> list[SearchResult]:
        return self.search.update_query(query)

    def navigate(self, direction: Direction) -> int:
        return self.search.navigate(direction)

    def commit_selection(self) -> SearchResult | None:
        return self.search.commit_selection()

    def close_search(self) -> None:
        self.search.close()


__all__ = ["ProjectExplorer"]
