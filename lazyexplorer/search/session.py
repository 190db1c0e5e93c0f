"""Quick-open search session: query, result list, selection cursor."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

from .fuzzy import MAX_RESULTS, IndexEntry, SearchResult, rank

Direction = Literal["up", "down"]

_KEY_ALIASES = {
    "down": "down",
    "arrowdown": "down",
    "ctrl-n": "down",
    "up": "up",
    "arrowup": "up",
    "ctrl-p": "up",
    "enter": "enter",
    "return": "enter",
    "\r": "enter",
    "\n": "enter",
    "escape": "escape",
    "esc": "escape",
    "\x1b": "escape",
}


class SearchSession:
    """Interactive fuzzy search over the currently materialized tree.

    ``index_source`` is called on every query change, so the results always
    reflect the live cache. ``on_select`` receives the committed result.
    """

    def __init__(
        self,
        index_source: Callable[[], list[IndexEntry]],
        on_select: Callable[[SearchResult], None] | None = None,
        limit: int = MAX_RESULTS,
    ) -> None:
        self.index_source = index_source
        self.on_select = on_select
        self.limit = limit
        self.active = False
        self.query = ""
        self.results: list[SearchResult] = []
        self.selected_index = 0

    def open(self) -> None:
        """Start a fresh session with an empty query."""
        self.active = True
        self.query = ""
        self.results = []
        self.selected_index = 0

    def close(self) -> None:
        """End the session without committing anything."""
        self.active = False
        self.query = ""
        self.results = []
        self.selected_index = 0

    def update_query(self, query: str) -> list[SearchResult]:
        """Re-rank against ``query`` and reset the selection to the top."""
        self.query = query
        if query.strip():
            self.results = rank(query, self.index_source(), limit=self.limit)
        else:
            self.results = []
        self.selected_index = 0
        return self.results

    def navigate(self, direction: Direction) -> int:
        """Move the selection cursor with wrap-around and return it."""
        count = len(self.results)
        if direction == "down":
            self.selected_index = (self.selected_index + 1) % max(count, 1)
        elif direction == "up":
            self.selected_index = max(count - 1, 0) if self.selected_index == 0 else self.selected_index - 1
        else:
            raise ValueError(f"unknown direction: {direction!r}")
        return self.selected_index

    @property
    def selected(self) -> SearchResult | None:
        if 0 <= self.selected_index < len(self.results):
            return self.results[self.selected_index]
        return None

    def commit_selection(self) -> SearchResult | None:
        """Deliver the selected result and close; no-op when nothing is selected."""
        result = self.selected
        if result is None:
            return None
        if self.on_select is not None:
            self.on_select(result)
        self.close()
        return result

    def handle_key(self, key: str) -> bool:
        """Dispatch one navigation key. Returns whether the key was consumed."""
        if not self.active:
            return False
        action = _KEY_ALIASES.get(key if len(key) == 1 else key.lower())
        if action in ("up", "down"):
            self.navigate(action)
            return True
        if action == "enter":
            self.commit_selection()
            return True
        if action == "escape":
            self.close()
            return True
        return False


__all__ = ["Direction", "SearchSession"]
