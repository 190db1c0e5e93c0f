"""Lazy directory cache with expand/collapse state and coalesced loads.

The cache is the only owner of materialized directory children. All state
changes happen on the thread that calls its methods; provider calls run in
the background and are committed when the owner drains them with ``poll``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..errors import ListingProviderError
from ..providers.types import ListingProvider, Node
from .loader import BackgroundLoader, JobRunner

logger = logging.getLogger(__name__)


def is_descendant(path: str, ancestor: str) -> bool:
    """Return whether ``path`` lies strictly below ``ancestor``."""
    for separator in ("/", "\\"):
        prefix = ancestor if ancestor.endswith(separator) else ancestor + separator
        if path.startswith(prefix) and path != ancestor:
            return True
    return False


@dataclass(frozen=True)
class LoadOutcome:
    """What happened to one completed listing request.

    ``discarded`` is set when the directory was collapsed before the result
    arrived; the cache was left untouched in that case.
    """

    path: str
    children: tuple[Node, ...] | None = None
    error: ListingProviderError | None = None
    discarded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.discarded


LoadCallback = Callable[[LoadOutcome], None]


class PendingLoad:
    """Handle shared by every caller waiting on one in-flight listing."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.outcome: LoadOutcome | None = None
        self._callbacks: list[LoadCallback] = []

    @property
    def done(self) -> bool:
        return self.outcome is not None

    def add_done_callback(self, callback: LoadCallback) -> None:
        """Call ``callback`` with the outcome, immediately if already done."""
        if self.outcome is not None:
            callback(self.outcome)
            return
        self._callbacks.append(callback)

    def _resolve(self, outcome: LoadOutcome) -> None:
        self.outcome = outcome
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            # A failing caller must not strand the rest of the drained batch.
            try:
                callback(outcome)
            except Exception:
                logger.exception("load callback for %s failed", self.path)


class DirectoryCache:
    """Expansion state plus per-directory child lists for one project.

    The project root's listing is the tree's top level. The root counts as
    permanently expanded and is never part of ``expanded``.
    """

    def __init__(
        self,
        root: str,
        provider: ListingProvider,
        run_in_background: JobRunner | None = None,
    ) -> None:
        self.root = root
        self._loader = BackgroundLoader(provider, run_in_background)
        self._expanded: set[str] = set()
        self._entries: dict[str, tuple[Node, ...]] = {}
        self._errors: dict[str, ListingProviderError] = {}
        self._in_flight: dict[str, PendingLoad] = {}

    # read accessors
    @property
    def expanded(self) -> frozenset[str]:
        return frozenset(self._expanded)

    def is_expanded(self, path: str) -> bool:
        return path == self.root or path in self._expanded

    def has_entry(self, path: str) -> bool:
        return path in self._entries

    def children(self, path: str) -> tuple[Node, ...] | None:
        """Cached children of ``path``, or ``None`` if never loaded successfully."""
        return self._entries.get(path)

    def roots(self) -> tuple[Node, ...]:
        """Top-level nodes: the root listing, empty until it has loaded."""
        return self._entries.get(self.root, ())

    def is_loading(self, path: str) -> bool:
        return path in self._in_flight

    def error(self, path: str) -> ListingProviderError | None:
        """Inline error left by the last failed load of ``path``."""
        return self._errors.get(path)

    def entries(self) -> dict[str, tuple[Node, ...]]:
        return dict(self._entries)

    # expansion
    def expand(self, path: str) -> PendingLoad | None:
        """Mark ``path`` expanded, loading it when there is no cache entry."""
        if path != self.root:
            self._expanded.add(path)
        if path in self._entries:
            return None
        return self.load(path)

    def collapse(self, path: str) -> None:
        """Mark ``path`` collapsed; its cached children are kept."""
        if path == self.root:
            return
        self._expanded.discard(path)

    def toggle_expand(self, path: str) -> bool:
        """Flip the expansion of ``path`` and return the new state."""
        if path == self.root:
            return True
        if path in self._expanded:
            self.collapse(path)
            logger.debug("collapsed %s", path)
            return False
        self.expand(path)
        logger.debug("expanded %s", path)
        return True

    # loading
    def load(self, path: str, on_done: LoadCallback | None = None) -> PendingLoad:
        """Request the children of ``path``.

        While a request for ``path`` is in flight, further calls join it
        instead of calling the provider again.
        """
        pending = self._in_flight.get(path)
        if pending is None:
            pending = PendingLoad(path)
            self._in_flight[path] = pending
            self._errors.pop(path, None)
            logger.debug("loading %s", path)
            self._loader.submit(path)
        else:
            logger.debug("joining in-flight load for %s", path)
        if on_done is not None:
            pending.add_done_callback(on_done)
        return pending

    def refresh(self, path: str, on_done: LoadCallback | None = None) -> PendingLoad:
        """Reload ``path`` even if it is cached.

        Joins a load already in flight for ``path``. If ``path`` is still
        collapsed when the result arrives it is discarded and the cached
        children stay as they were.
        """
        return self.load(path, on_done)

    def on_load_complete(
        self,
        path: str,
        result: Sequence[Node] | ListingProviderError,
    ) -> LoadOutcome:
        """Apply a finished listing for ``path``.

        Results for directories that are no longer expanded are discarded.
        Errors are recorded inline and leave any existing entry untouched.
        A successful result replaces the entry and prunes vanished subtrees.
        """
        pending = self._in_flight.pop(path, None)
        if isinstance(result, ListingProviderError):
            children = None
            error: ListingProviderError | None = result
        else:
            children = tuple(result)
            error = None

        if not self.is_expanded(path):
            logger.debug("discarding stale listing for collapsed %s", path)
            outcome = LoadOutcome(path=path, children=children, error=error, discarded=True)
        elif error is not None:
            logger.warning("listing %s failed: %s", path, error.reason)
            self._errors[path] = error
            outcome = LoadOutcome(path=path, error=error)
        else:
            assert children is not None
            previous = self._entries.get(path)
            self._entries[path] = children
            self._errors.pop(path, None)
            if previous is not None:
                self._prune_vanished(previous, children)
            outcome = LoadOutcome(path=path, children=children)

        if pending is not None:
            pending._resolve(outcome)
        return outcome

    def poll(self, timeout_seconds: float = 0.0) -> list[LoadOutcome]:
        """Commit every finished background listing and return the outcomes."""
        outcomes: list[LoadOutcome] = []
        for result in self._loader.drain_results(timeout_seconds):
            payload: Sequence[Node] | ListingProviderError
            if result.error is not None:
                payload = result.error
            else:
                payload = result.children or ()
            outcomes.append(self.on_load_complete(result.path, payload))
        return outcomes

    # pruning
    def _prune_vanished(self, previous: tuple[Node, ...], current: tuple[Node, ...]) -> None:
        current_dirs = {node.path for node in current if node.is_directory}
        for node in previous:
            if node.is_directory and node.path not in current_dirs:
                self._forget_subtree(node.path)

    def _forget_subtree(self, path: str) -> None:
        def doomed(candidate: str) -> bool:
            return candidate == path or is_descendant(candidate, path)

        for key in [key for key in self._entries if doomed(key)]:
            del self._entries[key]
        for key in [key for key in self._errors if doomed(key)]:
            del self._errors[key]
        self._expanded = {candidate for candidate in self._expanded if not doomed(candidate)}
        logger.debug("pruned vanished directory %s", path)


__all__ = [
    "DirectoryCache",
    "LoadCallback",
    "LoadOutcome",
    "PendingLoad",
    "is_descendant",
]
