"""Background execution of directory listing jobs.

Jobs run on daemon worker threads; their results are queued and handed back
to the owning thread only when it drains them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from ..errors import ListingProviderError
from ..providers.types import ListingProvider, Node

logger = logging.getLogger(__name__)

Job = Callable[[], None]
JobRunner = Callable[[Job], None]


@dataclass(frozen=True)
class ListingResult:
    """Completed provider call for one path: children or an error."""

    path: str
    children: tuple[Node, ...] | None = None
    error: ListingProviderError | None = None


def run_listing(provider: ListingProvider, path: str) -> ListingResult:
    """Call ``provider.list(path)`` and capture the outcome as a result."""
    try:
        children = tuple(provider.list(path))
    except ListingProviderError as exc:
        return ListingResult(path=path, error=exc)
    except Exception as exc:
        logger.warning("listing provider crashed for %s", path, exc_info=True)
        error = ListingProviderError(path, str(exc) or type(exc).__name__)
        error.__cause__ = exc
        return ListingResult(path=path, error=error)
    return ListingResult(path=path, children=children)


def run_on_daemon_thread(job: Job) -> None:
    """Default job runner: one daemon thread per job."""
    worker = threading.Thread(
        target=job,
        name="lazyexplorer-listing",
        daemon=True,
    )
    worker.start()


class BackgroundLoader:
    """Runs listing calls through a job runner and queues their results.

    ``run_in_background`` decides where the provider call executes. The
    default starts a daemon thread; ``lambda job: job()`` runs inline, which
    makes results available to the next ``drain_results`` immediately.
    """

    def __init__(
        self,
        provider: ListingProvider,
        run_in_background: JobRunner | None = None,
    ) -> None:
        self._provider = provider
        self._run_in_background = run_in_background or run_on_daemon_thread
        self._results: Queue[ListingResult] = Queue()

    def submit(self, path: str) -> None:
        """Schedule one provider call for ``path``."""

        def job() -> None:
            self._results.put(run_listing(self._provider, path))

        self._run_in_background(job)

    def drain_results(self, timeout_seconds: float = 0.0) -> list[ListingResult]:
        """Return all queued results, waiting up to ``timeout_seconds`` for the first."""
        out: list[ListingResult] = []
        if timeout_seconds > 0:
            try:
                out.append(self._results.get(timeout=timeout_seconds))
            except Empty:
                return out
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "BackgroundLoader",
    "Job",
    "JobRunner",
    "ListingResult",
    "run_listing",
    "run_on_daemon_thread",
]
