"""Typed exceptions raised by the explorer core and its adapters.

None of these is fatal: each one is recoverable by repeating the specific
operation (re-expand, refresh, re-poll status).
"""

from __future__ import annotations


class ExplorerError(RuntimeError):
    """Base class for all explorer errors."""


class ListingProviderError(ExplorerError):
    """Listing a directory failed (missing, unreadable, backend error)."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot list {path!r}: {reason}")


class StatusUnavailable(ExplorerError):
    """Version-control status could not be computed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"status unavailable: {reason}")


class BackendUnavailableError(ExplorerError):
    """No real backend was detected and demo data was not requested."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"backend unavailable: {reason}")


__all__ = [
    "ExplorerError",
    "ListingProviderError",
    "StatusUnavailable",
    "BackendUnavailableError",
]
