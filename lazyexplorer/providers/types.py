"""Boundary datatypes and collaborator contracts for explorer providers.

Listing and status providers sit on the far side of an RPC-like boundary.
Everything crossing it is normalized into the frozen types defined here.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..status.snapshot import StatusSnapshot


@dataclass(frozen=True)
class Node:
    """One directory entry as reported by a listing provider.

    ``path`` is the unique key within a project. Files never carry children;
    directory children live only in the directory cache.
    """

    name: str
    path: str
    is_directory: bool = False


class ListingProvider(Protocol):
    """Lists the immediate entries of one directory, in display order."""

    def list(self, path: str) -> Sequence[Node]:
        """Return entries of ``path`` or raise ``ListingProviderError``."""
        ...


class StatusProvider(Protocol):
    """Computes a version-control status snapshot for a project root."""

    def get_status(self, project_root: str) -> StatusSnapshot:
        """Return a snapshot or raise ``StatusUnavailable``."""
        ...


@dataclass(frozen=True)
class Connected:
    """A real listing backend is reachable for ``root``."""

    root: str


@dataclass(frozen=True)
class Unavailable:
    """No usable backend; ``reason`` says why."""

    reason: str


BackendCapability = Connected | Unavailable


def detect_backend(root: str) -> BackendCapability:
    """Probe whether ``root`` can be served by the local filesystem backend."""
    if not root:
        return Unavailable("no project root given")
    if not os.path.exists(root):
        return Unavailable(f"{root} does not exist")
    if not os.path.isdir(root):
        return Unavailable(f"{root} is not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        return Unavailable(f"{root} is not readable")
    return Connected(root)


__all__ = [
    "Node",
    "ListingProvider",
    "StatusProvider",
    "Connected",
    "Unavailable",
    "BackendCapability",
    "detect_backend",
]
