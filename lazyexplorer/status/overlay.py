"""Classify tree nodes against a version-control status snapshot.

Everything here is a pure function of its arguments. Callers re-evaluate per
render; nothing is cached because the caller decides when snapshots change.
"""

from __future__ import annotations

from typing import Literal

from ..providers.types import Node
from .snapshot import StatusSnapshot

FileStatus = Literal["none", "staged", "modified", "untracked"]

STATUS_NONE: FileStatus = "none"
STATUS_STAGED: FileStatus = "staged"
STATUS_MODIFIED: FileStatus = "modified"
STATUS_UNTRACKED: FileStatus = "untracked"


def _trim_root(project_root: str) -> str:
    trimmed = project_root.rstrip("/\\")
    return trimmed if trimmed else project_root


def relative_path(path: str, project_root: str) -> str:
    """Strip ``project_root`` plus one ``/`` or ``\\`` from the front of ``path``.

    Whichever separator follows the root is stripped; mixed separators further
    down the path are left untouched. Paths outside the root come back as-is.
    """
    root = _trim_root(project_root)
    for separator in ("/", "\\"):
        prefix = root if root.endswith(separator) else root + separator
        if path.startswith(prefix):
            return path[len(prefix):]
    return path


def classify(node: Node, snapshot: StatusSnapshot, project_root: str) -> FileStatus:
    """Return the decoration status of ``node``.

    Directories and non-repositories are always ``"none"``. Otherwise the
    first set containing the node's relative path wins, checked in the fixed
    order staged, modified, untracked.
    """
    if node.is_directory or not snapshot.is_git_repo:
        return STATUS_NONE

    rel_path = relative_path(node.path, project_root)
    if rel_path in snapshot.staged:
        return STATUS_STAGED
    if rel_path in snapshot.modified:
        return STATUS_MODIFIED
    if rel_path in snapshot.untracked:
        return STATUS_UNTRACKED
    return STATUS_NONE


def status_counts(snapshot: StatusSnapshot) -> dict[FileStatus, int]:
    """Count paths per status for summary headers."""
    if not snapshot.is_git_repo:
        return {STATUS_STAGED: 0, STATUS_MODIFIED: 0, STATUS_UNTRACKED: 0}
    return {
        STATUS_STAGED: len(snapshot.staged),
        STATUS_MODIFIED: len(snapshot.modified),
        STATUS_UNTRACKED: len(snapshot.untracked),
    }


__all__ = [
    "FileStatus",
    "STATUS_NONE",
    "STATUS_STAGED",
    "STATUS_MODIFIED",
    "STATUS_UNTRACKED",
    "classify",
    "relative_path",
    "status_counts",
]
