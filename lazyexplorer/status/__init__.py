"""Version-control status snapshots and the node classification overlay."""

from __future__ import annotations

from .overlay import (
    STATUS_MODIFIED,
    STATUS_NONE,
    STATUS_STAGED,
    STATUS_UNTRACKED,
    FileStatus,
    classify,
    relative_path,
    status_counts,
)
from .snapshot import StatusSnapshot, normalize_relative_path, normalize_status_payload

__all__ = [
    "FileStatus",
    "STATUS_NONE",
    "STATUS_STAGED",
    "STATUS_MODIFIED",
    "STATUS_UNTRACKED",
    "StatusSnapshot",
    "classify",
    "normalize_relative_path",
    "normalize_status_payload",
    "relative_path",
    "status_counts",
]
