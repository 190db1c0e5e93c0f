"""Version-control status snapshots and edge normalization.

Backends report status as loosely typed payloads. ``normalize_status_payload``
converts one into a ``StatusSnapshot`` exactly once, at the boundary.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..errors import StatusUnavailable

_REQUIRED_FIELDS = ("branch", "staged", "modified", "untracked")


def normalize_relative_path(raw: str) -> str:
    """Return ``raw`` with ``/`` separators and no leading ``./``."""
    normalized = raw.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def _path_set(paths: Iterable[str]) -> frozenset[str]:
    return frozenset(normalize_relative_path(path) for path in paths if path)


@dataclass(frozen=True)
class StatusSnapshot:
    """Branch plus staged/modified/untracked project-relative path sets."""

    branch: str = ""
    staged: frozenset[str] = frozenset()
    modified: frozenset[str] = frozenset()
    untracked: frozenset[str] = frozenset()
    is_git_repo: bool = False

    @classmethod
    def unavailable(cls) -> StatusSnapshot:
        """Snapshot used when there is no repository or status failed."""
        return cls()

    @classmethod
    def from_paths(
        cls,
        branch: str,
        staged: Iterable[str] = (),
        modified: Iterable[str] = (),
        untracked: Iterable[str] = (),
        is_git_repo: bool = True,
    ) -> StatusSnapshot:
        """Build a snapshot from arbitrary path iterables, normalizing separators."""
        return cls(
            branch=branch,
            staged=_path_set(staged),
            modified=_path_set(modified),
            untracked=_path_set(untracked),
            is_git_repo=is_git_repo,
        )

    @property
    def total_changes(self) -> int:
        return len(self.staged) + len(self.modified) + len(self.untracked)

    @property
    def is_clean(self) -> bool:
        """True for a repository with no staged, modified or untracked paths."""
        return self.is_git_repo and self.total_changes == 0


def _coerce_path_list(payload: Mapping[str, object], key: str) -> list[str]:
    value = payload.get(key)
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise StatusUnavailable(f"field {key!r} must be a list of paths")
    paths: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise StatusUnavailable(f"field {key!r} contains a non-string path")
        paths.append(item)
    return paths


def normalize_status_payload(payload: Mapping[str, object]) -> StatusSnapshot:
    """Convert a backend status mapping into a ``StatusSnapshot``.

    Accepts ``isGitRepo`` or ``is_git_repo`` as the repository discriminant.
    A payload that is not a repository normalizes to the unavailable snapshot
    regardless of its other fields. Missing or mistyped fields raise
    ``StatusUnavailable``.
    """
    if not isinstance(payload, Mapping):
        raise StatusUnavailable("status payload is not a mapping")

    if "isGitRepo" in payload:
        is_git_repo = payload["isGitRepo"]
    elif "is_git_repo" in payload:
        is_git_repo = payload["is_git_repo"]
    else:
        raise StatusUnavailable("status payload has no repository flag")
    if not isinstance(is_git_repo, bool):
        raise StatusUnavailable("repository flag must be a boolean")
    if not is_git_repo:
        return StatusSnapshot.unavailable()

    missing = [key for key in _REQUIRED_FIELDS if key not in payload]
    if missing:
        raise StatusUnavailable(f"status payload missing {', '.join(missing)}")

    branch = payload["branch"]
    if not isinstance(branch, str):
        raise StatusUnavailable("field 'branch' must be a string")

    return StatusSnapshot.from_paths(
        branch,
        staged=_coerce_path_list(payload, "staged"),
        modified=_coerce_path_list(payload, "modified"),
        untracked=_coerce_path_list(payload, "untracked"),
        is_git_repo=True,
    )


__all__ = [
    "StatusSnapshot",
    "normalize_relative_path",
    "normalize_status_payload",
]
