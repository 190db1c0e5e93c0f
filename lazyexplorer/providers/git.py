"""Git CLI status provider.

Runs ``git status --porcelain=v1 -z --branch`` and folds each record into the
staged/modified/untracked sets of a ``StatusSnapshot``.
"""

from __future__ import annotations

import logging
import os
import subprocess

from ..errors import StatusUnavailable
from ..status.snapshot import StatusSnapshot

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT_SECONDS = 2.0
_UNBORN_PREFIXES = ("No commits yet on ", "Initial commit on ")


def _run_git(cwd: str, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            ["git", "-C", cwd, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except FileNotFoundError as exc:
        raise StatusUnavailable("git executable not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise StatusUnavailable(f"git {args[0]} timed out after {timeout_seconds}s") from exc
    except OSError as exc:
        raise StatusUnavailable(f"cannot run git: {exc}") from exc


def parse_branch_header(header: str) -> str:
    """Extract the branch name from a porcelain ``## ...`` header line."""
    text = header[3:] if header.startswith("## ") else header
    for prefix in _UNBORN_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix):].strip()
    if text.startswith("HEAD (no branch)"):
        return "HEAD"
    text = text.split(" [", 1)[0]
    return text.split("...", 1)[0].strip()


def iter_porcelain_records(output: str) -> tuple[str, list[tuple[str, str]]]:
    """Split ``-z`` porcelain output into ``(branch, [(xy, path), ...])``."""
    branch = ""
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if token.startswith("## "):
            branch = parse_branch_header(token)
            continue
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        records.append((status, token[3:]))

        # Renames and copies carry the source path as an extra token.
        if "R" in status or "C" in status:
            index += 1

    return branch, records


def classify_record(status: str) -> str | None:
    """Map one porcelain ``XY`` code onto ``staged``/``modified``/``untracked``.

    Worktree modifications win over index changes for the same path, so a
    path lands in at most one set.
    """
    if status == "??":
        return "untracked"
    index_state, worktree_state = status[0], status[1]
    if worktree_state == "M":
        return "modified"
    if index_state in "MARC":
        return "staged"
    return None


def _rebase_path(rel_path: str, repo_root: str, project_root: str) -> str | None:
    if repo_root == project_root:
        return rel_path
    absolute = os.path.join(repo_root, rel_path)
    try:
        rebased = os.path.relpath(absolute, project_root)
    except ValueError:
        return None
    if rebased in (os.curdir, os.pardir) or rebased.startswith(os.pardir + os.sep):
        return None
    trailing = "/" if rel_path.endswith("/") else ""
    return rebased.replace(os.sep, "/") + trailing


class GitStatusProvider:
    """Status provider backed by the ``git`` command line."""

    def __init__(self, timeout_seconds: float = DEFAULT_GIT_TIMEOUT_SECONDS) -> None:
        self.timeout_seconds = timeout_seconds

    def _repo_root(self, project_root: str) -> str | None:
        proc = _run_git(project_root, ["rev-parse", "--show-toplevel"], self.timeout_seconds)
        if proc.returncode != 0:
            return None
        top = proc.stdout.strip()
        return os.path.realpath(top) if top else None

    def get_status(self, project_root: str) -> StatusSnapshot:
        """Return the snapshot for ``project_root``.

        A directory outside any repository yields the unavailable snapshot;
        a missing ``git`` binary, a timeout or a failing ``git status`` raise
        ``StatusUnavailable``.
        """
        if not os.path.isdir(project_root):
            raise StatusUnavailable(f"{project_root} is not a directory")

        repo_root = self._repo_root(project_root)
        if repo_root is None:
            logger.debug("%s is not inside a git repository", project_root)
            return StatusSnapshot.unavailable()

        proc = _run_git(
            repo_root,
            ["status", "--porcelain=v1", "-z", "--branch", "--untracked-files=normal"],
            self.timeout_seconds,
        )
        if proc.returncode != 0:
            raise StatusUnavailable(f"git status exited with {proc.returncode}")

        branch, records = iter_porcelain_records(proc.stdout)
        real_project_root = os.path.realpath(project_root)
        buckets: dict[str, list[str]] = {"staged": [], "modified": [], "untracked": []}
        for status, rel_path in records:
            bucket = classify_record(status)
            if bucket is None or not rel_path:
                continue
            rebased = _rebase_path(rel_path, repo_root, real_project_root)
            if rebased is None:
                continue
            buckets[bucket].append(rebased)

        return StatusSnapshot.from_paths(
            branch or "HEAD",
            staged=buckets["staged"],
            modified=buckets["modified"],
            untracked=buckets["untracked"],
            is_git_repo=True,
        )


__all__ = [
    "DEFAULT_GIT_TIMEOUT_SECONDS",
    "GitStatusProvider",
    "classify_record",
    "iter_porcelain_records",
    "parse_branch_header",
]
