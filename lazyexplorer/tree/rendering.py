"""Formatting helpers for tree rows and status badges."""

from __future__ import annotations

from ..status.overlay import (
    STATUS_MODIFIED,
    STATUS_STAGED,
    STATUS_UNTRACKED,
    FileStatus,
)
from ..status.snapshot import StatusSnapshot
from ..ui_theme import DEFAULT_THEME, UITheme
from .view import TreeRow

_BADGE_TEXT: dict[FileStatus, str] = {
    STATUS_STAGED: "[S]",
    STATUS_MODIFIED: "[M]",
    STATUS_UNTRACKED: "[?]",
}


def format_status_badge(status: FileStatus, theme: UITheme | None = None) -> str:
    """Return a colored badge for ``status`` with a leading space, or ``""``."""
    text = _BADGE_TEXT.get(status)
    if text is None:
        return ""
    active_theme = theme or DEFAULT_THEME
    color = {
        STATUS_STAGED: active_theme.badge_staged,
        STATUS_MODIFIED: active_theme.badge_modified,
        STATUS_UNTRACKED: active_theme.badge_untracked,
    }[status]
    return f" {color}{text}{active_theme.reset}"


def format_tree_row(row: TreeRow, status: FileStatus, theme: UITheme | None = None) -> str:
    """Render one visible tree row as display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * row.depth
    if row.node.is_directory:
        marker = "▾ " if row.expanded else "▸ "
        suffix = ""
        if row.loading:
            suffix = f" {active_theme.tree_loading}(loading){reset}"
        elif row.error is not None:
            suffix = f" {active_theme.tree_error}(error: {row.error}){reset}"
        return (
            f"{indent}{active_theme.tree_marker}{marker}{reset}"
            f"{active_theme.tree_dir}{row.node.name}/{reset}{suffix}"
        )

    badge = format_status_badge(status, active_theme)
    return f"{indent}  {active_theme.tree_file}{row.node.name}{reset}{badge}"


def format_status_header(snapshot: StatusSnapshot, theme: UITheme | None = None) -> str:
    """One-line branch and change summary, empty outside a repository."""
    if not snapshot.is_git_repo:
        return ""
    active_theme = theme or DEFAULT_THEME
    branch = f"{active_theme.branch}{snapshot.branch}{active_theme.reset}"
    if snapshot.is_clean:
        return f"{branch} working tree clean"
    parts = []
    if snapshot.staged:
        parts.append(f"{len(snapshot.staged)} staged")
    if snapshot.modified:
        parts.append(f"{len(snapshot.modified)} modified")
    if snapshot.untracked:
        parts.append(f"{len(snapshot.untracked)} untracked")
    return f"{branch} " + ", ".join(parts)


__all__ = [
    "format_status_badge",
    "format_status_header",
    "format_tree_row",
]
