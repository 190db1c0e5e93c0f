"""ANSI palettes for explorer output.

Themes only color tree rows, status badges and search results.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    tree_loading: str
    tree_error: str
    badge_staged: str
    badge_modified: str
    badge_untracked: str
    branch: str
    search_selected: str
    search_path: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    tree_loading="\033[2;38;5;250m",
    tree_error="\033[38;5;203m",
    badge_staged="\033[38;5;42m",
    badge_modified="\033[38;5;214m",
    badge_untracked="\033[38;5;75m",
    branch="\033[1;38;5;81m",
    search_selected="\033[7m",
    search_path="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    tree_loading="\033[2;38;5;110m",
    tree_error="\033[38;5;209m",
    badge_staged="\033[38;5;84m",
    badge_modified="\033[38;5;215m",
    badge_untracked="\033[38;5;117m",
    branch="\033[1;38;5;45m",
    search_selected="\033[7m",
    search_path="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_marker="",
    tree_dir="",
    tree_file="",
    tree_loading="",
    tree_error="",
    badge_staged="",
    badge_modified="",
    badge_untracked="",
    branch="",
    search_selected="",
    search_path="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
