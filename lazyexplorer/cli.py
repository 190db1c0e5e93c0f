"""Command-line front door for lazyexplorer.

Opens a project, expands the requested directories and prints either the
visible tree with status badges or ranked quick-open results.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from collections.abc import Callable
from pathlib import Path

from .config import load_git_timeout_seconds, load_show_hidden, load_theme_name, save_theme_name
from .errors import BackendUnavailableError
from .explorer import ProjectExplorer
from .providers import (
    DEMO_ROOT,
    FixtureListingProvider,
    FixtureStatusProvider,
    GitStatusProvider,
    detect_backend,
    select_listing_provider,
)
from .recent import RecentProjects
from .search.fuzzy import MAX_RESULTS
from .status.overlay import relative_path
from .tree.loader import Job
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _run_inline(job: Job) -> None:
    job()


def expansion_chain(root: str, relative: str, join: Callable[..., str] = os.path.join) -> list[str]:
    """Return ``relative`` and each of its ancestors below ``root``, outermost first."""
    parts = [part for part in re.split(r"[/\\]", relative) if part and part != "."]
    return [join(root, *parts[: index + 1]) for index in range(len(parts))]


def _join_fixture(root: str, *parts: str) -> str:
    return "/".join([root, *parts])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a project tree lazily with git status badges and fuzzy file lookup."
    )
    parser.add_argument("path", nargs="?", default=None, help="Project directory. Defaults to current directory.")
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="DIR",
        help="Project-relative directory to expand (repeatable).",
    )
    parser.add_argument("--find", metavar="QUERY", help="Print quick-open matches for QUERY instead of the tree.")
    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=MAX_RESULTS,
        help=f"Maximum number of --find results (default: {MAX_RESULTS}).",
    )
    parser.add_argument("--show-hidden", action="store_true", help="Include dot-files in listings.")
    parser.add_argument("--demo", action="store_true", help="Browse the built-in demo project instead of a real one.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--recent", action="store_true", help="List recently opened projects and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log loads and status polling to stderr.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the explorer view for one project.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.theme is not None:
        if args.theme.strip().lower() not in available_theme_names():
            raise SystemExit(f"Unknown theme: {args.theme}")
        save_theme_name(normalize_theme_name(args.theme))

    recent = RecentProjects()
    if args.recent:
        for project in recent.entries():
            sys.stdout.write(f"{project.name}\t{project.path}\n")
        return

    if args.demo:
        if args.path is not None:
            raise SystemExit("Cannot combine a project path with --demo.")
        root = DEMO_ROOT
        listing = FixtureListingProvider()
        status_provider = FixtureStatusProvider()
        join = _join_fixture
        on_project_opened: Callable[[str], None] | None = None
    else:
        root = os.path.abspath(args.path or default_path or Path.cwd())
        try:
            listing = select_listing_provider(
                detect_backend(root),
                show_hidden=args.show_hidden or load_show_hidden(),
            )
        except BackendUnavailableError as exc:
            raise SystemExit(f"Cannot open project: {exc.reason}") from exc
        status_provider = GitStatusProvider(timeout_seconds=load_git_timeout_seconds())
        join = os.path.join
        on_project_opened = recent.add

    explorer = ProjectExplorer(
        root,
        listing,
        status_provider,
        on_project_opened=on_project_opened,
        run_in_background=_run_inline,
        search_limit=args.limit,
    )
    explorer.open()
    for relative in args.expand:
        for path in expansion_chain(root, relative, join):
            explorer.expand(path)
    explorer.poll()

    root_error = explorer.cache.error(root)
    if root_error is not None:
        raise SystemExit(f"Cannot list project: {root_error.reason}")

    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)
    if args.find is not None:
        session = explorer.open_search()
        for result in explorer.update_query(args.find):
            location = relative_path(result.path, root)
            highlight = theme.search_selected if result is session.selected else ""
            sys.stdout.write(
                f"{result.score:6.3f}  {highlight}{result.name}{theme.reset}  {theme.search_path}{location}{theme.reset}\n"
            )
        return

    for line in explorer.render_lines(theme):
        sys.stdout.write(line + "\n")


if __name__ == "__main__":
    main()
