"""Fuzzy file lookup over the materialized part of the project tree.

The index is a flat, ordered list derived from the directory cache on
demand. Only directories that have been loaded contribute their files, so
files below never-expanded directories cannot be found until loaded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..providers.types import Node

MAX_RESULTS = 10
FULL_PATH_WEIGHT = 0.5
START_MATCH_BONUS = 2


@dataclass(frozen=True)
class IndexEntry:
    """One searchable file: node path, display name, project-relative path."""

    path: str
    name: str
    full_path: str


@dataclass(frozen=True)
class SearchResult:
    """Ranked match for one query. Recomputed per query, never stored."""

    path: str
    name: str
    score: float


def build_index(
    roots: Iterable[Node],
    children_of: Callable[[str], Iterable[Node] | None],
) -> list[IndexEntry]:
    """Flatten ``roots`` and cached descendants into index entries.

    ``children_of(path)`` returns the cached children of a directory or
    ``None`` when it has never been loaded; such directories contribute
    nothing. Files are always indexed. Entry order is depth-first in provider
    order and serves as the tie-break order for equal scores.
    """
    entries: list[IndexEntry] = []

    def walk(nodes: Iterable[Node], prefix: str, ancestors: frozenset[str]) -> None:
        for node in nodes:
            full_path = f"{prefix}/{node.name}" if prefix else node.name
            if not node.is_directory:
                entries.append(IndexEntry(path=node.path, name=node.name, full_path=full_path))
                continue
            if node.path in ancestors:
                continue
            children = children_of(node.path)
            if children is not None:
                walk(children, full_path, ancestors | {node.path})

    walk(roots, "", frozenset())
    return entries


def score(text: str, pattern: str) -> float:
    """Greedy case-insensitive subsequence score of ``pattern`` within ``text``.

    Each matched character is worth 1, and the match of the first pattern
    character earns a bonus of 2. The total is divided by ``len(text)`` when
    the whole pattern matched in order, otherwise the score is 0. An empty
    pattern scores 1.
    """
    if not pattern:
        return 1.0
    if not text:
        return 0.0

    folded_pattern = [char.casefold() for char in pattern]
    total = 0
    pattern_index = 0
    for char in text:
        if pattern_index >= len(folded_pattern):
            break
        if char.casefold() == folded_pattern[pattern_index]:
            total += 1
            if pattern_index == 0:
                total += START_MATCH_BONUS
            pattern_index += 1

    if pattern_index < len(folded_pattern):
        return 0.0
    return total / len(text)


def rank(query: str, index: Iterable[IndexEntry], limit: int = MAX_RESULTS) -> list[SearchResult]:
    """Score every entry against ``query`` and return the best ``limit``.

    A blank query yields no results. Entries are ranked by
    ``score(name) + 0.5 * score(full_path)``; ties keep index order.
    """
    if not query.strip():
        return []

    scored: list[SearchResult] = []
    for entry in index:
        combined = score(entry.name, query) + FULL_PATH_WEIGHT * score(entry.full_path, query)
        if combined > 0:
            scored.append(SearchResult(path=entry.path, name=entry.name, score=combined))

    scored.sort(key=lambda result: result.score, reverse=True)
    return scored[: max(0, limit)]


__all__ = [
    "FULL_PATH_WEIGHT",
    "IndexEntry",
    "MAX_RESULTS",
    "START_MATCH_BONUS",
    "SearchResult",
    "build_index",
    "rank",
    "score",
]
