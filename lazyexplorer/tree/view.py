"""Read-only projections of the directory cache for display.

Both projections are recomputed from the cache on every call and never
stored; the cache stays the single owner of materialized children.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..providers.types import Node
from .cache import DirectoryCache


@dataclass(frozen=True)
class TreeItem:
    """Nested tree node. ``children`` is ``None`` unless expanded and loaded."""

    node: Node
    children: tuple[TreeItem, ...] | None = None
    expanded: bool = False
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class TreeRow:
    """One visible row of the flattened tree."""

    node: Node
    depth: int
    expanded: bool = False
    loading: bool = False
    error: str | None = None


def _directory_state(cache: DirectoryCache, node: Node) -> tuple[bool, bool, str | None]:
    if not node.is_directory:
        return False, False, None
    error = cache.error(node.path)
    return (
        cache.is_expanded(node.path),
        cache.is_loading(node.path),
        error.reason if error is not None else None,
    )


def compose_tree(cache: DirectoryCache) -> tuple[TreeItem, ...]:
    """Merge the root listing with cached children of expanded directories."""

    def build(node: Node, ancestors: frozenset[str]) -> TreeItem:
        expanded, loading, error = _directory_state(cache, node)
        children: tuple[TreeItem, ...] | None = None
        if expanded and node.path not in ancestors:
            cached = cache.children(node.path)
            if cached is not None:
                below = ancestors | {node.path}
                children = tuple(build(child, below) for child in cached)
        return TreeItem(node=node, children=children, expanded=expanded, loading=loading, error=error)

    top = frozenset({cache.root})
    return tuple(build(node, top) for node in cache.roots())


def visible_rows(cache: DirectoryCache) -> list[TreeRow]:
    """Flatten the composed tree into display rows in depth-first order."""
    rows: list[TreeRow] = []

    def walk(items: tuple[TreeItem, ...], depth: int) -> None:
        for item in items:
            rows.append(
                TreeRow(
                    node=item.node,
                    depth=depth,
                    expanded=item.expanded,
                    loading=item.loading,
                    error=item.error,
                )
            )
            if item.children:
                walk(item.children, depth + 1)

    walk(compose_tree(cache), 0)
    return rows


__all__ = [
    "TreeItem",
    "TreeRow",
    "compose_tree",
    "visible_rows",
]
