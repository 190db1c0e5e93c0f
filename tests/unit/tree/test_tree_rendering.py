"""Tests for composed tree projections and row formatting."""

from __future__ import annotations

import unittest

from lazyexplorer.errors import ListingProviderError
from lazyexplorer.providers import FixtureListingProvider, Node
from lazyexplorer.status import StatusSnapshot
from lazyexplorer.tree import DirectoryCache, TreeRow, compose_tree, visible_rows
from lazyexplorer.tree.rendering import format_status_badge, format_status_header, format_tree_row
from lazyexplorer.ui_theme import PLAIN_THEME

TREE = {
    "src": {"App.tsx": None, "lib": {"util.ts": None}},
    "readme.md": None,
}


def _cache() -> DirectoryCache:
    cache = DirectoryCache("root", FixtureListingProvider(TREE, root="root"), lambda job: job())
    cache.expand("root")
    cache.poll()
    return cache


class ComposeTreeTests(unittest.TestCase):
    def test_collapsed_directory_has_no_children(self) -> None:
        items = compose_tree(_cache())
        self.assertEqual([item.node.name for item in items], ["src", "readme.md"])
        self.assertIsNone(items[0].children)
        self.assertFalse(items[0].expanded)

    def test_expanded_directory_shows_cached_children(self) -> None:
        cache = _cache()
        cache.expand("root/src")
        cache.poll()

        src = compose_tree(cache)[0]
        self.assertTrue(src.expanded)
        assert src.children is not None
        self.assertEqual([child.node.name for child in src.children], ["App.tsx", "lib"])

    def test_collapsing_hides_children_but_keeps_cache(self) -> None:
        cache = _cache()
        cache.expand("root/src")
        cache.poll()
        cache.collapse("root/src")

        self.assertIsNone(compose_tree(cache)[0].children)
        self.assertTrue(cache.has_entry("root/src"))

    def test_visible_rows_are_depth_first(self) -> None:
        cache = _cache()
        cache.expand("root/src")
        cache.expand("root/src/lib")
        cache.poll()

        rows = visible_rows(cache)
        self.assertEqual(
            [(row.node.name, row.depth) for row in rows],
            [("src", 0), ("App.tsx", 1), ("lib", 1), ("util.ts", 2), ("readme.md", 0)],
        )

    def test_loading_flag_is_reported_until_poll(self) -> None:
        held: list = []
        cache = DirectoryCache("root", FixtureListingProvider(TREE, root="root"), held.append)
        cache.on_load_complete("root", [Node(name="src", path="root/src", is_directory=True)])
        cache.expand("root/src")

        row = visible_rows(cache)[0]
        self.assertTrue(row.loading)
        self.assertTrue(row.expanded)


class FormatTreeRowTests(unittest.TestCase):
    def test_directory_rows_show_marker_and_state(self) -> None:
        node = Node(name="src", path="root/src", is_directory=True)
        self.assertEqual(format_tree_row(TreeRow(node=node, depth=0), "none", PLAIN_THEME), "▸ src/")
        self.assertEqual(
            format_tree_row(TreeRow(node=node, depth=1, expanded=True, loading=True), "none", PLAIN_THEME),
            "  ▾ src/ (loading)",
        )
        self.assertEqual(
            format_tree_row(TreeRow(node=node, depth=0, expanded=True, error="denied"), "none", PLAIN_THEME),
            "▾ src/ (error: denied)",
        )

    def test_file_rows_carry_status_badge(self) -> None:
        node = Node(name="App.tsx", path="root/src/App.tsx")
        self.assertEqual(format_tree_row(TreeRow(node=node, depth=1), "modified", PLAIN_THEME), "    App.tsx [M]")
        self.assertEqual(format_tree_row(TreeRow(node=node, depth=0), "none", PLAIN_THEME), "  App.tsx")

    def test_badges(self) -> None:
        self.assertEqual(format_status_badge("staged", PLAIN_THEME), " [S]")
        self.assertEqual(format_status_badge("untracked", PLAIN_THEME), " [?]")
        self.assertEqual(format_status_badge("none", PLAIN_THEME), "")
        self.assertIn("\033[", format_status_badge("modified"))


class FormatStatusHeaderTests(unittest.TestCase):
    def test_header_summarizes_changes(self) -> None:
        snapshot = StatusSnapshot.from_paths("main", staged=["a"], untracked=["b", "c"])
        self.assertEqual(format_status_header(snapshot, PLAIN_THEME), "main 1 staged, 2 untracked")

    def test_clean_and_non_repository_headers(self) -> None:
        self.assertEqual(
            format_status_header(StatusSnapshot.from_paths("dev"), PLAIN_THEME),
            "dev working tree clean",
        )
        self.assertEqual(format_status_header(StatusSnapshot.unavailable(), PLAIN_THEME), "")


class ErrorRowTests(unittest.TestCase):
    def test_failed_directory_row_reports_reason(self) -> None:
        cache = _cache()
        cache.expand("root/src")
        cache.poll()
        cache.on_load_complete("root/src", ListingProviderError("root/src", "denied"))

        src = visible_rows(cache)[0]
        self.assertEqual(src.error, "denied")
