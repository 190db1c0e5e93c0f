"""Tests for the project explorer facade over the demo providers."""

from __future__ import annotations

import unittest

from lazyexplorer.errors import StatusUnavailable
from lazyexplorer.explorer import ProjectExplorer
from lazyexplorer.providers import DEMO_ROOT, FixtureListingProvider, FixtureStatusProvider, Node
from lazyexplorer.search.fuzzy import SearchResult
from lazyexplorer.status import StatusSnapshot
from lazyexplorer.ui_theme import PLAIN_THEME


class BrokenStatusProvider:
    def get_status(self, project_root: str) -> StatusSnapshot:
        raise StatusUnavailable("git executable not found")


def _demo_explorer(**kwargs) -> ProjectExplorer:
    kwargs.setdefault("run_in_background", lambda job: job())
    return ProjectExplorer(DEMO_ROOT, FixtureListingProvider(), FixtureStatusProvider(), **kwargs)


class ProjectExplorerTreeTests(unittest.TestCase):
    def test_open_registers_project_and_loads_root(self) -> None:
        opened: list[str] = []
        explorer = _demo_explorer(on_project_opened=opened.append)

        explorer.open()
        explorer.poll()

        self.assertEqual(opened, [DEMO_ROOT])
        self.assertEqual(
            [item.node.name for item in explorer.tree()],
            ["components", "public", "src", "README.md", "package.json"],
        )
        self.assertEqual(explorer.status.branch, "main")

    def test_open_callback_receives_root_outcome(self) -> None:
        outcomes = []
        explorer = _demo_explorer()
        explorer.open(on_done=outcomes.append)
        explorer.poll()
        self.assertEqual(len(outcomes), 1)
        self.assertTrue(outcomes[0].ok)

    def test_render_lines_show_header_tree_and_badges(self) -> None:
        explorer = _demo_explorer()
        explorer.open()
        explorer.toggle_expand("demo/src")
        explorer.poll()

        lines = explorer.render_lines(PLAIN_THEME)

        self.assertEqual(lines[0], "main 1 staged, 2 modified, 1 untracked")
        self.assertIn("▾ src/", lines)
        self.assertIn("    App.tsx [S]", lines)
        self.assertIn("    main.tsx [M]", lines)
        self.assertIn("  README.md [M]", lines)
        self.assertIn("  ▸ utils/", lines)

    def test_refresh_defaults_to_root(self) -> None:
        explorer = _demo_explorer()
        explorer.open()
        explorer.poll()
        pending = explorer.refresh()
        self.assertEqual(pending.path, DEMO_ROOT)

    def test_classify_uses_project_relative_paths(self) -> None:
        explorer = _demo_explorer()
        explorer.open()
        node = Node(name="format.ts", path="demo/src/utils/format.ts")
        self.assertEqual(explorer.classify(node), "untracked")


class ProjectExplorerStatusTests(unittest.TestCase):
    def test_status_failure_degrades_and_records_reason(self) -> None:
        explorer = ProjectExplorer(
            DEMO_ROOT,
            FixtureListingProvider(),
            BrokenStatusProvider(),
            run_in_background=lambda job: job(),
        )
        with self.assertLogs("lazyexplorer.explorer", level="WARNING"):
            explorer.open()
        explorer.poll()

        self.assertFalse(explorer.status.is_git_repo)
        self.assertEqual(explorer.status_error, "git executable not found")
        self.assertEqual(explorer.classify(Node(name="README.md", path="demo/README.md")), "none")
        self.assertEqual(len(explorer.visible_rows()), 5)

    def test_no_status_provider_means_no_repository(self) -> None:
        explorer = ProjectExplorer(DEMO_ROOT, FixtureListingProvider(), run_in_background=lambda job: job())
        self.assertFalse(explorer.poll_status().is_git_repo)
        self.assertIsNone(explorer.status_error)


class ProjectExplorerSearchTests(unittest.TestCase):
    def test_search_covers_only_loaded_directories(self) -> None:
        explorer = _demo_explorer()
        explorer.open()
        explorer.poll()
        explorer.open_search()

        self.assertEqual(explorer.update_query("format"), [])

        explorer.expand("demo/src")
        explorer.expand("demo/src/utils")
        explorer.poll()
        results = explorer.update_query("format")
        self.assertEqual([result.path for result in results], ["demo/src/utils/format.ts"])

    def test_collapsed_but_cached_directories_stay_searchable(self) -> None:
        explorer = _demo_explorer()
        explorer.open()
        explorer.expand("demo/src")
        explorer.poll()
        explorer.toggle_expand("demo/src")

        explorer.open_search()
        self.assertIn("main.tsx", [result.name for result in explorer.update_query("main")])

    def test_commit_selection_delivers_file(self) -> None:
        picked: list[SearchResult] = []
        explorer = _demo_explorer(on_file_selected=picked.append)
        explorer.open()
        explorer.expand("demo/components")
        explorer.poll()

        explorer.open_search()
        explorer.update_query("card")
        self.assertEqual(explorer.navigate("down"), 0)
        result = explorer.commit_selection()

        assert result is not None
        self.assertEqual(result.path, "demo/components/Card.tsx")
        self.assertEqual(picked, [result])
        self.assertFalse(explorer.search.active)

    def test_close_search_discards_results(self) -> None:
        explorer = _demo_explorer()
        explorer.open()
        explorer.poll()
        explorer.open_search()
        explorer.update_query("read")
        explorer.close_search()
        self.assertEqual(explorer.search.results, [])
        self.assertIsNone(explorer.commit_selection())
