"""Tests for the recent-projects list and its config persistence."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyexplorer import config
from lazyexplorer.recent import RecentProject, RecentProjects, project_name


class RecentProjectsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store: list[dict[str, object]] = []
        self.now = 100.0

        def save(records: list[dict[str, object]]) -> None:
            self.store = records

        self.recent = RecentProjects(limit=3, load=lambda: self.store, save=save, clock=lambda: self.now)

    def test_add_moves_project_to_front_without_duplicates(self) -> None:
        self.recent.add("/work/a")
        self.now = 101.0
        self.recent.add("/work/b")
        self.now = 102.0
        self.recent.add("/work/a")

        self.assertEqual(
            self.recent.entries(),
            [
                RecentProject(path="/work/a", name="a", last_opened=102.0),
                RecentProject(path="/work/b", name="b", last_opened=101.0),
            ],
        )

    def test_list_is_bounded(self) -> None:
        for name in ("a", "b", "c", "d"):
            self.recent.add(f"/work/{name}")
        self.assertEqual([project.name for project in self.recent.entries()], ["d", "c", "b"])

    def test_remove(self) -> None:
        self.recent.add("/work/a")
        self.recent.add("/work/b")
        self.recent.remove("/work/a")
        self.assertEqual([project.path for project in self.recent.entries()], ["/work/b"])

    def test_malformed_records_are_skipped(self) -> None:
        self.store = [{"path": ""}, {"path": "/x/y", "last_opened": True}]
        self.assertEqual(self.recent.entries(), [RecentProject(path="/x/y", name="y", last_opened=0.0)])

    def test_project_name_accepts_either_separator(self) -> None:
        self.assertEqual(project_name("C:\\code\\app\\"), "app")
        self.assertEqual(project_name("/home/me/site/"), "site")
        self.assertEqual(project_name("/"), "/")

    def test_default_storage_round_trips_through_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyexplorer.config.CONFIG_PATH", config_path):
                RecentProjects(clock=lambda: 5.0).add("/work/site")
                self.assertEqual(
                    config.load_recent_projects(),
                    [{"path": "/work/site", "name": "site", "last_opened": 5.0}],
                )
                self.assertEqual(RecentProjects().entries()[0].name, "site")
