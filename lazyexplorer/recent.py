"""Recently opened projects, most recent first."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass

from . import config

logger = logging.getLogger(__name__)

MAX_RECENT_PROJECTS = 10


@dataclass(frozen=True)
class RecentProject:
    path: str
    name: str
    last_opened: float


def project_name(path: str) -> str:
    """Last path segment, accepting ``/`` or ``\\`` separators."""
    parts = [part for part in re.split(r"[/\\]", path) if part]
    return parts[-1] if parts else path


def _from_record(record: dict[str, object]) -> RecentProject | None:
    path = record.get("path")
    if not isinstance(path, str) or not path:
        return None
    name = record.get("name")
    last_opened = record.get("last_opened")
    if isinstance(last_opened, bool) or not isinstance(last_opened, (int, float)):
        last_opened = 0.0
    return RecentProject(
        path=path,
        name=name if isinstance(name, str) and name else project_name(path),
        last_opened=float(last_opened),
    )


class RecentProjects:
    """Bounded, de-duplicated list of recent projects backed by config.

    ``add`` is meant to be injected wherever a project gets opened, e.g. as
    ``ProjectExplorer(on_project_opened=recent.add)``.
    """

    def __init__(
        self,
        limit: int = MAX_RECENT_PROJECTS,
        load: Callable[[], list[dict[str, object]]] | None = None,
        save: Callable[[list[dict[str, object]]], None] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.limit = max(1, limit)
        self._load = load or config.load_recent_projects
        self._save = save or config.save_recent_projects
        self._clock = clock

    def entries(self) -> list[RecentProject]:
        projects: list[RecentProject] = []
        for record in self._load():
            project = _from_record(record)
            if project is not None:
                projects.append(project)
        return projects[: self.limit]

    def _store(self, projects: list[RecentProject]) -> None:
        self._save(
            [
                {"path": project.path, "name": project.name, "last_opened": project.last_opened}
                for project in projects[: self.limit]
            ]
        )

    def add(self, path: str) -> None:
        """Move ``path`` to the front, dropping any older entry for it."""
        entry = RecentProject(path=path, name=project_name(path), last_opened=self._clock())
        others = [project for project in self.entries() if project.path != path]
        self._store([entry, *others])
        logger.debug("registered recent project %s", path)

    def remove(self, path: str) -> None:
        self._store([project for project in self.entries() if project.path != path])


__all__ = [
    "MAX_RECENT_PROJECTS",
    "RecentProject",
    "RecentProjects",
    "project_name",
]
