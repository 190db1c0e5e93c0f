"""In-memory demo providers.

These adapters serve a fixed project layout. They are only ever used when a
caller selects them explicitly; the real data path never falls back to them.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..errors import ListingProviderError
from ..status.snapshot import StatusSnapshot
from .types import Node

FixtureTree = Mapping[str, "FixtureTree | None"]

DEMO_ROOT = "demo"

# Directories map to nested dicts, files to ``None``. Insertion order is the
# listing order.
DEMO_TREE: FixtureTree = {
    "components": {
        "Button.tsx": None,
        "Card.tsx": None,
        "Modal.tsx": None,
    },
    "public": {
        "images": {},
        "favicon.ico": None,
        "index.html": None,
        "robots.txt": None,
    },
    "src": {
        "components": {
            "Footer.tsx": None,
            "Header.tsx": None,
        },
        "utils": {
            "format.ts": None,
        },
        "App.css": None,
        "App.tsx": None,
        "index.css": None,
        "main.tsx": None,
    },
    "README.md": None,
    "package.json": None,
}

DEMO_STATUS = StatusSnapshot.from_paths(
    "main",
    staged=["src/App.tsx"],
    modified=["src/main.tsx", "README.md"],
    untracked=["src/utils/format.ts"],
)


class FixtureListingProvider:
    """Listing provider answering from a nested in-memory tree."""

    def __init__(self, tree: FixtureTree | None = None, root: str = DEMO_ROOT) -> None:
        self.tree = DEMO_TREE if tree is None else tree
        self.root = root

    def _lookup(self, path: str) -> FixtureTree:
        if path == self.root:
            return self.tree
        prefix = self.root + "/"
        if not path.startswith(prefix):
            raise ListingProviderError(path, "outside fixture root")

        current: FixtureTree | None = self.tree
        for part in path[len(prefix):].split("/"):
            if current is None or part not in current:
                raise ListingProviderError(path, "no such directory")
            current = current[part]
        if current is None:
            raise ListingProviderError(path, "not a directory")
        return current

    def list(self, path: str) -> list[Node]:
        """Return fixture children of ``path``."""
        directory = self._lookup(path)
        return [
            Node(name=name, path=f"{path}/{name}", is_directory=child is not None)
            for name, child in directory.items()
        ]


class FixtureStatusProvider:
    """Status provider returning a fixed snapshot."""

    def __init__(self, snapshot: StatusSnapshot = DEMO_STATUS) -> None:
        self.snapshot = snapshot

    def get_status(self, project_root: str) -> StatusSnapshot:
        return self.snapshot


__all__ = [
    "DEMO_ROOT",
    "DEMO_STATUS",
    "DEMO_TREE",
    "FixtureListingProvider",
    "FixtureStatusProvider",
    "FixtureTree",
]
