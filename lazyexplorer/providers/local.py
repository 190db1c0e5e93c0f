"""Filesystem-backed listing provider."""

from __future__ import annotations

import os

from ..errors import ListingProviderError
from .types import Node


def _entry_is_directory(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


class LocalListingProvider:
    """List directory children with ``os.scandir``.

    Hidden entries (leading ``.``) are skipped unless ``show_hidden`` is set.
    Children are ordered directories first, then by name.
    """

    def __init__(self, show_hidden: bool = False) -> None:
        self.show_hidden = show_hidden

    def list(self, path: str) -> list[Node]:
        """Return visible children of ``path`` or raise ``ListingProviderError``."""
        nodes: list[Node] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    name = entry.name
                    if not self.show_hidden and name.startswith("."):
                        continue
                    nodes.append(
                        Node(
                            name=name,
                            path=os.path.join(path, name),
                            is_directory=_entry_is_directory(entry),
                        )
                    )
        except OSError as exc:
            raise ListingProviderError(path, exc.strerror or str(exc)) from exc

        nodes.sort(key=lambda node: (not node.is_directory, node.name))
        return nodes


__all__ = ["LocalListingProvider"]
