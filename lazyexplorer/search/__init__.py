"""Fuzzy file search over the materialized tree and its interactive session."""

from __future__ import annotations

from .fuzzy import (
    FULL_PATH_WEIGHT,
    MAX_RESULTS,
    IndexEntry,
    SearchResult,
    build_index,
    rank,
    score,
)
from .session import Direction, SearchSession

__all__ = [
    "Direction",
    "FULL_PATH_WEIGHT",
    "IndexEntry",
    "MAX_RESULTS",
    "SearchResult",
    "SearchSession",
    "build_index",
    "rank",
    "score",
]
