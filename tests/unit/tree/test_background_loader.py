"""Tests for background listing jobs and result draining."""

from __future__ import annotations

import threading
import time
import unittest

from lazyexplorer.errors import ListingProviderError
from lazyexplorer.providers import Node
from lazyexplorer.tree.cache import DirectoryCache
from lazyexplorer.tree.loader import BackgroundLoader, ListingResult, run_listing


def _wait_for_results(loader: BackgroundLoader, *, expected_count: int, timeout_seconds: float = 1.0) -> list:
    deadline = time.monotonic() + timeout_seconds
    out: list = []
    while time.monotonic() < deadline:
        out.extend(loader.drain_results(0.01))
        if len(out) >= expected_count:
            break
    return out


class GatedProvider:
    def __init__(self) -> None:
        self.release = threading.Event()
        self.calls: list[str] = []
        self.threads: list[str] = []

    def list(self, path: str) -> list[Node]:
        self.calls.append(path)
        self.threads.append(threading.current_thread().name)
        self.release.wait(1.0)
        return [Node(name="a.txt", path=f"{path}/a.txt")]


class BackgroundLoaderTests(unittest.TestCase):
    def test_submit_runs_provider_on_worker_thread(self) -> None:
        provider = GatedProvider()
        loader = BackgroundLoader(provider)

        loader.submit("root")
        self.assertEqual(loader.drain_results(), [])
        provider.release.set()

        results = _wait_for_results(loader, expected_count=1)
        self.assertEqual(
            results,
            [ListingResult(path="root", children=(Node(name="a.txt", path="root/a.txt"),))],
        )
        self.assertEqual(provider.threads, ["lazyexplorer-listing"])

    def test_inline_runner_makes_results_available_immediately(self) -> None:
        provider = GatedProvider()
        provider.release.set()
        loader = BackgroundLoader(provider, lambda job: job())

        loader.submit("root")

        self.assertEqual(len(loader.drain_results()), 1)
        self.assertEqual(threading.current_thread().name, provider.threads[0])

    def test_run_listing_captures_provider_errors(self) -> None:
        class FailingProvider:
            def list(self, path: str) -> list[Node]:
                raise ListingProviderError(path, "gone")

        result = run_listing(FailingProvider(), "root/x")
        self.assertIsNone(result.children)
        assert result.error is not None
        self.assertEqual(result.error.reason, "gone")


class ThreadedDirectoryCacheTests(unittest.TestCase):
    def test_concurrent_expands_share_one_call_and_commit_on_poll(self) -> None:
        provider = GatedProvider()
        cache = DirectoryCache("root", provider)

        first = cache.expand("root/src")
        second = cache.load("root/src")
        self.assertIs(first, second)
        self.assertIsNone(cache.children("root/src"))

        provider.release.set()
        outcomes = []
        deadline = time.monotonic() + 1.0
        while not outcomes and time.monotonic() < deadline:
            outcomes = cache.poll(0.05)

        self.assertEqual(len(outcomes), 1)
        self.assertEqual(provider.calls, ["root/src"])
        self.assertEqual([node.name for node in cache.children("root/src") or ()], ["a.txt"])
