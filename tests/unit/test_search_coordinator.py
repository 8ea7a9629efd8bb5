"""Unit tests for debounced search coordination."""

import asyncio
from typing import List, Tuple

from scentlocker.core.search_coordinator import SearchCoordinator


class Recorder:
    """Collects searches and published results."""

    def __init__(self, slow_queries=(), slow_seconds: float = 0.05):
        self.calls: List[str] = []
        self.published: List[Tuple[str, list]] = []
        self.slow_queries = set(slow_queries)
        self.slow_seconds = slow_seconds

    async def search(self, query: str) -> List[str]:
        self.calls.append(query)
        if query in self.slow_queries:
            await asyncio.sleep(self.slow_seconds)
        return [query.upper()]

    def sync_search(self, query: str) -> List[str]:
        self.calls.append(query)
        return [query.upper()]

    def on_results(self, query: str, results: list) -> None:
        self.published.append((query, results))


class TestSearchCoordinator:
    """Test debounce, cancellation and stale-result suppression."""

    def test_debounce_keeps_only_last_query(self):
        recorder = Recorder()

        async def run():
            coordinator = SearchCoordinator(recorder.search, recorder.on_results, delay=0.01)
            coordinator.submit("bl")
            coordinator.submit("bla")
            coordinator.submit("black")
            await coordinator.wait()
            return coordinator

        coordinator = asyncio.run(run())

        assert recorder.calls == ["black"]
        assert recorder.published == [("black", ["BLACK"])]
        assert coordinator.applied_query == "black"
        assert coordinator.generation == 3

    def test_slow_stale_search_never_published(self):
        recorder = Recorder(slow_queries={"slow"})

        async def run():
            coordinator = SearchCoordinator(recorder.search, recorder.on_results, delay=0)
            coordinator.submit("slow")
            await asyncio.sleep(0.01)
            coordinator.submit("fast")
            await coordinator.wait()
            await asyncio.sleep(0.08)

        asyncio.run(run())

        assert recorder.calls == ["slow", "fast"]
        assert recorder.published == [("fast", ["FAST"])]

    def test_short_query_clears_without_searching(self):
        recorder = Recorder()

        async def run():
            coordinator = SearchCoordinator(recorder.search, recorder.on_results, delay=0.01)
            coordinator.submit(" a ")
            await coordinator.wait()

        asyncio.run(run())

        assert recorder.calls == []
        assert recorder.published == [(" a ", [])]

    def test_sync_search_supported(self):
        recorder = Recorder()

        async def run():
            coordinator = SearchCoordinator(recorder.sync_search, recorder.on_results, delay=0)
            coordinator.submit("rose")
            await coordinator.wait()

        asyncio.run(run())
        assert recorder.published == [("rose", ["ROSE"])]

    def test_cancel_publishes_nothing(self):
        recorder = Recorder()

        async def run():
            coordinator = SearchCoordinator(recorder.search, recorder.on_results, delay=0.05)
            coordinator.submit("rose")
            assert coordinator.pending
            coordinator.cancel()
            await coordinator.wait()
            assert not coordinator.pending

        asyncio.run(run())
        assert recorder.published == []

    def test_wait_without_submission(self):
        recorder = Recorder()

        async def run():
            coordinator = SearchCoordinator(recorder.search, recorder.on_results)
            await coordinator.wait()
            return coordinator

        coordinator = asyncio.run(run())
        assert coordinator.generation == 0
        assert coordinator.applied_query is None

    def test_failing_search_publishes_empty_results(self):
        recorder = Recorder()

        async def broken(query):
            recorder.calls.append(query)
            raise RuntimeError("index unavailable")

        async def run():
            coordinator = SearchCoordinator(broken, recorder.on_results, delay=0)
            coordinator.submit("rose")
            await coordinator.wait()
            return coordinator

        coordinator = asyncio.run(run())

        assert recorder.calls == ["rose"]
        assert recorder.published == [("rose", [])]
        assert coordinator.applied_query == "rose"

    def test_stale_failing_search_not_published(self):
        recorder = Recorder()

        async def search(query):
            recorder.calls.append(query)
            if query == "slow":
                await asyncio.sleep(0.05)
                raise RuntimeError("timed out")
            return [query.upper()]

        async def run():
            coordinator = SearchCoordinator(search, recorder.on_results, delay=0)
            first = coordinator.submit("slow")
            await asyncio.sleep(0.01)
            coordinator.submit("fast")
            await coordinator.wait()
            return first

        first = asyncio.run(run())

        assert recorder.published == [("fast", ["FAST"])]
        assert first.cancelled()
