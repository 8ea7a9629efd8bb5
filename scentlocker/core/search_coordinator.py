"""
Debounced, cancellable search execution for as-you-type input.

Every keystroke calls ``submit``. The previous pending or running search
is cancelled, and each run carries a generation number: results are
applied only if no newer submission happened meanwhile, so a slow stale
search can never overwrite a newer one. A failing search is logged and
publishes an empty result.
"""

import asyncio
import inspect
from typing import Any, Callable, Generic, List, Optional, TypeVar

from scentlocker.utils.logger import get_logger, log_exception

logger = get_logger(__name__)

T = TypeVar("T")


class SearchCoordinator(Generic[T]):
    """
    Runs at most one search at a time on behalf of a text input.

    Args:
        search: Callable taking the query; may be sync or async.
        on_results: Receives (query, results) for the latest search only.
        delay: Debounce delay in seconds.
        min_query_length: Shorter queries skip the search and publish an
            empty result immediately.

    Example:
        >>> coordinator = SearchCoordinator(use_case.search_lexical, render)
        >>> coordinator.submit("bla")
        >>> coordinator.submit("black orchid")   # cancels "bla"
        >>> await coordinator.wait()
    """

    def __init__(
        self,
        search: Callable[[str], Any],
        on_results: Callable[[str, List[T]], None],
        delay: float = 0.3,
        min_query_length: int = 2,
    ) -> None:
        self._search = search
        self._on_results = on_results
        self.delay = delay
        self.min_query_length = min_query_length
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self.applied_query: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, query: str) -> asyncio.Task:
        """
        Schedule a search for ``query``, cancelling the previous one.

        Must be called from within a running event loop.
        """
        self.cancel()
        self._generation += 1
        self._task = asyncio.create_task(self._run(query, self._generation))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait for the latest submission to settle (done or cancelled)."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _apply(self, query: str, results: List[T], generation: int) -> None:
        if not self._is_current(generation):
            logger.debug(f"Discarding stale results for '{query}'")
            return
        self.applied_query = query
        self._on_results(query, results)

    async def _run(self, query: str, generation: int) -> None:
        if len(query.strip()) < self.min_query_length:
            self._apply(query, [], generation)
            return

        await asyncio.sleep(self.delay)
        if not self._is_current(generation):
            return

        try:
            results = self._search(query)
            if inspect.isawaitable(results):
                results = await results
        except Exception as e:
            log_exception(logger, f"search for '{query}'", e)
            results = []

        self._apply(query, list(results), generation)
