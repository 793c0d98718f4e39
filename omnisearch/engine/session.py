"""Async search session that discards results of superseded queries."""

import asyncio
from typing import Callable, List, Optional

from loguru import logger

from .config import SearchConfig
from .metrics import SearchMetrics
from .models import SearchResult
from .search import SearchParams, compute_search_results


class SearchSession:
    """
    Runs searches off the event loop and keeps only the newest answer.

    Every submit() is stamped with a generation number at submission time.
    When a search completes, its results are published only if no newer
    submission exists, so a slow stale query can never overwrite a fresh
    one regardless of completion order.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        metrics: Optional[SearchMetrics] = None,
        on_results: Optional[Callable[[SearchParams, List[SearchResult]], None]] = None,
        search_fn: Callable[..., List[SearchResult]] = compute_search_results
    ):
        self.config = config or SearchConfig()
        self.metrics = metrics
        self.on_results = on_results
        self._search_fn = search_fn
        self._generation = 0
        self._published_generation = 0
        self.results: List[SearchResult] = []
        self.stale_discarded = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def published_generation(self) -> int:
        return self._published_generation

    async def submit(self, params: SearchParams) -> Optional[List[SearchResult]]:
        """
        Search ``params`` in a worker thread.

        Returns:
            The results if they were published, None if a newer
            submission superseded this one
        """
        self._generation += 1
        generation = self._generation

        results = await asyncio.to_thread(
            self._search_fn, params, self.config, self.metrics
        )

        if generation != self._generation:
            self.stale_discarded += 1
            logger.debug(
                f"Discarding stale results for '{params.query}' "
                f"(generation {generation}, latest {self._generation})"
            )
            return None

        self.results = results
        self._published_generation = generation
        if self.on_results is not None:
            self.on_results(params, results)
        return results
