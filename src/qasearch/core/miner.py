"""Knowledge miner — runs a batch of queries against the configured backend.

Each query gets its own adapter instance, so searches share no connection or
retry state and can run concurrently.  The miner is the layer that enforces
the total results cap across queries; a single adapter only caps its own
query.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from qasearch.adapters.base.registry import AdapterRegistry
from qasearch.models.search import ResultSet, SearchRequest

if TYPE_CHECKING:
    from qasearch.config.settings import Settings

logger = logging.getLogger(__name__)


class KnowledgeMiner:
    """Fan queries out to per-query adapters and collect their results.

    Args:
        settings: Application configuration; ``settings.search`` selects the
            backend and its limits.
        registry: Adapter registry. Defaults to the built-in backends.
    """

    def __init__(self, settings: Settings, registry: AdapterRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry or AdapterRegistry.with_builtins()

    async def mine(self, query_strings: Sequence[str], max_results_per_query: int | None = None) -> ResultSet:
        """Search every query and return the combined results.

        Results keep query order, then backend order within a query, and are
        truncated to ``search.max_results_total``.

        Raises:
            ConfigurationError: If the backend cannot be configured.
            SearchExhausted: If any query exhausts its retry budget.
        """
        search_settings = self.settings.search
        if not query_strings:
            return []

        per_query = max_results_per_query or search_settings.max_results_per_query
        requests = [SearchRequest(query_string=q, max_results=per_query) for q in query_strings]

        # Build every adapter up front so configuration errors surface before any network call
        adapters = [self.registry.create(search_settings.backend, search_settings) for _ in requests]

        semaphore = asyncio.Semaphore(search_settings.max_concurrent_queries)

        async def _run(index: int) -> ResultSet:
            async with semaphore:
                return await adapters[index].search(requests[index])

        start_time = time.monotonic()
        tasks = [asyncio.ensure_future(_run(i)) for i in range(len(requests))]
        try:
            per_query_results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        combined: ResultSet = [result for results in per_query_results for result in results]
        if len(combined) > search_settings.max_results_total:
            logger.info(
                "Truncating %d results to the total cap of %d",
                len(combined),
                search_settings.max_results_total,
            )
            combined = combined[: search_settings.max_results_total]

        logger.info(
            "Mined %d results from %d queries in %d ms",
            len(combined),
            len(requests),
            int((time.monotonic() - start_time) * 1000),
        )
        return combined
