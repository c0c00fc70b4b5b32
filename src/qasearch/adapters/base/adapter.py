"""Base search adapter — Capability interface for all search backends.

Every search backend implements this interface to serve evidence to the
question-answering pipeline.  The adapter is responsible for:
  1. Executing a single query against the backend (``query_backend``)
  2. Retrying transient backend failures within a bounded budget
  3. Normalizing raw documents into snippet/URL pairs
  4. Reporting health status

Backends are independent implementations selected by name through the
``AdapterRegistry`` or injected directly; ``search()`` is the only operation
callers need.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from qasearch.adapters.base.exceptions import ConfigurationError, SearchExhausted
from qasearch.adapters.base.retry import RetryPolicy
from qasearch.models.search import MAX_RESULTS_PERQUERY, RawResults, ResultSet, SearchRequest, SearchResult

if TYPE_CHECKING:
    from qasearch.config.settings import SearchSettings

logger = logging.getLogger(__name__)


class AdapterHealth(BaseModel):
    """Health status of a search adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


def first_value(val: Any) -> Any:
    """Backends may return single-valued fields as lists; unwrap transparently."""
    if isinstance(val, list):
        return val[0] if val else None
    return val


def normalize_documents(documents: Iterable[dict[str, Any]], max_results: int) -> ResultSet:
    """Map raw backend documents to ``SearchResult`` objects.

    Documents are visited in backend order.  A document is skipped when its
    ``content`` is missing or blank, or when it has content but no ``url``.
    At most *max_results* results are returned.
    """
    results: ResultSet = []
    for position, doc in enumerate(documents):
        if len(results) >= max_results:
            break

        content = first_value(doc.get("content"))
        if content is None or not str(content).strip():
            continue

        url = first_value(doc.get("url"))
        if url is None:
            logger.debug("Skipping document %d: content without url", position)
            continue

        results.append(SearchResult(snippet=str(content), source_url=str(url)))
    return results


class SearchAdapter(ABC):
    """Abstract base class for search engine adapters.

    Subclasses implement:
      - name / endpoint: identification used in logs and errors
      - query_backend(): one backend call, no retries
      - health_check(): report backend health

    An adapter instance holds configuration only.  Each ``search()`` call
    owns its connection and retry state, so independent instances can run
    concurrently without coordination.

    Args:
        retry: Retry policy for failed backend calls.
        max_results_per_query: Cap applied to every request's ``max_results``.

    Raises:
        ConfigurationError: If *max_results_per_query* is below 1.
    """

    def __init__(
        self,
        *,
        retry: RetryPolicy | None = None,
        max_results_per_query: int = MAX_RESULTS_PERQUERY,
    ) -> None:
        if max_results_per_query < 1:
            raise ConfigurationError(f"max_results_per_query must be at least 1, got {max_results_per_query}")
        self._retry = retry or RetryPolicy()
        self._max_results_per_query = max_results_per_query

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: SearchSettings) -> SearchAdapter:
        """Build an adapter from the ``search`` section of the settings."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'solr')."""

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Address of the backend this adapter queries."""

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry

    @property
    def max_results_per_query(self) -> int:
        return self._max_results_per_query

    @abstractmethod
    async def query_backend(self, request: SearchRequest) -> RawResults:
        """Execute one search call against the backend.

        Args:
            request: The query; ``max_results`` is already capped.

        Returns:
            Raw search results from the backend.

        Raises:
            TransientSearchError: If the call fails for any reason.
        """

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend."""

    async def search(self, request: SearchRequest) -> ResultSet:
        """Search the backend and normalize the results.

        Args:
            request: The query string and results cap.

        Returns:
            Up to ``request.max_results`` results in backend order.  An empty
            list when nothing matched.

        Raises:
            SearchExhausted: If every attempt allowed by the retry policy failed.
        """
        rows = min(request.max_results, self._max_results_per_query)
        if rows != request.max_results:
            request = request.model_copy(update={"max_results": rows})

        raw = await self._query_with_retry(request)
        results = normalize_documents(raw.documents, rows)

        logger.info(
            "Search '%s' on %s: %d hits, %d results, %d attempt(s)",
            request.query_string,
            self.name,
            raw.total_hits,
            len(results),
            raw.attempts,
        )
        return results

    async def _query_with_retry(self, request: SearchRequest) -> RawResults:
        policy = self._retry
        last_error: Exception | None = None

        for attempt in range(1, policy.max_attempts + 1):
            try:
                raw = await self.query_backend(request)
            except Exception as e:
                last_error = e
                logger.error(
                    "Search attempt %d/%d against %s failed: %s: %s",
                    attempt,
                    policy.max_attempts,
                    self.endpoint,
                    type(e).__name__,
                    e,
                )
                if attempt < policy.max_attempts:
                    await self._sleep(policy.delay_for(attempt))
                continue

            raw.attempts = attempt
            return raw

        logger.error("Search failed: giving up on %s after %d attempts", self.endpoint, policy.max_attempts)
        raise SearchExhausted(self.endpoint, policy.max_attempts, last_error) from last_error

    @staticmethod
    async def _sleep(seconds: float) -> None:
        await asyncio.sleep(seconds)
