"""Apache Solr adapter — Evidence search via Solr's JSON Request API.

Connects to an Apache Solr core (v8+) using ``httpx`` (async) over the
standard JSON Request API.  Only the ``content`` and ``url`` fields are
requested; documents are matched on ``content``.

Usage::

    adapter = SolrAdapter(endpoint="http://localhost:8983/solr/gettingstarted")
    results = await adapter.search(SearchRequest(query_string="capital of France"))
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import httpx

from qasearch.adapters.base.adapter import AdapterHealth, SearchAdapter
from qasearch.adapters.base.exceptions import ConfigurationError, TransientSearchError
from qasearch.adapters.base.retry import RetryPolicy
from qasearch.models.search import MAX_RESULTS_PERQUERY, RawResults, SearchRequest

if TYPE_CHECKING:
    from qasearch.config.settings import SearchSettings

logger = logging.getLogger(__name__)

FIELDS = ["content", "url"]


class SolrAdapter(SearchAdapter):
    """Search adapter for an Apache Solr core (v8+).

    Communicates with Solr via its `JSON Request API`_ over HTTP.  A new
    HTTP client is opened for every backend call and closed when it returns.

    .. _JSON Request API: https://solr.apache.org/guide/solr/latest/query-guide/json-request-api.html

    Args:
        endpoint: URL of the Solr core, e.g.
            ``"http://localhost:8983/solr/gettingstarted"``.
        retry: Retry policy for failed calls (50 retries, 1s apart by default).
        max_results_per_query: Upper bound on rows requested per query.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        timeout: HTTP request timeout in seconds.

    Raises:
        ConfigurationError: If *endpoint* is missing or not an http(s) URL,
            or if *max_results_per_query* is below 1.
    """

    def __init__(
        self,
        endpoint: str | None,
        *,
        retry: RetryPolicy | None = None,
        max_results_per_query: int = MAX_RESULTS_PERQUERY,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(retry=retry, max_results_per_query=max_results_per_query)
        self._endpoint = self._validate_endpoint(endpoint)
        self._username = username
        self._password = password
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> SolrAdapter:
        """Build an adapter from the ``search`` section of the settings."""
        return cls(
            settings.endpoint,
            retry=settings.retry,
            max_results_per_query=settings.max_results_per_query,
            username=settings.username,
            password=settings.password,
            timeout=settings.timeout,
        )

    @property
    def name(self) -> str:
        return "solr"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    # ── Search ───────────────────────────────────────────────────────────

    async def query_backend(self, request: SearchRequest) -> RawResults:
        """Execute a single query against Solr's ``/select`` handler."""
        body = self.build_query(request)

        try:
            async with self._client() as client:
                start = time.monotonic()
                resp = await client.post("/select", json=body)
                resp.raise_for_status()
                took_ms = int((time.monotonic() - start) * 1000)
                data = resp.json()
        except httpx.HTTPError as e:
            raise TransientSearchError(f"Solr query failed: {e}") from e
        except ValueError as e:
            raise TransientSearchError(f"Solr returned a non-JSON response: {e}") from e

        response_section = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response_section, dict):
            raise TransientSearchError("Solr response is missing 'response.docs'")

        docs = response_section.get("docs")
        if not isinstance(docs, list) or not all(isinstance(doc, dict) for doc in docs):
            raise TransientSearchError("Solr response is missing 'response.docs'")

        num_found = response_section.get("numFound", len(docs))
        if not isinstance(num_found, int) or isinstance(num_found, bool):
            raise TransientSearchError(f"Solr response has a non-integer 'numFound': {num_found!r}")

        header = data.get("responseHeader") or {}
        if not isinstance(header, dict):
            raise TransientSearchError("Solr response has a malformed 'responseHeader'")

        return RawResults(
            total_hits=num_found,
            documents=docs,
            metadata={"qtime_ms": header.get("QTime", 0)},
            took_ms=took_ms,
        )

    @staticmethod
    def build_query(request: SearchRequest) -> dict[str, Any]:
        """JSON request body for *request*: match on ``content``, return ``content`` and ``url``."""
        return {
            "query": f"content:({request.query_string})",
            "limit": request.max_results,
            "fields": list(FIELDS),
        }

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Ping the Solr core's admin endpoint."""
        try:
            async with self._client() as client:
                start = time.monotonic()
                resp = await client.get("/admin/ping")
                latency_ms = int((time.monotonic() - start) * 1000)

                if resp.status_code == 200:
                    solr_status = resp.json().get("status", "unknown")
                    return AdapterHealth(
                        status="healthy" if solr_status == "OK" else "degraded",
                        latency_ms=latency_ms,
                        last_check=datetime.now(UTC).isoformat(),
                        message=f"Endpoint: {self._endpoint}, status: {solr_status}",
                    )
                return AdapterHealth(
                    status="degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Solr returned HTTP {resp.status_code}",
                )
        except Exception as e:
            return AdapterHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    def _client(self) -> httpx.AsyncClient:
        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)

        return httpx.AsyncClient(
            base_url=self._endpoint,
            timeout=httpx.Timeout(self._timeout),
            auth=auth,
        )

    @staticmethod
    def _validate_endpoint(endpoint: str | None) -> str:
        if not endpoint or not endpoint.strip():
            raise ConfigurationError(
                "Solr endpoint is not configured. Set QASEARCH_SEARCH__ENDPOINT or pass --endpoint."
            )
        parsed = urlparse(endpoint.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid Solr endpoint '{endpoint}': expected an http(s) URL")
        return endpoint.strip().rstrip("/")
