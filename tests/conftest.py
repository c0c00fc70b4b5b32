"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from qasearch.adapters.base.adapter import AdapterHealth, SearchAdapter
from qasearch.config.settings import SearchSettings, Settings
from qasearch.models.search import RawResults, SearchRequest

SOLR_ENDPOINT = "http://localhost:8983/solr/test_docs"


class StubAdapter(SearchAdapter):
    """In-memory adapter that replays scripted outcomes, one per backend call.

    Each outcome is either ``RawResults`` (returned) or an exception (raised).
    Once the script runs out, empty results are returned.
    """

    def __init__(self, outcomes: list[RawResults | Exception] | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.outcomes = list(outcomes or [])
        self.calls: list[SearchRequest] = []

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> StubAdapter:
        return cls(retry=settings.retry, max_results_per_query=settings.max_results_per_query)

    @property
    def name(self) -> str:
        return "stub"

    @property
    def endpoint(self) -> str:
        return "stub://backend"

    async def query_backend(self, request: SearchRequest) -> RawResults:
        self.calls.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else RawResults()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def health_check(self) -> AdapterHealth:
        return AdapterHealth(status="healthy")


@pytest.fixture
def stub_adapter_cls() -> type[StubAdapter]:
    return StubAdapter


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with fast retries."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        search={
            "endpoint": SOLR_ENDPOINT,
            "retry": {"max_retries": 3, "delay_seconds": 0.0},
        },
    )


@pytest.fixture
def france_docs() -> list[dict[str, Any]]:
    """Backend documents for the 'capital of France' scenario."""
    return [
        {"content": "Paris is the capital of France", "url": "http://a"},
        {"content": "", "url": "http://b"},
        {"content": "France is in Europe", "url": "http://c"},
    ]


@pytest.fixture
def france_request() -> SearchRequest:
    return SearchRequest(query_string="capital of France", max_results=10)
