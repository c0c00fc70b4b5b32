"""Integration test fixtures — a live Solr core seeded with mock documents.

Point the tests at a running Solr core with::

    docker run -d -p 8983:8983 solr:9 solr-precreate documents
    QASEARCH_TEST_SOLR_ENDPOINT=http://localhost:8983/solr/documents pytest tests/integration

Without ``QASEARCH_TEST_SOLR_ENDPOINT`` every integration test is skipped.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import time
from typing import Any

import httpx
import pytest

MOCK_DOCUMENTS: list[dict[str, Any]] = [
    {
        "id": "doc-001",
        "content": "Paris is the capital and most populous city of France.",
        "url": "https://example.com/wiki/Paris",
    },
    {
        "id": "doc-002",
        "content": "France is a country in Western Europe; its capital is Paris.",
        "url": "https://example.com/wiki/France",
    },
    {
        "id": "doc-003",
        "content": "Berlin is the capital and largest city of Germany.",
        "url": "https://example.com/wiki/Berlin",
    },
    {
        "id": "doc-004",
        "content": "",
        "url": "https://example.com/wiki/Empty",
    },
    {
        "id": "doc-005",
        "content": "The Eiffel Tower is a wrought-iron lattice tower in Paris, France.",
        "url": "https://example.com/wiki/Eiffel_Tower",
    },
]


def _wait_for_service(url: str, timeout: float = 30.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _seed_solr(endpoint: str) -> None:
    async with httpx.AsyncClient(base_url=endpoint, timeout=30) as client:
        for field in [
            {"name": "content", "type": "text_general", "stored": True, "multiValued": False},
            {"name": "url", "type": "string", "stored": True},
        ]:
            with contextlib.suppress(httpx.HTTPError):
                await client.post("/schema", json={"add-field": field})

        await client.post(
            "/update",
            json={"delete": {"query": "*:*"}},
            params={"commit": "true"},
        )

        resp = await client.post("/update", json=MOCK_DOCUMENTS, params={"commit": "true"})
        resp.raise_for_status()


@pytest.fixture(scope="session")
def solr_ready() -> str:
    """Ensure Solr is running and seeded; return the core endpoint."""
    endpoint = os.environ.get("QASEARCH_TEST_SOLR_ENDPOINT")
    if not endpoint:
        pytest.skip("QASEARCH_TEST_SOLR_ENDPOINT is not set")
    endpoint = endpoint.rstrip("/")
    if not _wait_for_service(f"{endpoint}/admin/ping"):
        pytest.skip(f"Solr not available at {endpoint}")
    asyncio.run(_seed_solr(endpoint))
    return endpoint
