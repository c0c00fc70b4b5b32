"""Search request and result models.

A ``SearchRequest`` is built per query by the caller and consumed by a single
adapter invocation.  Adapters answer with a ``ResultSet``: an ordered list of
``SearchResult`` snippet/URL pairs in the order the backend returned them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_RESULTS_PERQUERY = 10
"""Default number of results requested from the backend per query."""

MAX_RESULTS_TOTAL = 100
"""Upper bound on results for a single request and across all queries of a run."""


class SearchRequest(BaseModel):
    """A single query issued to a search adapter."""

    model_config = ConfigDict(frozen=True)

    query_string: str = Field(min_length=1, description="Opaque query text matched against the content field")
    max_results: int = Field(
        default=MAX_RESULTS_PERQUERY,
        ge=1,
        le=MAX_RESULTS_TOTAL,
        description="Maximum number of results to return for this query",
    )


class SearchResult(BaseModel):
    """A normalized piece of evidence: a text snippet and where it came from."""

    model_config = ConfigDict(frozen=True)

    snippet: str = Field(description="Document content used as evidence downstream")
    source_url: str = Field(description="URL of the source document")

    @field_validator("snippet")
    @classmethod
    def _snippet_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("snippet must not be empty")
        return v


ResultSet = list[SearchResult]
"""Ordered search results; may be empty, never ``None``."""


class RawResults(BaseModel):
    """Raw search results from a backend before normalization."""

    total_hits: int = Field(default=0, description="Total number of matching documents")
    documents: list[dict[str, Any]] = Field(default_factory=list, description="Raw document dicts")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Backend-specific metadata")
    took_ms: int = Field(default=0, description="Backend query execution time in ms")
    attempts: int = Field(default=1, description="Number of backend calls made to obtain these results")
