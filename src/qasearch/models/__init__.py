"""Data models for search requests and normalized results."""

from qasearch.models.search import RawResults, ResultSet, SearchRequest, SearchResult

__all__ = ["RawResults", "ResultSet", "SearchRequest", "SearchResult"]
