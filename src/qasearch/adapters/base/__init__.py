"""Base adapter interface — Abstract classes for search engine connectors."""

from qasearch.adapters.base.adapter import SearchAdapter
from qasearch.adapters.base.registry import AdapterRegistry
from qasearch.adapters.base.retry import RetryPolicy

__all__ = ["AdapterRegistry", "RetryPolicy", "SearchAdapter"]
