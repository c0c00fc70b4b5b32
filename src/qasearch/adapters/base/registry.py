"""Adapter Registry — Maps backend names to adapter classes.

The registry creates a fresh adapter instance for every query so that
concurrent searches never share connection or retry state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from qasearch.adapters.base.adapter import SearchAdapter

if TYPE_CHECKING:
    from qasearch.config.settings import SearchSettings

logger = logging.getLogger(__name__)


class AdapterNotFoundError(Exception):
    """Raised when a requested adapter is not registered."""


class AdapterRegistry:
    """Registry of search adapter classes.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register("solr", SolrAdapter)
        >>> adapter = registry.create("solr", settings.search)
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[SearchAdapter]] = {}

    @classmethod
    def with_builtins(cls) -> AdapterRegistry:
        """Create a registry with every built-in backend registered."""
        from qasearch.adapters.solr.adapter import SolrAdapter

        registry = cls()
        registry.register("solr", SolrAdapter)
        return registry

    def register(self, name: str, adapter_class: type[SearchAdapter]) -> None:
        """Register an adapter class.

        Args:
            name: Unique name for this adapter type.
            adapter_class: The adapter class to register.
        """
        if name in self._classes:
            logger.warning("Overwriting existing adapter registration: %s", name)
        self._classes[name] = adapter_class
        logger.debug("Registered adapter: %s", name)

    def create(self, name: str, settings: SearchSettings) -> SearchAdapter:
        """Create a new adapter instance from configuration.

        Args:
            name: The registered adapter name.
            settings: Search settings passed to the adapter's ``from_settings``.

        Returns:
            A new adapter instance.

        Raises:
            AdapterNotFoundError: If no adapter is registered under this name.
            ConfigurationError: If the adapter rejects the configuration.
        """
        if name not in self._classes:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. "
                f"Available adapters: {list(self._classes.keys())}"
            )
        return self._classes[name].from_settings(settings)

    @property
    def registered_adapters(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._classes.keys())
