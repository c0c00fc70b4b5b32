"""Tests for the adapter registry."""

from __future__ import annotations

import pytest

from qasearch.adapters.base.exceptions import ConfigurationError
from qasearch.adapters.base.registry import AdapterNotFoundError, AdapterRegistry
from qasearch.adapters.solr.adapter import SolrAdapter
from qasearch.config.settings import Settings


class TestAdapterRegistry:
    def test_builtins(self) -> None:
        registry = AdapterRegistry.with_builtins()
        assert registry.registered_adapters == ["solr"]

    def test_create_builds_fresh_instances(self, settings: Settings) -> None:
        registry = AdapterRegistry.with_builtins()
        first = registry.create("solr", settings.search)
        second = registry.create("solr", settings.search)

        assert isinstance(first, SolrAdapter)
        assert first is not second
        assert first.endpoint == settings.search.endpoint

    def test_create_unknown(self, settings: Settings) -> None:
        registry = AdapterRegistry()
        with pytest.raises(AdapterNotFoundError, match="No adapter registered with name 'solr'"):
            registry.create("solr", settings.search)

    def test_create_propagates_configuration_error(self, settings: Settings) -> None:
        settings.search.endpoint = None
        with pytest.raises(ConfigurationError):
            AdapterRegistry.with_builtins().create("solr", settings.search)

    def test_register_custom_backend(self, settings: Settings, stub_adapter_cls: type) -> None:
        registry = AdapterRegistry()
        registry.register("stub", stub_adapter_cls)

        adapter = registry.create("stub", settings.search)
        assert adapter.name == "stub"
        assert adapter.retry_policy.max_retries == 3

    def test_overwrite_registration(self, stub_adapter_cls: type) -> None:
        registry = AdapterRegistry.with_builtins()
        registry.register("solr", stub_adapter_cls)
        assert registry.registered_adapters == ["solr"]
