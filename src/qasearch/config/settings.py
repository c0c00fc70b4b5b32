"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (QASEARCH_ prefix, optional .env file)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

from qasearch.adapters.base.retry import RetryPolicy
from qasearch.models.search import MAX_RESULTS_PERQUERY, MAX_RESULTS_TOTAL


class SearchSettings(BaseModel):
    """Search backend configuration."""

    model_config = ConfigDict(validate_assignment=True)

    backend: str = Field(default="solr", description="Registered adapter name")
    endpoint: str | None = Field(default=None, description="Backend URL, e.g. http://localhost:8983/solr/core")
    username: str | None = Field(default=None, description="Authentication username")
    password: str | None = Field(default=None, description="Authentication password")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_results_per_query: int = Field(
        default=MAX_RESULTS_PERQUERY, ge=1, le=MAX_RESULTS_TOTAL, description="Results requested per query"
    )
    max_results_total: int = Field(
        default=MAX_RESULTS_TOTAL, ge=1, description="Results kept across all queries of a run"
    )
    max_concurrent_queries: int = Field(default=10, ge=1, description="Max concurrent queries")
    retry: RetryPolicy = Field(default_factory=RetryPolicy, description="Retry policy for backend calls")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the QASEARCH_ prefix.
    Nested settings use double underscores.

    Example:
        QASEARCH_SEARCH__ENDPOINT=http://localhost:8983/solr/gettingstarted
        QASEARCH_SEARCH__RETRY__MAX_RETRIES=5
        QASEARCH_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "QASEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file take precedence over environment variables;
        anything the file leaves out still falls back to the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
