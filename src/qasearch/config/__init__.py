"""Configuration management."""

from qasearch.config.settings import Settings

__all__ = ["Settings"]
