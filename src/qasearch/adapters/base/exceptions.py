"""Adapter-specific exceptions."""

from __future__ import annotations


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid (e.g. no usable endpoint)."""


class TransientSearchError(AdapterError):
    """Raised when a single backend call fails.

    Covers timeouts, refused connections, HTTP error statuses and malformed
    response bodies.  The retry loop absorbs these; callers of
    ``SearchAdapter.search()`` never see them.
    """


class SearchExhausted(AdapterError):
    """Raised when the retry budget is spent without a successful backend call.

    Attributes:
        endpoint: The backend endpoint that was queried.
        attempts: Total number of backend calls made.
        last_error: The failure of the final attempt.
    """

    def __init__(self, endpoint: str, attempts: int, last_error: BaseException | None = None) -> None:
        self.endpoint = endpoint
        self.attempts = attempts
        self.last_error = last_error
        message = f"Search failed: endpoint {endpoint} did not respond successfully after {attempts} attempts"
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)
