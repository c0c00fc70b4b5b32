"""Bounded retry policy for backend calls."""

from __future__ import annotations

import random
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RetryPolicy(BaseModel):
    """How often, and how long apart, a failed backend call is retried.

    The budget is always finite: a search makes at most ``1 + max_retries``
    backend calls before giving up.
    """

    model_config = ConfigDict(validate_assignment=True)

    max_retries: int = Field(default=50, ge=0, description="Retries after the initial attempt")
    delay_seconds: float = Field(default=1.0, ge=0, description="Base delay between attempts")
    backoff: Literal["fixed", "exponential"] = Field(default="fixed", description="Delay growth strategy")
    max_delay_seconds: float = Field(default=30.0, ge=0, description="Cap for exponential delays")
    jitter: bool = Field(default=False, description="Randomize exponential delays to 50-100% of their value")

    @property
    def max_attempts(self) -> int:
        return 1 + self.max_retries

    def delay_for(self, retry_number: int) -> float:
        """Seconds to wait before retry number *retry_number* (1-based)."""
        if self.backoff == "fixed":
            return self.delay_seconds

        delay = min(self.delay_seconds * 2 ** (retry_number - 1), self.max_delay_seconds)
        if self.jitter:
            delay *= random.uniform(0.5, 1.0)
        return delay
