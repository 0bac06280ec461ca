"""Backoff policy for the retry decorator."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryStrategy:
    """Which failures are retried and how long to wait between attempts.

    Delays grow as ``initial_delay * exponential_base ** n`` up to
    ``max_delay``; with ``jitter`` each delay is scaled by a random factor
    drawn from ``jitter_range``.
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = True
    jitter_range: tuple[float, float] = (0.5, 1.5)
    exceptions: tuple[type[Exception], ...] = (Exception,)
    retry_if: Callable[[Exception], bool] | None = None

    def should_retry(self, exception: Exception) -> bool:
        if self.retry_if is not None:
            return self.retry_if(exception)
        return isinstance(exception, self.exceptions)

    def calculate_delay(self, retry_number: int) -> float:
        """Seconds to sleep before retry ``retry_number`` (zero-based)."""
        delay = self.initial_delay * self.exponential_base**retry_number
        delay = min(delay, self.max_delay)
        if not self.jitter:
            return delay
        low, high = self.jitter_range
        return delay * random.uniform(low, high)
