"""Async retry decorator with exponential backoff."""

from __future__ import annotations

import asyncio
import logging
import time
from functools import wraps
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from .exceptions import RetryError, RetryStatistics
from .strategies import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    jitter_range: tuple[float, float] = (0.5, 1.5),
    exceptions: tuple[type[Exception], ...] = (Exception,),
    retry_if: Callable[[Exception], bool] | None = None,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async callable while it raises retryable exceptions.

    Args:
        max_attempts: Total attempts, the first call included.
        initial_delay: Delay in seconds before the first retry.
        max_delay: Upper bound for any single delay.
        exponential_base: Growth factor between consecutive delays.
        jitter: Randomize delays within ``jitter_range``.
        jitter_range: Multiplier bounds applied when ``jitter`` is set.
        exceptions: Exception types that are retried.
        retry_if: Predicate that replaces the ``exceptions`` check.
        on_retry: Called with the exception and the 1-based failed attempt
            before each sleep.

    Raises:
        RetryError: Every attempt failed with a retryable exception.

    Example:
        ```python
        @retry(max_attempts=3, exceptions=(httpx.TransportError,))
        async def fetch_templates() -> dict: ...
        ```
    """
    strategy = RetryStrategy(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        jitter_range=jitter_range,
        exceptions=exceptions,
        retry_if=retry_if,
    )

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        target = func.__qualname__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            stats = RetryStatistics(started=time.monotonic())

            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    if not strategy.should_retry(exc):
                        raise

                    failed = stats.attempts + 1
                    if failed >= strategy.max_attempts:
                        stats.record(exc)
                        stats.finished = time.monotonic()
                        logger.error(
                            "Giving up on %s after %d attempts",
                            target,
                            failed,
                            extra={
                                "retry_target": target,
                                "attempt": failed,
                                "total_delay": stats.total_delay,
                                "error": str(exc),
                            },
                        )
                        raise RetryError(exc, failed, stats) from exc

                    delay = strategy.calculate_delay(stats.attempts)
                    stats.record(exc, delay)
                    logger.warning(
                        "Retrying %s in %.2fs (attempt %d/%d)",
                        target,
                        delay,
                        failed,
                        strategy.max_attempts,
                        extra={"retry_target": target, "attempt": failed, "error": str(exc)},
                    )
                    if on_retry is not None:
                        on_retry(exc, failed)
                    await asyncio.sleep(delay)

        return wrapper

    return decorator
