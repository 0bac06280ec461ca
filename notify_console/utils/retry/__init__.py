"""Retry helpers for calls to flaky upstream services."""

from __future__ import annotations

from notify_console.utils.retry.decorator import retry
from notify_console.utils.retry.exceptions import RetryError, RetryStatistics
from notify_console.utils.retry.strategies import RetryStrategy

__all__ = ["RetryError", "RetryStatistics", "RetryStrategy", "retry"]
