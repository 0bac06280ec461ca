"""Unit tests for the retry decorator."""
from __future__ import annotations

import pytest

from notify_console.utils.retry import RetryError, RetryStrategy, retry


@pytest.mark.unit
class TestRetryDecorator:
    async def test_retry_succeeds_first_attempt(self):
        call_count = 0

        @retry(max_attempts=3)
        async def successful_func():
            nonlocal call_count
            call_count += 1
            return "success"

        assert await successful_func() == "success"
        assert call_count == 1

    async def test_retry_succeeds_after_retries(self):
        call_count = 0
        retried: list[int] = []

        @retry(max_attempts=3, initial_delay=0.0, on_retry=lambda e, n: retried.append(n))
        async def eventually_successful():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ConnectionError("Not yet")
            return "success"

        assert await eventually_successful() == "success"
        assert call_count == 3
        assert retried == [1, 2]

    async def test_retry_fails_after_max_attempts(self):
        @retry(max_attempts=2, initial_delay=0.0)
        async def always_fails():
            raise ConnectionError("Always fails")

        with pytest.raises(RetryError) as exc_info:
            await always_fails()

        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_exception, ConnectionError)
        assert "Gave up after 2 attempts" in str(exc_info.value)
        assert exc_info.value.statistics.exceptions == ["ConnectionError", "ConnectionError"]

    async def test_non_retryable_exception_propagates(self):
        call_count = 0

        @retry(max_attempts=3, initial_delay=0.0, exceptions=(ConnectionError,))
        async def wrong_kind():
            nonlocal call_count
            call_count += 1
            raise KeyError("nope")

        with pytest.raises(KeyError):
            await wrong_kind()
        assert call_count == 1

    async def test_retry_if_predicate(self):
        @retry(max_attempts=3, initial_delay=0.0, retry_if=lambda e: "transient" in str(e))
        async def permanent():
            raise ValueError("permanent")

        with pytest.raises(ValueError, match="permanent"):
            await permanent()


@pytest.mark.unit
class TestRetryStrategy:
    def test_delay_grows_and_is_capped(self):
        strategy = RetryStrategy(initial_delay=1.0, max_delay=5.0, jitter=False)

        assert [strategy.calculate_delay(n) for n in range(4)] == [1.0, 2.0, 4.0, 5.0]

    def test_jitter_stays_in_range(self):
        strategy = RetryStrategy(initial_delay=2.0, jitter_range=(0.5, 1.5))

        assert 1.0 <= strategy.calculate_delay(0) <= 3.0
