"""Errors and bookkeeping for retried calls."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RetryStatistics:
    """Record of the failed attempts of one retried call."""

    attempts: int = 0
    total_delay: float = 0.0
    started: float = 0.0
    finished: float = 0.0
    exceptions: list[str] = field(default_factory=list)

    @property
    def duration(self) -> float:
        return self.finished - self.started

    def record(self, exc: Exception, delay: float = 0.0) -> None:
        self.attempts += 1
        self.total_delay += delay
        self.exceptions.append(type(exc).__name__)


class RetryError(Exception):
    """A retried call failed on every attempt.

    Attributes:
        last_exception: Exception raised by the final attempt.
        attempts: Number of attempts made.
        statistics: Delays and exception names per failed attempt.
    """

    def __init__(
        self,
        last_exception: Exception,
        attempts: int,
        statistics: RetryStatistics | None = None,
    ) -> None:
        self.last_exception = last_exception
        self.attempts = attempts
        self.statistics = statistics or RetryStatistics(attempts=attempts)
        super().__init__(f"Gave up after {attempts} attempts: {last_exception}")
