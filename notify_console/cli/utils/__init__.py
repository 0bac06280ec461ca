"""CLI utilities for running async operations and formatting output."""

from notify_console.cli.utils.async_runner import coro, run_async
from notify_console.cli.utils.formatters import (
    detail,
    error,
    header,
    info,
    success,
    warning,
)

__all__ = [
    "coro",
    "detail",
    "error",
    "header",
    "info",
    "run_async",
    "success",
    "warning",
]
