"""Bridge between click's synchronous callbacks and async service code."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

T = TypeVar("T")


def run_async(awaitable: Awaitable[T]) -> T:
    """Run ``awaitable`` on a new event loop and return its result."""

    async def _await() -> T:
        return await awaitable

    return asyncio.run(_await())


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Let an ``async def`` serve as a click command callback.

    Usage:
        @templates.command("export")
        @coro
        async def export_templates(template_ids):
            async with open_store(None) as store:
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return run_async(f(*args, **kwargs))

    return wrapper
