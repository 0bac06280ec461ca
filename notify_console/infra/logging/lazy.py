"""Deferred log message construction.

Debug lines such as a dump of a whole import plan are only worth building
when DEBUG is enabled; these helpers postpone the work until a handler
actually formats the record.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any


class LazyString:
    """Calls ``func`` when converted to ``str``.

    Example:
        ```python
        logger.debug("Import plan: %s", lazy(lambda: describe(plan)))
        ```
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[], Any]) -> None:
        self._func = func

    def __str__(self) -> str:
        return str(self._func())

    def __repr__(self) -> str:
        return f"LazyString({self._func!r})"


def lazy(func: Callable[[], Any]) -> LazyString:
    return LazyString(func)


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that resolves callable messages and arguments only when the level is enabled.

    Example:
        ```python
        logger = get_lazy_logger(__name__)
        logger.debug(lambda: f"Tokens: {tokenize(body)}")
        ```
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        args = tuple(arg() if callable(arg) else arg for arg in args)
        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        # Call-site extra overrides bound context
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Return a LazyLoggerAdapter for ``name`` with ``context`` bound as extra fields."""
    return LazyLoggerAdapter(logging.getLogger(name), context)
