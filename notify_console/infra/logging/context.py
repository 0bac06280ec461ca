"""Per-task logging context.

Values stored with ``set_log_context`` live in a ContextVar, so each asyncio
task (and thread) sees its own copy. ``ContextInjectingFilter`` copies them
onto every record; the import executor uses this to stamp all records of a
batch with its ``batch_id``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add or replace context fields for the current task.

    Example:
        ```python
        set_log_context(batch_id="b-1f3a")
        logger.info("Import started")  # record carries batch_id
        ```
    """
    _log_context.set({**_log_context.get(), **kwargs})


def get_log_context() -> dict[str, Any]:
    return dict(_log_context.get())


def clear_log_context() -> None:
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Drop ``keys`` from the current context; unknown keys are ignored."""
    _log_context.set({k: v for k, v in _log_context.get().items() if k not in keys})


class ContextInjectingFilter(logging.Filter):
    """Copy the current log context onto each record.

    Attributes already present on the record (``name``, ``extra=`` values,
    ...) win over context fields of the same name. Never rejects a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
