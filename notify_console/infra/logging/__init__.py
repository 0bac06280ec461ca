"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation
- Automatic context injection (batch_id, template_id, ...)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive debug messages

Basic usage:
    import logging

    from notify_console.infra.logging import set_log_context

    logger = logging.getLogger(__name__)

    set_log_context(batch_id="b-1f3a")
    logger.info("Import started")  # Automatically includes batch_id
"""

from notify_console.infra.logging.config import (
    complete,
    configure_logging,
    setup_logging,
    shutdown,
)
from notify_console.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from notify_console.infra.logging.formatters import JSONFormatter
from notify_console.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "clear_log_context",
    "complete",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "lazy",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
