"""Process-wide logging setup.

The root logger gets a single QueueHandler; a QueueListener thread fans
records out to the console and the rotating JSONL file, so slow disk writes
never block a request or an import batch.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
import time
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from notify_console.infra.logging.context import ContextInjectingFilter
from notify_console.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from notify_console.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None
_configured = False


def complete(max_wait: float = 5.0) -> None:
    """Block until queued records are handled or ``max_wait`` seconds pass."""
    if _queue is None or _listener is None:
        return
    deadline = time.monotonic() + max_wait
    while not _queue.empty() and time.monotonic() < deadline:
        time.sleep(0.01)


def shutdown() -> None:
    """Stop the listener thread and detach the queue handler."""
    global _queue, _listener, _queue_handler, _configured

    if _listener is not None:
        complete()
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None
    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None
    _queue = None
    _configured = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging from LoggingSettings unless it is already configured.

    Called by both the app lifespan and the CLI entry point.

    Args:
        log_settings: Settings to use instead of ``get_logging_settings()``.
        force: Reconfigure even when logging is already set up.
        **overrides: Keyword arguments for configure_logging() that win over
            the settings.
    """
    global _configured

    if _configured and not force:
        return
    if log_settings is None:
        from notify_console.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _configured = True


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "notify-console",
    **kwargs: Any,
) -> None:
    """(Re)build the logging pipeline.

    Args:
        log_level: Root logger level.
        console_level: Console threshold, ``log_level`` when None.
        file_level: File threshold, ``log_level`` when None.
        file_path: JSONL log file; None disables file logging.
        json_logs: JSON Lines output instead of plain text.
        console_enabled: Log to stderr.
        include_context: Inject set_log_context() fields into records.
        capture_warnings: Route ``warnings`` through logging.
        file_max_bytes: Size that triggers rotation.
        file_backup_count: Rotated files kept.
        service_name: Static ``service`` field of JSON records.
        **kwargs: Ignored; reported at DEBUG.
    """
    shutdown()
    logging.captureWarnings(capture_warnings)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": log_level.upper(), "handlers": []},
        }
    )

    handlers: list[logging.Handler] = []
    if console_enabled:
        console = logging.StreamHandler()
        handlers.append(_with_format(console, console_level or log_level, json_logs, service_name))
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path, maxBytes=file_max_bytes, backupCount=file_backup_count, encoding="utf-8"
        )
        file_level = file_level or log_level
        handlers.append(_with_format(file_handler, file_level, json_logs, service_name))

    _start_queue(handlers, include_context=include_context)

    if kwargs:
        logger.debug("Ignoring unknown logging options: %s", ", ".join(sorted(kwargs)))


def _with_format(
    handler: logging.Handler, level: str, json_logs: bool, service_name: str
) -> logging.Handler:
    handler.setLevel(level.upper())
    if json_logs:
        handler.setFormatter(JSONFormatter(static={"service": service_name}))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, TEXT_DATEFMT))
    return handler


def _start_queue(handlers: list[logging.Handler], *, include_context: bool) -> None:
    """Put a QueueHandler on the root logger feeding a listener over ``handlers``.

    The context filter sits on the QueueHandler so records propagated from
    child loggers are enriched too.
    """
    global _queue, _listener, _queue_handler

    if not handlers:
        return

    _queue = Queue()
    _listener = QueueListener(_queue, *handlers, respect_handler_level=True)
    _listener.start()
    atexit.register(shutdown)

    _queue_handler = QueueHandler(_queue)
    if include_context:
        _queue_handler.addFilter(ContextInjectingFilter())
    logging.getLogger().addHandler(_queue_handler)
