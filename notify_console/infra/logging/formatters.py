"""JSON Lines formatter."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

# Standard LogRecord attributes; everything else on a record is an extra field.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as a single-line JSON object.

    Output always has ``level``, ``logger``, ``message`` and a UTC
    ``timestamp``; ``static`` fields (the service name) and any non-standard
    record attributes, such as ``extra=`` values or injected context, follow
    as top-level keys.

    Example output:
        ```
        {"level": "INFO", "logger": "notify_console.features.templates.executor",
         "message": "Import finished: 2 created (1 renamed), 0 overwritten, 0 skipped, 0 failed",
         "timestamp": "2026-01-01T00:00:00.123Z", "service": "notify-console",
         "batch_id": "b-1f3a", "created_count": 2}
        ```
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
    ) -> None:
        """
        Args:
            fmt_keys: Output key to LogRecord attribute mapping.
            static: Fields added to every record, e.g. ``{"service": "notify-console"}``.
        """
        super().__init__()
        self.fmt_keys = fmt_keys or {"level": "levelname", "logger": "name", "message": "message"}
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        created = datetime.fromtimestamp(record.created, tz=UTC)

        data: dict[str, Any] = {
            key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()
        }
        data["timestamp"] = created.isoformat(timespec="milliseconds").replace("+00:00", "Z")

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_trace"] = self.formatStack(record.stack_info)

        data.update(self.static)
        for key, value in vars(record).items():
            if key not in _RESERVED and key not in data:
                data[key] = value

        # json.dumps escapes newlines, keeping one record per line
        return json.dumps(data, ensure_ascii=False, default=str)
