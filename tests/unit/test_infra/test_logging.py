"""Tests for logging configuration, context injection and formatting."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from notify_console.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    complete,
    configure_logging,
    get_lazy_logger,
    get_log_context,
    lazy,
    remove_from_log_context,
    set_log_context,
    shutdown,
)


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("notify_console.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


def test_log_context_round_trip():
    set_log_context(batch_id="b-1", policy="rename")
    remove_from_log_context("policy")

    assert get_log_context() == {"batch_id": "b-1"}


def test_context_filter_injects_without_overwriting():
    set_log_context(batch_id="b-1", name="ignored")
    record = make_record()

    assert ContextInjectingFilter().filter(record)
    assert record.batch_id == "b-1"
    assert record.name == "notify_console.test"


def test_json_formatter_single_line_with_extras():
    formatter = JSONFormatter(static={"service": "notify-console"})
    record = make_record("line one\nline two", batch_id="b-1")

    output = formatter.format(record)
    data = json.loads(output)

    assert "\n" not in output
    assert data["message"] == "line one\nline two"
    assert data["level"] == "INFO"
    assert data["service"] == "notify-console"
    assert data["batch_id"] == "b-1"
    assert data["timestamp"].endswith("Z")


def test_json_formatter_includes_exception():
    formatter = JSONFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    data = json.loads(formatter.format(record))

    assert "RuntimeError: boom" in data["exception"]


def test_lazy_logger_skips_disabled_levels():
    calls = []
    logger = get_lazy_logger("notify_console.test.lazy")
    logger.logger.setLevel(logging.INFO)

    logger.debug(lambda: calls.append("evaluated") or "msg")

    assert calls == []


def test_lazy_string_defers_evaluation():
    calls = []
    value = lazy(lambda: calls.append(1) or "done")

    assert calls == []
    assert str(value) == "done"
    assert calls == [1]


def test_configure_logging_writes_jsonl_file(tmp_path):
    log_file = tmp_path / "logs" / "app.jsonl"
    try:
        configure_logging(
            log_level="INFO",
            file_path=log_file,
            console_enabled=False,
            json_logs=True,
            service_name="notify-console",
        )
        set_log_context(batch_id="b-9")
        file_logger = logging.getLogger("notify_console.test.file")
        file_logger.info("Import finished", extra={"created_count": 2})
        complete()
    finally:
        shutdown()

    (line,) = log_file.read_text(encoding="utf-8").splitlines()
    data = json.loads(line)
    assert data["message"] == "Import finished"
    assert data["batch_id"] == "b-9"
    assert data["created_count"] == 2
    assert data["service"] == "notify-console"
