"""Tests for preview variable resolution."""

from __future__ import annotations

from datetime import datetime

from notify_console.core.settings import TemplateSettings
from notify_console.features.templates.variables import (
    default_preview_variables,
    resolve_variables,
)


def fixed_now() -> datetime:
    return datetime(2024, 1, 2, 3, 4, 5)


def test_default_variables():
    assert default_preview_variables(now=fixed_now) == {
        "title": "示例标题",
        "content": "示例内容",
        "level": "info",
        "message": "示例消息",
        "timestamp": "2024/01/02 03:04:05",
        "image": "",
        "url": "",
    }


def test_timestamp_follows_configured_format():
    settings = TemplateSettings(timestamp_format="%d.%m.%Y")

    assert default_preview_variables(settings, now=fixed_now)["timestamp"] == "02.01.2024"


def test_caller_values_override_defaults_and_extra_keys_are_kept():
    context = resolve_variables(caller_data={"title": "Disk full", "host": "db-1"}, now=fixed_now)

    assert context["title"] == "Disk full"
    assert context["host"] == "db-1"
    assert context["content"] == "示例内容"


def test_caller_none_keeps_default():
    context = resolve_variables(caller_data={"title": None, "extra": None}, now=fixed_now)

    assert context["title"] == "示例标题"
    assert "extra" not in context


def test_template_defaults_sit_between_samples_and_caller_data():
    context = resolve_variables(
        template_defaults={"level": "warn", "title": "From template"},
        caller_data={"title": "From caller"},
        now=fixed_now,
    )

    assert context["level"] == "warn"
    assert context["title"] == "From caller"


def test_values_are_not_coerced():
    context = resolve_variables(caller_data={"count": 3, "flags": ["a"]}, now=fixed_now)

    assert context["count"] == 3
    assert context["flags"] == ["a"]


def test_each_call_builds_a_fresh_context():
    first = resolve_variables(caller_data={"title": "x"}, now=fixed_now)
    first["title"] = "mutated"

    assert resolve_variables(now=fixed_now)["title"] == "示例标题"
