"""Tests for settings models and cached loaders."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from notify_console.core.settings import (
    AppSettings,
    LoggingSettings,
    RelaySettings,
    TemplateSettings,
    get_relay_settings,
    get_template_settings,
)


def test_template_settings_defaults():
    settings = TemplateSettings()

    assert settings.preview_fallback == "模板预览失败"
    assert settings.timestamp_format == "%Y/%m/%d %H:%M:%S"
    assert settings.rename_random_length == 6


def test_env_overrides_are_picked_up_by_loader(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TEMPLATES_PREVIEW_FALLBACK", "preview failed")
    monkeypatch.setenv("RELAY_MAX_RETRIES", "5")

    assert get_template_settings().preview_fallback == "preview failed"
    assert get_relay_settings().max_retries == 5


def test_loader_caches_instances():
    assert get_template_settings() is get_template_settings()


def test_settings_are_frozen():
    settings = TemplateSettings()

    with pytest.raises(ValidationError):
        settings.preview_fallback = "changed"


def test_relay_auth_headers():
    assert RelaySettings(admin_token="t").auth_headers == {"Authorization": "Bearer t"}
    assert RelaySettings(admin_token=None).auth_headers == {}


def test_relay_settings_validation():
    with pytest.raises(ValidationError):
        RelaySettings(templates_path="admin/templates")


def test_app_settings_api_prefix_must_be_absolute():
    with pytest.raises(ValidationError):
        AppSettings(api_prefix="api")


def test_logging_settings_to_kwargs():
    settings = LoggingSettings(level="debug", console_level="warning", file_enabled=False)

    kwargs = settings.to_logging_kwargs()

    assert kwargs["log_level"] == "DEBUG"
    assert kwargs["console_level"] == "WARNING"
    assert kwargs["file_level"] == "DEBUG"
    assert kwargs["file_path"] is None


def test_logging_file_path_only_when_enabled(tmp_path):
    settings = LoggingSettings(file_enabled=True, file_path=tmp_path / "app.jsonl")

    assert settings.to_logging_kwargs()["file_path"] == str(tmp_path / "app.jsonl")


def test_yaml_source(monkeypatch: pytest.MonkeyPatch, tmp_path):
    (tmp_path / "templates.yaml").write_text("sample_level: warn\n", encoding="utf-8")
    confd = tmp_path / "templates.d"
    confd.mkdir()
    (confd / "10-local.yaml").write_text("sample_title: Local title\n", encoding="utf-8")
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path))

    settings = TemplateSettings()

    assert settings.sample_level == "warn"
    assert settings.sample_title == "Local title"
