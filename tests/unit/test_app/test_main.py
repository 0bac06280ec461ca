"""Tests for the application factory."""

from __future__ import annotations

from fastapi.routing import APIRoute

from notify_console.app.main import create_app


def test_create_app_registers_template_routes():
    app = create_app()

    paths = {route.path for route in app.routes if isinstance(route, APIRoute)}
    assert {
        "/api/v1/templates/preview",
        "/api/v1/templates/preview/fields",
        "/api/v1/templates/import",
        "/api/v1/templates/export",
    } <= paths
    assert app.title == "Notify Console API"


def test_api_prefix_from_settings(monkeypatch):
    monkeypatch.setenv("APP_API_PREFIX", "/api/v2")

    app = create_app()

    assert any(
        isinstance(route, APIRoute) and route.path == "/api/v2/templates/preview"
        for route in app.routes
    )
