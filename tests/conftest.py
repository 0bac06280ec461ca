"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests off the network and quiet
    - Application Fixtures: FastAPI app and HTTP client wired to an in-memory store
    - Template Fixtures: sample templates, stores and deterministic id factories
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("RELAY_BASE_URL", "http://relay.test")
os.environ.setdefault("CONFIG_DIR", "/nonexistent-notify-console-conf")

from notify_console.core.settings import clear_all_caches  # noqa: E402
from notify_console.features.templates.reconciler import UniqueIdFactory  # noqa: E402
from notify_console.features.templates.schemas import Template  # noqa: E402
from notify_console.features.templates.store import InMemoryTemplateStore  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so monkeypatched env vars take effect."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Template Fixtures
# ============================================================================


@pytest.fixture
def welcome_template() -> Template:
    return Template(
        id="welcome",
        name="Welcome",
        title="Hello {{ .title }}",
        content="{{ .content }} at {{ .timestamp }}",
        url="{{if .url}}{{ .url }}{{end}}",
    )


@pytest.fixture
def alert_template() -> Template:
    return Template(
        id="alert",
        name="Alert",
        title="{{ .level | upper }}: {{ .title }}",
        content="{{ .message }}",
    )


@pytest.fixture
def store(welcome_template: Template, alert_template: Template) -> InMemoryTemplateStore:
    """In-memory store seeded with two templates."""
    return InMemoryTemplateStore([welcome_template, alert_template])


@pytest.fixture
def id_factory() -> UniqueIdFactory:
    """Rename id factory with a fixed clock and a fixed random fraction."""
    return UniqueIdFactory(clock=lambda: 1_700_000_000_000, rng=lambda: 0.5)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(store: InMemoryTemplateStore):
    """FastAPI application whose template store is the in-memory ``store`` fixture."""
    from notify_console.app.main import create_app
    from notify_console.features.templates.dependencies import get_template_store

    application = create_app()
    application.dependency_overrides[get_template_store] = lambda: store
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the app through ASGITransport."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
