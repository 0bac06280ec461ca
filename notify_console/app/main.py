"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from notify_console.app.exception_handlers import configure_exception_handlers
from notify_console.app.lifespan import lifespan
from notify_console.app.router import setup_routers
from notify_console.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.docs_url,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Configure exception handlers before routes
    configure_exception_handlers(app)

    setup_routers(app, app_settings)

    return app
