"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from notify_console.core.settings import get_app_settings
from notify_console.features.templates.router import router as templates_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from notify_console.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(templates_router, prefix=api_prefix)
    logger.info("Template endpoints registered at %s/templates", api_prefix)
