"""Startup and shutdown hooks of the FastAPI app."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from notify_console.core.settings import get_app_settings
from notify_console.infra.logging import complete, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    settings = get_app_settings()
    logger.info(
        "%s %s ready (%s)",
        settings.service_name,
        settings.version,
        settings.environment,
    )
    try:
        yield
    finally:
        logger.info("%s shutting down", settings.service_name)
        # Drain the log queue before uvicorn exits
        complete()
