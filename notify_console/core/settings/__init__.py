"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app, logging, relay, templates), each read from
init kwargs, optional ``conf/<domain>.yaml`` files, environment variables and
``.env`` in that order of precedence.

Import settings via cached loaders:
    from notify_console.core.settings import get_template_settings
"""

from __future__ import annotations

from .app import AppSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_logging_settings,
    get_relay_settings,
    get_template_settings,
)
from .logs import LoggingSettings
from .relay import RelaySettings
from .templates import TemplateSettings

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "RelaySettings",
    "TemplateSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_logging_settings",
    "get_relay_settings",
    "get_template_settings",
]
