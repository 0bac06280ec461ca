"""Cached settings getters.

Each getter builds its settings object on first use and returns the same
frozen instance afterwards. Tests call ``clear_all_caches()`` after changing
environment variables.
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .logs import LoggingSettings
from .relay import RelaySettings
from .templates import TemplateSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    return AppSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Relay admin API location, credentials and retry budget."""
    return RelaySettings()


@lru_cache(maxsize=1)
def get_template_settings() -> TemplateSettings:
    """Preview samples, fallback text and rename id shape."""
    return TemplateSettings()


def clear_all_caches() -> None:
    """Forget every cached settings instance."""
    for getter in (
        get_app_settings,
        get_logging_settings,
        get_relay_settings,
        get_template_settings,
    ):
        getter.cache_clear()
