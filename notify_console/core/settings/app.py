"""HTTP application settings.

Environment variables use APP_ prefix.
Example: APP_DEBUG=true, APP_API_PREFIX="/api/v2", APP_PORT=9000
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_yaml_source

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """Metadata and bind address of the FastAPI app served by `notify-console serve`."""

    service_name: str = Field(default="notify-console", pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$")
    title: str = Field(default="Notify Console API", min_length=1)
    description: str = Field(
        default="Template preview and import reconciliation for the notify relay",
    )
    version: str = Field(default="0.1.0", pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$")
    environment: Environment = "development"
    debug: bool = False

    api_prefix: str = Field(
        default="/api/v1",
        pattern=r"^/.*$",
        description="Mount point of the template routes",
    )
    docs_url: str | None = Field(default="/docs", description="Swagger UI path; null disables it")

    host: str = Field(default="0.0.0.0", description="Bind address for `notify-console serve`")
    port: int = Field(
        default=8000, ge=1, le=65535, description="Bind port for `notify-console serve`"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_yaml_source(settings_cls, "app"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
