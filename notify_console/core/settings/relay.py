"""Relay admin API connection settings.

Environment variables use RELAY_ prefix.
Example: RELAY_BASE_URL="http://notify:8080"
         RELAY_ADMIN_TOKEN="s3cret"
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_yaml_source


class RelaySettings(BaseSettings):
    """Connection settings for the notify relay admin API."""

    base_url: str = Field(
        default="http://localhost:8080",
        min_length=1,
        description="Base URL of the relay service (without the admin path)",
    )

    admin_token: SecretStr | None = Field(
        default=None,
        description="Bearer token sent to the admin endpoints, if auth is enabled",
    )

    templates_path: str = Field(
        default="/admin/templates",
        pattern=r"^/.*$",
        description="Path of the template collection endpoint",
    )

    timeout: float = Field(
        default=10.0,
        gt=0,
        le=300,
        description="Request timeout in seconds",
    )

    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per request on transport errors",
    )

    @property
    def auth_headers(self) -> dict[str, str]:
        """Headers carrying the admin token, empty when no token is configured."""
        if self.admin_token is None:
            return {}
        return {"Authorization": f"Bearer {self.admin_token.get_secret_value()}"}

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
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
            create_yaml_source(settings_cls, "relay"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
