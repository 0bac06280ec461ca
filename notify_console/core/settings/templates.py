"""Template preview and import settings.

Environment variables use TEMPLATES_ prefix.
Example: TEMPLATES_PREVIEW_FALLBACK="preview failed"
         TEMPLATES_TIMESTAMP_FORMAT="%Y-%m-%d %H:%M"
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_yaml_source


class TemplateSettings(BaseSettings):
    """Preview sample data, fallback text and rename id shape."""

    # ──────────────────────────────────────────────────────────────
    # Preview
    # ──────────────────────────────────────────────────────────────

    preview_fallback: str = Field(
        default="模板预览失败",
        description="Text shown in place of a preview whose rendering raised",
    )

    timestamp_format: str = Field(
        default="%Y/%m/%d %H:%M:%S",
        min_length=1,
        description="strftime format of the sample `timestamp` variable (local time)",
    )

    sample_title: str = Field(default="示例标题", description="Sample `title` value")
    sample_content: str = Field(default="示例内容", description="Sample `content` value")
    sample_level: str = Field(default="info", description="Sample `level` value")
    sample_message: str = Field(default="示例消息", description="Sample `message` value")

    # ──────────────────────────────────────────────────────────────
    # Import
    # ──────────────────────────────────────────────────────────────

    rename_random_length: int = Field(
        default=6,
        ge=1,
        le=12,
        description="Number of base36 random characters in generated rename ids",
    )

    export_version: str = Field(
        default="1.0",
        description="Version written into export documents",
    )

    model_config = SettingsConfigDict(
        env_prefix="TEMPLATES_",
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
            create_yaml_source(settings_cls, "templates"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
