"""Sample variables for template previews."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from notify_console.core.settings import get_template_settings

if TYPE_CHECKING:
    from notify_console.core.settings.templates import TemplateSettings

RenderContext = dict[str, Any]


def default_preview_variables(
    settings: TemplateSettings | None = None,
    now: Callable[[], datetime] = datetime.now,
) -> dict[str, str]:
    """Sample values for the variables every relay notification carries."""
    settings = settings or get_template_settings()
    return {
        "title": settings.sample_title,
        "content": settings.sample_content,
        "level": settings.sample_level,
        "message": settings.sample_message,
        "timestamp": now().strftime(settings.timestamp_format),
        "image": "",
        "url": "",
    }


def resolve_variables(
    template_defaults: Mapping[str, Any] | None = None,
    caller_data: Mapping[str, Any] | None = None,
    *,
    settings: TemplateSettings | None = None,
    now: Callable[[], datetime] = datetime.now,
) -> RenderContext:
    """Build the render context for a preview.

    Starts from the built-in samples, applies ``template_defaults`` over them,
    then ``caller_data``. Caller keys unknown to the defaults are added as-is.
    A ``None`` caller value counts as absent and keeps the default. Values are
    not coerced; the renderer stringifies them at substitution time.
    """
    context: RenderContext = default_preview_variables(settings, now)
    for source in (template_defaults, caller_data):
        if not source:
            continue
        context.update({str(key): value for key, value in source.items() if value is not None})
    return context
